"""
Proration helpers.
"""

from .proration import inclusive_day_span, period_day_count, prorate, single_day_price

__all__ = [
    "inclusive_day_span",
    "period_day_count",
    "single_day_price",
    "prorate",
]
