"""
Billing conventions: cadences, anchoring modes and day counts.
"""

from .anchors import (
    AnchorStrategy,
    AnniversaryAnchor,
    CalendarAnchor,
    get_anchor_strategy,
)
from .daycount import ACT_365F, ACT_ACT, DayCountConvention, get_day_count_convention
from .intervals import (
    MONTHLY,
    QUARTERLY,
    WEEKLY,
    YEARLY,
    IntervalPolicy,
    MonthlyInterval,
    QuarterlyInterval,
    WeeklyInterval,
    YearlyInterval,
    get_interval_policy,
)

__all__ = [
    # Interval policies
    "IntervalPolicy",
    "YearlyInterval",
    "QuarterlyInterval",
    "MonthlyInterval",
    "WeeklyInterval",
    "YEARLY",
    "QUARTERLY",
    "MONTHLY",
    "WEEKLY",
    "get_interval_policy",
    # Anchor strategies
    "AnchorStrategy",
    "CalendarAnchor",
    "AnniversaryAnchor",
    "get_anchor_strategy",
    # Day counts
    "DayCountConvention",
    "ACT_ACT",
    "ACT_365F",
    "get_day_count_convention",
]
