"""
Input schemas for the billing period engine.
"""

from .context import BillingContext
from .enums import BillingTime, IntervalKind, SubscriptionStatus
from .errors import (
    BillingPeriodError,
    InvalidContextError,
    InvalidPeriodError,
    MissingDateError,
)

__all__ = [
    # Enums
    "BillingTime",
    "IntervalKind",
    "SubscriptionStatus",
    # Context
    "BillingContext",
    # Errors
    "BillingPeriodError",
    "MissingDateError",
    "InvalidContextError",
    "InvalidPeriodError",
]
