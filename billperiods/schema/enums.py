"""
Core enumeration types for the billing period engine.
"""

from enum import Enum


class BillingTime(Enum):
    """How period boundaries are anchored."""

    CALENDAR = "calendar"
    ANNIVERSARY = "anniversary"


class IntervalKind(Enum):
    """Plan billing cadences."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class SubscriptionStatus(Enum):
    """Subscription lifecycle states read from subscription records."""

    PENDING = "pending"
    ACTIVE = "active"
    TERMINATED = "terminated"
    CANCELED = "canceled"
