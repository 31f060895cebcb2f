"""Subscription Billing Period Engine.

This package computes the calendar boundaries of invoiced subscription periods
and their usage-charge windows, together with the day counts and per-day prices
used for proration.

Key modules:
- calculator: PeriodCalculator, the public engine, and its factory
- conventions: Interval policies, anchor strategies and day count conventions
- schedule: Period boundary values, month arithmetic and billing schedules
- schema: Billing context, enums and errors
- valuation: Proration helpers
"""

__version__ = "1.0.0"

from billperiods.calculator import PeriodCalculator, create_period_calculator
from billperiods.schedule.core import PeriodBoundaries
from billperiods.schema import (
    BillingContext,
    BillingPeriodError,
    BillingTime,
    IntervalKind,
    InvalidContextError,
    InvalidPeriodError,
    MissingDateError,
)

__all__ = [
    "__version__",
    "PeriodCalculator",
    "create_period_calculator",
    "PeriodBoundaries",
    "BillingContext",
    "BillingTime",
    "IntervalKind",
    "BillingPeriodError",
    "MissingDateError",
    "InvalidContextError",
    "InvalidPeriodError",
]
