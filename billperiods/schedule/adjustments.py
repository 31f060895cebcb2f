"""
Calendar arithmetic helpers for period generation.
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta


def add_months(dt: Union[date, datetime], months: int) -> date:
    """Add months to a date, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years), and Feb 29 + 12 months
    is Feb 28. The result never rolls over into the following month.
    """
    if isinstance(dt, datetime):
        dt = dt.date()

    return dt + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start's month to end's month (days ignored)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def previous_day(dt: date) -> date:
    """The calendar day before dt."""
    return dt - timedelta(days=1)
