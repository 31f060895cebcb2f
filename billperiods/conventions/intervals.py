"""
Billing interval policies.

Each policy encapsulates the unit arithmetic of one billing cadence. Period
boundaries are expressed as occurrences of an anchor date: occurrence ``k`` is
the anchor shifted by ``k`` intervals, always computed from the anchor itself
so that month-end clamping never accumulates (a Jan 31 monthly anchor gives
Feb 28, then Mar 31).
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Dict, Union

from billperiods.config import get_default_week_start
from billperiods.schedule.adjustments import add_months, months_between
from billperiods.schema.enums import IntervalKind
from billperiods.schema.errors import InvalidContextError

# Any January 1st works as a calendar epoch for month-based cadences
_CALENDAR_EPOCH = date(2000, 1, 1)
# A Monday; weekly epochs are offset from it by the configured week start
_WEEKLY_EPOCH = date(2000, 1, 3)


class IntervalPolicy(ABC):
    """Base class for billing cadences."""

    kind: IntervalKind
    supports_monthly_charges: bool = False

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def add_interval(self, dt: date, count: int = 1) -> date:
        """Shift dt by count intervals."""
        pass

    def subtract_interval(self, dt: date, count: int = 1) -> date:
        """Shift dt back by count intervals."""
        return self.add_interval(dt, -count)

    @property
    @abstractmethod
    def calendar_anchor(self) -> date:
        """Canonical anchor whose occurrences are the calendar period starts."""
        pass

    def occurrence(self, anchor: date, index: int) -> date:
        """The index-th occurrence of anchor (negative indexes go backwards)."""
        return self.add_interval(anchor, index)

    @abstractmethod
    def index_of(self, dt: date, anchor: date) -> int:
        """Index of the latest anchor occurrence on or before dt."""
        pass

    def interval_length(self, anchor: date, index: int) -> int:
        """Number of days between occurrence index and occurrence index + 1."""
        return (self.occurrence(anchor, index + 1) - self.occurrence(anchor, index)).days

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _MonthBasedInterval(IntervalPolicy):
    """Cadences that are a whole number of calendar months."""

    months: int

    def add_interval(self, dt: date, count: int = 1) -> date:
        return add_months(dt, self.months * count)

    @property
    def calendar_anchor(self) -> date:
        return _CALENDAR_EPOCH

    def index_of(self, dt: date, anchor: date) -> int:
        index = months_between(anchor, dt) // self.months
        # Same target month but the (clamped) anchor day is still ahead of dt
        if self.occurrence(anchor, index) > dt:
            index -= 1
        return index


class YearlyInterval(_MonthBasedInterval):
    """Twelve-month cadence; calendar periods run Jan 1 to Dec 31."""

    kind = IntervalKind.YEARLY
    months = 12
    supports_monthly_charges = True


class QuarterlyInterval(_MonthBasedInterval):
    """Three-month cadence; calendar quarters start in Jan, Apr, Jul and Oct."""

    kind = IntervalKind.QUARTERLY
    months = 3
    supports_monthly_charges = True


class MonthlyInterval(_MonthBasedInterval):
    """One-month cadence."""

    kind = IntervalKind.MONTHLY
    months = 1


class WeeklyInterval(IntervalPolicy):
    """Seven-day cadence; calendar weeks start on the configured weekday."""

    kind = IntervalKind.WEEKLY

    def add_interval(self, dt: date, count: int = 1) -> date:
        return dt + timedelta(weeks=count)

    @property
    def calendar_anchor(self) -> date:
        return _WEEKLY_EPOCH + timedelta(days=get_default_week_start())

    def index_of(self, dt: date, anchor: date) -> int:
        return (dt - anchor).days // 7


# Pre-defined interval policy instances
YEARLY = YearlyInterval()
QUARTERLY = QuarterlyInterval()
MONTHLY = MonthlyInterval()
WEEKLY = WeeklyInterval()

# Registry
INTERVAL_POLICIES: Dict[IntervalKind, IntervalPolicy] = {
    IntervalKind.YEARLY: YEARLY,
    IntervalKind.QUARTERLY: QUARTERLY,
    IntervalKind.MONTHLY: MONTHLY,
    IntervalKind.WEEKLY: WEEKLY,
}


def get_interval_policy(interval: Union[IntervalKind, str]) -> IntervalPolicy:
    """Get an interval policy by kind or name ('yearly', 'monthly', ...)."""
    if isinstance(interval, IntervalKind):
        return INTERVAL_POLICIES[interval]

    try:
        kind = IntervalKind(str(interval).lower().strip())
    except ValueError as exc:
        raise InvalidContextError(
            f"Unknown billing interval: {interval}. "
            f"Available: {[k.value for k in INTERVAL_POLICIES]}"
        ) from exc
    return INTERVAL_POLICIES[kind]
