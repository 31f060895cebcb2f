"""
Billing-time anchor strategies.

An anchor strategy turns an interval policy into concrete period boundaries.
Periods are the half-open spans between consecutive anchor occurrences, so a
period always ends the day before the next one starts.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, Type, Union

from billperiods.schedule.adjustments import previous_day
from billperiods.schema.enums import BillingTime
from billperiods.schema.errors import InvalidContextError

from .intervals import IntervalPolicy


class AnchorStrategy(ABC):
    """Base class for billing-time modes, composed with one interval policy."""

    billing_time: BillingTime

    def __init__(self, policy: IntervalPolicy):
        self.policy = policy

    @abstractmethod
    def effective_anchor(self, anchor_date: date) -> date:
        """The date whose occurrences are this strategy's period starts."""
        pass

    def _index(self, reference_date: date, anchor_date: date) -> int:
        return self.policy.index_of(reference_date, self.effective_anchor(anchor_date))

    def _start(self, index: int, anchor_date: date) -> date:
        return self.policy.occurrence(self.effective_anchor(anchor_date), index)

    def period_start(self, reference_date: date, anchor_date: date) -> date:
        """First day of the period containing reference_date."""
        return self._start(self._index(reference_date, anchor_date), anchor_date)

    def period_end(self, reference_date: date, anchor_date: date) -> date:
        """Last day of the period containing reference_date."""
        index = self._index(reference_date, anchor_date)
        return previous_day(self._start(index + 1, anchor_date))

    def next_period_end(self, from_after: date, anchor_date: date) -> date:
        """First period end on or after from_after."""
        return self.period_end(from_after, anchor_date)

    def previous_period_start(
        self, reference_date: date, anchor_date: date, current_period: bool = False
    ) -> date:
        """Start of the period before the one containing reference_date.

        With current_period=True, the start of the containing period instead.
        """
        index = self._index(reference_date, anchor_date)
        if not current_period:
            index -= 1
        return self._start(index, anchor_date)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.policy!r})"


class CalendarAnchor(AnchorStrategy):
    """Periods aligned to calendar units, whatever the subscription date."""

    billing_time = BillingTime.CALENDAR

    def effective_anchor(self, anchor_date: date) -> date:
        return self.policy.calendar_anchor


class AnniversaryAnchor(AnchorStrategy):
    """Periods aligned to the subscription's own anchor day.

    Anchor days missing from a target month resolve to that month's last day
    (a Feb 29 yearly anchor starts periods on Feb 28 in common years).
    """

    billing_time = BillingTime.ANNIVERSARY

    def effective_anchor(self, anchor_date: date) -> date:
        return anchor_date


# Registry
ANCHOR_STRATEGIES: Dict[BillingTime, Type[AnchorStrategy]] = {
    BillingTime.CALENDAR: CalendarAnchor,
    BillingTime.ANNIVERSARY: AnniversaryAnchor,
}


def get_anchor_strategy(
    billing_time: Union[BillingTime, str], policy: IntervalPolicy
) -> AnchorStrategy:
    """Build the anchor strategy for a billing time over the given policy."""
    if not isinstance(billing_time, BillingTime):
        try:
            billing_time = BillingTime(str(billing_time).lower().strip())
        except ValueError as exc:
            raise InvalidContextError(
                f"Unknown billing time: {billing_time}. "
                f"Available: {[b.value for b in ANCHOR_STRATEGIES]}"
            ) from exc
    return ANCHOR_STRATEGIES[billing_time](policy)
