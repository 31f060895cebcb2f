"""
Billing schedule generation.

Walks the billing dates of a subscription and evaluates the period calculator at
each of them, producing one row per invoice.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import List, Optional, Union

import pandas as pd

from billperiods.calculator.period_calculator import PeriodCalculator
from billperiods.conventions.daycount import ACT_ACT
from billperiods.conventions.intervals import IntervalPolicy, get_interval_policy
from billperiods.schema.context import BillingContext
from billperiods.schema.enums import IntervalKind
from billperiods.utils.date import DateLike, to_date

logger = logging.getLogger(__name__)

_DATE_COLUMNS = [
    "billing_date",
    "from_date",
    "to_date",
    "charges_from_date",
    "charges_to_date",
]


@dataclass(frozen=True)
class ScheduledPeriod:
    """One invoice of a billing schedule.

    The charges dates are None when the invoice has no usage window (the first
    pay-in-advance invoice).
    """

    billing_date: date
    from_date: date
    to_date: date
    charges_from_date: Optional[date]
    charges_to_date: Optional[date]
    day_count: int
    year_fraction: float
    single_day_price: float
    is_termination: bool = False

    @property
    def has_charges(self) -> bool:
        return self.charges_from_date is not None


class BillingScheduleGenerator:
    """Generates the sequence of invoices of a subscription."""

    def __init__(self, interval: Union[IntervalPolicy, IntervalKind, str]):
        if not isinstance(interval, IntervalPolicy):
            interval = get_interval_policy(interval)
        self.policy = interval

    def billing_dates(self, context: BillingContext, until: DateLike) -> List[date]:
        """Regular (non-termination) billing dates from started_at up to until."""
        until = to_date(until)
        strategy = PeriodCalculator(context, self.policy).strategy
        anchor = context.anchor_date

        limit = until
        if context.is_terminated:
            limit = min(until, context.terminated_at)

        dates: List[date] = []
        if context.pay_in_advance and context.started_at <= limit:
            dates.append(context.started_at)

        current = strategy.next_period_end(context.started_at, anchor) + timedelta(days=1)
        while current <= limit:
            # Advance billing never invoices a period starting on termination day
            if context.pay_in_advance and current == context.terminated_at:
                break
            dates.append(current)
            current = strategy.next_period_end(current, anchor) + timedelta(days=1)
        return dates

    def generate(self, context: BillingContext, until: DateLike) -> List[ScheduledPeriod]:
        """
        Generate the invoices of a subscription.

        Args:
            context: Subscription context; its reference_date is ignored
            until: Last billing date to include

        Returns:
            Invoices in billing-date order, ending with the termination invoice
            when the subscription terminates on or before until
        """
        until = to_date(until)
        live_context = context.replace(terminated_at=None)

        periods = [
            self._evaluate(live_context.replace(reference_date=billing_date))
            for billing_date in self.billing_dates(context, until)
        ]

        if context.is_terminated and context.terminated_at <= until:
            final_context = context.replace(reference_date=context.terminated_at)
            periods.append(self._evaluate(final_context, is_termination=True))

        logger.debug(
            "Generated %s %s invoices from %s to %s",
            len(periods),
            self.policy.name,
            context.started_at,
            until,
        )
        return periods

    def _evaluate(self, context: BillingContext, is_termination: bool = False) -> ScheduledPeriod:
        calculator = PeriodCalculator(context, self.policy)
        from_date = calculator.from_date()
        to_date_ = calculator.to_date()

        charges_from: Optional[date] = calculator.charges_from_date()
        charges_to: Optional[date] = calculator.charges_to_date()
        if charges_to < charges_from:
            charges_from = charges_to = None

        return ScheduledPeriod(
            billing_date=context.reference_date,
            from_date=from_date,
            to_date=to_date_,
            charges_from_date=charges_from,
            charges_to_date=charges_to,
            day_count=calculator.period_day_count(),
            year_fraction=ACT_ACT.year_fraction(from_date, to_date_ + timedelta(days=1)),
            single_day_price=calculator.single_day_price(),
            is_termination=is_termination,
        )


def to_frame(periods: List[ScheduledPeriod]) -> pd.DataFrame:
    """Tabulate a billing schedule, one row per invoice."""
    columns = list(ScheduledPeriod.__dataclass_fields__)
    frame = pd.DataFrame([asdict(p) for p in periods], columns=columns)
    for column in _DATE_COLUMNS:
        frame[column] = pd.to_datetime(frame[column])
    return frame
