"""Billing period calculator.

This module provides the public engine: given a billing context and a cadence it
computes the invoiced subscription period, the usage-charge window inside it and
the day counts used for proration.

Rules are applied in a fixed precedence:
    1. termination: the invoiced period is the one containing terminated_at,
       clipped to end on it
    2. pay in advance: the invoiced period is the one containing the reference
       date rather than the one before it; charges trail one period behind
    3. monthly sub-billing: the charges window narrows to a monthly slice
"""

import logging
from datetime import date
from typing import Optional

from billperiods.conventions.anchors import get_anchor_strategy
from billperiods.conventions.intervals import MONTHLY, IntervalPolicy
from billperiods.schedule.adjustments import previous_day
from billperiods.schedule.core import PeriodBoundaries
from billperiods.schema.context import BillingContext
from billperiods.schema.errors import InvalidPeriodError
from billperiods.utils.date import DateLike, to_date
from billperiods.valuation import proration

logger = logging.getLogger(__name__)


class PeriodCalculator:
    """Computes period boundaries and pricing figures for one billing context."""

    def __init__(self, context: BillingContext, policy: IntervalPolicy):
        self.context = context
        self.policy = policy
        self.strategy = get_anchor_strategy(context.billing_time, policy)
        self._monthly_calculator: Optional["PeriodCalculator"] = None

    def __repr__(self) -> str:
        return (
            f"PeriodCalculator({self.policy.name}, {self.context.billing_time.value}, "
            f"reference_date={self.context.reference_date})"
        )

    # ------------------------------------------------------------------
    # Mode flags
    # ------------------------------------------------------------------

    @property
    def bills_charges_monthly(self) -> bool:
        """Monthly sub-billing only narrows cadences longer than a month."""
        return self.context.bill_charges_monthly and self.policy.supports_monthly_charges

    @property
    def charges_trail_period(self) -> bool:
        """Advance billing invoices the upcoming period but the elapsed usage."""
        ctx = self.context
        return ctx.pay_in_advance and not ctx.is_terminated and not ctx.current_usage

    @property
    def monthly_calculator(self) -> "PeriodCalculator":
        """Arrears calculator over monthly slices, sharing this anchoring."""
        if self._monthly_calculator is None:
            monthly_context = self.context.replace(
                pay_in_advance=False, bill_charges_monthly=False
            )
            self._monthly_calculator = PeriodCalculator(monthly_context, MONTHLY)
        return self._monthly_calculator

    # ------------------------------------------------------------------
    # Raw (unclamped) boundaries
    # ------------------------------------------------------------------

    def compute_from_date(self) -> date:
        """Start of the invoiced interval before clamping to started_at."""
        ctx = self.context
        if ctx.is_terminated:
            return self.strategy.period_start(ctx.terminated_at, ctx.anchor_date)
        if ctx.pay_in_advance or ctx.current_usage:
            return self.strategy.period_start(ctx.reference_date, ctx.anchor_date)
        return self.strategy.previous_period_start(ctx.reference_date, ctx.anchor_date)

    def compute_to_date(self, from_date: Optional[date] = None) -> date:
        """End of the interval starting at from_date, before termination clipping."""
        if from_date is None:
            from_date = self.compute_from_date()
        return self.strategy.next_period_end(from_date, self.context.anchor_date)

    def compute_charges_from_date(self) -> date:
        """Start of the charges interval before clamping to started_at."""
        if self.bills_charges_monthly:
            return self.monthly_calculator.compute_charges_from_date()
        if self.charges_trail_period:
            ctx = self.context
            return self.strategy.previous_period_start(ctx.reference_date, ctx.anchor_date)
        return self.compute_from_date()

    # ------------------------------------------------------------------
    # Public boundaries
    # ------------------------------------------------------------------

    def _clamp_to_start(self, value: date, label: str) -> date:
        started_at = self.context.started_at
        if value < started_at:
            logger.debug("Clamping %s %s to started_at %s", label, value, started_at)
            return started_at
        return value

    def _clip_to_termination(self, value: date, label: str) -> date:
        terminated_at = self.context.terminated_at
        if terminated_at is not None and value > terminated_at:
            logger.debug("Clipping %s %s to terminated_at %s", label, value, terminated_at)
            return terminated_at
        return value

    def from_date(self) -> date:
        """First day of the invoiced subscription period."""
        return self._clamp_to_start(self.compute_from_date(), "from_date")

    def to_date(self) -> date:
        """Last day of the invoiced subscription period."""
        return self._clip_to_termination(self.compute_to_date(), "to_date")

    def charges_from_date(self) -> date:
        """First day of the usage-charge window."""
        if self.bills_charges_monthly:
            return self.monthly_calculator.charges_from_date()
        return self._clamp_to_start(self.compute_charges_from_date(), "charges_from_date")

    def charges_to_date(self) -> date:
        """Last day of the usage-charge window."""
        if self.bills_charges_monthly:
            return self.monthly_calculator.charges_to_date()
        if self.charges_trail_period:
            return previous_day(self.from_date())
        return self.to_date()

    def boundaries(self) -> PeriodBoundaries:
        """All four dates, validated.

        Raises:
            InvalidPeriodError: If either window ends before it starts, e.g. the
                charges window of the very first pay-in-advance invoice.
        """
        result = PeriodBoundaries(
            from_date=self.from_date(),
            to_date=self.to_date(),
            charges_from_date=self.charges_from_date(),
            charges_to_date=self.charges_to_date(),
        )
        if result.to_date < result.from_date:
            raise InvalidPeriodError(
                f"Period ends ({result.to_date}) before it starts ({result.from_date})"
            )
        if result.charges_to_date < result.charges_from_date:
            raise InvalidPeriodError(
                f"Charges window ends ({result.charges_to_date}) "
                f"before it starts ({result.charges_from_date})"
            )
        logger.debug("%r -> %s", self, result)
        return result

    # ------------------------------------------------------------------
    # Period navigation
    # ------------------------------------------------------------------

    def next_end_of_period(self, dt: DateLike) -> date:
        """Last day of the interval containing dt (dt itself if it is one)."""
        return self.strategy.next_period_end(to_date(dt), self.context.anchor_date)

    def previous_beginning_of_period(self, current_period: bool = False) -> date:
        """Start of the interval before the reference date's one.

        With current_period=True, the start of the reference date's own interval.
        """
        ctx = self.context
        return self.strategy.previous_period_start(
            ctx.reference_date, ctx.anchor_date, current_period=current_period
        )

    def first_month_in_period(self) -> bool:
        """Whether the reference date's monthly slice opens its interval.

        For monthly-charged yearly and quarterly plans this is the invoice
        carrying the subscription fee; other cadences carry it on every invoice.
        """
        if not self.policy.supports_monthly_charges:
            return True
        ctx = self.context
        monthly_start = self.monthly_calculator.strategy.period_start(
            ctx.reference_date, ctx.anchor_date
        )
        return monthly_start == self.strategy.period_start(ctx.reference_date, ctx.anchor_date)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def period_day_count(self, dt: Optional[DateLike] = None) -> int:
        """Days in the whole interval containing dt (default: the invoiced one)."""
        reference = self.compute_from_date() if dt is None else to_date(dt)
        return proration.period_day_count(self.strategy, reference, self.context.anchor_date)

    def single_day_price(self, optional_from_date: Optional[DateLike] = None) -> float:
        """Plan amount (cents) divided by the invoiced interval's day count."""
        return proration.single_day_price(
            self.context.plan_amount_cents, self.period_day_count(optional_from_date)
        )

    def charges_duration_in_days(self) -> int:
        """Days in the whole interval the charges window belongs to."""
        if self.bills_charges_monthly:
            return self.monthly_calculator.charges_duration_in_days()
        return self.period_day_count(self.compute_charges_from_date())

    def prorated_amount(self) -> float:
        """Plan amount (cents) for the billed days of the invoiced period."""
        days = proration.inclusive_day_span(self.from_date(), self.to_date())
        return proration.prorate(self.context.plan_amount_cents, days, self.period_day_count())
