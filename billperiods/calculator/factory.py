"""
Factory functions for creating period calculators.
"""

from typing import Any, Mapping, Union

from billperiods.conventions.intervals import get_interval_policy
from billperiods.schema.context import BillingContext
from billperiods.schema.enums import IntervalKind
from billperiods.schema.errors import InvalidContextError
from billperiods.utils.date import DateLike

from .period_calculator import PeriodCalculator


def create_period_calculator(
    context: BillingContext, interval: Union[IntervalKind, str]
) -> PeriodCalculator:
    """
    Create a period calculator for a cadence.

    Args:
        context: Billing context to evaluate
        interval: Plan interval ('weekly', 'monthly', 'quarterly', 'yearly')

    Returns:
        Calculator composing the interval policy with the context's anchoring
    """
    return PeriodCalculator(context, get_interval_policy(interval))


def calculator_from_records(
    plan: Mapping[str, Any],
    subscription: Mapping[str, Any],
    reference_date: DateLike,
    current_usage: bool = False,
) -> PeriodCalculator:
    """
    Create a period calculator straight from plan and subscription records.

    Args:
        plan: Plan record (interval, amount_cents, pay_in_advance, bill_charges_monthly)
        subscription: Subscription record (subscription_date, started_at,
            billing_time, status, terminated_at)
        reference_date: Billing date to evaluate
        current_usage: Evaluate the in-progress period instead of the invoiced one

    Returns:
        Configured calculator
    """
    interval = plan.get("interval")
    if interval is None:
        raise InvalidContextError("plan interval is required")

    context = BillingContext.from_records(
        plan, subscription, reference_date, current_usage=current_usage
    )
    return create_period_calculator(context, interval)
