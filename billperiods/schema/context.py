"""
Billing context: the immutable input of one period calculation.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from billperiods.utils.date import DateLike, to_optional_date

from .enums import BillingTime, SubscriptionStatus
from .errors import InvalidContextError, MissingDateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingContext:
    """Subscription state evaluated against one billing date.

    Attributes:
        anchor_date: Subscription date the billing anchor is derived from
        started_at: Activation date; periods never start before it
        reference_date: Billing date the calculation is evaluated against
        billing_time: Calendar or anniversary anchoring
        terminated_at: Termination date, None while the subscription is live
        pay_in_advance: Invoice the upcoming period instead of the elapsed one
        bill_charges_monthly: Bill usage charges in monthly slices
        plan_amount_cents: Full-period plan amount used for per-day pricing
        current_usage: Evaluate the in-progress period (usage preview)
    """

    anchor_date: date
    started_at: date
    reference_date: date
    billing_time: BillingTime = BillingTime.CALENDAR
    terminated_at: Optional[date] = None
    pay_in_advance: bool = False
    bill_charges_monthly: bool = False
    plan_amount_cents: int = 0
    current_usage: bool = False

    def __post_init__(self):
        for name in ("anchor_date", "started_at", "reference_date"):
            value = to_optional_date(getattr(self, name))
            if value is None:
                raise MissingDateError(f"{name} is required")
            object.__setattr__(self, name, value)

        object.__setattr__(self, "terminated_at", to_optional_date(self.terminated_at))

        if not isinstance(self.billing_time, BillingTime):
            try:
                billing_time = BillingTime(str(self.billing_time).lower().strip())
            except ValueError as exc:
                raise InvalidContextError(
                    f"Invalid billing_time: {self.billing_time}. "
                    f"Must be one of {[b.value for b in BillingTime]}"
                ) from exc
            object.__setattr__(self, "billing_time", billing_time)

        if self.terminated_at is not None and self.terminated_at < self.started_at:
            raise InvalidContextError(
                f"terminated_at ({self.terminated_at}) cannot precede "
                f"started_at ({self.started_at})"
            )

        if self.plan_amount_cents < 0:
            raise InvalidContextError(
                f"plan_amount_cents cannot be negative, got: {self.plan_amount_cents}"
            )

    @property
    def is_terminated(self) -> bool:
        return self.terminated_at is not None

    @property
    def is_anniversary(self) -> bool:
        return self.billing_time == BillingTime.ANNIVERSARY

    def replace(self, **changes: Any) -> "BillingContext":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_records(
        cls,
        plan: Mapping[str, Any],
        subscription: Mapping[str, Any],
        reference_date: DateLike,
        current_usage: bool = False,
    ) -> "BillingContext":
        """Build a context from plan and subscription records.

        The subscription only counts as terminated when its status says so;
        a terminated_at on a live subscription is ignored.
        """
        status = SubscriptionStatus(subscription.get("status", SubscriptionStatus.ACTIVE.value))
        terminated_at = None
        if status == SubscriptionStatus.TERMINATED:
            terminated_at = subscription.get("terminated_at")
            if terminated_at is None:
                raise MissingDateError("terminated subscription has no terminated_at")
        elif subscription.get("terminated_at") is not None:
            logger.debug(
                "Ignoring terminated_at on %s subscription", status.value
            )

        started_at = subscription.get("started_at") or subscription.get("subscription_date")

        return cls(
            anchor_date=subscription.get("subscription_date"),
            started_at=started_at,
            reference_date=reference_date,
            billing_time=subscription.get("billing_time", BillingTime.CALENDAR),
            terminated_at=terminated_at,
            pay_in_advance=bool(plan.get("pay_in_advance", False)),
            bill_charges_monthly=bool(plan.get("bill_charges_monthly", False)),
            plan_amount_cents=int(plan.get("amount_cents", 0)),
            current_usage=current_usage,
        )
