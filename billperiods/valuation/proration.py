"""Day counting and per-day pricing helpers for proration."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from billperiods.config import get_default_day_count
from billperiods.conventions.anchors import AnchorStrategy
from billperiods.conventions.daycount import get_day_count_convention
from billperiods.schema.errors import InvalidPeriodError

logger = logging.getLogger(__name__)


def inclusive_day_span(start: date, end: date, day_count: Optional[str] = None) -> int:
    """Return the number of calendar days from start to end, both included."""
    if end < start:
        raise InvalidPeriodError(f"Span ends ({end}) before it starts ({start})")
    convention = get_day_count_convention(day_count or get_default_day_count())
    return convention.day_count(start, end) + 1


def period_day_count(
    strategy: AnchorStrategy, reference_date: date, anchor_date: date
) -> int:
    """Return the length in days of the whole period containing reference_date.

    Termination never shortens this count: it is the pricing denominator, not
    the number of billed days.
    """
    start = strategy.period_start(reference_date, anchor_date)
    end = strategy.period_end(reference_date, anchor_date)
    days = inclusive_day_span(start, end)
    logger.debug("Period %s..%s of %r spans %s days", start, end, strategy, days)
    return days


def single_day_price(amount: float, day_count: int) -> float:
    """Price of one day: amount / day_count."""
    if day_count <= 0:
        raise ValueError(f"day_count must be positive, got: {day_count}")
    return float(amount) / day_count


def prorate(amount: float, days: int, period_days: int) -> float:
    """Share of amount covering days out of a period of period_days."""
    if days < 0:
        raise ValueError(f"days cannot be negative, got: {days}")
    return single_day_price(amount, period_days) * days
