"""
Core data structures for billing periods.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict

from billperiods.utils.date import date_to_str


@dataclass(frozen=True)
class PeriodBoundaries:
    """Inclusive boundaries of an invoiced period and of its charges window."""

    from_date: date
    to_date: date
    charges_from_date: date
    charges_to_date: date

    @property
    def days(self) -> int:
        """Number of calendar days in the subscription period."""
        return (self.to_date - self.from_date).days + 1

    @property
    def charges_days(self) -> int:
        """Number of calendar days in the charges window."""
        return (self.charges_to_date - self.charges_from_date).days + 1

    def to_dict(self) -> Dict[str, str]:
        return {
            "from_date": date_to_str(self.from_date),
            "to_date": date_to_str(self.to_date),
            "charges_from_date": date_to_str(self.charges_from_date),
            "charges_to_date": date_to_str(self.charges_to_date),
        }
