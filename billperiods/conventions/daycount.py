"""
QuantLib-backed actual day count conventions.

Proration divides by the number of days actually elapsed in a period, so only
actual-day conventions are registered here.
"""

from datetime import date
from typing import Dict

import QuantLib as ql

from billperiods.utils.date import DateLike, to_date


def _ql_date(date_like: DateLike) -> ql.Date:
    py_date = to_date(date_like)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """An actual-day counting rule wrapping a QuantLib day counter."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def day_count(self, start: DateLike, end: DateLike) -> int:
        """Days from start (inclusive) to end (exclusive)."""
        return self._ql_daycount.dayCount(_ql_date(start), _ql_date(end))

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Share of a year between start (inclusive) and end (exclusive)."""
        return self._ql_daycount.yearFraction(_ql_date(start), _ql_date(end))

    def days_in_year(self, year: int) -> int:
        return self.day_count(date(year, 1, 1), date(year + 1, 1, 1))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ActualActualISDA(DayCountConvention):
    """ACT/ACT ISDA.

    Year fractions split the span at year ends, dividing by 365 or 366.
    """

    def __init__(self):
        super().__init__("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))


class Actual365Fixed(DayCountConvention):
    """ACT/365F. Day counts are actual; the year fraction uses a 365 basis."""

    def __init__(self):
        super().__init__("ACT/365F", ql.Actual365Fixed())


ACT_ACT = ActualActualISDA()
ACT_365F = Actual365Fixed()

# Registry
DAY_COUNT_CONVENTIONS: Dict[str, DayCountConvention] = {
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "ACTUAL/365F": ACT_365F,
}


def get_day_count_convention(name: str) -> DayCountConvention:
    """Look up a day count convention by (case-insensitive) name."""
    key = name.upper().strip()
    if key not in DAY_COUNT_CONVENTIONS:
        raise ValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
        )
    return DAY_COUNT_CONVENTIONS[key]
