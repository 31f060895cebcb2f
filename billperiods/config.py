"""
Engine-wide defaults.

Calendar weekly periods start on the configured weekday, and proration counts
days with the configured actual-day convention.
"""

import calendar

# Default engine settings
_DEFAULT_WEEK_START = calendar.MONDAY
_DEFAULT_DAY_COUNT = "ACT/ACT"


def get_default_week_start() -> int:
    """Weekday (0=Monday ... 6=Sunday) calendar weekly periods start on."""
    return _DEFAULT_WEEK_START


def set_default_week_start(weekday: int) -> None:
    """Set the weekday calendar weekly periods start on."""
    global _DEFAULT_WEEK_START
    if weekday not in range(7):
        raise ValueError(f"weekday must be between 0 and 6, got: {weekday}")
    _DEFAULT_WEEK_START = weekday


def get_default_day_count() -> str:
    """Name of the day count convention used for proration."""
    return _DEFAULT_DAY_COUNT


def set_default_day_count(name: str) -> None:
    """Set the day count convention used for proration."""
    # Imported here to keep config importable from the conventions package
    from billperiods.conventions.daycount import get_day_count_convention

    global _DEFAULT_DAY_COUNT
    _DEFAULT_DAY_COUNT = get_day_count_convention(name).name
