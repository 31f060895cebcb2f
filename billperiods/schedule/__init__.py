# Re-export schedule components
from .adjustments import add_months, months_between, previous_day
from .core import PeriodBoundaries
