"""
Billing period calculation engine.
"""

from .factory import calculator_from_records, create_period_calculator
from .period_calculator import PeriodCalculator

__all__ = [
    "PeriodCalculator",
    "create_period_calculator",
    "calculator_from_records",
]
