"""Paydate calculator.

Computes the next valid paydates for a recurring pay schedule:
- paydate models (monthly, biweekly, weekly) and their step rules
- holiday and weekend classification
- holiday/weekend adjustment with holiday precedence
- YAML configuration and a small CLI
"""

from .types import (
    PaydateModel,
    PaydateError,
    InvalidModelError,
    UnparsableDateError,
    AdjustmentLimitError,
)
from .holidays import DEFAULT_HOLIDAYS
from .calculator import PaydateCalculator
