from __future__ import annotations

from enum import Enum
from typing import Union


class PaydateError(Exception):
    """Base class for all paydate calculation errors."""


class InvalidModelError(PaydateError, ValueError):
    """Raised when a paydate model token is not recognized."""


class UnparsableDateError(PaydateError, ValueError):
    """Raised when a boundary date value cannot be read as a calendar day."""


class AdjustmentLimitError(PaydateError, RuntimeError):
    """Raised when holiday/weekend adjustment does not settle on a valid day."""


class PaydateModel(Enum):
    """Recurrence rule governing how nominal pay dates are spaced."""

    MONTHLY = "MONTHLY"
    BIWEEKLY = "BIWEEKLY"
    WEEKLY = "WEEKLY"

    @classmethod
    def parse(cls, value: Union[str, "PaydateModel"]) -> "PaydateModel":
        """Resolve a model token (case-sensitive) or pass a model through."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise InvalidModelError(
                f"Unknown paydate model: {value!r} (expected one of {valid})"
            ) from None
