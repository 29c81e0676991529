"""Calendar-day helpers shared by the engine, config loader and CLI.

All values crossing the library boundary are ``YYYY-MM-DD`` strings; inside
the package everything is a plain ``datetime.date`` with no time-of-day or
zone attached.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Union

import pandas as pd

from paydate.types import UnparsableDateError

DATE_FMT = "%Y-%m-%d"
REFERENCE_TIMEZONE = "America/Los_Angeles"

DateLike = Union[str, date, datetime, pd.Timestamp]


def to_date(value: DateLike, fmt: str = DATE_FMT) -> date:
    """Convert a string, datetime or Timestamp to a calendar date.

    Args:
        value: Date-like value. Strings must match ``fmt`` exactly.
        fmt: strptime format used for string input (default ``%Y-%m-%d``)

    Returns:
        The calendar day as ``datetime.date``

    Raises:
        UnparsableDateError: If the string does not match ``fmt`` or the
            type is not supported
    """
    # Timestamp and datetime are both date subclasses; check them first
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            raise UnparsableDateError("Cannot convert NaT to a date")
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            raise UnparsableDateError(
                f"Unsupported date string {value!r}, expected format {fmt}"
            ) from None
    raise UnparsableDateError(f"Unsupported type for date: {type(value).__name__}")


def format_date(value: DateLike) -> str:
    """Format a date-like value as ``YYYY-MM-DD``."""
    return to_date(value).strftime(DATE_FMT)


def today_in_zone(tz: str = REFERENCE_TIMEZONE) -> date:
    """Return the current calendar date in the given time zone."""
    return pd.Timestamp.now(tz=tz).date()


def add_months(start: date, months: int = 1) -> date:
    """Add calendar months, rolling a missing day-of-month to the next 1st.

    When ``start.day`` does not exist in the target month the result is the
    first day of the month after the target, e.g. Jan 30 + 1 month = Mar 1.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1

    days_in_month = calendar.monthrange(year, month)[1]
    if start.day <= days_in_month:
        return date(year, month, start.day)

    if month == 12:
        return date(year + 1, 1, 1)
    return date(year, month + 1, 1)


def shift_date(value: DateLike, count: int, unit: str = "days") -> date:
    """Shift a date by ``count`` days, weeks or months.

    Month shifts are applied one month at a time so that the rollover rule
    of :func:`add_months` compounds exactly like repeated monthly paydates.
    Negative counts step backward; a missing day-of-month still rolls to the
    1st of the following month (Mar 31 - 1 month = Mar 1).
    """
    start = to_date(value)
    unit = unit.lower().rstrip("s")

    if unit == "day":
        return start + timedelta(days=count)
    if unit == "week":
        return start + timedelta(weeks=count)
    if unit == "month":
        step = 1 if count >= 0 else -1
        result = start
        for _ in range(abs(count)):
            result = add_months(result, step)
        return result
    raise ValueError(f"Unsupported shift unit: {unit!r}")
