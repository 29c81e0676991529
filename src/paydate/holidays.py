"""Holiday sets for paydate adjustment.

The built-in set covers the US federal holidays of 2014 and 2015 (observed
dates). Callers with a different calendar pass their own set to the
calculator, or point the YAML config at a holiday file.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
import yaml

from paydate.types import UnparsableDateError
from paydate.utils.dates import DATE_FMT, DateLike, to_date

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAYS: frozenset[date] = frozenset(
    date.fromisoformat(d)
    for d in (
        "2014-01-01", "2014-01-20", "2014-02-17", "2014-05-26", "2014-07-04",
        "2014-09-01", "2014-10-13", "2014-11-11", "2014-11-27", "2014-12-25",
        "2015-01-01", "2015-01-19", "2015-02-16", "2015-05-25", "2015-07-03",
        "2015-09-07", "2015-10-12", "2015-11-11", "2015-11-26", "2015-12-25",
    )
)


def parse_holidays(values: Iterable[DateLike], fmt: Optional[str] = None) -> frozenset[date]:
    """Build a holiday set from date-like values.

    Args:
        values: Dates, datetimes, Timestamps or strings
        fmt: Format for string entries; ``YYYY-MM-DD`` when not given.
            Source lists often arrive as ``%d-%m-%Y``.

    Returns:
        Immutable set of calendar dates

    Raises:
        UnparsableDateError: If any entry cannot be parsed
    """
    values = list(values)
    strings = [v for v in values if isinstance(v, str)]
    others = [v for v in values if not isinstance(v, str)]

    parsed = {to_date(v) for v in others}
    if strings:
        try:
            stamps = pd.to_datetime(pd.Series(strings).str.strip(), format=fmt or DATE_FMT)
        except (ValueError, TypeError) as e:
            raise UnparsableDateError(f"Unparsable holiday date: {e}") from None
        missing = stamps.isna()
        if missing.any():
            bad = [strings[i] for i in missing[missing].index]
            raise UnparsableDateError(f"Unparsable holiday dates: {bad!r}")
        parsed.update(ts.date() for ts in stamps)

    return frozenset(parsed)


def load_holidays(path: Path) -> frozenset[date]:
    """Load a holiday set from a YAML file.

    Expected layout::

        format: "%d-%m-%Y"   # optional
        holidays:
          - 01-01-2014
          - 20-01-2014

    Args:
        path: Path to the holiday YAML file

    Returns:
        Immutable set of holiday dates

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no ``holidays`` list or an entry is unparsable
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Holiday file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("holidays") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"Holiday file must have a 'holidays' list: {path}")

    holidays = parse_holidays(entries, data.get("format"))
    logger.debug(f"Loaded {len(holidays)} holidays from {path}")
    return holidays
