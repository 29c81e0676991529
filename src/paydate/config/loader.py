"""Configuration loading for the paydate calculator.

A calculator config is a small YAML file::

    timezone: America/Los_Angeles
    number_of_paydates: 10
    max_adjustment_steps: 31
    holidays_file: holidays/us_federal_2014_2015.yaml

``holidays_file`` is resolved relative to the config file. An inline
``holidays`` list may be given instead; with neither, the built-in holiday
set is used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from paydate.calculator import (
    DEFAULT_MAX_ADJUSTMENT_STEPS,
    DEFAULT_NUMBER_OF_PAYDATES,
    PaydateCalculator,
)
from paydate.holidays import DEFAULT_HOLIDAYS, load_holidays, parse_holidays
from paydate.utils.dates import REFERENCE_TIMEZONE, DateLike, today_in_zone

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/calculator.yaml")


@dataclass(frozen=True)
class CalculatorConfig:
    """Settings used to build a PaydateCalculator.

    Attributes:
        timezone: Zone in which "today" is determined when not given explicitly
        number_of_paydates: Default number of paydates to generate
        max_adjustment_steps: Cap on day shifts when adjusting one paydate
        holidays: Holiday set used for adjustment
    """

    timezone: str = REFERENCE_TIMEZONE
    number_of_paydates: int = DEFAULT_NUMBER_OF_PAYDATES
    max_adjustment_steps: int = DEFAULT_MAX_ADJUSTMENT_STEPS
    holidays: frozenset[date] = DEFAULT_HOLIDAYS

    def create_calculator(self, today: Optional[DateLike] = None) -> PaydateCalculator:
        """Build a calculator, using the configured zone's date when ``today`` is None."""
        if today is None:
            today = today_in_zone(self.timezone)
        return PaydateCalculator(
            today=today,
            holidays=self.holidays,
            max_adjustment_steps=self.max_adjustment_steps,
        )


def _positive_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"'{key}' must be a positive integer, got {value!r}")
    return value


def load_calculator_config(path: Optional[Path] = None) -> CalculatorConfig:
    """Load calculator settings from YAML.

    Args:
        path: Path to calculator.yaml. Uses default if not provided.

    Returns:
        CalculatorConfig with loaded settings, or defaults if the file is missing

    Raises:
        FileNotFoundError: If the referenced holidays_file doesn't exist
        ValueError: If config is malformed
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.warning(f"Calculator config not found at {config_path}, using defaults")
        return CalculatorConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Calculator config must be a mapping: {config_path}")

    if "holidays" in data and "holidays_file" in data:
        raise ValueError("Specify either 'holidays' or 'holidays_file', not both")

    if "holidays_file" in data:
        holidays = load_holidays(config_path.parent / data["holidays_file"])
    elif "holidays" in data:
        if not isinstance(data["holidays"], list):
            raise ValueError(f"'holidays' must be a list: {config_path}")
        holidays = parse_holidays(data["holidays"], data.get("holiday_format"))
    else:
        holidays = DEFAULT_HOLIDAYS

    timezone = data.get("timezone", REFERENCE_TIMEZONE)
    if not isinstance(timezone, str):
        raise ValueError(f"'timezone' must be a string, got {timezone!r}")
    try:
        today_in_zone(timezone)
    except (KeyError, ValueError):
        raise ValueError(f"Unknown timezone in {config_path}: {timezone!r}") from None

    return CalculatorConfig(
        timezone=timezone,
        number_of_paydates=_positive_int(data, "number_of_paydates", DEFAULT_NUMBER_OF_PAYDATES),
        max_adjustment_steps=_positive_int(data, "max_adjustment_steps", DEFAULT_MAX_ADJUSTMENT_STEPS),
        holidays=holidays,
    )
