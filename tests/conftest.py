"""Shared test fixtures for paydate tests.

This module provides pytest fixtures that can be used across all test files.
"""

from datetime import date
from pathlib import Path

import pytest

from paydate.calculator import PaydateCalculator


REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def configs_dir() -> Path:
    """Return the shipped configs directory."""
    return REPO_ROOT / "configs"


@pytest.fixture
def make_calculator():
    """Return a factory building calculators for a fixed reference date.

    Returns:
        Callable taking ``today`` and optional ``holidays`` / ``max_adjustment_steps``
    """
    def _make(today="2014-05-12", holidays=None, **kwargs) -> PaydateCalculator:
        return PaydateCalculator(today=today, holidays=holidays, **kwargs)

    return _make


@pytest.fixture
def calculator(make_calculator) -> PaydateCalculator:
    """Return a calculator with the built-in holidays and today = 2014-05-12."""
    return make_calculator()


@pytest.fixture
def no_holiday_calculator(make_calculator) -> PaydateCalculator:
    """Return a calculator with an empty holiday set."""
    return make_calculator(holidays=[])


@pytest.fixture
def all_days_2014_2015():
    """Return every calendar day of 2014 and 2015."""
    start = date(2014, 1, 1)
    return [date.fromordinal(start.toordinal() + i) for i in range(730)]
