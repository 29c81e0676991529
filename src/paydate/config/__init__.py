"""Configuration loading and management."""

from paydate.config.loader import (
    CalculatorConfig,
    load_calculator_config,
)

__all__ = [
    'CalculatorConfig',
    'load_calculator_config',
]
