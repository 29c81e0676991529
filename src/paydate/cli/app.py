from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml

from paydate.config.loader import load_calculator_config
from paydate.types import PaydateError
from paydate.utils.dates import format_date, to_date
from paydate.utils.logging import configure_logging

app = typer.Typer(help="Paydate calculator CLI")

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=2)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Compute upcoming paydates around weekends and holidays."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("next")
def next_paydates(
    model: str = typer.Argument(..., help="Paydate model: MONTHLY, BIWEEKLY or WEEKLY"),
    seed: str = typer.Argument(..., help="An example past paydate (YYYY-MM-DD)"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of paydates"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Calculator config YAML"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Print the next paydates after today."""
    try:
        settings = load_calculator_config(config)
        calculator = settings.create_calculator(today=today)
        number = settings.number_of_paydates if count is None else count
        paydates = calculator.calculate_next_paydates(model, seed, number)
    except (PaydateError, ValueError, FileNotFoundError) as e:
        _fail(str(e))

    logger.info(f"Generated {len(paydates)} {model} paydates from {seed}")
    if as_json:
        typer.echo(json.dumps(paydates, indent=2))
    else:
        for paydate in paydates:
            typer.echo(paydate)


@app.command()
def check(
    date: str = typer.Argument(..., help="Date to classify (YYYY-MM-DD)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Calculator config YAML"),
) -> None:
    """Classify a date and show where it would be adjusted to."""
    try:
        settings = load_calculator_config(config)
        calculator = settings.create_calculator()
        day = to_date(date)
        adjusted = calculator.adjust(day)
    except (PaydateError, ValueError, FileNotFoundError) as e:
        _fail(str(e))

    typer.echo(f"Date:     {format_date(day)} ({day.strftime('%A')})")
    typer.echo(f"Holiday:  {'yes' if calculator.is_holiday(day) else 'no'}")
    typer.echo(f"Weekend:  {'yes' if calculator.is_weekend(day) else 'no'}")
    typer.echo(f"Valid:    {'yes' if calculator.is_valid_paydate(day) else 'no'}")
    typer.echo(f"Adjusted: {format_date(adjusted)}")


@app.command()
def print_config(path: Path) -> None:
    """Print a YAML config file as JSON."""
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    typer.echo(json.dumps(obj, indent=2, default=str))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
