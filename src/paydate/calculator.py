"""Next-paydate calculation.

Given one example paydate and a paydate model, produce the next paydates
after a reference "today". Rules:

- A valid paydate is neither a holiday nor a weekend.
- A paydate on a weekend moves forward until a valid date is reached.
- A paydate on a holiday moves backward until a valid date is reached.
- Holiday adjustment takes precedence over weekend adjustment: once backing
  off a holiday, weekends are also resolved backward.
- The example paydate is an anchor only and is never adjusted.
- The next paydate cannot be today.

Paydate models:

- MONTHLY: same day of the month every month. If that day does not exist in
  the following month, the paydate is the 1st of the month after (March 1
  follows January 30).
- BIWEEKLY: same weekday every other week.
- WEEKLY: same weekday every week.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from itertools import islice
from typing import Iterable, Iterator, Optional, Union

from paydate.holidays import DEFAULT_HOLIDAYS
from paydate.types import AdjustmentLimitError, PaydateModel
from paydate.utils.dates import DateLike, add_months, format_date, shift_date, to_date, today_in_zone

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# ISO weekday number for Friday; anything later is a weekend.
FRIDAY = 5

DEFAULT_NUMBER_OF_PAYDATES = 10
DEFAULT_MAX_ADJUSTMENT_STEPS = 31


class PaydateCalculator:
    """Computes upcoming paydates around a fixed holiday set and today.

    The holiday set and reference date are fixed at construction and never
    change afterwards, so an instance can be shared between callers.
    """

    def __init__(
        self,
        today: Optional[DateLike] = None,
        holidays: Optional[Iterable[DateLike]] = None,
        max_adjustment_steps: int = DEFAULT_MAX_ADJUSTMENT_STEPS,
    ):
        """Initialize calculator.

        Args:
            today: Reference date; paydates returned are strictly after it.
                Defaults to the current date in America/Los_Angeles.
            holidays: Holiday dates overriding the built-in set
            max_adjustment_steps: Day shifts allowed while adjusting a single
                paydate before giving up
        """
        if max_adjustment_steps < 1:
            raise ValueError(f"max_adjustment_steps must be positive, got {max_adjustment_steps}")

        self._today = to_date(today) if today is not None else today_in_zone()
        if holidays is None:
            self._holidays = DEFAULT_HOLIDAYS
        else:
            self._holidays = frozenset(to_date(h) for h in holidays)
        self._max_adjustment_steps = max_adjustment_steps

    @property
    def today(self) -> date:
        return self._today

    @property
    def holidays(self) -> frozenset[date]:
        return self._holidays

    def __repr__(self) -> str:
        return (
            f"PaydateCalculator(today='{format_date(self._today)}', "
            f"holidays={len(self._holidays)})"
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_holiday(self, value: DateLike) -> bool:
        """Whether the date is in the holiday set."""
        return to_date(value) in self._holidays

    @staticmethod
    def is_weekend(value: DateLike) -> bool:
        """Whether the date falls on a Saturday or Sunday."""
        return to_date(value).isoweekday() > FRIDAY

    def is_valid_paydate(self, value: DateLike) -> bool:
        """Whether the date is neither a weekend nor a holiday."""
        d = to_date(value)
        return not self.is_weekend(d) and not self.is_holiday(d)

    # ------------------------------------------------------------------
    # Stepping and adjustment
    # ------------------------------------------------------------------

    @staticmethod
    def advance(value: DateLike, model: Union[str, PaydateModel]) -> date:
        """Return the nominal paydate following ``value`` under ``model``."""
        d = to_date(value)
        model = PaydateModel.parse(model)

        if model is PaydateModel.WEEKLY:
            return d + timedelta(weeks=1)
        if model is PaydateModel.BIWEEKLY:
            return d + timedelta(weeks=2)
        return add_months(d, 1)

    def adjust(self, value: DateLike) -> date:
        """Move a nominal paydate off holidays and weekends.

        Holidays always move backward. Weekends move forward, unless the
        shift started from a holiday, in which case they keep moving backward.
        A forward weekend shift that lands on a holiday switches to backward.

        Raises:
            AdjustmentLimitError: If no valid day is reached within
                ``max_adjustment_steps`` shifts
        """
        original = to_date(value)
        current = original
        resolving_holiday = False

        for _ in range(self._max_adjustment_steps + 1):
            if self.is_holiday(current):
                resolving_holiday = True
                current -= ONE_DAY
            elif self.is_weekend(current):
                current = current - ONE_DAY if resolving_holiday else current + ONE_DAY
            else:
                if current != original:
                    logger.debug(f"Adjusted paydate {original} -> {current}")
                return current

        raise AdjustmentLimitError(
            f"No valid paydate within {self._max_adjustment_steps} days of {original}"
        )

    # ------------------------------------------------------------------
    # Sequence generation
    # ------------------------------------------------------------------

    def iter_paydates(self, model: Union[str, PaydateModel], seed: DateLike) -> Iterator[date]:
        """Yield adjusted paydates after today, indefinitely.

        The seed is advanced at least once, then until the nominal date is
        strictly after today. Each later candidate is advanced from the
        nominal (unadjusted) date.

        An adjusted date that backs off a holiday onto or before today, or
        onto the previously yielded paydate, is skipped.
        """
        model = PaydateModel.parse(model)
        nominal = self.advance(seed, model)
        while nominal <= self._today:
            nominal = self.advance(nominal, model)

        last = self._today
        while True:
            adjusted = self.adjust(nominal)
            if adjusted > last:
                yield adjusted
                last = adjusted
            else:
                logger.debug(f"Skipping {nominal}: adjusts to {adjusted}, not after {last}")
            nominal = self.advance(nominal, model)

    def next_paydates(
        self,
        model: Union[str, PaydateModel],
        seed: DateLike,
        count: int = DEFAULT_NUMBER_OF_PAYDATES,
    ) -> list[date]:
        """Return the next ``count`` valid paydates after today.

        Args:
            model: Paydate model or its token (``MONTHLY``, ``BIWEEKLY``, ``WEEKLY``)
            seed: An example paydate, normally in the past
            count: Number of paydates to return

        Returns:
            Strictly increasing list of ``count`` dates, all after today

        Raises:
            InvalidModelError: If the model token is unknown
            UnparsableDateError: If the seed cannot be parsed
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        model = PaydateModel.parse(model)
        seed = to_date(seed)

        paydates = list(islice(self.iter_paydates(model, seed), count))

        logger.debug(
            f"{model.value} from {seed}: {len(paydates)} paydates after {self._today}"
        )
        return paydates

    def calculate_next_paydates(
        self,
        paydate_model: Union[str, PaydateModel],
        paydate_one: DateLike,
        number_of_paydates: int = DEFAULT_NUMBER_OF_PAYDATES,
    ) -> list[str]:
        """String-in, string-out form of :meth:`next_paydates`.

        Returns:
            The next paydates as ``YYYY-MM-DD`` strings
        """
        return [
            format_date(d)
            for d in self.next_paydates(paydate_model, paydate_one, number_of_paydates)
        ]

    # ------------------------------------------------------------------
    # String helpers
    # ------------------------------------------------------------------

    @staticmethod
    def increase_date(value: DateLike, count: int, unit: str = "days") -> str:
        """Shift a date forward by ``count`` units, as ``YYYY-MM-DD``."""
        return format_date(shift_date(value, count, unit))

    @staticmethod
    def decrease_date(value: DateLike, count: int, unit: str = "days") -> str:
        """Shift a date backward by ``count`` units, as ``YYYY-MM-DD``."""
        return format_date(shift_date(value, -count, unit))
