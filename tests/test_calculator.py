"""Tests for next-paydate generation."""

from datetime import date

import pytest

from paydate.calculator import PaydateCalculator
from paydate.types import InvalidModelError, PaydateModel, UnparsableDateError


class TestFirstPaydate:
    """First generated paydate, with today set to the example paydate."""

    @pytest.mark.parametrize(
        "model, paydate_one, expected",
        [
            ("BIWEEKLY", "2014-05-12", "2014-05-23"),  # Memorial Day Monday
            ("MONTHLY", "2014-04-26", "2014-05-23"),  # Memorial Day Monday
            ("MONTHLY", "2014-11-25", "2014-12-24"),  # Christmas
            ("MONTHLY", "2014-04-03", "2014-05-05"),  # Saturday
            ("MONTHLY", "2014-03-31", "2014-05-01"),  # April has no 31st
            ("MONTHLY", "2014-01-31", "2014-03-03"),  # Rolls to Saturday Mar 1
            ("WEEKLY", "2009-04-29", "2009-05-06"),  # No holidays
            ("WEEKLY", "2014-05-19", "2014-05-23"),  # Friday before the weekend
            ("WEEKLY", "2014-04-27", "2014-05-05"),  # Monday after the weekend
        ],
    )
    def test_first_paydate(self, make_calculator, model, paydate_one, expected):
        """First paydate matches the known fixtures."""
        calc = make_calculator(today=paydate_one)

        result = calc.calculate_next_paydates(model, paydate_one, 1)

        assert result == [expected]


class TestNextPaydates:
    """Test the bounded sequence of paydates."""

    def test_biweekly_sequence(self, calculator):
        """Only the holiday candidate moves; later ones keep the nominal cadence."""
        result = calculator.calculate_next_paydates("BIWEEKLY", "2014-05-12", 5)

        assert result == [
            "2014-05-23",
            "2014-06-09",
            "2014-06-23",
            "2014-07-07",
            "2014-07-21",
        ]

    def test_monthly_rollover_drift(self, make_calculator):
        """After rolling to the 1st, later months continue from the 1st."""
        calc = make_calculator(today="2014-01-31")

        result = calc.next_paydates(PaydateModel.MONTHLY, date(2014, 1, 31), 4)

        # Mar 1 is a Saturday and Jun 1 a Sunday
        assert result == [
            date(2014, 3, 3),
            date(2014, 4, 1),
            date(2014, 5, 1),
            date(2014, 6, 2),
        ]

    def test_defaults_to_ten_paydates(self, calculator):
        """Default count is ten."""
        result = calculator.calculate_next_paydates("WEEKLY", "2014-05-05")

        assert len(result) == 10

    def test_fast_forwards_old_seed(self, make_calculator):
        """An old seed is advanced until it passes today."""
        calc = make_calculator(today="2014-05-20")

        result = calc.calculate_next_paydates("WEEKLY", "2014-01-06", 2)

        assert result == ["2014-05-23", "2014-06-02"]

    def test_seed_equal_to_today_is_excluded(self, make_calculator):
        """The next paydate cannot be today, even if today is a valid paydate."""
        calc = make_calculator(today="2014-05-27")

        result = calc.calculate_next_paydates("WEEKLY", "2014-05-27", 1)

        assert result == ["2014-06-03"]

    def test_future_seed_is_never_returned(self, make_calculator):
        """A seed after today is an anchor only, not an output."""
        calc = make_calculator(today="2014-05-27")

        result = calc.calculate_next_paydates("WEEKLY", "2014-06-03", 2)

        assert result == ["2014-06-10", "2014-06-17"]

    def test_adjustment_back_onto_today_is_skipped(self, make_calculator):
        """A holiday backing off onto today does not produce a paydate."""
        calc = make_calculator(today="2014-05-23")

        result = calc.calculate_next_paydates("WEEKLY", "2014-05-19", 2)

        assert result == ["2014-06-02", "2014-06-09"]

    def test_zero_count_returns_empty(self, calculator):
        """Zero paydates requested gives an empty list."""
        assert calculator.next_paydates("WEEKLY", "2014-05-05", 0) == []

    def test_negative_count_raises(self, calculator):
        """Negative count is a usage error."""
        with pytest.raises(ValueError, match="non-negative"):
            calculator.next_paydates("WEEKLY", "2014-05-05", -1)

    def test_unknown_model_raises(self, calculator):
        """Model tokens are case-sensitive."""
        with pytest.raises(InvalidModelError, match="Unknown paydate model"):
            calculator.calculate_next_paydates("monthly", "2014-05-05", 1)

    def test_unparsable_seed_raises(self, calculator):
        """Seed must be YYYY-MM-DD."""
        with pytest.raises(UnparsableDateError):
            calculator.calculate_next_paydates("WEEKLY", "05/05/2014", 1)

    def test_iter_paydates_is_lazy_and_unbounded(self, calculator):
        """The generator keeps producing paydates past the holiday table."""
        gen = calculator.iter_paydates("MONTHLY", "2014-05-15")

        dates = [next(gen) for _ in range(60)]

        assert dates[0] == date(2014, 6, 16)  # Jun 15 2014 is a Sunday
        assert dates[-1] > date(2019, 1, 1)


class TestSequenceProperties:
    """Invariants of generated paydates for every model."""

    @pytest.mark.parametrize("model", list(PaydateModel))
    @pytest.mark.parametrize("seed", ["2013-12-31", "2014-01-30", "2014-02-28", "2014-05-24"])
    def test_paydates_valid_increasing_and_after_today(self, make_calculator, model, seed):
        """Exactly count dates, strictly increasing, valid, after today."""
        calc = make_calculator(today="2014-02-01")

        result = calc.next_paydates(model, seed, 30)

        assert len(result) == 30
        assert all(d > calc.today for d in result)
        assert all(a < b for a, b in zip(result, result[1:]))
        assert all(calc.is_valid_paydate(d) for d in result)


class TestConstruction:
    """Test calculator construction."""

    def test_today_defaults_to_reference_zone(self, monkeypatch):
        """Without today, the current Los Angeles date is used."""
        monkeypatch.setattr(
            "paydate.calculator.today_in_zone", lambda: date(2014, 5, 12)
        )

        calc = PaydateCalculator()

        assert calc.today == date(2014, 5, 12)

    def test_holidays_default_and_override(self):
        """Holidays default to the built-in set; an override replaces it."""
        default = PaydateCalculator(today="2014-05-12")
        custom = PaydateCalculator(today="2014-05-12", holidays=["2014-05-27"])

        assert default.is_holiday("2014-05-26")
        assert not custom.is_holiday("2014-05-26")
        assert custom.holidays == frozenset({date(2014, 5, 27)})

    def test_holidays_are_immutable(self):
        """Holiday set is a frozenset and cannot be reassigned."""
        source = ["2014-05-27"]
        calc = PaydateCalculator(today="2014-05-12", holidays=source)
        source.append("2014-05-28")

        assert isinstance(calc.holidays, frozenset)
        assert not calc.is_holiday("2014-05-28")
        with pytest.raises(AttributeError):
            calc.holidays = frozenset()

    def test_invalid_max_steps_raises(self):
        """Adjustment cap must be positive."""
        with pytest.raises(ValueError, match="max_adjustment_steps"):
            PaydateCalculator(today="2014-05-12", max_adjustment_steps=0)

    def test_repr(self, calculator):
        """Repr shows the reference date and holiday count."""
        assert repr(calculator) == "PaydateCalculator(today='2014-05-12', holidays=20)"


class TestDateHelpers:
    """Test increase_date and decrease_date."""

    def test_increase_days(self):
        assert PaydateCalculator.increase_date("2014-05-30", 3) == "2014-06-02"

    def test_decrease_weeks(self):
        assert PaydateCalculator.decrease_date("2014-05-26", 2, "weeks") == "2014-05-12"

    def test_decrease_months(self):
        """Backward month shifts are supported too."""
        assert PaydateCalculator.decrease_date("2014-01-15", 1, "months") == "2013-12-15"
        assert PaydateCalculator.decrease_date("2014-03-31", 1, "month") == "2014-03-01"

    def test_increase_months_rolls_over(self):
        """Month shifts use the monthly paydate rollover."""
        assert PaydateCalculator.increase_date("2014-01-31", 1, "month") == "2014-03-01"
