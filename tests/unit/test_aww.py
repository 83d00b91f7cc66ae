"""Tests for average weekly wage and compensation rate calculations."""

from decimal import Decimal

import pytest

from compcalc.sdk.aww import (
    UnsupportedCalculationError,
    calculate_aww,
    calculate_aww_short_employment,
    calculate_aww_special_case,
    compute_aww,
    compute_compensation_rate,
    compute_total_pay,
    unsupported_result,
)
from compcalc.sdk.config import BUNDLED_RATE_TABLE
from compcalc.sdk.money import round2
from compcalc.sdk.rates import RateTable, load_rate_table


@pytest.fixture
def sc_table():
    return load_rate_table(BUNDLED_RATE_TABLE)


def quarters(total):
    """Four equal quarters adding up to ``total``."""
    each = Decimal(total) / 4
    return [str(each)] * 4


class TestAverageWeeklyWage:

    def test_total_and_aww(self):
        pays = ["2500", "2500", "2500", "2500"]
        assert compute_total_pay(pays) == Decimal("10000")
        assert round2(compute_aww(pays)) == Decimal("192.31")

    def test_aww_is_exact_until_display(self):
        assert compute_aww(["2500"] * 4) == Decimal(10000) / 52

    def test_blank_quarters_count_as_zero(self):
        assert compute_total_pay(["5200", "", None, "0"]) == Decimal("5200")

    def test_negative_quarter_raises(self):
        with pytest.raises(ValueError, match="Quarter 2"):
            compute_aww(["1000", "-1", "1000", "1000"])

    def test_requires_four_quarters(self):
        with pytest.raises(ValueError, match="4 quarterly"):
            compute_total_pay(["1000", "1000", "1000"])


class TestCompensationRate:

    def test_two_thirds_of_aww(self, sc_table):
        cr = compute_compensation_rate(Decimal(10000) / 52, 2025, sc_table)
        assert round2(cr["rate"]) == Decimal("128.21")
        assert cr["capped"] is False

    def test_aww_below_75_is_paid_in_full(self, sc_table):
        cr = compute_compensation_rate(Decimal("60"), 2025, sc_table)
        assert cr["rate"] == Decimal("60")

    @pytest.mark.parametrize("aww", ["75", "100", "112.49"])
    def test_floor_of_75(self, sc_table, aww):
        cr = compute_compensation_rate(Decimal(aww), 2025, sc_table)
        assert cr["rate"] == Decimal("75")

    def test_capped_at_year_maximum(self, sc_table):
        cr = compute_compensation_rate(Decimal("2000"), 2023, sc_table)
        assert cr["rate"] == Decimal("1035.78")
        assert cr["max_rate_applied"] == Decimal("1035.78")
        assert cr["effective_rate_year"] == 2023
        assert cr["capped"] is True

    def test_missing_year_uses_latest_year(self):
        table = RateTable.from_mapping({2020: "500.00", 2021: "600.00"})
        cr = compute_compensation_rate(Decimal("2000"), 2031, table)
        assert cr["rate"] == Decimal("600.00")
        assert cr["effective_rate_year"] == 2021

    def test_never_negative(self, sc_table):
        assert compute_compensation_rate(Decimal("0"), 2025, sc_table)["rate"] == Decimal("0")


class TestCalculateAww:

    def test_result_record(self, sc_table):
        result = calculate_aww(["2500"] * 4, 2025, sc_table)

        assert result.computed
        assert result.year_of_injury == 2025
        assert result.total_annual_pay == Decimal("10000")
        assert result.effective_rate_year == 2025
        assert result.display()["average_weekly_wage"] == "$192.31"
        assert result.display()["compensation_rate"] == "$128.21"

    def test_high_earner_2023(self, sc_table):
        result = calculate_aww(quarters(104000), 2023, sc_table)

        assert result.average_weekly_wage == Decimal("2000")
        assert result.compensation_rate == Decimal("1035.78")
        assert result.capped

    def test_same_inputs_same_result(self, sc_table):
        first = calculate_aww(["3100.10", "2999.99", "0", "4000"], 2019, sc_table)
        second = calculate_aww(["3100.10", "2999.99", "0", "4000"], 2019, sc_table)
        assert first == second


class TestUnsupportedPaths:

    def test_short_employment_is_not_computed(self):
        with pytest.raises(UnsupportedCalculationError, match="42-1-40") as exc:
            calculate_aww_short_employment(2025)
        assert exc.value.path == "short_employment"

    @pytest.mark.parametrize("case", ["guard", "inmate", "student"])
    def test_special_cases_are_not_computed(self, case):
        with pytest.raises(UnsupportedCalculationError) as exc:
            calculate_aww_special_case(case, 2025)
        assert exc.value.path == case

    def test_unsupported_result_has_no_amounts(self):
        try:
            calculate_aww_special_case("volunteerFF", 2024)
        except UnsupportedCalculationError as e:
            result = unsupported_result(2024, e)

        assert result.status == "unsupported"
        assert not result.computed
        assert "Volunteer Fire Fighter" in result.reason
        assert result.compensation_rate is None
        assert result.display()["compensation_rate"] == ""
