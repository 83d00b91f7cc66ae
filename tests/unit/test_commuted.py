"""Tests for the commuted value of remaining indemnity weeks."""

from decimal import Decimal

import pytest

from compcalc.sdk.commuted import (
    calculate_commuted_value,
    compute_weeks_remaining,
    discounted_weeks_factor,
)
from compcalc.sdk.rates import RateTable


@pytest.fixture
def table():
    return RateTable.from_mapping({2024: "1093.67", 2025: "1134.43"}, discount_rates={2025: "0.05"})


def annuity(weeks, annual_rate):
    """Float reference for the present value factor."""
    weekly = annual_rate / 52
    return (1 - (1 + weekly) ** -weeks) / weekly


class TestWeeksRemaining:

    def test_subtracts_from_500(self):
        assert compute_weeks_remaining("120", "30") == Decimal("350")

    def test_blank_is_zero(self):
        assert compute_weeks_remaining("", None) == Decimal("500")

    def test_may_go_negative(self):
        assert compute_weeks_remaining("300", "250") == Decimal("-50")


class TestDiscountedWeeks:

    def test_matches_annuity_formula(self):
        factor = discounted_weeks_factor(Decimal("380"), Decimal("0.0438"))
        assert abs(float(factor) - annuity(380, 0.0438)) < 1e-6

    def test_less_than_undiscounted_weeks(self):
        assert discounted_weeks_factor(Decimal("500"), Decimal("0.0438")) < 500

    def test_zero_rate_is_undiscounted(self):
        assert discounted_weeks_factor(Decimal("250"), Decimal("0")) == Decimal("250")

    @pytest.mark.parametrize("weeks", ["0", "-10"])
    def test_no_weeks_left(self, weeks):
        assert discounted_weeks_factor(Decimal(weeks), Decimal("0.02")) == Decimal("0")


class TestCalculateCommutedValue:

    def test_over_100_weeks(self, table):
        result = calculate_commuted_value("750", "120", "", rate_table=table)

        assert result.weeks_remaining == Decimal("380")
        assert result.discount_rate == Decimal("0.0438")
        assert result.ttd_paid_to_date_value == Decimal("90000")
        assert abs(float(result.commuted_value) - annuity(380, 0.0438) * 750) < 1e-4

    def test_full_500_weeks(self, table):
        result = calculate_commuted_value("500", "0", "0", rate_table=table)

        assert result.weeks_remaining == Decimal("500")
        assert result.ttd_paid_to_date_value == Decimal("0")
        assert result.commuted_value == result.discounted_weeks * 500
        assert abs(float(result.discounted_weeks) - annuity(500, 0.0438)) < 1e-6

    def test_exactly_100_weeks_uses_two_percent(self, table):
        result = calculate_commuted_value("1000", "400", "0", rate_table=table)

        assert result.weeks_remaining == Decimal("100")
        assert result.discount_rate == Decimal("0.02")
        assert abs(float(result.discounted_weeks) - annuity(100, 0.02)) < 1e-6

    def test_market_rate_for_discount_year(self, table):
        result = calculate_commuted_value("750", "0", "0", rate_table=table, discount_year=2025)
        assert result.discount_rate == Decimal("0.05")

    def test_discount_year_without_market_rate(self, table):
        result = calculate_commuted_value("750", "0", "0", rate_table=table, discount_year=2024)
        assert result.discount_rate == Decimal("0.0438")

    def test_all_weeks_used(self, table):
        result = calculate_commuted_value("1000", "500", "0", rate_table=table)

        assert result.weeks_remaining == Decimal("0")
        assert result.discounted_weeks == Decimal("0")
        assert result.commuted_value == Decimal("0")
        assert result.commuted_value_90 == Decimal("0")

    def test_settlement_percentages(self, table):
        result = calculate_commuted_value("812.50", "37.5", "12", rate_table=table)

        assert result.commuted_value_95 == result.commuted_value * Decimal("0.95")
        assert result.commuted_value_90 == result.commuted_value * Decimal("0.90")
        assert result.commuted_value_95 < result.commuted_value

    def test_display(self, table):
        shown = calculate_commuted_value("750", "120", "", rate_table=table).display()

        assert shown["discount_rate"] == "4.38%"
        assert shown["ttd_paid_to_date_value"] == "$90,000.00"
        assert shown["commuted_value"].startswith("$")

    def test_deterministic(self, table):
        first = calculate_commuted_value("640.25", "88", "10", rate_table=table)
        second = calculate_commuted_value("640.25", "88", "10", rate_table=table)
        assert first == second

    @pytest.mark.parametrize("rate", ["0", "-100", ""])
    def test_rate_must_be_positive(self, table, rate):
        with pytest.raises(ValueError):
            calculate_commuted_value(rate, "0", "0", rate_table=table)

    def test_negative_weeks_rejected(self, table):
        with pytest.raises(ValueError, match="negative"):
            calculate_commuted_value("500", "-1", "0", rate_table=table)
