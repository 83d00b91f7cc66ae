"""Tests for exact decimal money helpers."""

from decimal import Decimal

import pytest

from compcalc.sdk.money import (
    format_currency,
    format_decimal,
    format_percent,
    round2,
    sum_money,
    to_decimal,
)


class TestToDecimal:
    """Parsing form values."""

    def test_strips_currency_decoration(self):
        assert to_decimal("$1,250.50") == Decimal("1250.50")

    def test_blank_is_zero_by_default(self):
        assert to_decimal("") == Decimal("0")
        assert to_decimal("   ") == Decimal("0")
        assert to_decimal(None) == Decimal("0")

    def test_blank_without_default_raises(self):
        with pytest.raises(ValueError, match="required"):
            to_decimal("", default=None)

    @pytest.mark.parametrize("value", ["abc", "12..5", "NaN", "Infinity"])
    def test_garbage_raises(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_float_uses_shortest_repr(self):
        """0.1 must not become 0.1000000000000000055511151231257827."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_and_decimal_pass_through(self):
        assert to_decimal(2500) == Decimal("2500")
        assert to_decimal(Decimal("1.005")) == Decimal("1.005")


class TestRounding:

    def test_sum_is_exact(self):
        assert sum_money(["0.1", "0.2", ""]) == Decimal("0.3")

    def test_round_half_away_from_zero(self):
        assert round2(Decimal("2.675")) == Decimal("2.68")
        assert round2(Decimal("2.665")) == Decimal("2.67")
        assert round2("-0.005") == Decimal("-0.01")

    def test_aww_display_rounding(self):
        assert round2(Decimal(10000) / 52) == Decimal("192.31")

    def test_values_beyond_context_precision(self):
        assert round2(Decimal("1e30")) == Decimal("1000000000000000000000000000000.00")
        assert format_currency("12345678901234567890123456789.125") == "$12,345,678,901,234,567,890,123,456,789.13"


class TestFormatting:

    def test_currency(self):
        assert format_currency(Decimal("1000")) == "$1,000.00"
        assert format_currency(Decimal("1234.567")) == "$1,234.57"

    def test_negative_currency(self):
        assert format_currency(Decimal("-5.5")) == "-$5.50"

    def test_none_formats_blank(self):
        assert format_currency(None) == ""
        assert format_decimal(None) == ""
        assert format_percent(None) == ""

    def test_decimal_has_no_symbol(self):
        assert format_decimal(Decimal("104000")) == "104,000.00"

    def test_percent(self):
        assert format_percent(Decimal("0.0438")) == "4.38%"
        assert format_percent("0.02") == "2.00%"
