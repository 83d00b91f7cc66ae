"""Tests for the MCP server tools (requires the 'mcp' extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from compcalc.mcp import server  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("COMP_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


def run(coro):
    return asyncio.run(coro)


class TestCalculateAww:

    def test_four_quarters(self):
        result = run(server.calculate_aww(
            date_of_injury="2025-02-22",
            quarter1_pay="2500", quarter2_pay="2500", quarter3_pay="2500", quarter4_pay="2500",
            special_case="none", employed_four_quarters=True,
        ))

        assert result["result"]["status"] == "computed"
        assert result["display"]["compensation_rate"] == "$128.21"

    def test_validation_errors(self):
        result = run(server.calculate_aww(
            date_of_injury="2025-02-22",
            quarter1_pay="abc", quarter2_pay="2500", quarter3_pay="2500", quarter4_pay="2500",
            special_case="none", employed_four_quarters=True,
        ))

        assert result["result"] is None
        assert list(result["errors"]) == ["quarter1_pay"]
        assert result["step"] == 4

    def test_padded_special_case(self):
        result = run(server.calculate_aww(
            date_of_injury="2025-02-22",
            quarter1_pay="2500", quarter2_pay="2500", quarter3_pay="2500", quarter4_pay="2500",
            special_case="none ", employed_four_quarters=True,
        ))

        assert "errors" not in result
        assert result["result"]["status"] == "computed"

    def test_short_employment(self):
        result = run(server.calculate_aww(
            date_of_injury="2025-02-22",
            quarter1_pay="", quarter2_pay="", quarter3_pay="", quarter4_pay="",
            special_case="none", employed_four_quarters=False,
        ))

        assert result["result"]["status"] == "unsupported"


class TestCalculateCommutedValue:

    def test_commuted_value(self):
        result = run(server.calculate_commuted_value(
            year_of_injury="2023", comp_rate="750", ttd_paid_weeks="120", other_credit_weeks="",
        ))

        assert result["display"]["weeks_remaining"] == "380"
        assert result["result"]["kind"] == "commuted"

    def test_rate_over_maximum(self):
        result = run(server.calculate_commuted_value(
            year_of_injury="2023", comp_rate="5000", ttd_paid_weeks="", other_credit_weeks="",
        ))

        assert "comp_rate" in result["errors"]


class TestLookups:

    def test_max_rate(self):
        result = run(server.get_max_compensation_rate(year=2023, policy="latest"))

        assert result["rate"] == "1035.78"
        assert result["fallback"] is False

    def test_max_rate_default_policy(self):
        result = run(server.get_max_compensation_rate(year=1950, policy="default"))

        assert result["rate"] == "1134.43"
        assert result["effective_year"] is None

    def test_unknown_policy(self):
        result = run(server.get_max_compensation_rate(year=2023, policy="oldest"))

        assert "error" in result

    def test_preceding_quarters(self):
        result = run(server.get_preceding_quarters(date_of_injury="2025-02-22"))

        assert result["quarters"][0]["label"] == "Quarter 1: October-December 2024"

    def test_preceding_quarters_invalid(self):
        result = run(server.get_preceding_quarters(date_of_injury="tomorrow"))

        assert "date_of_injury" in result["errors"]
