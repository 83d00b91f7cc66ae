"""Tests for the rate table: loading, lookups and fallback policies.

Uses isolated directories via tmp_path and COMP_CALC_CONFIG_PATH
to avoid touching real settings.
"""

import json
from decimal import Decimal

import pytest
import yaml

from compcalc.sdk.config import BUNDLED_RATE_TABLE, ConfigNotFoundError
from compcalc.sdk.rates import (
    DEFAULT_MAX_COMP_RATE,
    HIGH_DISCOUNT_RATE,
    LOW_DISCOUNT_RATE,
    RateTable,
    RateTableError,
    get_rate_table,
    load_rate_table,
)


# === FIXTURES ===


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("COMP_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def sc_table():
    return load_rate_table(BUNDLED_RATE_TABLE)


@pytest.fixture
def short_table():
    """Two-year table whose latest rate differs from the statutory default."""
    return RateTable.from_mapping({2020: "500.00", 2021: "600.00"}, discount_rates={2021: "0.05"})


def write_table(path, rates, **extra):
    data = {"jurisdiction": "SC", "rates": rates, **extra}
    path.write_text(yaml.safe_dump(data))
    return path


# === BUNDLED TABLE ===


class TestBundledTable:

    def test_covers_1979_through_2025(self, sc_table):
        assert sc_table.earliest_year == 1979
        assert sc_table.latest_year == 2025
        assert len(sc_table.years()) == 2025 - 1979 + 1

    def test_years_most_recent_first(self, sc_table):
        years = sc_table.years()
        assert years[0] == 2025
        assert years == sorted(years, reverse=True)

    def test_known_rates(self, sc_table):
        assert sc_table.max_comp_rate_for(2023) == Decimal("1035.78")
        assert sc_table.max_comp_rate_for(2025) == Decimal("1134.43")
        assert sc_table.max_comp_rate_for(1979) == Decimal("185.00")

    def test_rates_load_as_exact_decimals(self, sc_table):
        assert sc_table.entry(2021).max_compensation_rate == Decimal("903.40")


# === FALLBACK POLICIES ===


class TestFallback:

    def test_exact_year_is_not_a_fallback(self, short_table):
        lookup = short_table.lookup_max_comp_rate(2020)
        assert lookup.rate == Decimal("500.00")
        assert lookup.effective_year == 2020
        assert lookup.fallback is False

    def test_latest_policy_uses_latest_year(self, short_table):
        lookup = short_table.lookup_max_comp_rate(2030, policy="latest")
        assert lookup.rate == Decimal("600.00")
        assert lookup.effective_year == 2021
        assert lookup.fallback is True
        assert "latest" in lookup.source

    def test_default_policy_uses_statutory_default(self, short_table):
        lookup = short_table.lookup_max_comp_rate(2030, policy="default")
        assert lookup.rate == DEFAULT_MAX_COMP_RATE
        assert lookup.effective_year is None
        assert lookup.source == "statutory default"

    def test_year_before_table_never_raises(self, sc_table):
        assert sc_table.max_comp_rate_for(1900, policy="latest") == Decimal("1134.43")
        assert sc_table.max_comp_rate_for(1900, policy="default") == Decimal("1134.43")


# === DISCOUNT RATES ===


class TestDiscountRate:

    @pytest.mark.parametrize("weeks", [0, 50, 100, Decimal("100")])
    def test_hundred_weeks_or_fewer_use_two_percent(self, short_table, weeks):
        assert short_table.discount_rate_for(weeks) == LOW_DISCOUNT_RATE

    def test_over_hundred_weeks_use_high_rate(self, short_table):
        assert short_table.discount_rate_for(101) == HIGH_DISCOUNT_RATE
        assert short_table.discount_rate_for(Decimal("100.5")) == HIGH_DISCOUNT_RATE

    def test_market_rate_for_year_replaces_high_rate(self, short_table):
        assert short_table.discount_rate_for(400, year=2021) == Decimal("0.05")

    def test_year_without_market_rate_uses_high_rate(self, short_table):
        assert short_table.discount_rate_for(400, year=2020) == HIGH_DISCOUNT_RATE

    def test_market_rate_never_applies_at_or_below_threshold(self, short_table):
        assert short_table.discount_rate_for(100, year=2021) == LOW_DISCOUNT_RATE


# === LOADING ===


class TestLoadRateTable:

    def test_duplicate_year_rejected(self, tmp_path):
        path = write_table(tmp_path / "dup.yaml", [
            {"year": 2024, "max_compensation_rate": "1000.00"},
            {"year": 2024, "max_compensation_rate": "1001.00"},
        ])
        with pytest.raises(RateTableError, match="Duplicate"):
            load_rate_table(path)

    def test_negative_rate_rejected(self, tmp_path):
        path = write_table(tmp_path / "neg.yaml", [{"year": 2024, "max_compensation_rate": "-1"}])
        with pytest.raises(RateTableError):
            load_rate_table(path)

    def test_discount_rate_must_be_fraction(self, tmp_path):
        path = write_table(tmp_path / "pct.yaml", [
            {"year": 2024, "max_compensation_rate": "1000.00", "discount_rate": "4.38"},
        ])
        with pytest.raises(RateTableError):
            load_rate_table(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RateTableError, match="not found"):
            load_rate_table(tmp_path / "nope.yaml")

    def test_default_max_rate_from_file(self, tmp_path):
        path = write_table(tmp_path / "custom.yaml",
                           [{"year": 2024, "max_compensation_rate": "1000.00"}],
                           default_max_compensation_rate="999.99")
        table = load_rate_table(path)
        assert table.max_comp_rate_for(1990, policy="default") == Decimal("999.99")


class TestGetRateTable:

    def test_uses_bundled_table_by_default(self, isolated_config):
        assert get_rate_table().latest_year == 2025

    def test_uses_configured_table(self, isolated_config, tmp_path):
        path = write_table(tmp_path / "custom.yaml", [{"year": 2030, "max_compensation_rate": "1500.00"}])
        (isolated_config / "settings.json").write_text(json.dumps({"rate_table": str(path)}))

        table = get_rate_table()

        assert table.latest_year == 2030
        assert table.max_comp_rate_for(2030) == Decimal("1500.00")

    def test_configured_table_missing(self, isolated_config, tmp_path):
        missing = tmp_path / "missing.yaml"
        (isolated_config / "settings.json").write_text(json.dumps({"rate_table": str(missing)}))

        with pytest.raises(ConfigNotFoundError, match="settings rate-table"):
            get_rate_table()
