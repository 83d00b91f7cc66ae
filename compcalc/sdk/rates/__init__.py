"""rates - Statutory rate tables and lookups.

Scope:
- Maximum weekly compensation rate by year of injury
- Commutation discount rates (2% / 4.38% by weeks remaining)
- Lookup-with-fallback policies for years outside the table

Constraints:
- Pure data + lookup - no calculation of benefits (that's in aww/commuted)
- Loaded once from sdk/rates/sc_rates.yaml (or the configured override)

Usage:
    from compcalc.sdk.rates import get_rate_table

    table = get_rate_table()
    table.max_comp_rate_for(2023)                   # Decimal("1035.78")
    table.max_comp_rate_for(1900, policy="default")  # Decimal("1134.43")
"""

from .schemas import RateEntry, RateTableFile

from .table import (
    DEFAULT_MAX_COMP_RATE,
    DISCOUNT_THRESHOLD_WEEKS,
    HIGH_DISCOUNT_RATE,
    LOW_DISCOUNT_RATE,
    FallbackPolicy,
    MaxRateLookup,
    RateTable,
    RateTableError,
    get_rate_table,
    load_rate_table,
)

__all__ = [
    # Schemas
    "RateEntry",
    "RateTableFile",
    # Lookups
    "RateTable",
    "MaxRateLookup",
    "FallbackPolicy",
    "RateTableError",
    "load_rate_table",
    "get_rate_table",
    # Statutory constants
    "DEFAULT_MAX_COMP_RATE",
    "DISCOUNT_THRESHOLD_WEEKS",
    "HIGH_DISCOUNT_RATE",
    "LOW_DISCOUNT_RATE",
]
