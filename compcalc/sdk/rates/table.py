"""Year-indexed statutory rate lookups.

The table is loaded once from YAML and never mutated. Lookups never raise
for an out-of-range year: each caller picks a fallback policy instead.

- "latest": use the latest year on file (AWW / compensation rate path)
- "default": use the fixed statutory ceiling of $1134.43 (commuted value path)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import get_rate_table_path
from .schemas import RateEntry, RateTableFile

logger = logging.getLogger(__name__)

FallbackPolicy = Literal["latest", "default"]

# Fixed by the Commission under S.C. Code 42-9-301, not configurable at runtime
DEFAULT_MAX_COMP_RATE = Decimal("1134.43")
HIGH_DISCOUNT_RATE = Decimal("0.0438")
LOW_DISCOUNT_RATE = Decimal("0.02")
DISCOUNT_THRESHOLD_WEEKS = 100


class RateTableError(Exception):
    """Raised when a rate table file is missing or malformed."""
    pass


@dataclass(frozen=True)
class MaxRateLookup:
    """Result of a maximum compensation rate lookup."""

    requested_year: int
    rate: Decimal
    effective_year: Optional[int]  # None when the fixed default was used
    fallback: bool

    @property
    def source(self) -> str:
        if not self.fallback:
            return f"{self.requested_year} table"
        if self.effective_year is None:
            return "statutory default"
        return f"{self.effective_year} table (latest on file)"


class RateTable:
    """Immutable lookup over validated rate entries."""

    def __init__(self, entries: List[RateEntry], default_max_rate: Decimal = DEFAULT_MAX_COMP_RATE,
                 jurisdiction: str = "SC"):
        if not entries:
            raise RateTableError("Rate table has no entries")
        self._entries: Dict[int, RateEntry] = {e.year: e for e in entries}
        if len(self._entries) != len(entries):
            raise RateTableError("Rate table has more than one entry for a year")
        self.default_max_rate = default_max_rate
        self.jurisdiction = jurisdiction

    @classmethod
    def from_mapping(cls, max_rates: Dict[int, Union[str, Decimal]],
                     discount_rates: Optional[Dict[int, Union[str, Decimal]]] = None) -> "RateTable":
        """Build a table from plain year -> rate mappings (handy in tests)."""
        discount_rates = discount_rates or {}
        entries = [
            RateEntry(year=year, max_compensation_rate=Decimal(str(rate)),
                      discount_rate=Decimal(str(discount_rates[year])) if year in discount_rates else None)
            for year, rate in max_rates.items()
        ]
        return cls(entries)

    def years(self) -> List[int]:
        """Years on file, most recent first."""
        return sorted(self._entries, reverse=True)

    @property
    def latest_year(self) -> int:
        return max(self._entries)

    @property
    def earliest_year(self) -> int:
        return min(self._entries)

    def entry(self, year: int) -> Optional[RateEntry]:
        return self._entries.get(year)

    def lookup_max_comp_rate(self, year: int, policy: FallbackPolicy = "latest") -> MaxRateLookup:
        """Look up the maximum compensation rate, recording any fallback applied."""
        entry = self._entries.get(year)
        if entry is not None:
            return MaxRateLookup(requested_year=year, rate=entry.max_compensation_rate,
                                 effective_year=year, fallback=False)

        if policy == "default":
            logger.debug(f"no max rate for {year}, using statutory default {self.default_max_rate}")
            return MaxRateLookup(requested_year=year, rate=self.default_max_rate,
                                 effective_year=None, fallback=True)

        latest = self.latest_year
        logger.debug(f"no max rate for {year}, using latest year on file ({latest})")
        return MaxRateLookup(requested_year=year, rate=self._entries[latest].max_compensation_rate,
                             effective_year=latest, fallback=True)

    def max_comp_rate_for(self, year: int, policy: FallbackPolicy = "latest") -> Decimal:
        """Maximum weekly compensation rate for a year of injury."""
        return self.lookup_max_comp_rate(year, policy).rate

    def discount_rate_for(self, weeks_remaining: Union[Decimal, int], year: Optional[int] = None) -> Decimal:
        """Annual commutation discount rate for the weeks remaining.

        Claims with more than 100 weeks remaining are discounted at the
        higher rate: the published market rate for ``year`` when the table
        has one, otherwise 4.38%. Claims of 100 weeks or fewer use 2%.
        """
        if Decimal(weeks_remaining) <= DISCOUNT_THRESHOLD_WEEKS:
            return LOW_DISCOUNT_RATE

        if year is not None:
            entry = self._entries.get(year)
            if entry is not None and entry.discount_rate is not None:
                return entry.discount_rate
            logger.debug(f"no market discount rate for {year}, using {HIGH_DISCOUNT_RATE}")

        return HIGH_DISCOUNT_RATE


def load_rate_table(path: Optional[Union[str, Path]] = None) -> RateTable:
    """Load and validate a rate table YAML file.

    Args:
        path: Explicit file path. Defaults to the configured table
            (settings.json "rate_table") or the bundled SC table.

    Raises:
        RateTableError: If the file is missing or fails validation
    """
    table_path = Path(path) if path else get_rate_table_path(require_exists=False)
    if not table_path.exists():
        raise RateTableError(f"Rate table file not found: {table_path}")

    with open(table_path, "r") as f:
        raw = yaml.safe_load(f) or {}

    try:
        parsed = RateTableFile.model_validate(raw)
    except ValidationError as e:
        raise RateTableError(f"Invalid rate table {table_path}:\n{e}")

    logger.debug(f"loaded {len(parsed.rates)} rate entries from {table_path}")
    return RateTable(parsed.rates, default_max_rate=parsed.default_max_compensation_rate,
                     jurisdiction=parsed.jurisdiction)


_rate_table: Optional[RateTable] = None
_rate_table_path: Optional[Path] = None


def get_rate_table() -> RateTable:
    """Get or load the process-wide rate table (read-only)."""
    global _rate_table, _rate_table_path
    table_path = get_rate_table_path(require_exists=True)
    if _rate_table is None or _rate_table_path != table_path:
        _rate_table = load_rate_table(table_path)
        _rate_table_path = table_path
    return _rate_table
