"""Pydantic schemas for rate table validation.

These schemas validate the rate table YAML and provide typed access to the
yearly maximum compensation rates and commutation discount rates.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RateEntry(BaseModel):
    """Statutory rates for a single calendar year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1900, le=2100, description="Calendar year of injury")
    max_compensation_rate: Decimal = Field(..., gt=0, description="Maximum weekly compensation rate")
    discount_rate: Optional[Decimal] = Field(
        default=None, ge=0, lt=1,
        description="Annual commutation discount rate for claims over 100 weeks (if published)",
    )


class RateTableFile(BaseModel):
    """Complete rate table file."""
    model_config = ConfigDict(extra="ignore")  # Allow unknown fields for forward compat

    jurisdiction: str = "SC"
    default_max_compensation_rate: Decimal = Field(Decimal("1134.43"), gt=0)
    rates: list[RateEntry] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _one_entry_per_year(self):
        seen = set()
        for entry in self.rates:
            if entry.year in seen:
                raise ValueError(f"Duplicate rate table entry for year {entry.year}")
            seen.add(entry.year)
        return self
