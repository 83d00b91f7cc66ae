"""Pydantic schemas for calculator results.

Results carry exact decimals. Rounding to cents happens only in
``display()``, which returns the strings a page, CLI or PDF form shows.
"""

from decimal import Decimal
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .money import format_currency, format_decimal, format_percent, round2


SpecialCase = Literal[
    "none",
    "guard",
    "volunteerFF",
    "volunteerRescue",
    "volunteerSheriff",
    "volunteerConstable",
    "inmate",
    "student",
]

SPECIAL_CASE_LABELS: Dict[str, str] = {
    "guard": "State and/or National Guard",
    "volunteerFF": "Volunteer Fire Fighter",
    "volunteerRescue": "Volunteer Rescue Squad Member",
    "volunteerSheriff": "Volunteer Deputy Sheriff",
    "volunteerConstable": "Volunteer State Constable",
    "inmate": "Inmate",
    "student": "Student Engaged in Work Study, Marketing Education, or Apprenticeship",
    "none": "None of the Above",
}


class AWWResult(BaseModel):
    """Average weekly wage and compensation rate for one date of injury.

    ``status == "unsupported"`` marks a path the calculator does not
    compute (short employment, special employment cases). Money fields are
    None in that case and ``reason`` explains why.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["aww"] = "aww"
    status: Literal["computed", "unsupported"] = "computed"
    year_of_injury: int = Field(..., description="Calendar year of the date of injury")
    total_annual_pay: Optional[Decimal] = Field(None, ge=0, description="Sum of the four quarters")
    average_weekly_wage: Optional[Decimal] = Field(None, ge=0, description="Total pay / 52")
    compensation_rate: Optional[Decimal] = Field(None, ge=0, description="Weekly compensation rate after floor and cap")
    max_rate_applied: Optional[Decimal] = Field(None, description="Maximum rate the CR was checked against")
    effective_rate_year: Optional[int] = Field(None, description="Table year the maximum rate came from")
    capped: bool = Field(False, description="True when the maximum rate limited the CR")
    reason: Optional[str] = Field(None, description="Why the result was not computed")

    @property
    def computed(self) -> bool:
        return self.status == "computed"

    def display(self) -> Dict[str, str]:
        """Display strings for each figure (blank when not computed)."""
        return {
            "year_of_injury": str(self.year_of_injury),
            "total_annual_pay": format_currency(self.total_annual_pay),
            "average_weekly_wage": format_currency(self.average_weekly_wage),
            "compensation_rate": format_currency(self.compensation_rate),
            "max_rate_applied": format_currency(self.max_rate_applied),
            "status": self.status,
            "reason": self.reason or "",
        }


class CommutedValueResult(BaseModel):
    """Present value of the remaining weeks of indemnity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["commuted"] = "commuted"
    compensation_rate: Decimal = Field(..., gt=0)
    ttd_paid_weeks: Decimal = Field(..., ge=0)
    other_credit_weeks: Decimal = Field(..., ge=0)
    weeks_remaining: Decimal = Field(..., description="500 - (TTD paid + other credit); may be <= 0")
    ttd_paid_to_date_value: Decimal = Field(..., ge=0)
    discount_rate: Decimal = Field(..., ge=0, description="Annual discount rate used")
    discounted_weeks: Decimal = Field(..., ge=0, description="Present value annuity factor in weeks")
    commuted_value: Decimal = Field(..., ge=0)
    commuted_value_95: Decimal = Field(..., ge=0)
    commuted_value_90: Decimal = Field(..., ge=0)

    def display(self) -> Dict[str, str]:
        return {
            "compensation_rate": format_currency(self.compensation_rate),
            "weeks_remaining": str(self.weeks_remaining),
            "ttd_paid_to_date_value": format_currency(self.ttd_paid_to_date_value),
            "discount_rate": format_percent(self.discount_rate),
            "discounted_weeks": format_decimal(self.discounted_weeks),
            "commuted_value": format_currency(self.commuted_value),
            "commuted_value_95": format_currency(self.commuted_value_95),
            "commuted_value_90": format_currency(self.commuted_value_90),
        }

    def rounded(self) -> Dict[str, Decimal]:
        """Money figures rounded to cents (for JSON output)."""
        return {
            "ttd_paid_to_date_value": round2(self.ttd_paid_to_date_value),
            "discounted_weeks": round2(self.discounted_weeks),
            "commuted_value": round2(self.commuted_value),
            "commuted_value_95": round2(self.commuted_value_95),
            "commuted_value_90": round2(self.commuted_value_90),
        }
