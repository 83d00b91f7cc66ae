"""Comp Calc MCP Server - FastMCP implementation for calculator tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from compcalc.sdk import (
    ConfigNotFoundError,
    RateTableError,
    format_currency,
    get_rate_table,
    get_wizard,
    preceding_four_quarters,
    quarter_containing,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("comp-calc")


def _run_wizard(name: str, fields: dict) -> dict[str, Any]:
    """Run a wizard over flat fields, returning results or per-field errors."""
    try:
        state = get_wizard(name).run(fields)
    except (RateTableError, ConfigNotFoundError) as e:
        logger.error(f"Rate table unavailable: {e}")
        return {"error": str(e), "result": None}

    if state.errors:
        return {"errors": state.errors, "step": state.current_step, "result": None}

    result = state.results
    return {
        "result": result.model_dump(mode="json"),
        "display": result.display(),
    }


# --- Tools ---

@mcp.tool()
async def calculate_aww(
    date_of_injury: str = Field(description="Date of injury (YYYY-MM-DD, 1979-01-01 through today)"),
    quarter1_pay: str = Field(default="", description="Gross pay for the most recent quarter before the injury"),
    quarter2_pay: str = Field(default="", description="Gross pay for the second quarter before the injury"),
    quarter3_pay: str = Field(default="", description="Gross pay for the third quarter before the injury"),
    quarter4_pay: str = Field(default="", description="Gross pay for the earliest of the four quarters"),
    special_case: str = Field(default="none", description="'none', 'guard', 'volunteerFF', 'volunteerRescue', 'volunteerSheriff', 'volunteerConstable', 'inmate' or 'student'"),
    employed_four_quarters: bool = Field(default=True, description="False if employed less than four complete quarters"),
) -> dict[str, Any]:
    """Calculate average weekly wage (AWW) and weekly compensation rate.

    AWW is the total of the four quarters before the quarter of injury
    divided by 52. The compensation rate is 66.67% of AWW (minimum $75,
    or AWW itself below $75), capped at the maximum rate for the year.

    Use get_preceding_quarters() to find which quarters to enter.
    Special employment cases and short employment return status
    'unsupported' with a reason instead of amounts.
    """
    return _run_wizard("aww", {
        "date_of_injury": date_of_injury,
        "special_case": special_case,
        "employed_four_quarters": "yes" if employed_four_quarters else "no",
        "quarter1_pay": quarter1_pay,
        "quarter2_pay": quarter2_pay,
        "quarter3_pay": quarter3_pay,
        "quarter4_pay": quarter4_pay,
    })


@mcp.tool()
async def calculate_commuted_value(
    year_of_injury: str = Field(description="Year of injury (4 digits, e.g., '2023')"),
    comp_rate: str = Field(description="Weekly compensation rate (> 0, at most the year's maximum)"),
    ttd_paid_weeks: str = Field(default="", description="Weeks of TTD paid to date (blank = 0)"),
    other_credit_weeks: str = Field(default="", description="Other weeks credited (blank = 0)"),
) -> dict[str, Any]:
    """Calculate the commuted (present) value of the weeks remaining under the 500-week cap.

    Returns weeks remaining, discount rate, discounted weeks, and the
    commuted value with its 95% and 90% settlement figures.
    """
    return _run_wizard("commuted", {
        "year_of_injury": year_of_injury,
        "comp_rate": comp_rate,
        "ttd_paid_weeks": ttd_paid_weeks,
        "other_credit_weeks": other_credit_weeks,
    })


@mcp.tool()
async def get_max_compensation_rate(
    year: int = Field(description="Year of injury"),
    policy: str = Field(default="latest", description="Fallback for a year not on file: 'latest' (AWW) or 'default' ($1134.43, commuted value)"),
) -> dict[str, Any]:
    """Get the maximum weekly compensation rate for a year of injury."""
    if policy not in ("latest", "default"):
        return {"error": f"Unknown policy '{policy}'. Use 'latest' or 'default'.", "rate": None}
    try:
        lookup = get_rate_table().lookup_max_comp_rate(year, policy=policy)
    except (RateTableError, ConfigNotFoundError) as e:
        return {"error": str(e), "rate": None}

    return {
        "year": year,
        "rate": str(lookup.rate),
        "formatted": format_currency(lookup.rate),
        "effective_year": lookup.effective_year,
        "fallback": lookup.fallback,
        "source": lookup.source,
    }


@mcp.tool()
async def get_preceding_quarters(
    date_of_injury: str = Field(description="Date of injury (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Get the four quarters whose wages determine AWW.

    Quarter 1 is the most recent quarter before the quarter of injury,
    quarter 4 the earliest.
    """
    quarters = preceding_four_quarters(date_of_injury)
    if quarters is None:
        return {"errors": {"date_of_injury": "Invalid date. Use YYYY-MM-DD."}, "quarters": None}

    return {
        "date_of_injury": date_of_injury,
        "quarter_of_injury": quarter_containing(date_of_injury),
        "quarters": [q.to_dict() for q in quarters],
    }


# --- Resources (optional, for browsing) ---

@mcp.resource("compcalc://rates/max-compensation")
async def max_rates_resource() -> str:
    """Maximum compensation rate table, most recent year first."""
    try:
        table = get_rate_table()
    except (RateTableError, ConfigNotFoundError) as e:
        return json.dumps({"error": str(e)})

    rows = [table.entry(year).model_dump(mode="json", exclude_none=True) for year in table.years()]
    return json.dumps({"jurisdiction": table.jurisdiction, "rates": rows}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
