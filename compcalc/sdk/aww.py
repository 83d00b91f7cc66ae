"""Average weekly wage (AWW) and compensation rate (CR) calculations.

Implements the four-quarter method of S.C. Code 42-1-40: gross wages
for the four quarters preceding the quarter of injury, divided by 52.
The weekly compensation rate is 66.67% of AWW, floored at $75 (or at the
AWW itself when the worker earned less than $75 a week) and capped at the
Commission's maximum rate for the year of injury.

Alternative methods (less than four quarters employed, special employment
categories) are not computed here: they raise UnsupportedCalculationError
rather than falling back to the four-quarter formula.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from .money import ZERO, Number, sum_money, to_decimal
from .rates import RateTable, get_rate_table
from .schemas import SPECIAL_CASE_LABELS, AWWResult

logger = logging.getLogger(__name__)

WEEKS_IN_YEAR = 52
COMPENSATION_RATE_PERCENTAGE = Decimal("0.6667")
MIN_COMPENSATION_RATE = Decimal("75")


class UnsupportedCalculationError(Exception):
    """Raised for AWW paths whose statutory method is not implemented."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


def _quarter_values(quarter_pays: Sequence[Optional[Number]]) -> list:
    if len(quarter_pays) != 4:
        raise ValueError(f"Expected 4 quarterly pay values, got {len(quarter_pays)}")
    values = [to_decimal(q) for q in quarter_pays]
    for index, value in enumerate(values, start=1):
        if value < 0:
            raise ValueError(f"Quarter {index} pay cannot be negative: {value}")
    return values


def compute_total_pay(quarter_pays: Sequence[Optional[Number]]) -> Decimal:
    """Sum of the four quarterly gross pay amounts. Blank counts as zero."""
    return sum_money(_quarter_values(quarter_pays))


def compute_aww(quarter_pays: Sequence[Optional[Number]]) -> Decimal:
    """Average weekly wage: total of four quarters divided by 52 (exact).

    Raises:
        ValueError: If any quarter is negative or not a number
    """
    return compute_total_pay(quarter_pays) / WEEKS_IN_YEAR


def uncapped_compensation_rate(aww: Decimal) -> Decimal:
    """Two-thirds of AWW floored at $75, or AWW itself below $75."""
    if aww < MIN_COMPENSATION_RATE:
        return aww
    return max(aww * COMPENSATION_RATE_PERCENTAGE, MIN_COMPENSATION_RATE)


def compute_compensation_rate(
    aww: Number,
    year_of_injury: int,
    rate_table: Optional[RateTable] = None,
) -> dict:
    """Compensation rate for an AWW, capped at the year's maximum rate.

    Years outside the table use the latest year on file.

    Returns:
        Dict with:
            - rate: Decimal compensation rate
            - max_rate_applied: maximum rate checked against
            - effective_rate_year: table year the maximum came from
            - capped: True if the maximum limited the rate
    """
    aww = to_decimal(aww)
    table = rate_table or get_rate_table()
    lookup = table.lookup_max_comp_rate(year_of_injury, policy="latest")

    rate = uncapped_compensation_rate(aww)
    capped = False
    if rate > lookup.rate:
        rate = lookup.rate
        capped = True
    if rate < 0:
        rate = ZERO

    return {
        "rate": rate,
        "max_rate_applied": lookup.rate,
        "effective_rate_year": lookup.effective_year,
        "capped": capped,
    }


def calculate_aww(
    quarter_pays: Sequence[Optional[Number]],
    year_of_injury: int,
    rate_table: Optional[RateTable] = None,
) -> AWWResult:
    """Four-quarter AWW and compensation rate for a year of injury."""
    total = compute_total_pay(quarter_pays)
    aww = total / WEEKS_IN_YEAR
    cr = compute_compensation_rate(aww, year_of_injury, rate_table)

    logger.debug(f"AWW: total {total} / {WEEKS_IN_YEAR} = {aww}; CR {cr['rate']} "
                 f"(max {cr['max_rate_applied']} from {cr['effective_rate_year']})")

    return AWWResult(
        year_of_injury=year_of_injury,
        total_annual_pay=total,
        average_weekly_wage=aww,
        compensation_rate=cr["rate"],
        max_rate_applied=cr["max_rate_applied"],
        effective_rate_year=cr["effective_rate_year"],
        capped=cr["capped"],
    )


def calculate_aww_short_employment(year_of_injury: int) -> AWWResult:
    """Less than four quarters employed.

    S.C. Code 42-1-40 allows days actually worked, a comparable employee's
    wage, or the contracted wage. None is implemented yet.

    Raises:
        UnsupportedCalculationError: always
    """
    raise UnsupportedCalculationError(
        "Employment of less than four quarters requires an alternative method under "
        "S.C. Code 42-1-40 (days actually worked, comparable employee wage, or contracted wage). "
        "This calculator does not compute it.",
        path="short_employment",
    )


def calculate_aww_special_case(special_case: str, year_of_injury: int) -> AWWResult:
    """Special employment categories (guard, volunteers, inmates, students).

    Raises:
        UnsupportedCalculationError: always
    """
    label = SPECIAL_CASE_LABELS.get(special_case, special_case)
    raise UnsupportedCalculationError(
        f"{label}: wages for this category are set by a separate statutory rule. "
        f"This calculator does not compute it.",
        path=special_case,
    )


def unsupported_result(year_of_injury: int, error: UnsupportedCalculationError) -> AWWResult:
    """Result record for a path the calculator does not compute."""
    logger.warning(f"AWW not computed ({error.path}): {error}")
    return AWWResult(year_of_injury=year_of_injury, status="unsupported", reason=str(error))

