"""Commuted value of remaining indemnity (S.C. Code 42-9-301).

The present value of the weeks left under the 500-week cap, discounted
weekly at the Commission's annual rate: 4.38% (or the published market
rate) when more than 100 weeks remain, 2% otherwise.
"""

import logging
from decimal import Decimal, localcontext
from typing import Optional

from .money import ZERO, Number, to_decimal
from .rates import RateTable, get_rate_table
from .schemas import CommutedValueResult

logger = logging.getLogger(__name__)

MAX_INDEMNITY_WEEKS = Decimal("500")
WEEKS_IN_YEAR = 52
SETTLEMENT_95 = Decimal("0.95")
SETTLEMENT_90 = Decimal("0.90")


def compute_weeks_remaining(ttd_paid_weeks: Number, other_credit_weeks: Number) -> Decimal:
    """500 minus weeks already paid or credited. Zero or negative is valid."""
    return MAX_INDEMNITY_WEEKS - (to_decimal(ttd_paid_weeks) + to_decimal(other_credit_weeks))


def discounted_weeks_factor(weeks_remaining: Decimal, annual_rate: Decimal) -> Decimal:
    """Ordinary annuity present value factor: (1 - (1 + i)^-n) / i.

    ``i`` is the weekly rate (annual / 52) and ``n`` the weeks remaining.
    Returns 0 when no weeks remain and ``n`` when the rate is zero.
    """
    if weeks_remaining <= 0:
        return ZERO
    weekly = annual_rate / WEEKS_IN_YEAR
    if weekly == 0:
        return weeks_remaining
    with localcontext() as ctx:
        ctx.prec = 34
        factor = (1 - (1 + weekly) ** (-weeks_remaining)) / weekly
    return +factor


def calculate_commuted_value(
    comp_rate: Number,
    ttd_paid_weeks: Optional[Number] = None,
    other_credit_weeks: Optional[Number] = None,
    rate_table: Optional[RateTable] = None,
    discount_year: Optional[int] = None,
) -> CommutedValueResult:
    """Commuted value for a compensation rate and weeks already paid.

    Args:
        comp_rate: Weekly compensation rate (> 0)
        ttd_paid_weeks: Weeks of TTD paid to date (blank = 0)
        other_credit_weeks: Other weeks credited against the 500 (blank = 0)
        rate_table: Rate table for discount rate lookup (default: configured)
        discount_year: Year whose published market discount rate applies to
            claims over 100 weeks. None uses the statutory 4.38%.

    Raises:
        ValueError: If comp_rate is not positive or weeks are negative
    """
    rate = to_decimal(comp_rate, default=None)
    ttd = to_decimal(ttd_paid_weeks)
    other = to_decimal(other_credit_weeks)
    if rate <= 0:
        raise ValueError(f"Compensation rate must be positive: {rate}")
    if ttd < 0 or other < 0:
        raise ValueError("Weeks paid or credited cannot be negative")

    table = rate_table or get_rate_table()
    weeks_remaining = compute_weeks_remaining(ttd, other)
    discount_rate = table.discount_rate_for(weeks_remaining, year=discount_year)
    discounted = discounted_weeks_factor(weeks_remaining, discount_rate)
    commuted = discounted * rate

    logger.debug(f"commuted value: {weeks_remaining} weeks at {discount_rate} -> "
                 f"{discounted} discounted weeks x {rate} = {commuted}")

    return CommutedValueResult(
        compensation_rate=rate,
        ttd_paid_weeks=ttd,
        other_credit_weeks=other,
        weeks_remaining=weeks_remaining,
        ttd_paid_to_date_value=ttd * rate,
        discount_rate=discount_rate,
        discounted_weeks=discounted,
        commuted_value=commuted,
        commuted_value_95=commuted * SETTLEMENT_95,
        commuted_value_90=commuted * SETTLEMENT_90,
    )
