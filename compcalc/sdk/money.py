"""Exact decimal helpers for currency math.

Every monetary value in a calculation stays a Decimal at full precision.
Only values headed for display are rounded to cents, half away from zero
(the way the Commission's worksheets round).
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional, Union


CENTS = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, str]


def to_decimal(value: Optional[Union[Number, float]], default: Optional[Decimal] = ZERO) -> Decimal:
    """Convert a form value to Decimal.

    Blank input (None or whitespace) returns ``default``. Currency
    decoration (``$`` and thousands separators) is stripped so values
    pasted from a display field still parse.

    Args:
        value: Raw value, usually a string from a form field
        default: Value returned for blank input. Pass None to treat blank
            input as invalid.

    Returns:
        Decimal value

    Raises:
        ValueError: If the value is not a finite number, or blank with no default

    Example:
        to_decimal("$1,250.50")  # -> Decimal("1250.50")
        to_decimal("")           # -> Decimal("0")
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not a finite number: {value}")
        return value
    if isinstance(value, float):
        # repr of a float is its shortest round-trip form (0.1 -> "0.1")
        value = repr(value)
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValueError("A value is required")
        return default

    cleaned = str(value).strip().replace("$", "").replace(",", "")
    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def sum_money(values: Iterable[Number]) -> Decimal:
    """Sum values exactly. Blank entries count as zero."""
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return total


def round2(amount: Number) -> Decimal:
    """Round to two decimal places, half away from zero.

    Example:
        round2(Decimal("192.307692"))  # -> Decimal("192.31")
        round2(Decimal("-0.005"))      # -> Decimal("-0.01")
    """
    value = to_decimal(amount)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_decimal(amount: Optional[Number]) -> str:
    """Format as ``1,234.57`` (no currency symbol). Empty string for None."""
    if amount is None:
        return ""
    return f"{round2(amount):,.2f}"


def format_currency(amount: Optional[Number]) -> str:
    """Format as ``$1,234.57``. Empty string for None."""
    if amount is None:
        return ""
    rounded = round2(amount)
    if rounded < 0:
        return f"-${rounded.copy_negate():,.2f}"
    return f"${rounded:,.2f}"


def format_percent(rate: Optional[Number]) -> str:
    """Format a decimal rate as a percentage: Decimal("0.0438") -> ``4.38%``."""
    if rate is None:
        return ""
    return f"{round2(to_decimal(rate) * 100)}%"
