"""Per-step field validators.

Each validator takes the flat field map and returns ``{field: message}``
for the fields it owns. An empty dict means the step may advance.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Mapping, Optional

from ..dates import parse_iso_date
from ..money import ZERO, to_decimal
from ..rates import RateTable
from ..schemas import SPECIAL_CASE_LABELS

MIN_DATE_OF_INJURY = date(1979, 1, 1)
MIN_YEAR_OF_INJURY = 1979
MAX_WEEKS = Decimal("500")
MAX_QUARTER_PAY = Decimal("1000000000000")  # one trillion dollars per quarter
QUARTER_FIELDS = ("quarter1_pay", "quarter2_pay", "quarter3_pay", "quarter4_pay")

Clock = Callable[[], date]


def _value(fields: Mapping[str, str], name: str) -> str:
    value = fields.get(name)
    return "" if value is None else str(value).strip()


def parse_year(text: str) -> Optional[int]:
    """Integer year from ASCII or Unicode decimal digits, else None."""
    text = (text or "").strip()
    if not text.isdecimal():
        return None
    return int(text)


def _number(text: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
    try:
        return to_decimal(text, default=default)
    except ValueError:
        return None


def validate_date_of_injury(fields: Mapping[str, str], today: Clock = date.today) -> Dict[str, str]:
    doi = parse_iso_date(_value(fields, "date_of_injury"))
    if doi is None or doi < MIN_DATE_OF_INJURY or doi > today():
        return {"date_of_injury": "Please enter a valid date between January 1, 1979 and today."}
    return {}


def validate_special_case(fields: Mapping[str, str]) -> Dict[str, str]:
    if _value(fields, "special_case") not in SPECIAL_CASE_LABELS:
        return {"special_case": "You must select a valid option before proceeding."}
    return {}


def validate_employed_four_quarters(fields: Mapping[str, str]) -> Dict[str, str]:
    if _value(fields, "employed_four_quarters") not in ("yes", "no"):
        return {"employed_four_quarters": "You must select 'yes' or 'no' before proceeding."}
    return {}


def validate_quarter_pay(fields: Mapping[str, str]) -> Dict[str, str]:
    """Every quarter must be a non-negative amount below MAX_QUARTER_PAY.

    Each quarter is reported separately.
    """
    errors = {}
    for name in QUARTER_FIELDS:
        amount = _number(_value(fields, name))
        if amount is None or amount < 0:
            errors[name] = "Please enter a valid amount (must be a positive number)."
        elif amount >= MAX_QUARTER_PAY:
            errors[name] = "Please enter an amount less than $1,000,000,000,000."
    return errors


def validate_year_of_injury(fields: Mapping[str, str], today: Clock = date.today) -> Dict[str, str]:
    current_year = today().year
    year = parse_year(_value(fields, "year_of_injury"))
    message = f"Year must be between {MIN_YEAR_OF_INJURY} and {current_year}."
    if year is None or not MIN_YEAR_OF_INJURY <= year <= current_year:
        return {"year_of_injury": message}
    return {}


def validate_compensation_rate(fields: Mapping[str, str], rate_table: RateTable) -> Dict[str, str]:
    """Rate must be positive and no higher than the maximum for the year of injury.

    A year missing from the table (or not yet valid) is checked against the
    statutory default maximum.
    """
    text = _value(fields, "comp_rate")
    if not text:
        return {"comp_rate": "Compensation Rate is required."}
    rate = _number(text)
    if rate is None:
        return {"comp_rate": "Please enter a valid number for the Compensation Rate."}
    if rate <= 0:
        return {"comp_rate": "Rate must be greater than 0."}

    year = parse_year(_value(fields, "year_of_injury"))
    max_rate = rate_table.max_comp_rate_for(year, policy="default")
    if rate > max_rate:
        return {"comp_rate": f"Compensation Rate must be between $0 and ${max_rate}."}
    return {}


def validate_weeks(fields: Mapping[str, str]) -> Dict[str, str]:
    """Weeks paid and credited: each 0..500 (blank = 0), together at most 500."""
    errors = {}
    weeks = {}
    for name, label in (("ttd_paid_weeks", "TTD Paid"), ("other_credit_weeks", "Other Credit")):
        value = _number(_value(fields, name), default=ZERO)
        if value is None:
            errors[name] = f"{label} must be a valid number."
        elif value < 0:
            errors[name] = "Cannot be negative."
        elif value > MAX_WEEKS:
            errors[name] = "Cannot exceed 500 weeks."
        else:
            weeks[name] = value

    if not errors and sum(weeks.values()) > MAX_WEEKS:
        errors["ttd_paid_weeks"] = "Total weeks (TTD Paid + Other Credit) cannot exceed 500."
    return errors
