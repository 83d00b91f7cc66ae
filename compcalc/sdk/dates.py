"""Date of injury and statutory quarter utilities.

S.C. Code 42-1-40 averages wages over the four calendar quarters
immediately preceding the quarter in which the injury occurred. Quarter 1
is the most recent of those four, quarter 4 the earliest.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Union


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DateLike = Union[date, str]


@dataclass(frozen=True)
class Quarter:
    """One of the four quarters preceding a date of injury."""

    number: int  # 1 = most recent prior quarter, 4 = earliest
    start: date
    end: date

    @property
    def label(self) -> str:
        return (f"Quarter {self.number}: {MONTH_NAMES[self.start.month - 1]}-"
                f"{MONTH_NAMES[self.end.month - 1]} {self.start.year}")

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }


def parse_iso_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse YYYY-MM-DD. Returns None for blank or invalid input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        return None
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def year_from_date(value: Optional[DateLike]) -> Optional[int]:
    parsed = parse_iso_date(value)
    return parsed.year if parsed else None


def format_display_date(value: Optional[DateLike]) -> str:
    """``2025-02-22`` -> ``February 22, 2025``. Empty string if invalid."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return ""
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_form_date(value: Optional[DateLike]) -> str:
    """``2025-02-22`` -> ``02/22/2025`` (the format Commission forms expect)."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return ""
    return parsed.strftime("%m/%d/%Y")


def _quarter_index(d: date) -> int:
    return (d.month - 1) // 3 + 1


def _quarter_bounds(year: int, quarter: int) -> tuple:
    start = date(year, (quarter - 1) * 3 + 1, 1)
    if quarter == 4:
        end = date(year, 12, 31)
    else:
        end = date(year, quarter * 3 + 1, 1) - timedelta(days=1)
    return start, end


def quarter_containing(value: DateLike) -> str:
    """Describe the calendar quarter that contains the date of injury.

    Example:
        quarter_containing("2025-02-22")
        # -> "Quarter 1 of 2025 (January 1, 2025 - March 31, 2025)"
    """
    doi = parse_iso_date(value)
    if doi is None:
        return "Invalid Date"
    quarter = _quarter_index(doi)
    start, end = _quarter_bounds(doi.year, quarter)
    return (f"Quarter {quarter} of {doi.year} "
            f"({format_display_date(start)} - {format_display_date(end)})")


def preceding_four_quarters(value: DateLike) -> Optional[List[Quarter]]:
    """The four quarters before the quarter containing the date of injury.

    Returns:
        Quarters ordered most recent (1) to earliest (4), or None if the
        date is invalid.
    """
    doi = parse_iso_date(value)
    if doi is None:
        return None

    year = doi.year
    quarter = _quarter_index(doi)
    quarters = []
    for number in range(1, 5):
        quarter -= 1
        if quarter < 1:
            quarter = 4
            year -= 1
        start, end = _quarter_bounds(year, quarter)
        quarters.append(Quarter(number=number, start=start, end=end))
    return quarters


def quarter_label(number: int, value: Optional[DateLike]) -> str:
    """Label for preceding quarter ``number`` (1-4), or a generic label."""
    if number < 1 or number > 4:
        return f"Quarter {number}"
    quarters = preceding_four_quarters(value) if value else None
    if not quarters:
        return f"Quarter {number}"
    return quarters[number - 1].label
