"""Average weekly wage / compensation rate wizard (13 steps)."""

from datetime import date
from functools import partial
from typing import Dict, Mapping, Optional

from ..aww import (
    UnsupportedCalculationError,
    calculate_aww,
    calculate_aww_short_employment,
    calculate_aww_special_case,
    unsupported_result,
)
from ..dates import format_display_date, quarter_containing, quarter_label, year_from_date
from ..rates import RateTable, get_rate_table
from ..schemas import SPECIAL_CASE_LABELS
from .machine import Step, WizardMachine, branch_on, goto
from .validators import (
    QUARTER_FIELDS,
    Clock,
    validate_date_of_injury,
    validate_employed_four_quarters,
    validate_quarter_pay,
    validate_special_case,
)

AWW_WIZARD = "aww"

STEP_DATE_OF_INJURY = 1
STEP_SPECIAL_CASE = 2
STEP_EMPLOYED_FOUR_QUARTERS = 3
STEP_QUARTERLY_PAY = 4
STEP_SHORT_EMPLOYMENT = 5
STEP_SUMMARY = 13

# Special case value -> its placeholder step
SPECIAL_CASE_STEPS: Dict[str, int] = {
    "guard": 6,
    "volunteerFF": 7,
    "volunteerRescue": 8,
    "volunteerSheriff": 9,
    "volunteerConstable": 10,
    "inmate": 11,
    "student": 12,
}

DEFAULT_QUARTER_PAY = "2500"

SPECIAL_CASE_OPTIONS = tuple(
    (value, SPECIAL_CASE_LABELS[value]) for value in ["none", *SPECIAL_CASE_STEPS]
)


def _employed_title(fields: Mapping[str, str]) -> str:
    return (f"Was the employee employed for at least four complete quarters before "
            f"{format_display_date(fields.get('date_of_injury')) or 'the date of injury'}?")


def _quarters_description(fields: Mapping[str, str]) -> str:
    doi = fields.get("date_of_injury")
    lines = [f"Date of injury falls in {quarter_containing(doi)}.",
             "Enter gross wages for each of the four preceding quarters:"]
    lines += [f"  {quarter_label(n, doi)}" for n in range(1, 5)]
    return "\n".join(lines)


def _special_case_step(value: str, step_id: int) -> Step:
    label = SPECIAL_CASE_LABELS[value]
    return Step(
        id=step_id,
        name=value,
        title=label,
        description=(f"Wages for a {label.lower()} are determined by a separate statutory rule, "
                     f"not the four-quarter method. The calculator records this case but does "
                     f"not compute a rate for it."),
        next=goto(STEP_SUMMARY),
    )


def _calculate(fields: Mapping[str, str], rate_table: RateTable):
    year = year_from_date(fields.get("date_of_injury"))
    special_case = (fields.get("special_case") or "none").strip()
    try:
        if special_case != "none":
            return calculate_aww_special_case(special_case, year)
        if (fields.get("employed_four_quarters") or "").strip() == "no":
            return calculate_aww_short_employment(year)
        return calculate_aww([fields.get(name) for name in QUARTER_FIELDS], year, rate_table)
    except UnsupportedCalculationError as e:
        return unsupported_result(year, e)


def aww_seed(today: Clock = date.today) -> Dict[str, str]:
    """Defaults for a new or reset AWW session."""
    seed = {
        "date_of_injury": today().isoformat(),
        "special_case": "none",
        "employed_four_quarters": "yes",
    }
    for name in QUARTER_FIELDS:
        seed[name] = DEFAULT_QUARTER_PAY
    return seed


def build_aww_wizard(rate_table: Optional[RateTable] = None, today: Clock = date.today) -> WizardMachine:
    """AWW wizard bound to a rate table and a clock.

    Args:
        rate_table: Table for maximum rate lookups (default: configured table)
        today: Callable returning the current date, for the date-of-injury
            upper bound and the seed date
    """
    table = rate_table or get_rate_table()

    steps = [
        Step(
            id=STEP_DATE_OF_INJURY,
            name="date_of_injury",
            title="What is the date of injury?",
            fields=("date_of_injury",),
            validate=partial(validate_date_of_injury, today=today),
            next=goto(STEP_SPECIAL_CASE),
            description="Enter the date as YYYY-MM-DD (January 1, 1979 through today).",
        ),
        Step(
            id=STEP_SPECIAL_CASE,
            name="special_case",
            title="Does the employee fall into any of these categories?",
            fields=("special_case",),
            validate=validate_special_case,
            next=branch_on("special_case", {"none": STEP_EMPLOYED_FOUR_QUARTERS, **SPECIAL_CASE_STEPS}),
            options=SPECIAL_CASE_OPTIONS,
        ),
        Step(
            id=STEP_EMPLOYED_FOUR_QUARTERS,
            name="employed_four_quarters",
            title=_employed_title,
            fields=("employed_four_quarters",),
            validate=validate_employed_four_quarters,
            next=branch_on("employed_four_quarters",
                           {"yes": STEP_QUARTERLY_PAY, "no": STEP_SHORT_EMPLOYMENT}),
            options=(("yes", "Yes"), ("no", "No")),
        ),
        Step(
            id=STEP_QUARTERLY_PAY,
            name="quarterly_pay",
            title="Gross pay for the four quarters before the injury",
            fields=QUARTER_FIELDS,
            validate=validate_quarter_pay,
            next=goto(STEP_SUMMARY),
            description=_quarters_description,
        ),
        Step(
            id=STEP_SHORT_EMPLOYMENT,
            name="short_employment",
            title="Employed less than four quarters",
            next=goto(STEP_SUMMARY),
            description=("S.C. Code 42-1-40 provides alternative methods when the employee "
                         "worked less than four quarters: days actually worked, the wage of a "
                         "comparable employee, or the contracted wage. The calculator does not "
                         "compute these."),
        ),
        *[_special_case_step(value, step_id) for value, step_id in SPECIAL_CASE_STEPS.items()],
        Step(
            id=STEP_SUMMARY,
            name="summary",
            title="Average weekly wage and compensation rate",
        ),
    ]

    return WizardMachine.from_steps(
        AWW_WIZARD,
        steps,
        seed=partial(aww_seed, today=today),
        calculate=partial(_calculate, rate_table=table),
    )
