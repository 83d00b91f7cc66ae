"""Commuted value wizard (4 steps)."""

from datetime import date
from functools import partial
from typing import Dict, Mapping, Optional

from ..commuted import calculate_commuted_value
from ..rates import RateTable, get_rate_table
from .machine import Step, WizardMachine, goto
from .validators import Clock, parse_year, validate_compensation_rate, validate_weeks, validate_year_of_injury

COMMUTED_WIZARD = "commuted"

STEP_YEAR_OF_INJURY = 1
STEP_COMPENSATION_RATE = 2
STEP_WEEKS = 3
STEP_SUMMARY = 4


def _rate_description(fields: Mapping[str, str], rate_table: RateTable) -> str:
    year_text = (fields.get("year_of_injury") or "").strip()
    year = parse_year(year_text)
    lookup = rate_table.lookup_max_comp_rate(year, policy="default")
    return f"Maximum compensation rate for {year_text or 'this year'}: ${lookup.rate} ({lookup.source})."


def _calculate(fields: Mapping[str, str], rate_table: RateTable, today: Clock):
    return calculate_commuted_value(
        fields.get("comp_rate"),
        fields.get("ttd_paid_weeks"),
        fields.get("other_credit_weeks"),
        rate_table=rate_table,
        discount_year=today().year,
    )


def commuted_seed(today: Clock = date.today) -> Dict[str, str]:
    """Defaults for a new or reset commuted value session."""
    return {
        "year_of_injury": str(today().year),
        "comp_rate": "",
        "ttd_paid_weeks": "",
        "other_credit_weeks": "",
    }


def build_commuted_wizard(rate_table: Optional[RateTable] = None, today: Clock = date.today) -> WizardMachine:
    """Commuted value wizard bound to a rate table and a clock.

    The market discount rate for claims over 100 weeks is taken from the
    table entry for the year the calculation runs, not the year of injury.
    """
    table = rate_table or get_rate_table()

    steps = [
        Step(
            id=STEP_YEAR_OF_INJURY,
            name="year_of_injury",
            title="What year did the injury occur?",
            fields=("year_of_injury",),
            validate=partial(validate_year_of_injury, today=today),
            next=goto(STEP_COMPENSATION_RATE),
        ),
        Step(
            id=STEP_COMPENSATION_RATE,
            name="comp_rate",
            title="What is the weekly compensation rate?",
            fields=("comp_rate",),
            validate=partial(validate_compensation_rate, rate_table=table),
            next=goto(STEP_WEEKS),
            description=partial(_rate_description, rate_table=table),
        ),
        Step(
            id=STEP_WEEKS,
            name="weeks",
            title="Weeks of TTD paid and other weeks credited",
            fields=("ttd_paid_weeks", "other_credit_weeks"),
            validate=validate_weeks,
            next=goto(STEP_SUMMARY),
            description="Leave blank for zero. Together the weeks cannot exceed 500.",
        ),
        Step(
            id=STEP_SUMMARY,
            name="summary",
            title="Commuted value",
        ),
    ]

    return WizardMachine.from_steps(
        COMMUTED_WIZARD,
        steps,
        seed=partial(commuted_seed, today=today),
        calculate=partial(_calculate, rate_table=table, today=today),
    )
