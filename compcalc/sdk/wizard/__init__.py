"""
Calculator wizards.

Scope:
    - Generic step engine (WizardMachine) and per-session WizardState
    - AWW/compensation rate wizard and commuted value wizard definitions
    - Per-step field validators

Constraints:
    - Validators are pure: fields in, {field: message} out
    - The machine holds no session data; each session owns a WizardState
    - Engines run only when the terminal step is reached on a validated path

Usage:
    from compcalc.sdk.wizard import get_wizard

    wizard = get_wizard("commuted")
    state = wizard.run({"year_of_injury": "2025", "comp_rate": "750"})
    print(state.results.commuted_value)
"""

from datetime import date
from typing import Optional

from ..rates import RateTable
from .aww_wizard import AWW_WIZARD, aww_seed, build_aww_wizard
from .commuted_wizard import COMMUTED_WIZARD, build_commuted_wizard, commuted_seed
from .machine import (
    Step,
    WizardMachine,
    WizardPreconditionError,
    WizardState,
    branch_on,
    goto,
)
from .validators import Clock

WIZARDS = {
    AWW_WIZARD: build_aww_wizard,
    COMMUTED_WIZARD: build_commuted_wizard,
}


def get_wizard(name: str, rate_table: Optional[RateTable] = None, today: Clock = date.today) -> WizardMachine:
    """Build a wizard by name ("aww" or "commuted").

    Raises:
        KeyError: If no wizard has that name
    """
    if name not in WIZARDS:
        raise KeyError(f"Unknown wizard {name!r}. Available: {', '.join(WIZARDS)}")
    return WIZARDS[name](rate_table=rate_table, today=today)


__all__ = [
    "AWW_WIZARD",
    "COMMUTED_WIZARD",
    "WIZARDS",
    "Step",
    "WizardMachine",
    "WizardPreconditionError",
    "WizardState",
    "aww_seed",
    "branch_on",
    "build_aww_wizard",
    "build_commuted_wizard",
    "commuted_seed",
    "get_wizard",
    "goto",
]
