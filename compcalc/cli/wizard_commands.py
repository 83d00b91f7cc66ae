"""Interactive wizard CLI commands for Comp Calc.

Walks through a calculator one step at a time. At any prompt, type
``back`` to return to the previous step, ``reset`` to start over or
``quit`` to leave.
"""

from typing import Optional

import click
from rich.console import Console

from compcalc.sdk import AWWResult, WizardMachine, WizardState, quarter_label

from ._common import load_wizard
from .renderers import render_aww_result, render_commuted_result, render_errors

NAV_COMMANDS = ("back", "reset", "quit")

FIELD_LABELS = {
    "date_of_injury": "Date of injury (YYYY-MM-DD)",
    "special_case": "Category",
    "employed_four_quarters": "Employed four quarters (yes/no)",
    "year_of_injury": "Year of injury",
    "comp_rate": "Compensation rate",
    "ttd_paid_weeks": "TTD weeks paid",
    "other_credit_weeks": "Other weeks credited",
}


def _field_label(name: str, state: WizardState) -> str:
    if name.startswith("quarter") and name.endswith("_pay"):
        return quarter_label(int(name[len("quarter")]), state.fields.get("date_of_injury"))
    return FIELD_LABELS.get(name, name)


def _show_step(console: Console, wizard: WizardMachine, state: WizardState) -> None:
    step = wizard.step_for(state)
    console.print()
    console.print(f"[bold]Step {step.id}: {step.heading(state.fields)}[/bold]")
    description = step.describe(state.fields)
    if description:
        console.print(description)
    for value, label in step.options:
        console.print(f"  [cyan]{value}[/cyan]  {label}")


def _show_results(console: Console, state: WizardState) -> None:
    if isinstance(state.results, AWWResult):
        render_aww_result(console, state.results, state.fields.get("date_of_injury"))
    elif state.results is not None:
        render_commuted_result(console, state.results)


def _prompt_step(wizard: WizardMachine, state: WizardState) -> Optional[str]:
    """Prompt for the current step's fields. Returns a navigation command if one was typed."""
    step = wizard.step_for(state)

    if step.terminal:
        value = click.prompt("Type back, reset or quit", default="quit", show_default=False)
        return value.strip().lower()

    if not step.fields:
        value = click.prompt("Press Enter to continue", default="", show_default=False)
        command = value.strip().lower()
        return command if command in NAV_COMMANDS else None

    for name in step.fields:
        current = state.fields.get(name, "")
        value = click.prompt(f"  {_field_label(name, state)}", default=current,
                             show_default=bool(current))
        command = value.strip().lower()
        if command in NAV_COMMANDS:
            return command
        wizard.set_field(state, name, value)
    return None


def run_interactive(wizard: WizardMachine) -> WizardState:
    """Drive a wizard from prompts until the user quits."""
    console = Console()
    state = wizard.start()

    while True:
        _show_step(console, wizard, state)
        if wizard.step_for(state).terminal:
            _show_results(console, state)

        command = _prompt_step(wizard, state)
        if command == "quit":
            return state
        if command == "back":
            wizard.previous_step(state)
            continue
        if command == "reset":
            wizard.reset(state)
            continue
        if wizard.step_for(state).terminal:
            continue

        if not wizard.next_step(state):
            render_errors(console, state.errors)


@click.group()
def wizard():
    """Step-by-step interactive calculators."""
    pass


@wizard.command("aww")
def wizard_aww():
    """Average weekly wage and compensation rate, one question at a time."""
    run_interactive(load_wizard("aww"))


@wizard.command("commuted")
def wizard_commuted():
    """Commuted value of remaining weeks, one question at a time."""
    run_interactive(load_wizard("commuted"))
