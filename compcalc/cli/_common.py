"""Helpers shared by CLI commands."""

import click

from compcalc.sdk import (
    ConfigNotFoundError,
    RateTable,
    RateTableError,
    WizardMachine,
    WizardState,
    get_rate_table,
    get_setting,
    get_wizard,
)


def load_table() -> RateTable:
    """Configured rate table, with load errors as ClickException."""
    try:
        return get_rate_table()
    except (RateTableError, ConfigNotFoundError) as e:
        raise click.ClickException(str(e))


def load_wizard(name: str) -> WizardMachine:
    return get_wizard(name, rate_table=load_table())


def output_format(requested):
    """--format value, falling back to settings.json default_output_format."""
    return requested or get_setting("default_output_format", "text")


def raise_field_errors(state: WizardState) -> None:
    """Exit non-zero with one line per invalid field."""
    if not state.errors:
        return
    lines = ["Invalid input:"]
    lines += [f"  {field}: {message}" for field, message in state.errors.items()]
    raise click.ClickException("\n".join(lines))
