"""Settings CLI commands for Comp Calc.

Manages settings.json - rate table override, preferences.
"""

import click
from pathlib import Path

from compcalc.sdk import (
    BUNDLED_RATE_TABLE,
    RateTableError,
    clear_setting,
    get_rate_table_path,
    get_setting,
    get_settings_path,
    load_rate_table,
    load_settings,
    set_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - rate_table: path to a custom rate table YAML
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    table_path = get_rate_table_path()
    suffix = " (bundled)" if table_path == BUNDLED_RATE_TABLE else ""
    click.echo(f"  rate_table: {table_path}{suffix}")


@settings.command("rate-table")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom rate_table, revert to the bundled table")
def settings_rate_table(path, clear):
    """Set or clear a custom rate table.

    PATH is a YAML file with the same layout as the bundled table.
    The file is validated before it is saved.

    Examples:
        comp-calc settings rate-table ~/rates/sc_rates_2026.yaml
        comp-calc settings rate-table --clear
    """
    if clear:
        if clear_setting("rate_table"):
            click.echo("Cleared rate_table setting.")
            click.echo(f"Rate table is now: {BUNDLED_RATE_TABLE} (bundled)")
        else:
            click.echo("rate_table was not set.")
        return

    if not path:
        current_table = get_setting("rate_table")
        if current_table:
            click.echo(f"Current rate_table: {current_table}")
        else:
            click.echo(f"No custom rate_table set. Using bundled: {BUNDLED_RATE_TABLE}")
        return

    table_path = Path(path).expanduser().resolve()
    try:
        table = load_rate_table(table_path)
    except RateTableError as e:
        raise click.ClickException(str(e))

    set_setting("rate_table", str(table_path))
    click.echo(f"Set rate_table: {table_path}")
    click.echo(f"  {len(table.years())} years, {table.earliest_year}-{table.latest_year}")
    click.echo(f"Saved to: {get_settings_path()}")
