"""Rate table CLI commands for Comp Calc."""

import json

import click
from rich.console import Console

from compcalc.sdk import format_currency, format_percent

from ._common import load_table, output_format
from .renderers import render_rate_table


@click.group()
def rates():
    """Show maximum compensation rates and discount rates."""
    pass


@rates.command("list")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: settings default_output_format, else text)")
def rates_list(fmt):
    """List every year in the rate table, most recent first."""
    table = load_table()

    if output_format(fmt) == "json":
        rows = []
        for year in table.years():
            entry = table.entry(year)
            rows.append(entry.model_dump(mode="json", exclude_none=True))
        click.echo(json.dumps(rows, indent=2))
        return

    render_rate_table(Console(), table)


@rates.command("show")
@click.argument("year", type=int)
@click.option("--policy", type=click.Choice(["latest", "default"]), default="latest",
              help="Fallback for a year not on file: latest year (AWW) or statutory default (commuted value)")
@click.option("--weeks", type=int, default=None,
              help="Also show the discount rate for this many weeks remaining")
def rates_show(year, policy, weeks):
    """Show the maximum compensation rate for YEAR.

    Examples:
        comp-calc rates show 2023
        comp-calc rates show 1975 --policy default
        comp-calc rates show 2025 --weeks 350
    """
    table = load_table()
    lookup = table.lookup_max_comp_rate(year, policy=policy)

    click.echo(f"Maximum compensation rate for {year}: {format_currency(lookup.rate)}")
    click.echo(f"  Source: {lookup.source}")

    if weeks is not None:
        rate = table.discount_rate_for(weeks, year=year)
        click.echo(f"Discount rate for {weeks} weeks remaining: {format_percent(rate)}")
