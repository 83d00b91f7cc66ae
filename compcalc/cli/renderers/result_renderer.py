"""Rich renderers for calculator results.

Transforms SDK result models into formatted Rich tables.
"""

from typing import Mapping, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from compcalc.sdk import (
    AWWResult,
    CommutedValueResult,
    RateTable,
    format_currency,
    format_decimal,
    format_display_date,
    format_percent,
    preceding_four_quarters,
    quarter_containing,
)


def render_errors(console: Console, errors: Mapping[str, str]) -> None:
    """Render per-field validation errors."""
    lines = [f"[bold]{field}[/bold]: {message}" for field, message in errors.items()]
    console.print(Panel("\n".join(lines), title="Please correct", border_style="red"))


def render_aww_result(console: Console, result: AWWResult, date_of_injury: Optional[str] = None) -> None:
    """Render an AWW/compensation rate result.

    Args:
        console: Rich Console instance
        result: Result from calculate_aww() or the AWW wizard
        date_of_injury: ISO date shown in the heading, if known
    """
    heading = "Average Weekly Wage"
    if date_of_injury:
        heading += f" - injury on {format_display_date(date_of_injury)}"

    if not result.computed:
        console.print(Panel(
            f"[yellow]{result.reason}[/yellow]",
            title=heading,
            border_style="yellow"
        ))
        return

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("item")
    table.add_column("amount", justify="right")

    shown = result.display()
    table.add_row("Total annual pay", shown["total_annual_pay"])
    table.add_row("Average weekly wage", shown["average_weekly_wage"])
    table.add_row("[bold]Compensation rate[/bold]", f"[bold]{shown['compensation_rate']}[/bold]")
    table.add_row("Maximum rate", shown["max_rate_applied"])

    console.print(Panel(table, title=heading, border_style="green"))

    if result.effective_rate_year != result.year_of_injury:
        console.print(f"[dim]No maximum rate on file for {result.year_of_injury}; "
                      f"used {result.effective_rate_year}.[/dim]")
    if result.capped:
        console.print("[dim]Compensation rate limited to the maximum rate.[/dim]")


def render_commuted_result(console: Console, result: CommutedValueResult) -> None:
    """Render a commuted value result."""
    shown = result.display()

    inputs = Table(box=None, show_header=False, padding=(0, 2))
    inputs.add_column("key", style="dim")
    inputs.add_column("value", justify="right")
    inputs.add_row("Compensation rate", shown["compensation_rate"])
    inputs.add_row("TTD weeks paid", format_decimal(result.ttd_paid_weeks))
    inputs.add_row("Other weeks credited", format_decimal(result.other_credit_weeks))
    inputs.add_row("Weeks remaining", shown["weeks_remaining"])
    inputs.add_row("TTD paid to date", shown["ttd_paid_to_date_value"])
    console.print(Panel(inputs, title="Inputs", border_style="dim"))

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("item")
    table.add_column("amount", justify="right")
    table.add_row("Discount rate", shown["discount_rate"])
    table.add_row("Discounted weeks", shown["discounted_weeks"])
    table.add_row("[bold]Commuted value[/bold]", f"[bold]{shown['commuted_value']}[/bold]")
    table.add_row("95% of commuted value", shown["commuted_value_95"])
    table.add_row("90% of commuted value", shown["commuted_value_90"])
    console.print(Panel(table, title="Commuted Value", border_style="green"))


def render_quarters(console: Console, date_of_injury: str) -> None:
    """Render the quarter containing the injury and the four quarters before it."""
    quarters = preceding_four_quarters(date_of_injury) or []

    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Quarter")
    table.add_column("Start")
    table.add_column("End")
    for quarter in quarters:
        table.add_row(
            str(quarter.number),
            quarter.label.split(": ", 1)[1],
            format_display_date(quarter.start),
            format_display_date(quarter.end),
        )

    console.print(f"Date of injury falls in {quarter_containing(date_of_injury)}")
    console.print(table)


def render_rate_table(console: Console, rate_table: RateTable) -> None:
    """Render every year in the rate table, most recent first."""
    table = Table(title=f"{rate_table.jurisdiction} maximum compensation rates", box=box.SIMPLE)
    table.add_column("Year", justify="right")
    table.add_column("Max rate", justify="right")
    table.add_column("Discount rate", justify="right")

    for year in rate_table.years():
        entry = rate_table.entry(year)
        table.add_row(
            str(year),
            format_currency(entry.max_compensation_rate),
            format_percent(entry.discount_rate) or "-",
        )

    console.print(table)
    console.print(f"[dim]Years not listed use {format_currency(rate_table.default_max_rate)} "
                  f"(commuted value) or the latest year (AWW).[/dim]")
