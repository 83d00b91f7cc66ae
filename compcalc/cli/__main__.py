"""Comp Calc CLI - Command-line interface for workers' compensation calculators."""

import json
from datetime import date

import click
from rich.console import Console

from compcalc import __version__
from compcalc.sdk import (
    SPECIAL_CASE_LABELS,
    FormFillError,
    aww_form_fields,
    commuted_form_fields,
    fill_pdf_form,
    parse_iso_date,
    preceding_four_quarters,
    quarter_containing,
)

from ._common import load_wizard, output_format, raise_field_errors
from .rates_commands import rates as rates_group
from .renderers import render_aww_result, render_commuted_result, render_quarters
from .settings_commands import settings as settings_group
from .wizard_commands import wizard as wizard_group


@click.group()
@click.version_option(version=__version__, prog_name="comp-calc")
def cli():
    """Comp Calc - South Carolina workers' compensation calculators.

    Average weekly wage / compensation rate and commuted value of
    remaining weeks, using the Commission's maximum rate table.

    The rate table is loaded from (in order):

    \b
    1. settings.json 'rate_table' key (set via 'settings rate-table')
    2. The bundled South Carolina table

    Settings live in COMP_CALC_CONFIG_PATH or ~/.config/comp-calc/.
    """
    pass


cli.add_command(settings_group)
cli.add_command(rates_group)
cli.add_command(wizard_group)


def _write_pdf(fields: dict, pdf_template, pdf_output) -> None:
    if not pdf_template:
        return
    if not pdf_output:
        raise click.UsageError("--pdf-output is required with --pdf-template")
    try:
        written = fill_pdf_form(pdf_template, fields, pdf_output)
    except FormFillError as e:
        raise click.ClickException(str(e))
    click.echo(f"Filled {len(written)} form fields: {pdf_output}", err=True)


@cli.command("aww")
@click.option("--doi", "date_of_injury", required=True, help="Date of injury (YYYY-MM-DD)")
@click.option("--special-case", type=click.Choice(list(SPECIAL_CASE_LABELS)), default="none",
              help="Special employment category (default: none)")
@click.option("--short-employment", is_flag=True,
              help="Employed less than four complete quarters before the injury")
@click.option("--q1", default="", help="Gross pay, most recent quarter before the injury")
@click.option("--q2", default="", help="Gross pay, second quarter before the injury")
@click.option("--q3", default="", help="Gross pay, third quarter before the injury")
@click.option("--q4", default="", help="Gross pay, earliest of the four quarters")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: settings default_output_format or text)")
@click.option("--pdf-template", type=click.Path(dir_okay=False), help="Fillable PDF form to fill")
@click.option("--pdf-output", type=click.Path(dir_okay=False), help="Where to write the filled PDF")
def aww(date_of_injury, special_case, short_employment, q1, q2, q3, q4, fmt, pdf_template, pdf_output):
    """Average weekly wage and compensation rate.

    Uses the four quarters before the quarter of injury. Run
    'comp-calc quarters DATE' to see which quarters those are.

    Examples:
        comp-calc aww --doi 2025-02-22 --q1 2500 --q2 2500 --q3 2500 --q4 2500
        comp-calc aww --doi 2023-06-01 --q1 26000 --q2 26000 --q3 26000 --q4 26000 --format json
    """
    wizard = load_wizard("aww")
    state = wizard.run({
        "date_of_injury": date_of_injury,
        "special_case": special_case,
        "employed_four_quarters": "no" if short_employment else "yes",
        "quarter1_pay": q1,
        "quarter2_pay": q2,
        "quarter3_pay": q3,
        "quarter4_pay": q4,
    })
    raise_field_errors(state)
    result = state.results

    if output_format(fmt) == "json":
        output = result.model_dump(mode="json")
        output["display"] = result.display()
        click.echo(json.dumps(output, indent=2))
    else:
        render_aww_result(Console(), result, date_of_injury)

    _write_pdf(aww_form_fields(result, date_of_injury), pdf_template, pdf_output)


@cli.command("commuted")
@click.option("--year", "year_of_injury", default=lambda: str(date.today().year),
              help="Year of injury (default: current year)")
@click.option("--comp-rate", required=True, help="Weekly compensation rate")
@click.option("--ttd-weeks", default="", help="Weeks of TTD paid to date (default 0)")
@click.option("--other-credit", default="", help="Other weeks credited (default 0)")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: settings default_output_format or text)")
@click.option("--pdf-template", type=click.Path(dir_okay=False), help="Fillable PDF form to fill")
@click.option("--pdf-output", type=click.Path(dir_okay=False), help="Where to write the filled PDF")
def commuted(year_of_injury, comp_rate, ttd_weeks, other_credit, fmt, pdf_template, pdf_output):
    """Commuted value of the weeks remaining under the 500-week cap.

    Claims with more than 100 weeks remaining are discounted at 4.38%
    (or the published market rate for the current year), others at 2%.

    Examples:
        comp-calc commuted --year 2023 --comp-rate 750 --ttd-weeks 120
        comp-calc commuted --comp-rate 1000 --ttd-weeks 300 --other-credit 150 --format json
    """
    wizard = load_wizard("commuted")
    state = wizard.run({
        "year_of_injury": year_of_injury,
        "comp_rate": comp_rate,
        "ttd_paid_weeks": ttd_weeks,
        "other_credit_weeks": other_credit,
    })
    raise_field_errors(state)
    result = state.results

    if output_format(fmt) == "json":
        output = result.model_dump(mode="json")
        output["display"] = result.display()
        click.echo(json.dumps(output, indent=2))
    else:
        render_commuted_result(Console(), result)

    _write_pdf(commuted_form_fields(result), pdf_template, pdf_output)


@cli.command("quarters")
@click.argument("date_of_injury")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: settings default_output_format or text)")
def quarters(date_of_injury, fmt):
    """Show the four quarters before DATE_OF_INJURY (YYYY-MM-DD).

    Quarter 1 is the most recent, quarter 4 the earliest. Their gross
    wages are the inputs to 'comp-calc aww'.
    """
    if parse_iso_date(date_of_injury) is None:
        raise click.BadParameter(f"Invalid date '{date_of_injury}'. Use YYYY-MM-DD.")

    if output_format(fmt) == "json":
        output = {
            "date_of_injury": date_of_injury,
            "quarter_of_injury": quarter_containing(date_of_injury),
            "quarters": [q.to_dict() for q in preceding_four_quarters(date_of_injury)],
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_quarters(Console(), date_of_injury)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
