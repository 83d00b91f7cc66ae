"""Commission form field values from calculator results.

Maps results to display strings keyed by AcroForm field name and fills an
existing fillable PDF template with PyPDF2. Amounts use thousands
separators without a dollar sign (the forms print their own), dates use
MM/DD/YYYY.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import PyPDF2

from .dates import DateLike, format_form_date
from .money import format_decimal, format_percent
from .schemas import AWWResult, CommutedValueResult

logger = logging.getLogger(__name__)


class FormFillError(Exception):
    """Raised when a PDF template cannot be filled."""
    pass


def aww_form_fields(result: AWWResult, date_of_injury: Optional[DateLike] = None) -> Dict[str, str]:
    """Form fields for an AWW/compensation rate result.

    Unsupported results carry only the date and year: no amounts.
    """
    fields = {
        "Date_Of_Injury": format_form_date(date_of_injury),
        "Year_Of_Injury": str(result.year_of_injury),
    }
    if not result.computed:
        return fields

    fields.update({
        "Total_Annual_Pay": format_decimal(result.total_annual_pay),
        "Average_Weekly_Wage": format_decimal(result.average_weekly_wage),
        "Compensation_Rate": format_decimal(result.compensation_rate),
        "Max_Compensation_Rate": format_decimal(result.max_rate_applied),
    })
    return fields


def commuted_form_fields(result: CommutedValueResult) -> Dict[str, str]:
    return {
        "Compensation_Rate": format_decimal(result.compensation_rate),
        "TTD_Weeks_Paid": format_decimal(result.ttd_paid_weeks),
        "Other_Weeks_Credited": format_decimal(result.other_credit_weeks),
        "Weeks_Remaining": format_decimal(result.weeks_remaining),
        "TTD_Paid_To_Date": format_decimal(result.ttd_paid_to_date_value),
        "Discount_Rate": format_percent(result.discount_rate),
        "Discounted_Weeks": format_decimal(result.discounted_weeks),
        "Commuted_Value": format_decimal(result.commuted_value),
        "Commuted_Value_95": format_decimal(result.commuted_value_95),
        "Commuted_Value_90": format_decimal(result.commuted_value_90),
    }


def fill_pdf_form(
    template: Union[str, Path],
    fields: Mapping[str, str],
    output: Union[str, Path],
) -> Dict[str, str]:
    """Copy a fillable PDF template to ``output`` with field values set.

    Fields the template does not define are skipped with a warning.

    Returns:
        The field values actually written

    Raises:
        FormFillError: If the template is missing or has no form fields
    """
    template = Path(template)
    if not template.exists():
        raise FormFillError(f"PDF template not found: {template}")

    reader = PyPDF2.PdfReader(str(template))
    available = reader.get_fields() or {}
    if not available:
        raise FormFillError(f"PDF template has no form fields: {template}")

    values = {}
    for name, value in fields.items():
        if name in available:
            values[name] = value
        else:
            logger.warning(f"Field {name} not found in {template.name}, skipping")

    writer = PyPDF2.PdfWriter()
    writer.clone_reader_document_root(reader)
    for page in writer.pages:
        writer.update_page_form_field_values(page, values)

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "wb") as f:
        writer.write(f)

    logger.debug(f"filled {len(values)} fields from {template} into {output}")
    return values
