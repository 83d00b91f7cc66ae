"""Comp Calc SDK - Core functionality for workers' compensation calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_rate_table_path,
    ConfigNotFoundError,
    BUNDLED_RATE_TABLE,
)

from .money import (
    to_decimal,
    sum_money,
    round2,
    format_currency,
    format_decimal,
    format_percent,
)

from .rates import (
    RateTable,
    RateTableError,
    MaxRateLookup,
    load_rate_table,
    get_rate_table,
    DEFAULT_MAX_COMP_RATE,
    HIGH_DISCOUNT_RATE,
    LOW_DISCOUNT_RATE,
)

from .dates import (
    Quarter,
    parse_iso_date,
    year_from_date,
    format_display_date,
    format_form_date,
    quarter_containing,
    preceding_four_quarters,
    quarter_label,
)

from .schemas import (
    AWWResult,
    CommutedValueResult,
    SpecialCase,
    SPECIAL_CASE_LABELS,
)

from .aww import (
    UnsupportedCalculationError,
    compute_total_pay,
    compute_aww,
    compute_compensation_rate,
    calculate_aww,
    calculate_aww_short_employment,
    calculate_aww_special_case,
    unsupported_result,
)

from .commuted import (
    compute_weeks_remaining,
    discounted_weeks_factor,
    calculate_commuted_value,
    MAX_INDEMNITY_WEEKS,
)

from .forms import (
    FormFillError,
    aww_form_fields,
    commuted_form_fields,
    fill_pdf_form,
)

from .wizard import (
    WizardMachine,
    WizardState,
    WizardPreconditionError,
    get_wizard,
    build_aww_wizard,
    build_commuted_wizard,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_rate_table_path",
    "ConfigNotFoundError",
    "BUNDLED_RATE_TABLE",
    # Money
    "to_decimal",
    "sum_money",
    "round2",
    "format_currency",
    "format_decimal",
    "format_percent",
    # Rates
    "RateTable",
    "RateTableError",
    "MaxRateLookup",
    "load_rate_table",
    "get_rate_table",
    "DEFAULT_MAX_COMP_RATE",
    "HIGH_DISCOUNT_RATE",
    "LOW_DISCOUNT_RATE",
    # Dates
    "Quarter",
    "parse_iso_date",
    "year_from_date",
    "format_display_date",
    "format_form_date",
    "quarter_containing",
    "preceding_four_quarters",
    "quarter_label",
    # Results
    "AWWResult",
    "CommutedValueResult",
    "SpecialCase",
    "SPECIAL_CASE_LABELS",
    # AWW
    "UnsupportedCalculationError",
    "compute_total_pay",
    "compute_aww",
    "compute_compensation_rate",
    "calculate_aww",
    "calculate_aww_short_employment",
    "calculate_aww_special_case",
    "unsupported_result",
    # Commuted value
    "compute_weeks_remaining",
    "discounted_weeks_factor",
    "calculate_commuted_value",
    "MAX_INDEMNITY_WEEKS",
    # Forms
    "FormFillError",
    "aww_form_fields",
    "commuted_form_fields",
    "fill_pdf_form",
    # Wizards
    "WizardMachine",
    "WizardState",
    "WizardPreconditionError",
    "get_wizard",
    "build_aww_wizard",
    "build_commuted_wizard",
]
