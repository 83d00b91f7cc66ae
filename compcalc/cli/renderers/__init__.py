"""Rich renderers for CLI output."""

from .result_renderer import (
    render_aww_result,
    render_commuted_result,
    render_errors,
    render_quarters,
    render_rate_table,
)

__all__ = [
    "render_aww_result",
    "render_commuted_result",
    "render_errors",
    "render_quarters",
    "render_rate_table",
]
