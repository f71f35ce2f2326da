"""Report rendering for Robot Framework Mean Time."""

from rf_mean_time.report.renderer import (
    Report,
    format_line,
    format_seconds,
    render,
    report_title,
    sample_count,
    style_line,
    top_n,
)

__all__ = [
    "Report",
    "format_line",
    "format_seconds",
    "render",
    "report_title",
    "sample_count",
    "style_line",
    "top_n",
]
