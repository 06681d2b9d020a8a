"""Report rendering."""

from .report import NO_DESCRIPTION, NO_RESULTS, build_report, render_json, render_report

__all__ = [
    "NO_DESCRIPTION",
    "NO_RESULTS",
    "build_report",
    "render_json",
    "render_report",
]
