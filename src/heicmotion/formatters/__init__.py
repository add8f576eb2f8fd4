"""Output formatters for heicmotion."""

from .default import build_report_table, format_summary, format_totals
from .json import format_json, to_dict

__all__ = [
    "format_summary",
    "format_totals",
    "build_report_table",
    "format_json",
    "to_dict",
]
