"""JSON report formatter."""

import json
from typing import Any

from heicmotion.models import BatchReport


def format_json(report: BatchReport, indent: int = 2) -> str:
    """Format a batch report as a JSON string, including the computed totals.

    Args:
        report: BatchReport object
        indent: JSON indentation level

    Returns:
        JSON formatted string
    """
    return json.dumps(to_dict(report), indent=indent, ensure_ascii=False, default=str)


def to_dict(report: BatchReport) -> dict[str, Any]:
    """Convert a report to a dictionary with ``processed`` and ``failures`` totals."""
    data = report.model_dump(mode="json")
    data["processed"] = report.processed
    data["failures"] = report.failures
    return data
