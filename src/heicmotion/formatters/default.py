"""Human-readable summary formatters."""

from rich.table import Table

from heicmotion.models import BatchReport, FileSummary


def format_summary(summary: FileSummary) -> str:
    """Format one file summary as a one-line status.

    Format: filename | still: ok/failed | motion: <outcome> | errors: N
    """
    parts = [
        summary.file.rsplit("/", 1)[-1],
        f"still: {'ok' if summary.still_ok else 'failed'}",
        f"motion: {summary.motion}",
    ]
    if summary.errors:
        parts.append(f"errors: {len(summary.errors)}")
    return " | ".join(parts)


def format_totals(report: BatchReport) -> str:
    """Format the final processed/failed count line."""
    return f"Done. Processed {report.processed} file(s). {report.failures} failure(s)."


def build_report_table(report: BatchReport) -> Table:
    """Build a rich table with one row per processed file."""
    table = Table(title="heicmotion", show_header=True, header_style="bold")
    table.add_column("File", style="cyan")
    table.add_column("Still")
    table.add_column("Motion")
    table.add_column("Errors", justify="right")

    for summary in report.files:
        table.add_row(
            summary.file.rsplit("/", 1)[-1],
            "[green]ok[/green]" if summary.still_ok else "[red]failed[/red]",
            summary.motion,
            str(len(summary.errors)) if summary.errors else "",
        )
    return table
