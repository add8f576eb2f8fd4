"""
Command-line interface for heicmotion.

Usage:
  heicmotion photos/ out/                       # Convert every HEIC in photos/
  heicmotion photos/ out/ --recursive           # Include subdirectories
  heicmotion photos/ out/ --quality 90 -j 4     # Lower quality, 4 files at a time
  heicmotion photos/ out/ --dry-run --debug     # Scan only, verbose
  heicmotion photos/ out/ --report report.json  # Save per-file summaries
  heicmotion --status                           # Show tool availability
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from heicmotion._version import __version__
from heicmotion.config import get_config
from heicmotion.convert import ConvertOptions, process_files
from heicmotion.exceptions import ConfigError
from heicmotion.converters import get_converter_status
from heicmotion.formatters import build_report_table, format_json, format_summary, format_totals
from heicmotion.models import BatchReport, ToolAvailability
from heicmotion.utils import detect_tools, iter_source_files, print_dependency_status

logger = logging.getLogger("heicmotion")


def _quality(value: str) -> int:
    try:
        quality = round(float(value))
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError("--quality must be an integer 1-100") from None
    if not 1 <= quality <= 100:
        raise argparse.ArgumentTypeError("--quality must be an integer 1-100")
    return quality


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value!r}")
    return number


def setup_logging(debug: bool = False, console: Console | None = None) -> None:
    """Route heicmotion logs through a rich handler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False


def print_converter_status(tools: ToolAvailability) -> None:
    """Print the still converter chain in the order it is tried."""
    print("\nStill converters (tried in order):")
    for name, available in get_converter_status(tools).items():
        print(f"  {'✓' if available else '✗'} {name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heicmotion",
        description="Convert HEIC/HEIF stills to JPEG and extract embedded motion photos to MP4.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Still conversion (first available wins):
  ImageMagick -> heif-convert -> ffmpeg single frame
  Orientation is applied explicitly, then metadata is copied with exiftool
  and the JPEG's Orientation tag is reset to 1.

Motion extraction (requires ffprobe, and ffmpeg to write):
  Nested MP4/MOV containers are located in the HEIC bytes, validated with
  ffprobe and written as <name>.mp4 (remuxed, or re-encoded if rotated).

Examples:
  heicmotion photos/ out/
  heicmotion photos/ out/ --recursive --quality 90
  heicmotion --status
        """,
    )
    parser.add_argument("source_dir", nargs="?", help="Directory containing .heic/.heif files")
    parser.add_argument("output_dir", nargs="?", help="Directory for .jpg/.mp4 output")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--quality", type=_quality, help="JPEG quality 1-100 (default: 95)")
    parser.add_argument("--recursive", action="store_true", default=None, help="Descend into subdirectories")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve orientation and scan for motion, but write nothing",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose diagnostic logging")
    parser.add_argument("-j", "--jobs", type=_positive_int, help="Files processed concurrently (default: 1)")
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        help="Seconds allowed per external tool invocation (default: 120)",
    )
    parser.add_argument("--report", metavar="FILE", help="Save per-file summaries as JSON")
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="One line per file instead of the summary table"
    )
    parser.add_argument("--status", action="store_true", help="Show external tool availability")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for heicmotion CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console(stderr=True)
    setup_logging(args.debug, console)

    try:
        config = get_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    tools = detect_tools(config.tools)

    # Handle --status mode (no directories required)
    if args.status:
        print_dependency_status(tools)
        print_converter_status(tools)
        return 0

    if not args.source_dir or not args.output_dir:
        parser.error("the following arguments are required: source_dir, output_dir")

    source_dir = Path(args.source_dir).resolve()
    output_dir = Path(args.output_dir).resolve()
    if not source_dir.is_dir():
        print(f"Source directory does not exist: {source_dir}", file=sys.stderr)
        return 2
    output_dir.mkdir(parents=True, exist_ok=True)

    conversion = config.conversion
    recursive = args.recursive if args.recursive is not None else conversion.recursive
    options = ConvertOptions(
        quality=args.quality or conversion.quality,
        dry_run=args.dry_run,
        timeout=args.timeout or conversion.timeout_seconds,
    )

    logger.info("Tool availability: %s", tools.as_status())
    files = list(iter_source_files(source_dir, recursive=recursive, extensions=conversion.extensions))
    summaries = process_files(files, output_dir, tools, options, jobs=args.jobs or conversion.jobs)

    report = BatchReport(
        source_dir=str(source_dir),
        output_dir=str(output_dir),
        tools=tools.as_status(),
        files=summaries,
    )
    if not files:
        logger.warning("No .heic/.heif files found in %s", source_dir)
    if args.debug:
        for summary in report.files:
            if summary.errors:
                logger.debug("Summary errors for %s: %s", summary.file, list(summary.errors))

    if files and args.quiet:
        for summary in report.files:
            console.print(format_summary(summary), markup=False, highlight=False)
    elif files:
        console.print(build_report_table(report))
    logger.info(format_totals(report))

    # JSON export
    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            f.write(format_json(report))
        logger.info("Report saved to: %s", args.report)

    return 1 if report.failures else 0


if __name__ == "__main__":
    sys.exit(main())
