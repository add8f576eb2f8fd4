"""heicmotion - HEIC/HEIF to JPEG conversion with motion photo extraction.

Usage:
    from heicmotion import detect_tools, process_file

    tools = detect_tools()
    summary = process_file("IMG_0001.HEIC", "out/", tools)

    # What happened
    print(summary.steps)
    if summary.errors:
        print(f"Errors: {summary.errors}")

    # Export as JSON
    print(summary.model_dump_json())
"""

from heicmotion._version import __version__
from heicmotion.config import HeicMotionConfig, get_config, load_config
from heicmotion.converters import convert_still, get_available_converters
from heicmotion.convert import ConvertOptions, process_file, process_files
from heicmotion.exceptions import ConfigError, HeicMotionError
from heicmotion.metadata import copy_all_metadata
from heicmotion.models import (
    BatchReport,
    ContainerCandidate,
    ConversionResult,
    FileSummary,
    NormalizationPlan,
    OrientationCode,
    ProbeVerdict,
    ToolAvailability,
)
from heicmotion.motion import detect_embedded_video, normalize_mp4, plan_normalization
from heicmotion.orientation import ffmpeg_filter, imagemagick_ops, resolve_orientation
from heicmotion.utils import detect_tools, scan_candidates
from heicmotion.validate import plausible_dimensions, validate_output

__all__ = [
    # Version
    "__version__",
    # Main functions
    "process_file",
    "process_files",
    "ConvertOptions",
    "detect_tools",
    # Still path
    "resolve_orientation",
    "imagemagick_ops",
    "ffmpeg_filter",
    "convert_still",
    "get_available_converters",
    "validate_output",
    "plausible_dimensions",
    "copy_all_metadata",
    # Motion path
    "scan_candidates",
    "detect_embedded_video",
    "plan_normalization",
    "normalize_mp4",
    # Models
    "OrientationCode",
    "ToolAvailability",
    "ConversionResult",
    "ContainerCandidate",
    "ProbeVerdict",
    "NormalizationPlan",
    "FileSummary",
    "BatchReport",
    # Config
    "HeicMotionConfig",
    "get_config",
    "load_config",
    # Errors
    "HeicMotionError",
    "ConfigError",
]
