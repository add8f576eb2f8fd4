"""Utility functions for heicmotion."""

from .container import (
    FTYP_MARKER,
    HEIF_EXTENSIONS,
    HEIF_LIKE_BRANDS,
    find_all,
    read_ascii,
    scan_candidates,
)
from .deps import detect_tools, print_dependency_status
from .files import iter_source_files
from .process import DEFAULT_TIMEOUT, run_command

__all__ = [
    # Processes
    "run_command",
    "DEFAULT_TIMEOUT",
    # Dependency checking
    "detect_tools",
    "print_dependency_status",
    # Container scanning
    "scan_candidates",
    "find_all",
    "read_ascii",
    "FTYP_MARKER",
    "HEIF_LIKE_BRANDS",
    "HEIF_EXTENSIONS",
    # Input files
    "iter_source_files",
]
