"""Metadata propagation from source HEIC to converted JPEG."""

import logging
import os

from heicmotion.extractors import ExifToolExtractor
from heicmotion.models import MetadataCopyResult, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def copy_all_metadata(
    tools: ToolAvailability,
    src: str,
    dst: str,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> MetadataCopyResult:
    """Copy EXIF, XMP, GPS and the ICC profile from ``src`` to ``dst``.

    ``dst`` is rewritten in place with Orientation=1, since the conversion
    chain already rotated its pixels.

    Args:
        tools: Tool availability snapshot
        src: Original HEIC/HEIF file
        dst: Converted JPEG

    Returns:
        MetadataCopyResult (reason is exiftool_missing or exiftool_failed on failure)
    """
    if not tools.metadata_reader:
        logger.warning(
            "exiftool not found; metadata fidelity will be reduced for %s", os.path.basename(dst)
        )
        return MetadataCopyResult(ok=False, reason="exiftool_missing")

    result = ExifToolExtractor(tools.metadata_reader, timeout).copy_metadata(src, dst)
    if not result.ok:
        logger.warning("exiftool metadata copy failed for %s: %s", os.path.basename(dst), result.stderr)
    return result
