"""Plausibility checks for converted stills."""

import logging

from heicmotion.extractors import ExifToolExtractor
from heicmotion.models import ImageDimensions, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

MIN_DIMENSION = 64

# Sizes some decoders emit when they fall back to an embedded thumbnail or tile
PLACEHOLDER_SIZES = frozenset({(512, 512), (320, 240)})


def plausible_dimensions(width: int, height: int) -> bool:
    """Check that a width/height pair looks like a real photo."""
    if not width or not height:
        return False
    if width <= MIN_DIMENSION or height <= MIN_DIMENSION:
        return False
    return (width, height) not in PLACEHOLDER_SIZES


def get_image_dimensions(
    tools: ToolAvailability, path: str, timeout: float | None = DEFAULT_TIMEOUT
) -> ImageDimensions:
    """Read pixel dimensions with exiftool (0x0 when it is unavailable)."""
    if not tools.metadata_reader:
        return ImageDimensions()
    return ExifToolExtractor(tools.metadata_reader, timeout).read_dimensions(path)


def validate_output(
    tools: ToolAvailability, path: str, timeout: float | None = DEFAULT_TIMEOUT
) -> tuple[bool, ImageDimensions]:
    """Accept or reject a converted still by its dimensions.

    Returns:
        (accepted, dimensions)
    """
    dims = get_image_dimensions(tools, path, timeout)
    logger.debug("Output dimensions: %s (source=%s)", dims.resolution, dims.source)
    return plausible_dimensions(dims.width, dims.height), dims
