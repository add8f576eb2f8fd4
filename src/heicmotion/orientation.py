"""Orientation resolution and per-tool transform vocabularies.

Rotation is always applied explicitly during conversion instead of relying on
each tool's auto-orient behaviour, so one orientation code is resolved per
source file and translated into every converter's own operations here.
"""

import logging

from heicmotion.extractors import ExifToolExtractor, FFprobeExtractor
from heicmotion.models import OrientationCode, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# ImageMagick operations that bring each orientation upright
IMAGEMAGICK_OPS: dict[OrientationCode, list[str]] = {
    OrientationCode.TOP_LEFT: [],
    OrientationCode.TOP_RIGHT: ["-flop"],  # mirror horizontal
    OrientationCode.BOTTOM_RIGHT: ["-rotate", "180"],
    OrientationCode.BOTTOM_LEFT: ["-flip"],  # mirror vertical
    OrientationCode.LEFT_TOP: ["-transpose"],
    OrientationCode.RIGHT_TOP: ["-rotate", "90"],
    OrientationCode.RIGHT_BOTTOM: ["-transverse"],
    OrientationCode.LEFT_BOTTOM: ["-rotate", "270"],
}

# Equivalent ffmpeg filter chains (None = no filter)
FFMPEG_FILTERS: dict[OrientationCode, str | None] = {
    OrientationCode.TOP_LEFT: None,
    OrientationCode.TOP_RIGHT: "hflip",
    OrientationCode.BOTTOM_RIGHT: "hflip,vflip",
    OrientationCode.BOTTOM_LEFT: "vflip",
    OrientationCode.LEFT_TOP: "transpose=1,hflip",
    OrientationCode.RIGHT_TOP: "transpose=1",
    OrientationCode.RIGHT_BOTTOM: "transpose=2,hflip",
    OrientationCode.LEFT_BOTTOM: "transpose=2",
}


def imagemagick_ops(code: OrientationCode | int) -> list[str]:
    """Return the ImageMagick arguments that bring ``code`` upright."""
    return list(IMAGEMAGICK_OPS.get(OrientationCode.from_value(code) or OrientationCode.TOP_LEFT, []))


def ffmpeg_filter(code: OrientationCode | int) -> str | None:
    """Return the ffmpeg ``-vf`` chain that brings ``code`` upright."""
    return FFMPEG_FILTERS.get(OrientationCode.from_value(code) or OrientationCode.TOP_LEFT)


def resolve_orientation(
    path: str,
    tools: ToolAvailability,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> OrientationCode:
    """Determine the orientation code of a source file.

    ExifTool's numeric Orientation tag is preferred. Otherwise the first
    video stream's ``rotate`` tag is read with ffprobe and mapped
    0/90/180/270 to 1/6/3/8. Falls back to 1; never raises.

    Args:
        path: Source file
        tools: Tool availability snapshot
        timeout: Per-invocation timeout in seconds

    Returns:
        The resolved OrientationCode
    """
    if tools.metadata_reader:
        code = ExifToolExtractor(tools.metadata_reader, timeout).read_orientation(path)
        if code is not None:
            logger.debug("Orientation from exiftool: %d (%s)", code, code.label)
            return code

    if tools.video_prober:
        rotation = FFprobeExtractor(tools.video_prober, timeout).read_rotation(path)
        if rotation is not None:
            code = OrientationCode.from_rotation(rotation)
            if code is not None:
                logger.debug("Orientation from ffprobe rotate=%d: %d (%s)", rotation, code, code.label)
                return code
            logger.debug("Unresolvable stream rotation %d for %s", rotation, path)

    return OrientationCode.TOP_LEFT
