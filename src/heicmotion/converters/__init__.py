"""Still-image converter chain for heicmotion."""

import logging

from heicmotion.converters.base import BaseConverter
from heicmotion.converters.ffmpeg_frame import FFmpegFrameConverter, jpeg_qscale
from heicmotion.converters.heif_convert import HeifConvertConverter
from heicmotion.converters.imagemagick import ImageMagickConverter
from heicmotion.models import ConversionAttempt, ConversionResult, OrientationCode, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# All converter classes (order doesn't matter, priority is used)
_CONVERTERS: list[type[BaseConverter]] = [
    ImageMagickConverter,
    HeifConvertConverter,
    FFmpegFrameConverter,
]


def get_available_converters(
    tools: ToolAvailability, timeout: float | None = DEFAULT_TIMEOUT
) -> list[BaseConverter]:
    """Get converter instances whose tool is available, sorted by priority.

    Returns:
        List of converter instances, lowest priority number first.
    """
    available = [cls(tools, timeout) for cls in _CONVERTERS if cls.is_available(tools)]
    available.sort(key=lambda x: x.priority)
    return available


def get_converter_status(tools: ToolAvailability) -> dict[str, bool]:
    """Get availability status of all converters, in priority order."""
    ordered = sorted(_CONVERTERS, key=lambda cls: cls.priority)
    return {cls.name: cls.is_available(tools) for cls in ordered}


def convert_still(
    tools: ToolAvailability,
    src: str,
    dst: str,
    quality: int,
    orientation: OrientationCode,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> ConversionResult:
    """Convert a HEIC/HEIF still to JPEG using the first converter that works.

    Strategies are tried in priority order; the first success ends the
    chain. On total failure every attempt's diagnostic is returned.

    Args:
        tools: Tool availability snapshot
        src: Source HEIC/HEIF path
        dst: Destination JPEG path
        quality: JPEG quality 1-100
        orientation: Orientation code to bake into the pixels
        timeout: Per-invocation timeout in seconds

    Returns:
        ConversionResult with the winning strategy or all failures
    """
    attempts: list[ConversionAttempt] = []
    for converter in get_available_converters(tools, timeout):
        attempt = converter.convert(src, dst, quality, orientation)
        attempts.append(attempt)
        if attempt.ok:
            return ConversionResult(ok=True, path=dst, method=converter.name, attempts=attempts)
        logger.debug("%s", attempt.diagnostic)

    return ConversionResult(ok=False, attempts=attempts)


__all__ = [
    "BaseConverter",
    "ImageMagickConverter",
    "HeifConvertConverter",
    "FFmpegFrameConverter",
    "jpeg_qscale",
    "get_available_converters",
    "get_converter_status",
    "convert_still",
]
