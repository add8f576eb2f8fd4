"""External metadata tool wrappers for heicmotion."""

from heicmotion.extractors.base import BaseExtractor
from heicmotion.extractors.exiftool import ExifToolExtractor
from heicmotion.extractors.ffprobe import (
    FFprobeExtractor,
    display_matrix_rotation,
    first_video_stream,
    has_display_matrix,
    stream_rotation,
)

__all__ = [
    "BaseExtractor",
    "ExifToolExtractor",
    "FFprobeExtractor",
    "display_matrix_rotation",
    "first_video_stream",
    "has_display_matrix",
    "stream_rotation",
]
