"""ImageMagick converter strategy."""

from typing import ClassVar

from heicmotion.converters.base import BaseConverter
from heicmotion.models import OrientationCode, ToolAvailability
from heicmotion.orientation import imagemagick_ops


class ImageMagickConverter(BaseConverter):
    """Convert with ImageMagick, applying orientation as explicit operations.

    Preferred path: it decodes the full-resolution primary image where some
    ffmpeg builds fall back to a 512x512 tile. ``-auto-orient`` is never used
    so the result does not depend on the ImageMagick version.
    """

    name: ClassVar[str] = "imagemagick"
    priority: ClassVar[int] = 10

    @classmethod
    def is_available(cls, tools: ToolAvailability) -> bool:
        return tools.raster_converter is not None

    def build_command(
        self, src: str, dst: str, quality: int, orientation: OrientationCode
    ) -> list[str]:
        return [
            str(self.tools.raster_converter),
            src,
            *imagemagick_ops(orientation),
            "-quality",
            str(quality),
            dst,
        ]

    def describe(self, orientation: OrientationCode) -> str:
        ops = imagemagick_ops(orientation)
        return f"(ops={' '.join(ops)})" if ops else "(no rotation)"
