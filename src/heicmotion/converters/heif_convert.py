"""libheif ``heif-convert`` converter strategy."""

from typing import ClassVar

from heicmotion.converters.base import BaseConverter
from heicmotion.models import OrientationCode, ToolAvailability


class HeifConvertConverter(BaseConverter):
    """One-shot conversion with heif-convert.

    heif-convert applies the container's own transforms; there is no way to
    pass an explicit rotation or (portably) a quality level.
    """

    name: ClassVar[str] = "heif-convert"
    priority: ClassVar[int] = 20

    @classmethod
    def is_available(cls, tools: ToolAvailability) -> bool:
        return tools.heif_decoder is not None

    def build_command(
        self, src: str, dst: str, quality: int, orientation: OrientationCode
    ) -> list[str]:
        return [str(self.tools.heif_decoder), src, dst]
