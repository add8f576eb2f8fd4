"""ffmpeg single-frame converter strategy."""

from typing import ClassVar

from heicmotion.converters.base import BaseConverter
from heicmotion.models import OrientationCode, ToolAvailability
from heicmotion.orientation import ffmpeg_filter


def jpeg_qscale(quality: int) -> int:
    """Map JPEG quality 1-100 onto ffmpeg's inverted ``-qscale:v`` 2-31 scale."""
    quality = min(100, max(1, quality))
    # Round half up
    return min(31, max(2, int(31 - (quality / 100) * 29 + 0.5)))


class FFmpegFrameConverter(BaseConverter):
    """Extract one frame with ffmpeg, autorotate disabled and orientation applied as a filter."""

    name: ClassVar[str] = "ffmpeg-frame"
    priority: ClassVar[int] = 30

    @classmethod
    def is_available(cls, tools: ToolAvailability) -> bool:
        return tools.video_frame_extractor is not None

    def build_command(
        self, src: str, dst: str, quality: int, orientation: OrientationCode
    ) -> list[str]:
        cmd = [
            str(self.tools.video_frame_extractor),
            "-hide_banner",
            "-y",
            "-noautorotate",
            "-i",
            src,
            "-frames:v",
            "1",
        ]
        vf = ffmpeg_filter(orientation)
        if vf:
            cmd += ["-vf", vf]
        cmd += ["-qscale:v", str(jpeg_qscale(quality)), dst]
        return cmd

    def describe(self, orientation: OrientationCode) -> str:
        vf = ffmpeg_filter(orientation)
        return f"(vf={vf})" if vf else "(no vf)"
