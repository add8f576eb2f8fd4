"""FFprobe wrapper."""

import contextlib
import json
import logging
from typing import Any, ClassVar

from heicmotion.extractors.base import BaseExtractor
from heicmotion.utils.process import run_command

logger = logging.getLogger(__name__)


def first_video_stream(probe_data: dict[str, Any], skip_attached_pic: bool = False) -> dict[str, Any] | None:
    """Return the first video stream in ffprobe output.

    Args:
        probe_data: Parsed ffprobe JSON
        skip_attached_pic: Ignore cover-art style still pictures
    """
    for stream in probe_data.get("streams") or []:
        if stream.get("codec_type") != "video":
            continue
        if skip_attached_pic and (stream.get("disposition") or {}).get("attached_pic"):
            continue
        return stream
    return None


def stream_rotation(stream: dict[str, Any] | None) -> int:
    """Return the stream's ``rotate`` tag normalized into 0..359 (0 if absent)."""
    if not stream:
        return 0
    tags = stream.get("tags") or {}
    with contextlib.suppress(ValueError, TypeError):
        return int(float(tags.get("rotate", 0))) % 360
    return 0


def has_display_matrix(stream: dict[str, Any] | None) -> bool:
    """Check whether a stream carries a display-transform side data entry."""
    if not stream:
        return False
    return any(
        "displaymatrix" in str(sd.get("side_data_type", "")).replace(" ", "").lower()
        for sd in stream.get("side_data_list") or []
    )


class FFprobeExtractor(BaseExtractor):
    """Probe container and stream metadata using FFprobe."""

    name: ClassVar[str] = "ffprobe"

    def probe(self, path: str, video_only: bool = False) -> dict[str, Any]:
        """Run ffprobe and return parsed JSON output ({} on any failure).

        Args:
            path: File to probe
            video_only: Only report the first video stream (no format section)
        """
        cmd = [
            self.executable,
            "-hide_banner",
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
        ]
        if video_only:
            cmd += ["-select_streams", "v:0"]
        else:
            cmd.append("-show_format")
        cmd.append(path)

        result = run_command(cmd, timeout=self.timeout)
        if not result.ok:
            logger.debug("ffprobe failed for %s: %s", path, result.diagnostic)
            return {}
        try:
            data = json.loads(result.stdout or "{}")
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def read_rotation(self, path: str) -> int | None:
        """Read the first video stream's raw ``rotate`` tag in degrees.

        Returns None when ffprobe fails or the tag is missing or non-numeric.
        """
        stream = first_video_stream(self.probe(path, video_only=True))
        if not stream:
            return None
        rotate = (stream.get("tags") or {}).get("rotate", 0)
        try:
            return int(float(rotate))
        except (ValueError, TypeError):
            return None


def display_matrix_rotation(stream: dict[str, Any] | None) -> int:
    """Return the clockwise rotation implied by display-matrix side data (0..359).

    ffprobe reports the matrix angle counter-clockwise, so it is negated to
    match the ``rotate`` tag convention.
    """
    if not stream:
        return 0
    for sd in stream.get("side_data_list") or []:
        if "displaymatrix" not in str(sd.get("side_data_type", "")).replace(" ", "").lower():
            continue
        with contextlib.suppress(ValueError, TypeError):
            return int(-float(sd.get("rotation", 0))) % 360
    return 0
