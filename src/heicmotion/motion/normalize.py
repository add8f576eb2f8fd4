"""MP4 normalization of an extracted motion clip."""

import contextlib
import logging
import os
from typing import Any

from heicmotion.extractors import (
    display_matrix_rotation,
    first_video_stream,
    has_display_matrix,
    stream_rotation,
)
from heicmotion.models import NormalizationPlan, NormalizationResult, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)

ROTATION_FILTERS = {
    90: "transpose=1",
    270: "transpose=2",
    180: "hflip,vflip",
}

# Re-encode settings
VIDEO_CODEC = "libx264"
PRESET = "veryfast"
CRF = "20"
AUDIO_CODEC = "aac"
AUDIO_BITRATE = "160k"


def plan_normalization(probe_data: dict[str, Any]) -> NormalizationPlan:
    """Decide between remux and re-encode for an extracted clip.

    A rotate tag or display-matrix side data on the first video stream
    forces a re-encode with the rotation baked in; otherwise the streams
    are copied.
    """
    stream = first_video_stream(probe_data)
    rotation = stream_rotation(stream) or display_matrix_rotation(stream)
    display_matrix = has_display_matrix(stream)

    if not rotation and not display_matrix:
        return NormalizationPlan(method="copy")

    vf = ROTATION_FILTERS.get(rotation)
    unhandled = rotation != 0 and vf is None
    if unhandled:
        logger.warning("Unhandled rotation %d; re-encoding without a transform", rotation)
    return NormalizationPlan(
        method="reencode",
        video_filter=vf or "null",
        rotation=rotation,
        has_display_matrix=display_matrix,
        unhandled_rotation=unhandled,
    )


def build_ffmpeg_command(
    ffmpeg: str,
    src: str,
    dst: str,
    plan: NormalizationPlan,
    clear_display_matrix: bool = True,
) -> list[str]:
    """Build the ffmpeg argv that realises ``plan``.

    A re-encode resets the input display matrix to 0 degrees (ffmpeg 6.1+)
    so the output carries no rotation besides the one baked in by the filter.
    """
    if not plan.reencode:
        return [ffmpeg, "-hide_banner", "-y", "-i", src, "-c", "copy", "-movflags", "+faststart", dst]

    cmd = [
        ffmpeg,
        "-hide_banner",
        "-y",
        # Rotation is applied by the explicit filter only
        "-noautorotate",
    ]
    if clear_display_matrix:
        cmd += ["-display_rotation:v:0", "0"]
    return cmd + [
        "-i",
        src,
        "-vf",
        plan.video_filter or "null",
        "-c:v",
        VIDEO_CODEC,
        "-preset",
        PRESET,
        "-crf",
        CRF,
        "-c:a",
        AUDIO_CODEC,
        "-b:a",
        AUDIO_BITRATE,
        "-metadata:s:v:0",
        "rotate=0",
        "-movflags",
        "+faststart",
        dst,
    ]


def normalize_mp4(
    tools: ToolAvailability,
    src: str,
    dst: str,
    probe_data: dict[str, Any],
    timeout: float | None = DEFAULT_TIMEOUT,
) -> NormalizationResult:
    """Write an extracted clip as a fast-start MP4.

    Args:
        tools: Tool availability snapshot
        src: Sliced candidate file
        dst: Destination MP4 path
        probe_data: ffprobe output for ``src``

    Returns:
        NormalizationResult with method ``copy`` or ``reencode``
    """
    if not tools.video_encoder:
        return NormalizationResult(ok=False, reason="ffmpeg_missing")

    plan = plan_normalization(probe_data)
    result = run_command(build_ffmpeg_command(tools.video_encoder, src, dst, plan), timeout=timeout)
    if plan.reencode and not result.ok and "display_rotation" in result.diagnostic:
        logger.debug("ffmpeg predates -display_rotation; retrying without it")
        cmd = build_ffmpeg_command(tools.video_encoder, src, dst, plan, clear_display_matrix=False)
        result = run_command(cmd, timeout=timeout)
    if not result.ok:
        with contextlib.suppress(FileNotFoundError):
            os.remove(dst)
        return NormalizationResult(ok=False, reason="ffmpeg_failed", stderr=result.diagnostic)
    return NormalizationResult(ok=True, method=plan.method)
