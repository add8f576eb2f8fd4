"""Motion photo extraction for heicmotion."""

from heicmotion.motion.detect import (
    VIDEO_FORMATS,
    detect_embedded_video,
    evaluate_probe,
    probe_candidate,
)
from heicmotion.motion.normalize import build_ffmpeg_command, normalize_mp4, plan_normalization

__all__ = [
    "VIDEO_FORMATS",
    "detect_embedded_video",
    "evaluate_probe",
    "probe_candidate",
    "plan_normalization",
    "build_ffmpeg_command",
    "normalize_mp4",
]
