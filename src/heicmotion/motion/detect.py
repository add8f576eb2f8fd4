"""Embedded motion video detection.

Candidates from the byte scanner are sliced out to a scratch file (from the
candidate's start to end of file) and confirmed with ffprobe. The first
candidate that looks like a playable, moving video wins.
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import Any

from heicmotion.extractors import FFprobeExtractor, first_video_stream
from heicmotion.models import ContainerCandidate, MotionDetection, ProbeVerdict, ToolAvailability
from heicmotion.utils.container import scan_candidates
from heicmotion.utils.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# ffprobe format names accepted as a motion container
VIDEO_FORMATS = frozenset({"mp4", "mov", "3g2", "3gp", "mj2"})

MIN_VIDEO_DIMENSION = 32
MIN_FRAMES = 5
MIN_DURATION = 0.3


def _as_number(value: Any, kind: type = float) -> Any:
    try:
        return kind(float(value))
    except (TypeError, ValueError):
        return kind(0)


def evaluate_probe(probe_data: dict[str, Any]) -> ProbeVerdict:
    """Judge whether ffprobe output describes a plausible motion clip.

    All four checks must hold: container format, a real (non cover-art)
    video stream, both dimensions above 32, and more than 5 frames or more
    than 0.3 seconds.
    """
    fmt = probe_data.get("format") or {}
    format_name = str(fmt.get("format_name") or "").lower()
    verdict = ProbeVerdict(
        format_name=format_name,
        container_ok=any(name.strip() in VIDEO_FORMATS for name in format_name.split(",")),
    )

    stream = first_video_stream(probe_data, skip_attached_pic=True)
    if stream is None:
        verdict.reason = "no video stream"
        return verdict

    verdict.has_video = True
    verdict.width = _as_number(stream.get("width"), int)
    verdict.height = _as_number(stream.get("height"), int)
    verdict.nb_frames = _as_number(stream.get("nb_frames"), int)
    verdict.duration = _as_number(fmt.get("duration")) or _as_number(stream.get("duration"))

    verdict.dimensions_ok = verdict.width > MIN_VIDEO_DIMENSION and verdict.height > MIN_VIDEO_DIMENSION
    verdict.motion_ok = verdict.nb_frames > MIN_FRAMES or verdict.duration > MIN_DURATION

    if not verdict.container_ok:
        verdict.reason = f"container {format_name or 'unknown'}"
    elif not verdict.dimensions_ok:
        verdict.reason = f"dimensions {verdict.width}x{verdict.height}"
    elif not verdict.motion_ok:
        verdict.reason = f"no motion ({verdict.nb_frames} frames, {verdict.duration:.2f}s)"
    return verdict


def probe_candidate(
    prober: FFprobeExtractor,
    candidate: ContainerCandidate,
    data: bytes,
    scratch_dir: str | Path,
    label: str = "source",
) -> tuple[ProbeVerdict, str | None, dict[str, Any]]:
    """Slice the file tail at ``candidate`` and probe it.

    The slice is deleted unless the candidate is accepted.

    Returns:
        (verdict, slice path if accepted, ffprobe data)
    """
    slice_path = os.path.join(scratch_dir, f"slice_{label}_{candidate.start}.bin")
    keep = False
    try:
        with open(slice_path, "wb") as f:
            f.write(data[candidate.start :])

        probe_data = prober.probe(slice_path)
        if not probe_data:
            return ProbeVerdict(reason="ffprobe failed"), None, {}

        verdict = evaluate_probe(probe_data)
        logger.debug(
            "Candidate %d ffprobe summary: format=%s %dx%d frames=%d duration=%.2f",
            candidate.start,
            verdict.format_name,
            verdict.width,
            verdict.height,
            verdict.nb_frames,
            verdict.duration,
        )
        keep = verdict.accepted
        return verdict, (slice_path if keep else None), probe_data
    except OSError as e:
        return ProbeVerdict(reason=f"slice failed: {e}"), None, {}
    finally:
        if not keep:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(slice_path)


def detect_embedded_video(
    tools: ToolAvailability,
    src: str,
    scratch_dir: str | Path,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> MotionDetection:
    """Find and validate an embedded motion video in a HEIC/HEIF file.

    Args:
        tools: Tool availability snapshot
        src: Source HEIC/HEIF path
        scratch_dir: Per-file scratch directory for slices
        timeout: Per-invocation timeout in seconds

    Returns:
        MotionDetection; ``ok`` is False with a reason when nothing was found
    """
    if not tools.video_prober:
        logger.warning(
            "ffprobe not found; disabling embedded video detection for %s", os.path.basename(src)
        )
        return MotionDetection(ok=False, reason="ffprobe_missing")

    try:
        data = Path(src).read_bytes()
    except OSError as e:
        return MotionDetection(ok=False, reason=f"read_failed: {e}")

    candidates = scan_candidates(data)
    if not candidates:
        return MotionDetection(ok=False, reason="no_candidates")

    prober = FFprobeExtractor(tools.video_prober, timeout)
    label = Path(src).name
    for candidate in candidates:
        verdict, slice_path, probe_data = probe_candidate(prober, candidate, data, scratch_dir, label)
        if slice_path:
            return MotionDetection(
                ok=True, candidate=candidate, slice_path=slice_path, probe=probe_data
            )
        logger.debug("Rejected candidate %d: %s", candidate.start, verdict.reason)

    return MotionDetection(ok=False, reason="no_valid_slice")
