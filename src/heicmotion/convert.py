"""Per-file orchestration: still conversion and motion extraction."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from heicmotion.converters import convert_still
from heicmotion.metadata import copy_all_metadata
from heicmotion.models import FileSummary, OrientationCode, ToolAvailability
from heicmotion.motion import detect_embedded_video, normalize_mp4
from heicmotion.orientation import resolve_orientation
from heicmotion.utils.process import DEFAULT_TIMEOUT
from heicmotion.validate import validate_output

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertOptions:
    """Per-run options shared by every file."""

    quality: int = 95
    dry_run: bool = False
    timeout: float | None = DEFAULT_TIMEOUT


def output_paths(src: str | Path, output_dir: str | Path) -> tuple[str, str]:
    """Return the (jpg, mp4) destination paths for a source file."""
    base = Path(src).stem
    return str(Path(output_dir) / f"{base}.jpg"), str(Path(output_dir) / f"{base}.mp4")


class _Recorder:
    """Append-only step/error log for one file."""

    def __init__(self) -> None:
        self.steps: list[str] = []
        self.errors: list[str] = []

    def step(self, text: str) -> None:
        self.steps.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


def _still_path(
    tools: ToolAvailability,
    src: str,
    jpg_out: str,
    orientation: OrientationCode,
    options: ConvertOptions,
    log: _Recorder,
) -> bool:
    """Convert, validate and tag the JPEG. Returns True if a valid JPEG was written."""
    if options.dry_run:
        log.step("dry-run: skip still conversion")
        return False

    conv = convert_still(tools, src, jpg_out, options.quality, orientation, options.timeout)
    if not conv.ok:
        failures = " | ".join(conv.failures) or "no converter available"
        log.error(f"All still conversion paths failed: {failures}")
        return False
    log.step(f"still: {conv.method}")

    accepted, dims = validate_output(tools, jpg_out, options.timeout)
    if not accepted:
        log.error(f"implausible dimensions {dims.resolution}")
        with contextlib.suppress(FileNotFoundError):
            os.remove(jpg_out)
        return False

    meta = copy_all_metadata(tools, src, jpg_out, options.timeout)
    log.step(f"metadata: {'copied+Orientation=1' if meta.ok else 'skipped/partial'}")
    if meta.reason == "exiftool_failed":
        log.error(f"metadata copy failed: {meta.stderr or meta.reason}")
    return True


def _motion_path(
    tools: ToolAvailability,
    src: str,
    mp4_out: str,
    scratch_dir: str,
    options: ConvertOptions,
    log: _Recorder,
) -> str:
    """Detect and write the embedded video. Returns the motion outcome label."""
    if not tools.video_prober:
        log.step("motion: disabled (ffprobe missing)")
        return "disabled"

    det = detect_embedded_video(tools, src, scratch_dir, options.timeout)
    if not det.ok or det.candidate is None or det.slice_path is None:
        log.step("motion: none")
        logger.debug("No embedded video in %s: %s", os.path.basename(src), det.reason)
        return "none"

    log.step(f"motion: candidate@{det.candidate.start} brand={det.candidate.brand or 'unknown'}")
    try:
        if options.dry_run:
            log.step("dry-run: skip mp4 normalize")
            return "detected"

        norm = normalize_mp4(tools, det.slice_path, mp4_out, det.probe, options.timeout)
        if not norm.ok:
            log.error(f"mp4 normalize failed: {norm.stderr or norm.reason}")
            return "failed"
        log.step(f"mp4: {norm.method} -> {mp4_out}")
        return norm.method or "copy"
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(det.slice_path)


def process_file(
    src: str | Path,
    output_dir: str | Path,
    tools: ToolAvailability,
    options: ConvertOptions | None = None,
) -> FileSummary:
    """Convert one HEIC/HEIF file and extract its motion video, if any.

    This is the per-file entry point. It:
    1. Resolves the orientation code once
    2. Runs the still path (convert, validate, copy metadata)
    3. Runs the motion path (scan, probe, normalize) regardless of step 2
    4. Removes the scratch directory on every exit path

    Never raises; failures are recorded in the returned summary.

    Args:
        src: Source HEIC/HEIF file
        output_dir: Directory for ``<basename>.jpg`` / ``<basename>.mp4``
        tools: Tool availability snapshot
        options: Quality, dry-run and timeout settings

    Returns:
        FileSummary with ordered steps and errors
    """
    options = options or ConvertOptions()
    src = str(src)
    jpg_out, mp4_out = output_paths(src, output_dir)
    log = _Recorder()
    orientation = OrientationCode.TOP_LEFT
    still_ok = False
    motion = "none"

    logger.info("→ Processing %s", os.path.basename(src))
    try:
        scratch_dir = tempfile.TemporaryDirectory(prefix="heicmotion-", ignore_cleanup_errors=True)
    except OSError as e:
        logger.error("Cannot create scratch directory for %s: %s", src, e)
        log.error(f"scratch directory unavailable: {e}")
        return _summary(src, jpg_out, mp4_out, orientation, log, still_ok, motion)

    with scratch_dir as scratch:
        try:
            orientation = resolve_orientation(src, tools, options.timeout)
            logger.debug("Orientation decision: %d (%s)", orientation, orientation.label)
        except Exception as e:
            logger.exception("Orientation lookup crashed for %s", src)
            log.error(f"orientation: {e}")

        try:
            still_ok = _still_path(tools, src, jpg_out, orientation, options, log)
        except Exception as e:
            logger.exception("Still conversion crashed for %s", src)
            log.error(f"still: {e}")

        try:
            motion = _motion_path(tools, src, mp4_out, scratch, options, log)
        except Exception as e:
            logger.exception("Motion extraction crashed for %s", src)
            log.error(f"motion: {e}")
            motion = "failed"

    if log.errors:
        logger.error("Failed: %s: %s", os.path.basename(src), "; ".join(log.errors))
    if still_ok:
        logger.info("   JPG → %s", jpg_out)
    if motion in ("copy", "reencode"):
        logger.info("   MP4 → %s", mp4_out)

    return _summary(src, jpg_out, mp4_out, orientation, log, still_ok, motion)


def _summary(
    src: str,
    jpg_out: str,
    mp4_out: str,
    orientation: OrientationCode,
    log: _Recorder,
    still_ok: bool,
    motion: str,
) -> FileSummary:
    return FileSummary(
        file=src,
        jpg_out=jpg_out,
        mp4_out=mp4_out,
        orientation=int(orientation),
        steps=tuple(log.steps),
        errors=tuple(log.errors),
        still_ok=still_ok,
        motion=motion,
    )


def output_collisions(paths: list[str]) -> dict[int, str]:
    """Map the index of each file whose output stem was already claimed to the claiming file."""
    claimed: dict[str, str] = {}
    collisions: dict[int, str] = {}
    for index, path in enumerate(paths):
        key = Path(path).stem.casefold()
        if key in claimed:
            collisions[index] = claimed[key]
        else:
            claimed[key] = path
    return collisions


def _collision_summary(src: str, output_dir: str | Path, first: str) -> FileSummary:
    jpg_out, mp4_out = output_paths(src, output_dir)
    logger.error("Skipped: %s writes the same outputs as %s", src, first)
    return FileSummary(
        file=src,
        jpg_out=jpg_out,
        mp4_out=mp4_out,
        steps=("skipped: duplicate output name",),
        errors=(f"output name collides with {first}",),
    )


def process_files(
    paths: Iterable[str | Path],
    output_dir: str | Path,
    tools: ToolAvailability,
    options: ConvertOptions | None = None,
    jobs: int = 1,
) -> list[FileSummary]:
    """Process many files, optionally with a bounded worker pool.

    Summaries are returned in input order. A file whose output name clashes
    with an earlier file (same stem, compared case-insensitively) is skipped
    with an error so it cannot overwrite or delete the earlier output.

    Args:
        paths: Source files
        output_dir: Destination directory
        tools: Tool availability snapshot (read-only, shared by workers)
        options: Per-run options
        jobs: Number of files processed concurrently
    """
    paths = [str(p) for p in paths]
    collisions = output_collisions(paths)

    def run(index: int) -> FileSummary:
        if index in collisions:
            return _collision_summary(paths[index], output_dir, collisions[index])
        return process_file(paths[index], output_dir, tools, options)

    if jobs <= 1 or len(paths) <= 1:
        return [run(i) for i in range(len(paths))]

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(run, range(len(paths))))
