"""Embedded motion video models."""

from typing import Any

from pydantic import BaseModel, Field


class ContainerCandidate(BaseModel):
    """A guessed nested container start inside a still-image file."""

    start: int
    ftyp_index: int
    brand: str | None = None
    legitimate: bool = True


class ProbeVerdict(BaseModel):
    """Plausibility checks for one probed candidate slice."""

    container_ok: bool = False
    has_video: bool = False
    dimensions_ok: bool = False
    motion_ok: bool = False
    format_name: str = ""
    width: int = 0
    height: int = 0
    nb_frames: int = 0
    duration: float = 0.0
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.container_ok and self.has_video and self.dimensions_ok and self.motion_ok


class MotionDetection(BaseModel):
    """Result of scanning and probing one file for an embedded video."""

    ok: bool
    reason: str | None = None
    candidate: ContainerCandidate | None = None
    slice_path: str | None = None
    probe: dict[str, Any] = Field(default_factory=dict)


class NormalizationPlan(BaseModel):
    """Whether to remux or re-encode an extracted video, and with which filter."""

    method: str = "copy"
    video_filter: str | None = None
    rotation: int = 0
    has_display_matrix: bool = False
    unhandled_rotation: bool = False

    @property
    def reencode(self) -> bool:
        return self.method == "reencode"


class NormalizationResult(BaseModel):
    """Outcome of writing the final MP4."""

    ok: bool
    method: str | None = None
    reason: str | None = None
    stderr: str | None = None
