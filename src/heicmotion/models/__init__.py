"""Pydantic models for heicmotion."""

from .motion import (
    ContainerCandidate,
    MotionDetection,
    NormalizationPlan,
    NormalizationResult,
    ProbeVerdict,
)
from .orientation import OrientationCode
from .process import CommandResult
from .still import ConversionAttempt, ConversionResult, ImageDimensions, MetadataCopyResult
from .summary import BatchReport, FileSummary
from .tools import ToolAvailability

__all__ = [
    # Orientation
    "OrientationCode",
    # Tools
    "ToolAvailability",
    "CommandResult",
    # Still path
    "ConversionAttempt",
    "ConversionResult",
    "ImageDimensions",
    "MetadataCopyResult",
    # Motion path
    "ContainerCandidate",
    "ProbeVerdict",
    "MotionDetection",
    "NormalizationPlan",
    "NormalizationResult",
    # Summaries
    "FileSummary",
    "BatchReport",
]
