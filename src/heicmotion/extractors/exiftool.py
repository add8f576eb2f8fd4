"""ExifTool wrapper: orientation, dimensions and metadata copy."""

import logging
from typing import ClassVar

from heicmotion.extractors.base import BaseExtractor
from heicmotion.models import ImageDimensions, MetadataCopyResult, OrientationCode
from heicmotion.utils.process import run_command

logger = logging.getLogger(__name__)


class ExifToolExtractor(BaseExtractor):
    """Read and write still-image metadata using ExifTool.

    Install: brew install exiftool (macOS) or apt install libimage-exiftool-perl (Linux)
    """

    name: ClassVar[str] = "exiftool"

    # Tag groups copied from the source onto the converted JPEG
    COPY_TAGS = ["-All:All", "-icc_profile", "-XMP:All", "-GPS:All"]

    def read_orientation(self, path: str) -> OrientationCode | None:
        """Read the numeric EXIF orientation, or None if absent or invalid."""
        cmd = [
            self.executable,
            "-s",
            "-s",
            "-s",
            "-Orientation#",  # Numeric value
            path,
        ]
        result = run_command(cmd, timeout=self.timeout)
        if not result.ok:
            return None
        return OrientationCode.from_value(result.stdout)

    def read_dimensions(self, path: str) -> ImageDimensions:
        """Read pixel width/height; 0x0 if exiftool cannot report both."""
        cmd = [
            self.executable,
            "-s",
            "-s",
            "-s",
            "-ImageWidth",
            "-ImageHeight",
            path,
        ]
        result = run_command(cmd, timeout=self.timeout)
        if result.ok:
            lines = [line.strip() for line in result.stdout.strip().splitlines()]
            if len(lines) == 2 and all(line.isdigit() for line in lines):
                return ImageDimensions(width=int(lines[0]), height=int(lines[1]), source="exiftool")
        return ImageDimensions()

    def copy_metadata(self, src: str, dst: str) -> MetadataCopyResult:
        """Copy all metadata from ``src`` onto ``dst`` in place.

        The stored orientation of ``dst`` is forced to 1 because its pixels
        are already rotated.
        """
        cmd = [
            self.executable,
            "-overwrite_original",
            "-m",  # Ignore minor errors
            "-TagsFromFile",
            src,
            *self.COPY_TAGS,
            "-unsafe",
            "-Orientation#=1",  # Numeric; must follow the copied tags
            dst,
        ]
        result = run_command(cmd, timeout=self.timeout)
        if not result.ok:
            return MetadataCopyResult(ok=False, reason="exiftool_failed", stderr=result.diagnostic)
        return MetadataCopyResult(ok=True)
