"""Dependency checking utilities."""

import shutil
from pathlib import Path

from heicmotion.config import ToolPathsConfig
from heicmotion.models import ToolAvailability


def _resolve(name: str, override: str | None = None) -> str | None:
    """Resolve an executable, preferring an explicit override."""
    if override:
        return shutil.which(override)
    return shutil.which(name)


def detect_tools(paths: ToolPathsConfig | None = None) -> ToolAvailability:
    """Locate every external tool once, before any file is processed.

    ImageMagick 7's ``magick`` is preferred over the legacy ``convert``.

    Args:
        paths: Optional explicit executable overrides

    Returns:
        Frozen ToolAvailability snapshot
    """
    paths = paths or ToolPathsConfig()

    imagemagick = _resolve("magick", paths.imagemagick) or _resolve("convert")
    is_magick = imagemagick is not None and Path(imagemagick).stem.lower() == "magick"

    return ToolAvailability(
        exiftool=_resolve("exiftool", paths.exiftool),
        ffmpeg=_resolve("ffmpeg", paths.ffmpeg),
        ffprobe=_resolve("ffprobe", paths.ffprobe),
        imagemagick=imagemagick,
        imagemagick_is_magick=is_magick,
        heif_convert=_resolve("heif-convert", paths.heif_convert),
    )


def print_dependency_status(tools: ToolAvailability) -> None:
    """Print tool availability to stdout."""
    status = tools.as_status()

    print("heicmotion tool status:")
    print("=" * 40)
    for name, available in status.items():
        icon = "✓" if available else "✗"
        detail = f" ({available})" if isinstance(available, str) else ""
        print(f"  {icon} {name}{detail}")

    print(f"\nSummary: {sum(1 for v in status.values() if v)}/{len(status)} tools")

    # Recommendations
    if not tools.exiftool:
        print("\n⚠️  exiftool is recommended for orientation and metadata copy.")
        print("   Install: brew install exiftool / apt install libimage-exiftool-perl")
    if not tools.ffprobe:
        print("\n⚠️  ffprobe is required for motion photo extraction. Install: brew install ffmpeg")
    if not (tools.imagemagick or tools.heif_convert or tools.ffmpeg):
        print("\n⚠️  No still converter found. Install ImageMagick, libheif or ffmpeg.")
