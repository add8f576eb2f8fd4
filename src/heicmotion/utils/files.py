"""Input file enumeration."""

from collections.abc import Iterator
from pathlib import Path

from .container import HEIF_EXTENSIONS


def iter_source_files(
    root: str | Path,
    recursive: bool = False,
    extensions: list[str] | None = None,
) -> Iterator[Path]:
    """Yield HEIC/HEIF files under ``root`` in sorted order.

    Args:
        root: Source directory
        recursive: Descend into subdirectories
        extensions: Lower-case suffixes to accept (default .heic/.heif)
    """
    suffixes = {e.lower() for e in (extensions or HEIF_EXTENSIONS)}
    for entry in sorted(Path(root).iterdir()):
        if entry.is_dir():
            if recursive:
                yield from iter_source_files(entry, recursive=True, extensions=extensions)
            continue
        if entry.is_file() and entry.suffix.lower() in suffixes:
            yield entry
