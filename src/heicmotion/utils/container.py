"""Container byte-scanning utilities.

Embedded motion videos are located by looking for nested ``ftyp`` boxes in
the raw bytes of a still-image file. Nothing about the nested box is
validated here; candidates are structural guesses for the prober to confirm.
"""

import logging

from heicmotion.models import ContainerCandidate

logger = logging.getLogger(__name__)

FTYP_MARKER = b"ftyp"

# Major brands of the outer still-image family (HEIF/HEIC/AVIF)
HEIF_LIKE_BRANDS = frozenset(
    {
        "heic",
        "heix",
        "hevc",
        "hevx",
        "heim",
        "heis",
        "hevm",
        "hevs",
        "mif1",
        "msf1",
        "avif",
        "avis",
    }
)

# Still-image file extensions accepted as input
HEIF_EXTENSIONS = [".heic", ".heif"]


def find_all(data: bytes, needle: bytes) -> list[int]:
    """Return every (possibly overlapping) index of ``needle`` in ``data``."""
    indexes = []
    i = data.find(needle)
    while i != -1:
        indexes.append(i)
        i = data.find(needle, i + 1)
    return indexes


def read_ascii(data: bytes, offset: int, length: int) -> str | None:
    """Read ``length`` bytes at ``offset`` as ASCII, or None if out of range."""
    if offset < 0 or offset + length > len(data):
        return None
    return data[offset : offset + length].decode("ascii", errors="replace")


def scan_candidates(data: bytes) -> list[ContainerCandidate]:
    """Find nested container starts that may hold an embedded video.

    The box start is 4 bytes before each ``ftyp`` marker (the size field
    precedes the type). The primary header at offset 0 and any box whose
    major brand belongs to the HEIF/AVIF family are skipped.

    Args:
        data: Raw bytes of the source file

    Returns:
        Candidates ordered by descending offset (appended payloads first)
    """
    candidates: list[ContainerCandidate] = []
    indexes = find_all(data, FTYP_MARKER)
    logger.debug("ftyp occurrences at byte offsets: %s", ", ".join(map(str, indexes)) or "none")

    for index in indexes:
        start = index - 4
        if start < 0:
            continue
        if start == 0:
            logger.debug("Skipping primary ftyp at offset 0")
            continue

        brand = read_ascii(data, index + 4, 4)
        candidate = ContainerCandidate(
            start=start,
            ftyp_index=index,
            brand=brand,
            legitimate=brand not in HEIF_LIKE_BRANDS,
        )
        if not candidate.legitimate:
            logger.debug("Skipping HEIF/AVIF brand candidate: %s at ftyp index %d", brand, index)
            continue

        candidates.append(candidate)

    candidates.sort(key=lambda c: c.start, reverse=True)
    return candidates
