"""Test helpers: a scripted process runner and synthetic HEIC/ffprobe data."""

from __future__ import annotations

import json
import os
import struct
from collections.abc import Callable

from heicmotion.models import CommandResult


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(returncode=0, stdout=stdout)


def fail(code: int = 1, stderr: str = "boom") -> CommandResult:
    return CommandResult(returncode=code, stderr=stderr)


def touch(path: str, data: bytes = b"\xff\xd8\xff\xe0fake-jpeg") -> None:
    with open(path, "wb") as f:
        f.write(data)


def writes_last_arg(result: CommandResult | None = None) -> Callable[[list[str]], CommandResult]:
    """Responder that creates the file named by the last argv entry."""

    def responder(args: list[str]) -> CommandResult:
        touch(args[-1])
        return result or ok()

    return responder


class FakeRunner:
    """Scripted stand-in for ``run_command``.

    Responders are registered per executable basename and receive the argv.
    Unscripted tools fail with exit code 127.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.responders: dict[str, Callable[[list[str]], CommandResult]] = {}

    def on(self, tool: str, responder: Callable[[list[str]], CommandResult]) -> FakeRunner:
        self.responders[tool] = responder
        return self

    def calls_for(self, tool: str) -> list[list[str]]:
        return [c for c in self.calls if os.path.basename(c[0]) == tool]

    def __call__(self, args: list[str], timeout: float | None = None) -> CommandResult:
        self.calls.append(list(args))
        responder = self.responders.get(os.path.basename(args[0]))
        if responder is None:
            return CommandResult(args=list(args), returncode=127, stderr="not scripted")
        result = responder(list(args))
        return result.model_copy(update={"args": list(args)})


def make_box(box_type: bytes, payload: bytes = b"") -> bytes:
    """Build an ISO-BMFF box with a 32-bit size header."""
    return struct.pack(">I4s", 8 + len(payload), box_type) + payload


def make_ftyp(major: bytes, compatible: tuple[bytes, ...] = ()) -> bytes:
    return make_box(b"ftyp", major + b"\x00\x00\x00\x00" + b"".join(compatible))


def make_heic(with_motion: bool = False, motion_brand: bytes = b"mp42") -> bytes:
    """Build a synthetic HEIC byte stream, optionally with an appended MP4."""
    data = make_ftyp(b"heic", (b"mif1", b"heic"))
    data += make_box(b"meta", b"\x00" * 32)
    data += make_box(b"mdat", b"\x11" * 256)
    if with_motion:
        data += make_ftyp(motion_brand, (b"isom", b"mp42"))
        data += make_box(b"moov", b"\x00" * 64)
        data += make_box(b"mdat", b"\x22" * 512)
    return data


def motion_offset(data: bytes) -> int:
    """Return the box start of the last ftyp in ``data``."""
    return data.rindex(b"ftyp") - 4


def ffprobe_json(
    width: int = 1080,
    height: int = 1920,
    nb_frames: str = "90",
    duration: str = "3.0",
    format_name: str = "mov,mp4,m4a,3gp,3g2,mj2",
    rotate: str | None = None,
    side_data: list[dict] | None = None,
    attached_pic: int = 0,
) -> str:
    """Build ``ffprobe -show_streams -show_format`` JSON output."""
    stream: dict = {
        "index": 0,
        "codec_type": "video",
        "codec_name": "hevc",
        "width": width,
        "height": height,
        "nb_frames": nb_frames,
        "duration": duration,
        "disposition": {"attached_pic": attached_pic},
        "tags": {},
    }
    if rotate is not None:
        stream["tags"]["rotate"] = rotate
    if side_data is not None:
        stream["side_data_list"] = side_data
    audio = {"index": 1, "codec_type": "audio", "codec_name": "aac"}
    return json.dumps(
        {
            "streams": [stream, audio],
            "format": {"format_name": format_name, "duration": duration, "nb_streams": 2},
        }
    )
