"""Tests for the still conversion chain."""

import os

import pytest

from heicmotion.converters import (
    FFmpegFrameConverter,
    HeifConvertConverter,
    ImageMagickConverter,
    convert_still,
    get_available_converters,
    get_converter_status,
    jpeg_qscale,
)
from heicmotion.models import OrientationCode, ToolAvailability
from tests.fixtures import fail, ok, touch, writes_last_arg


@pytest.fixture
def dst(tmp_path):
    return str(tmp_path / "out.jpg")


class TestConverterRegistry:
    """Test converter availability and ordering."""

    def test_priority_order(self, all_tools):
        names = [c.name for c in get_available_converters(all_tools)]
        assert names == ["imagemagick", "heif-convert", "ffmpeg-frame"]

    def test_only_available_tools(self):
        tools = ToolAvailability(ffmpeg="ffmpeg")
        assert [c.name for c in get_available_converters(tools)] == ["ffmpeg-frame"]

    def test_status(self, no_tools):
        assert get_converter_status(no_tools) == {
            "imagemagick": False,
            "heif-convert": False,
            "ffmpeg-frame": False,
        }


class TestCommands:
    """Test each strategy's command line."""

    def test_imagemagick_explicit_rotation(self, all_tools):
        cmd = ImageMagickConverter(all_tools).build_command(
            "in.heic", "out.jpg", 90, OrientationCode.RIGHT_TOP
        )
        assert cmd == ["magick", "in.heic", "-rotate", "90", "-quality", "90", "out.jpg"]

    def test_imagemagick_identity(self, all_tools):
        cmd = ImageMagickConverter(all_tools).build_command("in.heic", "out.jpg", 95, OrientationCode.TOP_LEFT)
        assert cmd == ["magick", "in.heic", "-quality", "95", "out.jpg"]
        assert "-auto-orient" not in cmd

    def test_legacy_convert_binary(self):
        tools = ToolAvailability(imagemagick="/usr/bin/convert")
        cmd = ImageMagickConverter(tools).build_command("in.heic", "out.jpg", 95, OrientationCode.BOTTOM_LEFT)
        assert cmd == ["/usr/bin/convert", "in.heic", "-flip", "-quality", "95", "out.jpg"]

    def test_heif_convert(self, all_tools):
        cmd = HeifConvertConverter(all_tools).build_command("in.heic", "out.jpg", 95, OrientationCode.RIGHT_TOP)
        assert cmd == ["heif-convert", "in.heic", "out.jpg"]

    def test_ffmpeg_disables_autorotate(self, all_tools):
        cmd = FFmpegFrameConverter(all_tools).build_command(
            "in.heic", "out.jpg", 95, OrientationCode.RIGHT_BOTTOM
        )
        assert "-noautorotate" in cmd
        assert cmd.index("-noautorotate") < cmd.index("-i")
        assert cmd[cmd.index("-frames:v") + 1] == "1"
        assert cmd[cmd.index("-vf") + 1] == "transpose=2,hflip"
        assert cmd[cmd.index("-qscale:v") + 1] == "3"
        assert cmd[-1] == "out.jpg"

    def test_ffmpeg_identity_has_no_filter(self, all_tools):
        cmd = FFmpegFrameConverter(all_tools).build_command("in.heic", "out.jpg", 95, OrientationCode.TOP_LEFT)
        assert "-vf" not in cmd

    @pytest.mark.parametrize("quality,expected", [(100, 2), (95, 3), (50, 17), (1, 31), (0, 31), (150, 2)])
    def test_jpeg_qscale(self, quality, expected):
        assert jpeg_qscale(quality) == expected


class TestConvertStill:
    """Test the fallback chain."""

    def test_first_strategy_wins(self, fake_runner, all_tools, dst):
        fake_runner.on("magick", writes_last_arg())
        result = convert_still(all_tools, "in.heic", dst, 95, OrientationCode.RIGHT_TOP)

        assert result.ok is True
        assert result.method == "imagemagick"
        assert result.path == dst
        assert fake_runner.calls_for("heif-convert") == []
        assert fake_runner.calls_for("ffmpeg") == []

    def test_falls_back_in_order(self, fake_runner, all_tools, dst):
        fake_runner.on("magick", lambda args: fail(1, "no decode delegate"))
        fake_runner.on("heif-convert", lambda args: fail(2, "unsupported"))
        fake_runner.on("ffmpeg", writes_last_arg())
        result = convert_still(all_tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)

        assert result.ok is True
        assert result.method == "ffmpeg-frame"
        assert [a.strategy for a in result.attempts] == ["imagemagick", "heif-convert", "ffmpeg-frame"]
        assert len(result.failures) == 2

    def test_total_failure_keeps_diagnostics(self, fake_runner, all_tools, dst):
        fake_runner.on("magick", lambda args: fail(1, "no decode delegate"))
        fake_runner.on("heif-convert", lambda args: fail(2, "unsupported"))
        fake_runner.on("ffmpeg", lambda args: fail(187, "invalid data"))
        result = convert_still(all_tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)

        assert result.ok is False
        assert result.method is None
        assert result.failures == [
            "imagemagick exit 1: no decode delegate",
            "heif-convert exit 2: unsupported",
            "ffmpeg-frame exit 187: invalid data",
        ]

    @pytest.mark.parametrize("code", [1, 2, 127, -1])
    def test_nonzero_exit_with_output_is_failure(self, fake_runner, dst, code):
        """Test a strategy that writes a file but exits non-zero never succeeds."""
        tools = ToolAvailability(imagemagick="magick")
        fake_runner.on("magick", writes_last_arg(fail(code)))
        result = convert_still(tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)
        assert result.ok is False
        assert not os.path.exists(dst)

    def test_partial_output_from_last_strategy_removed(self, fake_runner, all_tools, dst):
        """Test a half-written JPEG from the final failing strategy is not left behind."""
        fake_runner.on("magick", lambda args: fail(1, "no decode delegate"))
        fake_runner.on("heif-convert", lambda args: fail(1, "unsupported"))
        fake_runner.on("ffmpeg", writes_last_arg(fail(255, "Conversion failed!")))
        result = convert_still(all_tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)

        assert result.ok is False
        assert result.failures[-1] == "ffmpeg-frame exit 255: Conversion failed!"
        assert not os.path.exists(dst)

    def test_stale_output_is_not_success(self, fake_runner, dst):
        """Test a leftover file from an earlier run cannot satisfy the exists check."""
        touch(dst)
        tools = ToolAvailability(heif_convert="heif-convert")
        fake_runner.on("heif-convert", lambda args: ok())
        result = convert_still(tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)

        assert result.ok is False
        assert result.failures == ["heif-convert exit 0 but produced no output"]
        assert not os.path.exists(dst)

    def test_timeout_is_strategy_failure(self, fake_runner, all_tools, dst):
        from heicmotion.models import CommandResult

        fake_runner.on("magick", lambda args: CommandResult(returncode=-1, stderr="timed out", timed_out=True))
        fake_runner.on("heif-convert", writes_last_arg())
        result = convert_still(all_tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)
        assert result.ok is True
        assert result.method == "heif-convert"

    def test_no_converters(self, fake_runner, no_tools, dst):
        result = convert_still(no_tools, "in.heic", dst, 95, OrientationCode.TOP_LEFT)
        assert result.ok is False
        assert result.attempts == []
        assert fake_runner.calls == []
