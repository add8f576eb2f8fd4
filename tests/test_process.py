"""Tests for run_command, tool detection and file enumeration."""

import sys

from heicmotion import __version__
from heicmotion.config import ToolPathsConfig
from heicmotion.models import ToolAvailability
from heicmotion.utils import detect_tools, iter_source_files
from heicmotion.utils.process import run_command


class TestRunCommand:
    """Test run_command never raises and reports outcomes."""

    def test_missing_binary(self):
        result = run_command(["heicmotion-no-such-tool-xyz", "--help"])
        assert result.returncode == -1
        assert result.ok is False
        assert result.stderr
        assert result.timed_out is False

    def test_exit_code_and_output(self):
        result = run_command(
            [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"]
        )
        assert result.returncode == 3
        assert result.stdout.strip() == "out"
        assert result.diagnostic == "err"
        assert result.args[0] == sys.executable

    def test_success(self):
        result = run_command([sys.executable, "-c", "print(42)"])
        assert result.ok
        assert result.diagnostic == "42"

    def test_timeout(self):
        result = run_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.2)
        assert result.timed_out is True
        assert result.returncode == -1
        assert "timed out" in result.stderr


class TestDetectTools:
    def test_missing_override_is_unavailable(self, monkeypatch):
        monkeypatch.setattr("heicmotion.utils.deps.shutil.which", lambda name: None)
        tools = detect_tools(ToolPathsConfig(exiftool="/nowhere/exiftool"))
        assert tools == ToolAvailability()

    def test_prefers_magick(self, monkeypatch):
        found = {"magick": "/usr/bin/magick", "convert": "/usr/bin/convert"}
        monkeypatch.setattr("heicmotion.utils.deps.shutil.which", lambda name: found.get(name))
        tools = detect_tools()
        assert tools.raster_converter == "/usr/bin/magick"
        assert tools.imagemagick_is_magick is True

    def test_falls_back_to_convert(self, monkeypatch):
        found = {"convert": "/usr/bin/convert", "ffprobe": "/usr/bin/ffprobe"}
        monkeypatch.setattr("heicmotion.utils.deps.shutil.which", lambda name: found.get(name))
        tools = detect_tools()
        assert tools.raster_converter == "/usr/bin/convert"
        assert tools.imagemagick_is_magick is False
        assert tools.video_prober == "/usr/bin/ffprobe"
        assert tools.video_encoder is None


class TestIterSourceFiles:
    def test_flat_and_recursive(self, tmp_path):
        (tmp_path / "b.HEIC").write_bytes(b"x")
        (tmp_path / "a.heif").write_bytes(b"x")
        (tmp_path / "c.jpg").write_bytes(b"x")
        nested = tmp_path / "2024"
        nested.mkdir()
        (nested / "d.heic").write_bytes(b"x")

        flat = [p.name for p in iter_source_files(tmp_path)]
        assert flat == ["a.heif", "b.HEIC"]

        deep = [p.name for p in iter_source_files(tmp_path, recursive=True)]
        assert deep == ["d.heic", "a.heif", "b.HEIC"]

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "x.hif").write_bytes(b"x")
        (tmp_path / "y.heic").write_bytes(b"x")
        assert [p.name for p in iter_source_files(tmp_path, extensions=[".hif"])] == ["x.hif"]


def test_version():
    assert __version__ == "0.5.0"
