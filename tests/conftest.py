"""Pytest configuration and fixtures."""

import os
import subprocess

import pytest

from heicmotion.config import reset_config
from heicmotion.models import ToolAvailability
from tests.fixtures import FakeRunner

# Modules that call run_command directly
RUNNER_MODULES = [
    "heicmotion.extractors.exiftool",
    "heicmotion.extractors.ffprobe",
    "heicmotion.converters.base",
    "heicmotion.motion.normalize",
]


def command_exists(cmd: str) -> bool:
    """Check if a command exists in PATH."""
    try:
        subprocess.run(
            [cmd, "-version"],
            capture_output=True,
            timeout=5,
        )
        return True
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False


@pytest.fixture
def has_ffmpeg() -> bool:
    """Check if ffmpeg and ffprobe are available."""
    return command_exists("ffmpeg") and command_exists("ffprobe")


@pytest.fixture
def has_exiftool() -> bool:
    """Check if exiftool is available."""
    return command_exists("exiftool")


@pytest.fixture
def fake_runner(monkeypatch) -> FakeRunner:
    """Patch every run_command call site with a FakeRunner."""
    runner = FakeRunner()
    for module in RUNNER_MODULES:
        monkeypatch.setattr(f"{module}.run_command", runner)
    return runner


@pytest.fixture
def all_tools() -> ToolAvailability:
    """Every tool present (bare names, resolved by the fake runner)."""
    return ToolAvailability(
        exiftool="exiftool",
        ffmpeg="ffmpeg",
        ffprobe="ffprobe",
        imagemagick="magick",
        imagemagick_is_magick=True,
        heif_convert="heif-convert",
    )


@pytest.fixture
def no_tools() -> ToolAvailability:
    return ToolAvailability()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from HEICMOTION_* variables, config files and cached config."""
    for key in list(os.environ):
        if key.startswith("HEICMOTION_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("heicmotion.config.CONFIG_LOCATIONS", [])
    reset_config()
    yield
    reset_config()
