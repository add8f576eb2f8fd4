"""Configuration management for heicmotion.

Supports loading configuration from:
1. Environment variables (HEICMOTION_*)
2. Config file (~/.heicmotion/config.yaml)
3. Default values

Example config file (~/.heicmotion/config.yaml):
    conversion:
      quality: 92
      timeout_seconds: 60
      jobs: 4
      recursive: true
    tools:
      exiftool: "/opt/homebrew/bin/exiftool"
      imagemagick: "magick"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from heicmotion.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".heicmotion" / "config.yaml",
    Path.home() / ".config" / "heicmotion" / "config.yaml",
    Path(".heicmotion.yaml"),
]


@dataclass
class ConversionConfig:
    """Conversion configuration."""

    quality: int = 95
    timeout_seconds: float = 120
    jobs: int = 1
    recursive: bool = False
    extensions: list[str] = field(default_factory=lambda: [".heic", ".heif"])

    def validate(self) -> None:
        """Raise ConfigError for out-of-range values."""
        if not 1 <= self.quality <= 100:
            raise ConfigError(f"quality must be an integer 1-100, got {self.quality}")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")


@dataclass
class ToolPathsConfig:
    """Explicit executable overrides (names or absolute paths)."""

    exiftool: str | None = None
    ffmpeg: str | None = None
    ffprobe: str | None = None
    imagemagick: str | None = None
    heif_convert: str | None = None


@dataclass
class HeicMotionConfig:
    """Main configuration for heicmotion."""

    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)


def _load_yaml_config(locations: list[Path] | None = None) -> dict[str, Any]:
    """Load configuration from the first YAML file found."""
    for config_path in CONFIG_LOCATIONS if locations is None else locations:
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f)
                    return data if isinstance(data, dict) else {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
                continue
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with HEICMOTION_ prefix."""
    return os.environ.get(f"HEICMOTION_{key}", default)


def _parse_bool(value: str | None) -> bool | None:
    """Parse boolean from string."""
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes", "on")


def _parse_number(value: Any, kind: type, key: str) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {key}: {value!r}") from e


def load_config(locations: list[Path] | None = None) -> HeicMotionConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables (HEICMOTION_*)
    2. Config file (~/.heicmotion/config.yaml)
    3. Default values

    Raises:
        ConfigError: If a value is malformed or out of range
    """
    file_config = _load_yaml_config(locations)

    # Conversion config
    conversion_config = file_config.get("conversion") or {}
    recursive_env = _parse_bool(_get_env("RECURSIVE"))
    extensions = conversion_config.get("extensions") or [".heic", ".heif"]
    conversion = ConversionConfig(
        quality=_parse_number(
            _get_env("QUALITY") or conversion_config.get("quality", 95), int, "quality"
        ),
        timeout_seconds=_parse_number(
            _get_env("TIMEOUT") or conversion_config.get("timeout_seconds", 120),
            float,
            "timeout_seconds",
        ),
        jobs=_parse_number(_get_env("JOBS") or conversion_config.get("jobs", 1), int, "jobs"),
        recursive=(
            recursive_env
            if recursive_env is not None
            else bool(conversion_config.get("recursive", False))
        ),
        extensions=[str(e).lower() for e in extensions],
    )
    conversion.validate()

    # Tool overrides
    tools_config = file_config.get("tools") or {}
    tools = ToolPathsConfig(
        exiftool=_get_env("EXIFTOOL") or tools_config.get("exiftool"),
        ffmpeg=_get_env("FFMPEG") or tools_config.get("ffmpeg"),
        ffprobe=_get_env("FFPROBE") or tools_config.get("ffprobe"),
        imagemagick=_get_env("IMAGEMAGICK") or tools_config.get("imagemagick"),
        heif_convert=_get_env("HEIF_CONVERT") or tools_config.get("heif_convert"),
    )

    return HeicMotionConfig(conversion=conversion, tools=tools)


# Global config instance (lazy loaded)
_config: HeicMotionConfig | None = None


def get_config() -> HeicMotionConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
