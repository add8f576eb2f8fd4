"""Exceptions for heicmotion."""


class HeicMotionError(Exception):
    """Base error for heicmotion."""

    pass


class ConfigError(HeicMotionError):
    """Invalid configuration value."""

    pass
