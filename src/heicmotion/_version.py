"""Version information for heicmotion."""

__version__ = "0.5.0"
