"""Base class for external metadata tools."""

from typing import ClassVar

from heicmotion.utils.process import DEFAULT_TIMEOUT


class BaseExtractor:
    """Wrapper around one external metadata tool.

    Extractors are bound to the executable path resolved at startup and never
    raise: every failure is reported as an empty or default result so callers
    can fall through to the next strategy.

    Attributes:
        name: Human-readable name of the tool
    """

    name: ClassVar[str] = "base"

    def __init__(self, executable: str, timeout: float | None = DEFAULT_TIMEOUT):
        self.executable = executable
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(executable={self.executable!r})"
