"""Base converter class."""

import contextlib
import logging
import os
from abc import ABC, abstractmethod
from typing import ClassVar

from heicmotion.models import ConversionAttempt, OrientationCode, ToolAvailability
from heicmotion.utils.process import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)


class BaseConverter(ABC):
    """Abstract base class for still-image converter strategies.

    Converters follow a plugin architecture: each one checks its own
    availability against the tool snapshot and builds the command line for
    its tool. Running the command and judging the outcome is shared here.

    Attributes:
        name: Strategy identifier reported in summaries
        priority: Lower numbers are tried first
    """

    name: ClassVar[str] = "base"
    priority: ClassVar[int] = 100

    def __init__(self, tools: ToolAvailability, timeout: float | None = DEFAULT_TIMEOUT):
        self.tools = tools
        self.timeout = timeout

    @classmethod
    @abstractmethod
    def is_available(cls, tools: ToolAvailability) -> bool:
        """Check if the backing tool was found."""
        pass

    @abstractmethod
    def build_command(
        self, src: str, dst: str, quality: int, orientation: OrientationCode
    ) -> list[str]:
        """Build the argv that converts ``src`` into ``dst``."""
        pass

    def describe(self, orientation: OrientationCode) -> str:
        """Return a short description of the transform applied (for debug logs)."""
        return ""

    def convert(
        self, src: str, dst: str, quality: int, orientation: OrientationCode
    ) -> ConversionAttempt:
        """Run the conversion.

        Succeeds only if the tool exits zero and ``dst`` exists afterwards.
        Any existing ``dst`` is removed first so a stale file from an earlier
        attempt cannot be mistaken for output.
        """
        try:
            os.remove(dst)
        except FileNotFoundError:
            pass
        except OSError as e:
            return ConversionAttempt(
                strategy=self.name, ok=False, diagnostic=f"{self.name} cannot replace {dst}: {e}"
            )

        result = run_command(self.build_command(src, dst, quality, orientation), timeout=self.timeout)
        if result.ok and os.path.exists(dst):
            logger.debug("Converted with %s %s", self.name, self.describe(orientation))
            return ConversionAttempt(strategy=self.name, ok=True, path=dst)

        if result.ok:
            diagnostic = f"{self.name} exit 0 but produced no output"
        else:
            diagnostic = f"{self.name} exit {result.returncode}: {result.diagnostic}"
            # Partial output from a failed or killed tool
            with contextlib.suppress(FileNotFoundError):
                os.remove(dst)
        return ConversionAttempt(strategy=self.name, ok=False, diagnostic=diagnostic)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"
