"""Still-image conversion result models."""

from pydantic import BaseModel, Field


class ConversionAttempt(BaseModel):
    """Outcome of one converter strategy."""

    strategy: str
    ok: bool
    path: str | None = None
    diagnostic: str | None = None


class ConversionResult(BaseModel):
    """Outcome of the whole conversion chain.

    ``failures`` holds a diagnostic for every strategy that was tried and
    failed before the chain succeeded or gave up.
    """

    ok: bool
    path: str | None = None
    method: str | None = None
    attempts: list[ConversionAttempt] = Field(default_factory=list)

    @property
    def failures(self) -> list[str]:
        return [a.diagnostic or f"{a.strategy} failed" for a in self.attempts if not a.ok]


class ImageDimensions(BaseModel):
    """Pixel dimensions of a converted still."""

    width: int = 0
    height: int = 0
    source: str = "none"

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"


class MetadataCopyResult(BaseModel):
    """Outcome of copying metadata onto a converted still."""

    ok: bool
    reason: str | None = None
    stderr: str | None = None
