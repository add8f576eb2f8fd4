"""External process result model."""

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of one external tool invocation."""

    args: list[str] = Field(default_factory=list)
    returncode: int = -1
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def diagnostic(self) -> str:
        """Return the most useful trimmed output for error reporting."""
        return (self.stderr or "").strip() or (self.stdout or "").strip()
