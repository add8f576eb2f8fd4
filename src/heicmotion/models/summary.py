"""Per-file and batch summary models."""

from pydantic import BaseModel, ConfigDict, Field


class FileSummary(BaseModel):
    """What happened to one input file.

    Built once by the orchestrator and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    jpg_out: str
    mp4_out: str
    orientation: int = 1
    steps: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    still_ok: bool = False
    motion: str = "none"

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class BatchReport(BaseModel):
    """Summaries for a whole run."""

    source_dir: str
    output_dir: str
    tools: dict[str, bool | str] = Field(default_factory=dict)
    files: list[FileSummary] = Field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.files)

    @property
    def failures(self) -> int:
        return sum(1 for f in self.files if f.has_errors)
