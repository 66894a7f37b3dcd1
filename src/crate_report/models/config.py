"""Configuration model for .crate-report.toml."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

OutputFormat = Literal["csv", "html", "markdown", "pr-comment"]
OUTPUT_FORMATS: Tuple[str, ...] = ("csv", "html", "markdown", "pr-comment")


class ReportConfig(BaseModel):
    """Defaults for the CLI; command-line options override every field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    exclude: Tuple[str, ...] = ()
    jobs: int = Field(default=1, ge=1)
    format: OutputFormat = "markdown"
    color: bool = True
    config_path: Path | None = Field(default=None, exclude=True)

    @field_validator("exclude")
    @classmethod
    def patterns_not_empty(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject blank patterns, which would match nothing useful."""

        if any(not pattern.strip() for pattern in v):
            raise ValueError("Exclude patterns must not be empty")
        return v


__all__ = ["OUTPUT_FORMATS", "OutputFormat", "ReportConfig"]
