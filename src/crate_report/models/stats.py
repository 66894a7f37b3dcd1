"""Per-file safety counters and whole-crate reports."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Fields compared when deciding whether a file changed between two reports.
SAFETY_FIELDS = (
    "unsafe_fns",
    "unsafe_statements",
    "static_mut_items",
    "unwraps",
)


class CodeStats(BaseModel):
    """Safety-relevant counters for one file, or summed over many."""

    model_config = ConfigDict(frozen=True)

    static_mut_items: int = Field(default=0, ge=0)
    total_fns: int = Field(default=0, ge=0)
    total_lines: int = Field(default=0, ge=0)
    total_statements: int = Field(default=0, ge=0)
    unsafe_fns: int = Field(default=0, ge=0)
    unsafe_statements: int = Field(default=0, ge=0)
    unwraps: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def unsafe_fns_within_total(self) -> "CodeStats":
        if self.unsafe_fns > self.total_fns:
            raise ValueError(
                f"unsafe_fns ({self.unsafe_fns}) exceeds total_fns ({self.total_fns})"
            )
        return self

    def __add__(self, other: "CodeStats") -> "CodeStats":
        if not isinstance(other, CodeStats):
            return NotImplemented
        return CodeStats(
            static_mut_items=self.static_mut_items + other.static_mut_items,
            total_fns=self.total_fns + other.total_fns,
            total_lines=self.total_lines + other.total_lines,
            total_statements=self.total_statements + other.total_statements,
            unsafe_fns=self.unsafe_fns + other.unsafe_fns,
            unsafe_statements=self.unsafe_statements + other.unsafe_statements,
            unwraps=self.unwraps + other.unwraps,
        )

    def is_perfect(self) -> bool:
        """True when the file has no unsafe code, static muts or unwraps."""
        return all(getattr(self, name) == 0 for name in SAFETY_FIELDS)

    def should_report_change(self, other: "CodeStats") -> bool:
        """Compare only the safety fields; totals and line counts are ignored."""
        return any(
            getattr(self, name) != getattr(other, name) for name in SAFETY_FIELDS
        )


def sum_stats(stats: Iterable[CodeStats]) -> CodeStats:
    """Field-wise sum; an empty iterable sums to all zeros."""
    total = CodeStats()
    for item in stats:
        total = total + item
    return total


class Report(BaseModel):
    """File -> CodeStats mapping plus the crate-wide total."""

    model_config = ConfigDict(frozen=True)

    files: Dict[str, CodeStats] = Field(default_factory=dict)
    total: CodeStats = Field(default_factory=CodeStats)


FileEntries = Union[Mapping[str, CodeStats], Iterable[Tuple[str, CodeStats]]]


def build_report(entries: FileEntries) -> Report:
    """Build a report with lexicographically ordered files and their total.

    Args:
        entries: Mapping or iterable of (filename, stats) pairs

    Returns:
        Report whose total is the field-wise sum of every file
    """
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    files = dict(sorted(pairs, key=lambda item: item[0]))
    return Report(files=files, total=sum_stats(files.values()))


__all__ = ["SAFETY_FIELDS", "CodeStats", "Report", "build_report", "sum_stats"]
