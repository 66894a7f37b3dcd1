"""Per-file change classification between a baseline and a current report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Union

from .stats import CodeStats, Report


@dataclass(frozen=True)
class Added:
    """File exists only in the current report."""

    stats: CodeStats


@dataclass(frozen=True)
class Removed:
    """File exists only in the baseline."""

    stats: CodeStats


@dataclass(frozen=True)
class Changed:
    """File exists in both reports with different safety counters."""

    before: CodeStats
    after: CodeStats

    def delta(self, name: str) -> int:
        """Signed change of one counter (after - before)."""
        return getattr(self.after, name) - getattr(self.before, name)


Diff = Union[Added, Removed, Changed]


@dataclass(frozen=True)
class DiffReport:
    """Changed files plus both crate-wide totals."""

    before_total: CodeStats
    after_total: CodeStats
    changes: Dict[str, Diff] = field(default_factory=dict)

    def total_delta(self, name: str) -> int:
        return getattr(self.after_total, name) - getattr(self.before_total, name)


def diff_reports(current: Report, baseline: Report) -> DiffReport:
    """Reconcile the file sets of two reports.

    Files present in both reports whose safety counters are equal are left
    out of ``changes`` even if line, statement or function totals moved.

    Args:
        current: Report for the current tree ("after")
        baseline: Previously persisted report ("before")

    Returns:
        DiffReport with changes ordered by filename
    """
    changes: Dict[str, Diff] = {}
    for filename in sorted(baseline.files.keys() | current.files.keys()):
        before = baseline.files.get(filename)
        after = current.files.get(filename)

        if before is None:
            changes[filename] = Added(after)
        elif after is None:
            changes[filename] = Removed(before)
        elif before.should_report_change(after):
            changes[filename] = Changed(before=before, after=after)

    return DiffReport(
        before_total=baseline.total,
        after_total=current.total,
        changes=changes,
    )


__all__ = ["Added", "Changed", "Diff", "DiffReport", "Removed", "diff_reports"]
