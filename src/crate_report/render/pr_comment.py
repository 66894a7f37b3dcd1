"""Markdown summary for automated pull request comments."""

from typing import List, Optional

from ..models.diff import Added, Changed, DiffReport, Removed
from .style import signed
from .text import FOOTER

# Collapse the file list into <details> above this many changed files.
COLLAPSE_THRESHOLD = 5

_METRICS = (
    ("Unsafe Functions", "unsafe_fns"),
    ("Unsafe Statements", "unsafe_statements"),
    ("Static Mut Items", "static_mut_items"),
    ("Unwrap Calls", "unwraps"),
)

_CHANGE_LABELS = (
    ("unsafe functions", "unsafe_fns"),
    ("unsafe statements", "unsafe_statements"),
    ("static mut items", "static_mut_items"),
    ("unwraps", "unwraps"),
)


def _no_changes(diff: DiffReport) -> str:
    lines = [
        "## Safety Analysis Report",
        "",
        "**No safety changes detected.** This PR doesn't modify any safety-related metrics.",
        "",
        "| Metric | Current |",
        "|--------|--------|",
    ]
    lines += [f"| {label} | {getattr(diff.after_total, name)} |" for label, name in _METRICS]
    lines += ["", "---", f"*{FOOTER}*"]
    return "\n".join(lines) + "\n"


def assessment(diff: DiffReport) -> str:
    """One sentence verdict from the direction of the total deltas."""
    deltas = [diff.total_delta(name) for _, name in _METRICS]
    regressions = sum(1 for d in deltas if d > 0)
    improvements = sum(1 for d in deltas if d < 0)

    if improvements and not regressions:
        return "This PR reduces unsafe code usage."
    if regressions and not improvements:
        return "This PR introduces more unsafe code."
    if regressions and improvements:
        return "This PR has both quality improvements and regressions."
    return "**No safety changes.** File changes detected but no impact on quality metrics."


def _file_lines(diff: DiffReport) -> List[str]:
    lines = []
    for filename, change in diff.changes.items():
        if isinstance(change, Added):
            stats = change.stats
            lines += [
                f"- **{filename}** [NEW]",
                f"  - Unsafe functions: {stats.unsafe_fns}, "
                f"Statements: {stats.unsafe_statements}, Unwraps: {stats.unwraps}",
            ]
        elif isinstance(change, Removed):
            stats = change.stats
            lines += [
                f"- **{filename}** [REMOVED]",
                f"  - Had: {stats.unsafe_fns} unsafe functions, "
                f"{stats.unsafe_statements} statements, {stats.unwraps} unwraps",
            ]
        elif isinstance(change, Changed):
            details = [
                f"{label}: {getattr(change.before, name)} → {getattr(change.after, name)}"
                for label, name in _CHANGE_LABELS
                if change.delta(name)
            ]
            lines += [f"- **{filename}** [MODIFIED]", f"  - {', '.join(details)}"]
    return lines


def format_pr_comment(diff: Optional[DiffReport]) -> str:
    """Render a PR comment body.

    Args:
        diff: Diff against the baseline, or None when no baseline is usable

    Returns:
        Markdown text, or an empty string without a baseline
    """
    if diff is None:
        return ""
    if not diff.changes:
        return _no_changes(diff)

    lines = ["## Crate Report", "", "### Summary", ""]
    lines += ["| Metric | Before | After | Change |", "|--------|--------|-------|--------|"]
    for label, name in _METRICS:
        lines.append(
            f"| {label} | {getattr(diff.before_total, name)} | "
            f"{getattr(diff.after_total, name)} | {signed(diff.total_delta(name))} |"
        )
    lines += ["", assessment(diff), ""]

    collapse = len(diff.changes) > COLLAPSE_THRESHOLD
    if collapse:
        lines += ["<details>", "<summary>Detailed File Changes</summary>", ""]
    else:
        lines += ["### File Changes", ""]

    lines += _file_lines(diff)

    if collapse:
        lines += ["", "</details>"]

    lines += ["", "---", f"*{FOOTER}*"]
    return "\n".join(lines) + "\n"
