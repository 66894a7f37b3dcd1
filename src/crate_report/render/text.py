"""Markdown / terminal report with an optional baseline diff."""

from typing import List, Optional

from ..models.diff import Added, Changed, DiffReport, Removed
from ..models.stats import CodeStats, Report
from .style import (
    RenderConfig,
    Severity,
    count_severity,
    delta_severity,
    paint,
    percentage,
    ratio_severity,
)
from .table import Cell, Table

FOOTER = "Generated by crate-report"


def format_delta(old: int, new: int, config: RenderConfig, decrease_is_good: bool = True) -> str:
    """``3 -> 5 (+2)`` style change, coloured by direction."""
    delta = new - old
    if delta == 0:
        return paint(f"{old} (no change)", Severity.NEUTRAL, config)

    plus = "+" if delta > 0 else ""
    return paint(
        f"{old} -> {new} ({plus}{delta})",
        delta_severity(delta, decrease_is_good),
        config,
    )


def format_unsafe_fn_change(change: Changed, config: RenderConfig) -> str:
    """``before_unsafe/before_total -> after_unsafe/after_total (+n)``."""
    before, after = change.before, change.after
    unsafe_delta = after.unsafe_fns - before.unsafe_fns
    total_delta = after.total_fns - before.total_fns

    if unsafe_delta == 0 and total_delta == 0:
        return f"{after.unsafe_fns}/{after.total_fns} (no change)"

    if unsafe_delta < 0:
        sign, severity = "-", Severity.SAFE
    elif unsafe_delta > 0:
        sign, severity = "+", Severity.DANGER
    else:
        sign, severity = "", None

    return paint(
        f"{before.unsafe_fns}/{before.total_fns} -> "
        f"{after.unsafe_fns}/{after.total_fns} ({sign}{abs(unsafe_delta)})",
        severity,
        config,
    )


def format_percentage(unsafe_count: int, total_count: int, config: RenderConfig) -> str:
    pct = percentage(unsafe_count, total_count)
    return paint(
        f"{pct:.2f}% ({unsafe_count} / {total_count})",
        ratio_severity(unsafe_count, total_count),
        config,
    )


def report_table(report: Report) -> Table:
    """One row per file: fn ratio, unsafe statements, static muts, unwraps."""
    table = Table(
        headers=[
            Cell(""),
            Cell(" (unsafe/total) fns"),
            Cell("statements"),
            Cell("static mut"),
            Cell("unwrap"),
        ]
    )
    for filename, stats in report.files.items():
        table.add_row(
            [
                Cell(filename, Severity.SAFE if stats.is_perfect() else None),
                Cell(
                    f"{stats.unsafe_fns}/{stats.total_fns}",
                    ratio_severity(stats.unsafe_fns, stats.total_fns),
                ),
                Cell(f"{stats.unsafe_statements}/{stats.total_statements}"),
                Cell(str(stats.static_mut_items), count_severity(stats.static_mut_items)),
                Cell(str(stats.unwraps), count_severity(stats.unwraps)),
            ]
        )
    return table


def format_summary(total: CodeStats, config: RenderConfig) -> str:
    return "\n".join(
        [
            "Code Report",
            "===========",
            f"- Total lines: {total.total_lines}",
            f"- Total unsafe functions: {format_percentage(total.unsafe_fns, total.total_fns, config)}",
            f"- Total statements in unsafe blocks: {total.unsafe_statements}",
            f"- Total static mut items: {total.static_mut_items}",
            f"- Total unwrap calls: {total.unwraps}",
            "",
            "",
        ]
    )


def format_diff(diff: DiffReport, config: RenderConfig) -> str:
    """Summary deltas, then changed, added and removed files."""
    before, after = diff.before_total, diff.after_total
    lines: List[str] = []

    if not diff.changes:
        lines.append("No changes")

    lines += [
        "Summary",
        "=======",
        f"unsafe fn   : {format_delta(before.unsafe_fns, after.unsafe_fns, config)}",
        f"total fn    : {format_delta(before.total_fns, after.total_fns, config, decrease_is_good=False)}",
        f"unsafe stmt : {format_delta(before.unsafe_statements, after.unsafe_statements, config)}",
        f"static mut  : {format_delta(before.static_mut_items, after.static_mut_items, config)}",
        f"unwraps     : {format_delta(before.unwraps, after.unwraps, config)}",
        "",
    ]

    for filename, change in diff.changes.items():
        if isinstance(change, Changed):
            lines += [
                filename,
                f"unsafe fn   : {format_unsafe_fn_change(change, config)}",
                f"unsafe stmt : {format_delta(change.before.unsafe_statements, change.after.unsafe_statements, config)}",
                f"static mut  : {format_delta(change.before.static_mut_items, change.after.static_mut_items, config)}",
                f"unwraps     : {format_delta(change.before.unwraps, change.after.unwraps, config)}",
                "",
            ]

    for filename, change in diff.changes.items():
        if isinstance(change, Added):
            stats = change.stats
            lines += [
                f"{filename} [NEW FILE]",
                f"  Unsafe funcs: {stats.unsafe_fns}",
                f"   Total funcs: {stats.total_fns}",
                f"  Unsafe stmts: {stats.unsafe_statements}",
                f"       unwraps: {stats.unwraps}",
                "",
            ]

    for filename, change in diff.changes.items():
        if isinstance(change, Removed):
            stats = change.stats
            lines += [
                f"{filename} [REMOVED]",
                f"  Had {stats.unsafe_fns} unsafe / {stats.total_fns} total fns, "
                f"{stats.unsafe_statements} unsafe lines",
                "",
            ]

    return "\n".join(lines) + "\n"


def format_markdown_report(
    report: Report, diff: Optional[DiffReport], config: RenderConfig
) -> str:
    """Full text report.

    Args:
        report: Current report
        diff: Diff against a baseline, or None to omit the diff section
        config: Render options (colour on/off)

    Returns:
        Report text ending with a footer line
    """
    out = format_summary(report.total, config)
    out += report_table(report).to_markdown(config)

    if diff is not None:
        out += "\n\n" + format_diff(diff, config)

    out += f"\n{FOOTER}\n"
    return out
