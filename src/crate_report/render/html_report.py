"""Standalone HTML report with a sortable file table."""

import html
from typing import List, Optional

from ..models.diff import Added, DiffReport, Removed
from ..models.stats import Report
from .style import count_severity, percentage, ratio_severity


def format_change_delta(before: int, after: int) -> str:
    delta = after - before
    if delta == 0:
        return "no change"
    return f"+{delta}" if delta > 0 else str(delta)


_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Crate Safety Report</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; background: #f8f9fa; }
        .container { max-width: 1200px; margin: 0 auto; padding: 20px; }
        .header { background: white; border-radius: 8px; padding: 30px; margin-bottom: 30px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .header h1 { color: #2c3e50; margin-bottom: 10px; }
        .header .subtitle { color: #7f8c8d; }
        .summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 30px; }
        .metric { background: white; border-radius: 8px; padding: 20px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); text-align: center; }
        .metric-value { font-size: 2em; font-weight: bold; margin-bottom: 5px; }
        .metric-label { color: #7f8c8d; font-size: 0.9em; }
        .safe { color: #27ae60; }
        .warning { color: #f39c12; }
        .danger { color: #e74c3c; }
        .neutral { color: #7f8c8d; }
        table { width: 100%; background: white; border-radius: 8px; overflow: hidden; box-shadow: 0 2px 4px rgba(0,0,0,0.1); border-collapse: collapse; }
        th, td { padding: 12px 15px; text-align: left; border-bottom: 1px solid #ecf0f1; }
        th { background: #34495e; color: white; font-weight: 600; cursor: pointer; user-select: none; }
        tr:hover { background: #f8f9fa; }
        .perfect-file { color: #27ae60 !important; }
        .diff-section { background: white; border-radius: 8px; padding: 20px; margin-top: 30px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .diff-change { margin: 10px 0; padding: 10px; border-radius: 4px; background: #f8f9fa; }
        .diff-added { border-left: 4px solid #27ae60; }
        .diff-removed { border-left: 4px solid #e74c3c; }
        .diff-modified { border-left: 4px solid #f39c12; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Crate Safety Report</h1>
            <div class="subtitle">Analysis of unsafe code usage in Rust crate</div>
        </div>
"""

_SCRIPT = """    </div>
    <script>
        let sortDirections = {};

        function sortTable(column) {
            const table = document.getElementById('fileTable');
            const tbody = table.getElementsByTagName('tbody')[0];
            const rows = Array.from(tbody.getElementsByTagName('tr'));
            const direction = sortDirections[column] === 'asc' ? 'desc' : 'asc';
            sortDirections[column] = direction;

            rows.sort((a, b) => {
                let aVal = a.cells[column].textContent.trim();
                let bVal = b.cells[column].textContent.trim();
                if (column > 0) {
                    aVal = parseInt(aVal.split('/')[0]) || 0;
                    bVal = parseInt(bVal.split('/')[0]) || 0;
                }
                if (aVal === bVal) return 0;
                const ascending = aVal > bVal ? 1 : -1;
                return direction === 'asc' ? ascending : -ascending;
            });

            rows.forEach(row => tbody.appendChild(row));
        }
    </script>
</body>
</html>
"""


def _metric(value: str, css_class: str, label: str) -> str:
    return (
        '            <div class="metric">\n'
        f'                <div class="metric-value {css_class}">{value}</div>\n'
        f'                <div class="metric-label">{label}</div>\n'
        "            </div>\n"
    )


def _summary(report: Report) -> str:
    total = report.total
    pct = percentage(total.unsafe_fns, total.total_fns)
    return (
        '        <div class="summary">\n'
        + _metric(str(total.total_lines), "neutral", "Total Lines")
        + _metric(
            f"{pct:.1f}%",
            ratio_severity(total.unsafe_fns, total.total_fns).value,
            "Unsafe Functions",
        )
        + _metric(
            str(total.unsafe_statements),
            count_severity(total.unsafe_statements).value,
            "Unsafe Statements",
        )
        + _metric(
            str(total.static_mut_items),
            count_severity(total.static_mut_items).value,
            "Static Mut Items",
        )
        + _metric(str(total.unwraps), count_severity(total.unwraps).value, "Unwrap Calls")
        + "        </div>\n"
    )


def _file_table(report: Report) -> str:
    headers = [
        "File",
        "Unsafe/Total Functions",
        "Unsafe Statements",
        "Static Mut",
        "Unwraps",
    ]
    parts = ['        <table id="fileTable">\n            <thead>\n                <tr>\n']
    for column, header in enumerate(headers):
        parts.append(
            f'                    <th class="sortable" onclick="sortTable({column})">{header}</th>\n'
        )
    parts.append("                </tr>\n            </thead>\n            <tbody>\n")

    for filename, stats in report.files.items():
        file_class = "perfect-file" if stats.is_perfect() else ""
        parts.append(
            "                <tr>\n"
            f'                    <td class="{file_class}">{html.escape(filename)}</td>\n'
            f'                    <td class="{ratio_severity(stats.unsafe_fns, stats.total_fns).value}">'
            f"{stats.unsafe_fns}/{stats.total_fns}</td>\n"
            f'                    <td class="{count_severity(stats.unsafe_statements).value}">'
            f"{stats.unsafe_statements}</td>\n"
            f'                    <td class="{count_severity(stats.static_mut_items).value}">'
            f"{stats.static_mut_items}</td>\n"
            f'                    <td class="{count_severity(stats.unwraps).value}">'
            f"{stats.unwraps}</td>\n"
            "                </tr>\n"
        )

    parts.append("            </tbody>\n        </table>\n")
    return "".join(parts)


def _change_line(label: str, before: int, after: int) -> str:
    return f"{label}: {before} → {after} ({format_change_delta(before, after)})"


def format_html_diff(diff: DiffReport) -> str:
    """Changes-from-baseline section; empty when no file changed."""
    if not diff.changes:
        return ""

    before, after = diff.before_total, diff.after_total
    summary_lines = [
        _change_line("Unsafe functions", before.unsafe_fns, after.unsafe_fns),
        _change_line("Unsafe statements", before.unsafe_statements, after.unsafe_statements),
        _change_line("Static mut items", before.static_mut_items, after.static_mut_items),
        _change_line("Unwrap calls", before.unwraps, after.unwraps),
    ]

    parts: List[str] = [
        '        <div class="diff-section">\n',
        "            <h2>Changes from Baseline</h2>\n",
        '            <div class="diff-change">\n',
        "                <strong>Summary Changes:</strong><br>\n",
        "                " + "<br>\n                ".join(summary_lines) + "\n",
        "            </div>\n",
    ]

    for filename, change in diff.changes.items():
        name = html.escape(filename)
        if isinstance(change, Added):
            stats = change.stats
            title = f"{name} [NEW FILE]"
            body = (
                f"Unsafe functions: {stats.unsafe_fns}, "
                f"Unsafe statements: {stats.unsafe_statements}, Unwraps: {stats.unwraps}"
            )
            css_class = "diff-added"
        elif isinstance(change, Removed):
            stats = change.stats
            title = f"{name} [REMOVED]"
            body = (
                f"Had {stats.unsafe_fns} unsafe functions, "
                f"{stats.unsafe_statements} unsafe statements, {stats.unwraps} unwraps"
            )
            css_class = "diff-removed"
        else:
            title = f"{name} [MODIFIED]"
            body = "<br>\n                ".join(
                [
                    _change_line("Unsafe functions", change.before.unsafe_fns, change.after.unsafe_fns),
                    _change_line(
                        "Unsafe statements",
                        change.before.unsafe_statements,
                        change.after.unsafe_statements,
                    ),
                    _change_line("Unwraps", change.before.unwraps, change.after.unwraps),
                ]
            )
            css_class = "diff-modified"

        parts.append(
            f'            <div class="diff-change {css_class}">\n'
            f"                <strong>{title}</strong><br>\n"
            f"                {body}\n"
            "            </div>\n"
        )

    parts.append("        </div>\n")
    return "".join(parts)


def format_html_report(report: Report, diff: Optional[DiffReport] = None) -> str:
    """Render the report (and diff, if any) as a complete HTML document."""
    out = _HEAD + _summary(report) + _file_table(report)
    if diff is not None:
        out += format_html_diff(diff)
    return out + _SCRIPT
