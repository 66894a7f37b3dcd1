"""Renderers for reports, diffs and candidate listings."""

from .candidates import format_candidates
from .csv_report import write_csv_report
from .html_report import format_html_report
from .pr_comment import format_pr_comment
from .style import PLAIN, RenderConfig, Severity
from .text import format_diff, format_markdown_report

__all__ = [
    "PLAIN",
    "RenderConfig",
    "Severity",
    "format_candidates",
    "format_diff",
    "format_html_report",
    "format_markdown_report",
    "format_pr_comment",
    "write_csv_report",
]
