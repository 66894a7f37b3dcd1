"""Data model for crate reports, diffs and candidates."""

from .baseline import (
    CSV_HEADERS,
    BaselineError,
    load_baseline,
    parse_baseline,
    stats_to_row,
)
from .candidate import Candidate, FileStats
from .config import OUTPUT_FORMATS, ReportConfig
from .diff import Added, Changed, Diff, DiffReport, Removed, diff_reports
from .stats import SAFETY_FIELDS, CodeStats, Report, build_report, sum_stats

__all__ = [
    "Added",
    "BaselineError",
    "CSV_HEADERS",
    "Candidate",
    "Changed",
    "CodeStats",
    "Diff",
    "DiffReport",
    "FileStats",
    "OUTPUT_FORMATS",
    "Removed",
    "Report",
    "ReportConfig",
    "SAFETY_FIELDS",
    "build_report",
    "diff_reports",
    "load_baseline",
    "parse_baseline",
    "stats_to_row",
    "sum_stats",
]
