"""CSV writer for reports (the baseline format)."""

import csv
from typing import TextIO

from ..models.baseline import CSV_HEADERS, stats_to_row
from ..models.stats import Report


def write_csv_report(report: Report, output: TextIO) -> None:
    """Write one row per file, header first.

    Notes:
        - Column order follows CSV_HEADERS
        - Files keep the report's lexicographic order so baselines diff cleanly
    """
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for filename, stats in report.files.items():
        writer.writerow(stats_to_row(filename, stats))
