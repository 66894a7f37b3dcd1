"""Baseline CSV codec.

A baseline is a previously written ``--format csv`` report. It is read back
into a :class:`Report` so the current tree can be diffed against it.

Header validation is order independent but strict about the column set:
a baseline missing a column, carrying an extra one, or repeating one is not
a baseline. Rows whose cells do not parse are skipped and the rest kept.
"""

import csv
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .stats import CodeStats, Report, build_report

logger = logging.getLogger(__name__)

CSV_HEADERS = (
    "filename",
    "static_mut_items",
    "total_fns",
    "total_lines",
    "total_statements",
    "unsafe_fns",
    "unsafe_statements",
    "unwraps",
)

_COUNTER_FIELDS = CSV_HEADERS[1:]
_INTEGER = re.compile(r"[+-]?[0-9]+")


class BaselineError(ValueError):
    """Raised by strict baseline loading when the file cannot be used."""


def stats_to_row(filename: str, stats: CodeStats) -> List[str]:
    """Serialize one file's stats in CSV_HEADERS order."""
    return [filename] + [str(getattr(stats, name)) for name in _COUNTER_FIELDS]


def headers_match(header: Sequence[str]) -> bool:
    """Check a header row against the fixed column set, ignoring order."""
    return sorted(header) == sorted(CSV_HEADERS)


def _parse_counter(name: str, value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"{name}: {value!r} is not an integer")
    return int(value)


def _row_to_entry(
    row: Sequence[str], index: Dict[str, int]
) -> Tuple[str, CodeStats]:
    if len(row) != len(CSV_HEADERS):
        raise ValueError(f"expected {len(CSV_HEADERS)} cells, got {len(row)}")

    counters = {
        name: _parse_counter(name, row[index[name]]) for name in _COUNTER_FIELDS
    }
    return row[index["filename"]], CodeStats(**counters)


def parse_baseline(
    rows: Iterable[Sequence[str]], strict: bool = False
) -> Optional[Report]:
    """Rebuild a report from CSV rows.

    Args:
        rows: Header row followed by one row per file
        strict: Raise BaselineError instead of returning None / skipping rows

    Returns:
        Report, or None when the header does not match
    """
    rows = iter(rows)
    header = next(rows, None)
    if header is None or not headers_match(header):
        if strict:
            raise BaselineError(
                f"CSV headers do not match expected format: {list(CSV_HEADERS)}"
            )
        logger.warning("Ignoring baseline with unexpected headers: %s", header)
        return None

    index = {name: position for position, name in enumerate(header)}
    entries = []
    for line_number, row in enumerate(rows, start=2):
        if not row:
            continue
        try:
            entries.append(_row_to_entry(row, index))
        except ValueError as e:
            if strict:
                raise BaselineError(f"Invalid baseline row {line_number}: {e}") from e
            logger.warning("Skipping baseline row %d: %s", line_number, e)

    return build_report(entries)


def load_baseline(path: Path, strict: bool = False) -> Optional[Report]:
    """Read a baseline CSV file.

    Args:
        path: CSV file written by ``crate-report report --format csv``
        strict: Raise BaselineError for unreadable or malformed baselines

    Returns:
        Report, or None if the baseline is unusable in lenient mode
    """
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return parse_baseline(csv.reader(f), strict=strict)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        if strict:
            raise BaselineError(f"Failed to read baseline {path}: {e}") from e
        logger.warning("Failed to read baseline %s: %s", path, e)
        return None
