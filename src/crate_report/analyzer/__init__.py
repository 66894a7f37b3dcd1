"""Crate analyzer - tree-sitter based safety metrics for Rust sources."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from tree_sitter import Tree

from ..models.candidate import FileStats
from ..models.stats import CodeStats, Report, build_report
from .candidates import DETECTORS, Detector, find_file_candidates
from .metrics import collect
from .scanner import find_rust_files, relative_name
from .syntax import parse_rust

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_file(path: Path) -> Optional[tuple[str, Tree]]:
    """Read and parse a file; None when either step fails."""
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    tree = parse_rust(source)
    if tree is None:
        logger.debug("Skipping %s: syntax error", path)
        return None
    return source, tree


def analyze_file(path: Path) -> Optional[CodeStats]:
    """Collect metrics for a single file.

    Args:
        path: Rust source file

    Returns:
        CodeStats, or None if the file cannot be read or parsed
    """
    parsed = _parse_file(path)
    if parsed is None:
        return None
    source, tree = parsed

    try:
        return collect(tree, source)
    except RecursionError:
        logger.warning("Skipping %s: syntax tree too deep", path)
        return None


def analyze_file_candidates(path: Path, detector: Detector) -> Optional[FileStats]:
    """Run one detector over a single file.

    Args:
        path: Rust source file
        detector: detect_safe_candidate or detect_bool_candidate

    Returns:
        FileStats (possibly without candidates), or None if unparseable
    """
    parsed = _parse_file(path)
    if parsed is None:
        return None
    _, tree = parsed

    try:
        candidates = find_file_candidates(tree, detector)
    except RecursionError:
        logger.warning("Skipping %s: syntax tree too deep", path)
        return None
    return FileStats(filename=str(path), candidates=candidates)


def _map_files(
    func: Callable[[Path], T], paths: Sequence[Path], jobs: int
) -> List[T]:
    """Apply func to every path, on a thread pool when jobs > 1.

    Results come back in input order; each task owns its own result.
    """
    if jobs <= 1 or len(paths) < 2:
        return [func(path) for path in paths]

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        return list(executor.map(func, paths))


def generate_report(
    crate_root: Path, exclude: Iterable[str] = (), jobs: int = 1
) -> Report:
    """Analyze every Rust file under a crate root.

    Args:
        crate_root: Crate directory
        exclude: Extra directory names or glob patterns to skip
        jobs: Number of worker threads (1 = serial)

    Returns:
        Report keyed by path relative to crate_root
    """
    paths = find_rust_files(crate_root, exclude)
    logger.debug("Analyzing %d files under %s", len(paths), crate_root)

    results = _map_files(analyze_file, paths, jobs)
    return build_report(
        (relative_name(path, crate_root), stats)
        for path, stats in zip(paths, results)
        if stats is not None
    )


def find_candidates(
    crate_root: Path,
    kind: str,
    exclude: Iterable[str] = (),
    jobs: int = 1,
) -> List[FileStats]:
    """Find refactoring candidates under a crate root.

    Args:
        crate_root: Crate directory
        kind: 'safe' (unsafe -> safe) or 'bool' (i32 -> bool)
        exclude: Extra directory names or glob patterns to skip
        jobs: Number of worker threads (1 = serial)

    Returns:
        FileStats with at least one candidate, sorted by filename
    """
    try:
        detector = DETECTORS[kind]
    except KeyError:
        raise ValueError(f"Unknown candidate kind: {kind}") from None

    paths = find_rust_files(crate_root, exclude)
    results = _map_files(
        lambda path: analyze_file_candidates(path, detector), paths, jobs
    )

    file_stats = []
    for path, stats in zip(paths, results):
        if stats is None or not stats.candidates:
            continue
        stats.filename = relative_name(path, crate_root)
        file_stats.append(stats)

    return sorted(file_stats, key=lambda s: s.filename)


__all__ = [
    "analyze_file",
    "analyze_file_candidates",
    "find_candidates",
    "generate_report",
]
