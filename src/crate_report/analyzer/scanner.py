"""File scanner for finding Rust sources in a crate."""

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List

# Build output is never analyzed.
DEFAULT_EXCLUDES = ("target",)


def has_cargo_manifest(crate_root: Path) -> bool:
    """Check that crate_root looks like a crate (has a Cargo.toml)."""
    return (crate_root / "Cargo.toml").is_file()


def _is_excluded(relative: Path, patterns: Iterable[str]) -> bool:
    relative_str = relative.as_posix()
    for pattern in patterns:
        if any(fnmatch(part, pattern) for part in relative.parts):
            return True
        if fnmatch(relative_str, pattern):
            return True
    return False


def find_rust_files(crate_root: Path, exclude: Iterable[str] = ()) -> List[Path]:
    """Find all ``.rs`` files under a crate root.

    Args:
        crate_root: Directory to scan
        exclude: Extra directory names or glob patterns to skip

    Returns:
        Sorted list of file paths
    """
    if not crate_root or not crate_root.exists():
        return []

    patterns = list(DEFAULT_EXCLUDES) + list(exclude)
    files = []
    for rs_file in crate_root.rglob("*.rs"):
        if not rs_file.is_file():
            continue
        if _is_excluded(rs_file.relative_to(crate_root), patterns):
            continue
        files.append(rs_file)

    return sorted(files)


def relative_name(path: Path, crate_root: Path) -> str:
    """Report key for a file: its path relative to the crate root."""
    try:
        return path.relative_to(crate_root).as_posix()
    except ValueError:
        return path.as_posix()
