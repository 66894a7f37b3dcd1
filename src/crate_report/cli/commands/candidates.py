"""Candidate commands - list functions the heuristics flag."""

from pathlib import Path

import click

from ...analyzer import find_candidates
from ...context import pass_context
from ...render import format_candidates
from ..helpers import emit, require_crate_root


def _run(ctx, crate_root: Path, kind: str, jobs) -> None:
    config = ctx.config
    require_crate_root(crate_root)

    file_stats = find_candidates(
        crate_root, kind, exclude=config.exclude, jobs=jobs or config.jobs
    )
    emit(format_candidates(file_stats, kind), None)


@click.command("safe-candidates")
@click.argument(
    "crate_root", default=".", type=click.Path(file_okay=False, path_type=Path)
)
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None,
              help="Files to analyze in parallel")
@pass_context
def safe_candidates(ctx, crate_root, jobs):
    """List unsafe functions that take no raw pointers.

    Such functions may not need to be unsafe. The check is syntactic only,
    so review each candidate before converting it.
    """
    _run(ctx, crate_root, "safe", jobs)


@click.command("bool-candidates")
@click.argument(
    "crate_root", default=".", type=click.Path(file_okay=False, path_type=Path)
)
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None,
              help="Files to analyze in parallel")
@pass_context
def bool_candidates(ctx, crate_root, jobs):
    """List i32 functions that only ever return 0 or 1."""
    _run(ctx, crate_root, "bool", jobs)
