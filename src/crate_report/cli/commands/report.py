"""Report command - safety metrics for a crate, optionally diffed."""

import io
from pathlib import Path
from typing import Optional

import click

from ...analyzer import generate_report
from ...context import pass_context
from ...models.baseline import BaselineError, load_baseline
from ...models.config import OUTPUT_FORMATS
from ...models.diff import DiffReport, diff_reports
from ...models.stats import Report
from ...render import (
    RenderConfig,
    format_html_report,
    format_markdown_report,
    format_pr_comment,
    write_csv_report,
)
from ..helpers import emit, require_crate_root


def _load_diff(
    current: Report, baseline: Optional[Path], strict: bool
) -> Optional[DiffReport]:
    """Diff against the baseline file, if one was given and is usable."""
    if baseline is None:
        return None

    try:
        old_report = load_baseline(baseline, strict=strict)
    except BaselineError as e:
        raise click.ClickException(str(e)) from e

    if old_report is None:
        return None
    return diff_reports(current, old_report)


@click.command()
@click.argument(
    "crate_root", default=".", type=click.Path(file_okay=False, path_type=Path)
)
@click.option("--baseline", type=click.Path(dir_okay=False, path_type=Path),
              help="Baseline CSV file to compare against")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Output file path (defaults to stdout)")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (default: markdown)")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None,
              help="Files to analyze in parallel")
@click.option("--color/--no-color", default=None,
              help="Force colour on or off (default: auto)")
@pass_context
def report(ctx, crate_root, baseline, output, output_format, jobs, color):
    """Analyze unsafe code usage in a Rust crate.

    CRATE_ROOT is the directory holding Cargo.toml (default: current directory).

    Examples:
        crate-report report                           # Markdown report for .
        crate-report report --format csv -o base.csv  # Save a baseline
        crate-report report --baseline base.csv       # Report plus diff
        crate-report report --format pr-comment --baseline base.csv
    """
    config = ctx.config
    output_format = output_format or config.format
    jobs = jobs or config.jobs

    require_crate_root(crate_root)

    current = generate_report(crate_root, exclude=config.exclude, jobs=jobs)

    if output_format == "csv":
        buffer = io.StringIO()
        write_csv_report(current, buffer)
        emit(buffer.getvalue(), output)
        return

    if output_format == "html":
        diff = _load_diff(current, baseline, strict=False)
        emit(format_html_report(current, diff), output)
    elif output_format == "pr-comment":
        diff = _load_diff(current, baseline, strict=False)
        emit(format_pr_comment(diff), output)
    else:  # markdown
        diff = _load_diff(current, baseline, strict=True)
        use_color = output is None and (config.color if color is None else color)
        text = format_markdown_report(current, diff, RenderConfig(color=use_color))
        emit(text, output, color=color)
