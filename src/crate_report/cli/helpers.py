"""Shared helpers for crate-report commands."""

import sys
from pathlib import Path
from typing import Optional

import click

from ..analyzer.scanner import has_cargo_manifest


def require_crate_root(crate_root: Path) -> None:
    """Exit with help text unless crate_root contains a Cargo.toml."""
    if has_cargo_manifest(crate_root):
        return

    try:
        expanded = crate_root.resolve(strict=True)
    except OSError:
        expanded = crate_root

    click.echo(f"Error: No Cargo.toml found in '{expanded}'", err=True)
    click.echo("Please specify a valid Rust crate directory.", err=True)
    click.echo("", err=True)
    click.echo(click.get_current_context().get_help(), err=True)
    sys.exit(1)


def emit(text: str, output: Optional[Path], color: Optional[bool] = None) -> None:
    """Write text to the output file, or to stdout."""
    if output is not None:
        output.write_text(text, encoding="utf-8")
    else:
        click.echo(text, nl=False, color=color)
