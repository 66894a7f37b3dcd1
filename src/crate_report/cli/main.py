"""crate-report CLI main entry point with global options."""

import logging

import click

from .. import __version__
from ..context import ReportContext, load_config, resolve_config_path


@click.group()
@click.version_option(__version__, prog_name="crate-report")
@click.option(
    "--config", "config_option", type=click.Path(dir_okay=False),
    help="Config file (overrides $CRATE_REPORT_CONFIG and .crate-report.toml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log skipped files and other details")
@click.pass_context
def cli(ctx, config_option, verbose):
    """crate-report - measure unsafe code usage in Rust crates."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )
    ctx.ensure_object(ReportContext)
    ctx.obj.config = load_config(resolve_config_path(config_option))


# Register commands at module level so tests can import cli with commands attached
from .commands.candidates import bool_candidates, safe_candidates
from .commands.report import report

cli.add_command(report)
cli.add_command(safe_candidates)
cli.add_command(bool_candidates)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
