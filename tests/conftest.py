"""Pytest configuration and shared fixtures."""

import textwrap

import pytest
from click.testing import CliRunner

from crate_report.cli import cli
from crate_report.context import CONFIG_ENV


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Keep a developer's .crate-report.toml or env override out of tests."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["report", str(crate)])
        result = invoke(["report", str(crate), "--format", "csv"])
    """

    def _invoke(args):
        return cli_runner.invoke(cli, args)

    return _invoke


@pytest.fixture
def make_crate(tmp_path):
    """Create a crate directory with a Cargo.toml and the given sources.

    Usage:
        crate = make_crate({"src/lib.rs": "fn main() {}"})
    """

    def _make(files, name="demo"):
        root = tmp_path / name
        root.mkdir()
        (root / "Cargo.toml").write_text(
            f'[package]\nname = "{name}"\nversion = "0.1.0"\n'
        )
        for relative, source in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source))
        return root

    return _make
