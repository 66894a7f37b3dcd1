"""Tests for config discovery and loading."""

import pytest
from pydantic import ValidationError

from crate_report.context import (
    CONFIG_ENV,
    CONFIG_FILENAME,
    load_config,
    resolve_config_path,
)
from crate_report.models import ReportConfig


def test_defaults():
    config = ReportConfig()

    assert config.exclude == ()
    assert config.jobs == 1
    assert config.format == "markdown"
    assert config.color is True


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        ReportConfig(jobs=0)
    with pytest.raises(ValidationError):
        ReportConfig(format="xml")
    with pytest.raises(ValidationError):
        ReportConfig(exclude=["  "])
    with pytest.raises(ValidationError):
        ReportConfig(unknown=True)


def test_load_config(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text('exclude = ["vendor", "benches/*"]\njobs = 4\nformat = "csv"\ncolor = false\n')

    config = load_config(path)

    assert config.exclude == ("vendor", "benches/*")
    assert config.jobs == 4
    assert config.format == "csv"
    assert config.color is False
    assert config.config_path == path


@pytest.mark.parametrize(
    "content",
    ["jobs = [", "jobs = 0", 'format = "yaml"', "colour = true"],
)
def test_bad_config_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(content)

    assert load_config(path) == ReportConfig()


def test_missing_config_falls_back_to_defaults(tmp_path):
    assert load_config(tmp_path / "nope.toml") == ReportConfig()
    assert load_config(None) == ReportConfig()


def test_resolution_order(tmp_path, monkeypatch):
    project = tmp_path / "project"
    nested = project / "src" / "deep"
    nested.mkdir(parents=True)
    found = project / CONFIG_FILENAME
    found.write_text("jobs = 2\n")
    monkeypatch.chdir(nested)

    assert resolve_config_path(None) == found.resolve()

    monkeypatch.setenv(CONFIG_ENV, "/env/config.toml")
    assert str(resolve_config_path(None)) == "/env/config.toml"

    assert str(resolve_config_path("cli.toml")) == "cli.toml"
