"""crate-report context for passing configuration between commands."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from .models.config import ReportConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".crate-report.toml"
CONFIG_ENV = "CRATE_REPORT_CONFIG"


def _find_config(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from start_dir looking for .crate-report.toml.

    Args:
        start_dir: Directory to start searching from (default: CWD)

    Returns:
        Path to the first config file found, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config = current / CONFIG_FILENAME
        if config.is_file():
            return config

        # Stop at root directory
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def resolve_config_path(config_option: Optional[str]) -> Optional[Path]:
    """Locate the configuration file.

    Resolution order:
    1. --config CLI flag (explicit override)
    2. $CRATE_REPORT_CONFIG environment variable
    3. Walk up from CWD looking for .crate-report.toml

    Args:
        config_option: Value of --config CLI option if provided

    Returns:
        Path to the config file, or None to use defaults
    """
    if config_option:
        return Path(config_option)

    env_config = os.environ.get(CONFIG_ENV)
    if env_config:
        return Path(env_config)

    return _find_config()


def load_config(config_path: Optional[Path]) -> ReportConfig:
    """Load configuration, falling back to defaults if it is unusable.

    Example .crate-report.toml:
    ```toml
    exclude = ["vendor", "benches/*"]
    jobs = 4
    format = "markdown"
    color = true
    ```
    """
    if config_path is None:
        return ReportConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        return ReportConfig.model_validate({**data, "config_path": config_path})
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        # Don't fail the run if config is invalid
        logger.warning("Ignoring %s: %s", config_path, e)
        return ReportConfig()


class ReportContext:
    def __init__(self):
        self.config = ReportConfig()


pass_context = click.make_pass_decorator(ReportContext, ensure=True)
