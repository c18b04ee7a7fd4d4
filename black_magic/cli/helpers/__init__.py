"""CLI helper functions for Black Magic."""

import logging
from pathlib import Path
from typing import Optional

from black_magic.models.config import BuildConfig
from black_magic.utils.config_manager import ConfigManager

from .output_reporter import OutputReporter

__all__ = ['OutputReporter', 'configure_logging', 'get_project_root', 'load_build_config']


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def get_project_root() -> Path:
    """The project is always the current working directory."""
    return Path.cwd()


def load_build_config(project_root: Path, toolchain_tag: Optional[str] = None) -> BuildConfig:
    """Load the project's build config with command line overrides applied.

    Raises:
        ConfigurationError: If the config file is unreadable or invalid
    """
    return ConfigManager(project_root).get_build_config({'toolchain_tag': toolchain_tag})
