"""Configuration management utilities."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..models.config import BuildConfig
from ..services.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "black_magic.json"


class ConfigManager:
    """Loads build configuration for a project."""

    def __init__(self, project_root: Path):
        """Initialize config manager."""
        self.project_root = project_root
        self.config_file = project_root / CONFIG_FILE_NAME

    def load_file(self) -> Dict[str, Any]:
        """Read the project's config file, or an empty dict if there is none."""
        if not self.config_file.exists():
            return {}
        try:
            data = json.loads(self.config_file.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Unable to read {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_file} must contain a JSON object")
        return data

    def get_build_config(self, overrides: Optional[Dict[str, Any]] = None) -> BuildConfig:
        """Merge defaults, the config file and command line overrides."""
        data = self.load_file()
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})
        try:
            config = BuildConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid build configuration: {e}") from e
        logger.debug(f"Build configuration: {config.model_dump()}")
        return config

