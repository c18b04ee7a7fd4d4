"""Utilities for finding paths."""

import os
from pathlib import Path
from typing import Optional


class PathFinder:
    """Utility class for finding host paths."""

    @staticmethod
    def cargo_home() -> Path:
        """Locate the Cargo home holding the dependency caches."""
        env_home = os.environ.get('CARGO_HOME')
        if env_home:
            path = Path(env_home)
            if not path.is_absolute():
                path = Path.cwd() / path
            return path
        return Path.home() / '.cargo'

    @staticmethod
    def existing_dir(path: Path) -> Optional[Path]:
        """Return ``path`` if it is a directory on the host."""
        return path if path.is_dir() else None
