"""Utilities for Black Magic."""

from .file_lock import build_lock
from .config_manager import ConfigManager
from .path_finder import PathFinder

__all__ = [
    'build_lock',
    'ConfigManager',
    'PathFinder'
]
