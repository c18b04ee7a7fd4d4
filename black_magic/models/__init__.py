"""Models for Black Magic."""

from .build import (
    Artifact,
    BuilderImage,
    BuildMode,
    BuildState,
    CommandResult,
    ProjectContext,
    VolumeMount,
)
from .config import BuildConfig

__all__ = [
    'Artifact',
    'BuilderImage',
    'BuildConfig',
    'BuildMode',
    'BuildState',
    'CommandResult',
    'ProjectContext',
    'VolumeMount'
]
