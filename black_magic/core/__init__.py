"""Core functionality for Black Magic."""

from .artifact_packager import ArtifactPackager
from .compile_runner import CompileRunner
from .image_builder import BuilderImageManager
from .pipeline import BuildPipeline
from .volume_mounter import VolumeMounter

__all__ = [
    'ArtifactPackager',
    'BuilderImageManager',
    'BuildPipeline',
    'CompileRunner',
    'VolumeMounter'
]
