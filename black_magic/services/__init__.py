"""Service layer for abstracting Docker operations and error kinds."""

from .docker_service import DockerService
from .exceptions import (
    BlackMagicError,
    BuildEnvironmentError,
    BuilderSetupError,
    BuildLockedError,
    CompileError,
    ConfigurationError,
    DockerServiceError,
    ErrorKind,
    ImageBuildError,
    ImageNotFoundError,
    NotAProjectError,
    PackagingError,
    RuntimeUnavailableError,
)

__all__ = [
    "DockerService",
    "BlackMagicError",
    "BuildEnvironmentError",
    "BuilderSetupError",
    "BuildLockedError",
    "CompileError",
    "ConfigurationError",
    "DockerServiceError",
    "ErrorKind",
    "ImageBuildError",
    "ImageNotFoundError",
    "NotAProjectError",
    "PackagingError",
    "RuntimeUnavailableError",
]
