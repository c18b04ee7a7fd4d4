"""Custom exceptions for Black Magic."""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of fatal errors, each mapped to its own exit status."""
    CONFIGURATION = 2
    ENVIRONMENT = 3
    BUILDER_SETUP = 4
    COMPILE = 5
    PACKAGING = 6


class BlackMagicError(Exception):
    """Base exception for all errors reported to the user."""

    kind = None

    @property
    def exit_code(self) -> int:
        """Process exit status for this error."""
        return self.kind.value if self.kind else 1


class BuildEnvironmentError(BlackMagicError):
    """Docker is unavailable or the working directory is not a project."""

    kind = ErrorKind.ENVIRONMENT


class RuntimeUnavailableError(BuildEnvironmentError):
    """Exception raised when Docker is not installed or not reachable."""

    pass


class NotAProjectError(BuildEnvironmentError):
    """Exception raised when no Cargo.toml is found in the working directory."""

    pass


class BuildLockedError(BuildEnvironmentError):
    """Exception raised when another build holds the project's lock."""

    pass


class ConfigurationError(BlackMagicError):
    """Exception raised for missing or conflicting build options."""

    kind = ErrorKind.CONFIGURATION


class BuilderSetupError(BlackMagicError):
    """Exception raised when the builder image cannot be built."""

    kind = ErrorKind.BUILDER_SETUP

    def __init__(self, message: str, build_log: str = ""):
        super().__init__(message)
        self.build_log = build_log


class CompileError(BlackMagicError):
    """Exception raised when the containerized build fails."""

    kind = ErrorKind.COMPILE

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class PackagingError(BlackMagicError):
    """Exception raised when the project image fails to build."""

    kind = ErrorKind.PACKAGING

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class DockerServiceError(Exception):
    """Exception raised for Docker service operations."""

    pass


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ImageBuildError(DockerServiceError):
    """Exception raised when an image build fails."""

    def __init__(self, message: str, build_log: str = ""):
        super().__init__(message)
        self.build_log = build_log
