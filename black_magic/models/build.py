"""Build pipeline data models."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from ..services.exceptions import ConfigurationError


MANIFEST_NAME = "Cargo.toml"


class BuildMode(Enum):
    """Artifact shape produced by a build."""
    LAMBDA = "lambda"
    DOCKER = "docker"

    @classmethod
    def from_flags(cls, lambda_: bool, docker: bool) -> 'BuildMode':
        """Resolve the mode from the two command line flags.

        Raises:
            ConfigurationError: If neither or both flags are set
        """
        if lambda_ and docker:
            raise ConfigurationError(
                "You can't specify both at once, please build one then the other."
            )
        if not lambda_ and not docker:
            raise ConfigurationError("You need to specify what to build. See `--help`.")
        return cls.LAMBDA if lambda_ else cls.DOCKER


class BuildState(Enum):
    """Pipeline progress."""
    IDLE = "idle"
    ENVIRONMENT_CHECKED = "environment_checked"
    BUILDER_IMAGE_READY = "builder_image_ready"
    COMPILED = "compiled"
    PACKAGED = "packaged"
    FAILED = "failed"


@dataclass(frozen=True)
class ProjectContext:
    """The Cargo project being built."""
    root: Path
    name: str
    manifest_path: Path
    output_subdir: str = "target/black_magic"

    @classmethod
    def from_directory(cls, root: Path, output_subdir: str = "target/black_magic") -> 'ProjectContext':
        """Create a context for ``root`` without checking the manifest."""
        return cls(
            root=root,
            name=root.name,
            manifest_path=root / MANIFEST_NAME,
            output_subdir=output_subdir,
        )

    @property
    def output_dir(self) -> Path:
        """Directory receiving generated artifacts and scratch files."""
        return self.root.joinpath(*self.output_subdir.split('/'))

    @property
    def builder_dir(self) -> Path:
        """Scratch directory holding the builder image Dockerfile."""
        return self.output_dir / "bm_dockerfile"


@dataclass(frozen=True)
class VolumeMount:
    """A host path bound into the builder container."""
    host_path: str
    container_path: str

    @classmethod
    def from_path(cls, host_path: Path, container_path: str) -> 'VolumeMount':
        """Create a mount with the host path in Docker's slash form."""
        return cls(host_path=str(host_path).replace('\\', '/'), container_path=container_path)

    def as_volume_arg(self) -> str:
        """Render as a ``docker run -v`` argument."""
        return f"{self.host_path}:{self.container_path}"


def dedupe_mounts(mounts: Iterable[VolumeMount]) -> List[VolumeMount]:
    """Drop mounts whose container path is already bound, keeping the first."""
    seen = set()
    result = []
    for mount in mounts:
        if mount.container_path in seen:
            continue
        seen.add(mount.container_path)
        result.append(mount)
    return result


@dataclass
class BuilderImage:
    """The reusable toolchain image."""
    name: str
    exists: bool
    dockerfile: str


@dataclass
class CommandResult:
    """Outcome of one external invocation."""
    stdout: str
    stderr: str
    success: bool
    command: str = ""


@dataclass
class Artifact:
    """Final output of a successful build."""
    mode: BuildMode
    path: Optional[Path] = None
    image_tag: Optional[str] = None

    def describe(self) -> str:
        """Short human readable form."""
        if self.mode is BuildMode.LAMBDA:
            return f"Lambda archive: {self.path}"
        return f"Project image: {self.image_tag}"
