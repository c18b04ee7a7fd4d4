"""Build orchestration: environment checks, builder image, compile and package."""

import logging
from pathlib import Path
from typing import Optional

from ..environment import EnvironmentProbe
from ..models.build import Artifact, BuildMode, BuildState
from ..models.config import BuildConfig
from ..services.docker_service import DockerService
from ..services.exceptions import (
    BlackMagicError,
    CompileError,
    ConfigurationError,
    DockerServiceError,
    RuntimeUnavailableError,
)
from ..utils.file_lock import build_lock
from .artifact_packager import ArtifactPackager
from .compile_runner import CompileRunner
from .constants import LOCK_FILE_NAME
from .image_builder import BuilderImageManager
from .volume_mounter import VolumeMounter

logger = logging.getLogger(__name__)


class BuildPipeline:
    """Runs one build of the project at ``project_root``.

    State moves Idle -> EnvironmentChecked -> BuilderImageReady -> Compiled
    -> Packaged, or to Failed from any stage. Nothing created before a
    failure is cleaned up.
    """

    def __init__(
        self,
        project_root: Path,
        config: Optional[BuildConfig] = None,
        reporter=None,
        docker_service_factory=DockerService,
        cache_root: Optional[Path] = None,
    ):
        self.project_root = project_root
        self.config = config or BuildConfig()
        self.reporter = reporter
        self.docker_service_factory = docker_service_factory
        self.cache_root = cache_root
        self.state = BuildState.IDLE

    def run(self, mode: BuildMode, force_rebuild: bool = False) -> Artifact:
        """Build and package the project.

        Raises:
            BlackMagicError: Subclass matching the failed stage
        """
        if not isinstance(mode, BuildMode):
            raise ConfigurationError("You need to specify exactly one of --lambda or --docker.")
        try:
            return self._run(mode, force_rebuild)
        except BlackMagicError:
            self._transition(BuildState.FAILED)
            raise

    def _run(self, mode: BuildMode, force_rebuild: bool) -> Artifact:
        probe = EnvironmentProbe(self.project_root, self.config.output_subdir)
        probe.require_runtime()
        context = probe.resolve_project_context()
        docker_service = self._connect()
        self._transition(BuildState.ENVIRONMENT_CHECKED)

        with build_lock(context.output_dir / LOCK_FILE_NAME):
            manager = BuilderImageManager(docker_service, context, self.config)
            builder_image = manager.ensure_builder_image(
                force_rebuild=force_rebuild,
                on_build=self._notify('builder_image_building'),
            )
            self._transition(BuildState.BUILDER_IMAGE_READY)

            mounts = VolumeMounter(self.config.container_workdir).compute_mounts(context, self.cache_root)
            packager = ArtifactPackager(docker_service, self.config)
            runner = CompileRunner(docker_service, self.config, packager)

            self._notify('compiling')(mode)
            result = runner.run(mode, mounts, builder_image, context)
            if not result.success:
                raise CompileError("Build failed.", result=result)
            self._transition(BuildState.COMPILED)

            artifact = packager.package(
                mode, context, on_image_build=self._notify('project_image_building')
            )
            self._transition(BuildState.PACKAGED)
            return artifact

    def _connect(self) -> DockerService:
        try:
            return self.docker_service_factory()
        except DockerServiceError as e:
            raise RuntimeUnavailableError(str(e)) from e

    def _notify(self, event: str):
        handler = getattr(self.reporter, event, None)
        return handler or (lambda *args: None)

    def _transition(self, state: BuildState):
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state
