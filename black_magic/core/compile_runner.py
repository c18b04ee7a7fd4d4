"""Containerized cross-compilation."""

import logging
import shlex
from typing import List

from ..models.build import BuilderImage, BuildMode, CommandResult, ProjectContext, VolumeMount
from ..models.config import BuildConfig
from ..services.docker_service import DockerService
from ..services.exceptions import DockerServiceError
from .artifact_packager import ArtifactPackager
from .constants import CONTAINER_SHELL
from .volume_mounter import VolumeMounter

logger = logging.getLogger(__name__)


class CompileRunner:
    """Runs the release build and the packaging step in one builder container."""

    def __init__(self, docker_service: DockerService, config: BuildConfig, packager: ArtifactPackager):
        """Initialize compile runner."""
        self.docker_service = docker_service
        self.config = config
        self.packager = packager

    def cargo_command(self) -> str:
        """Release build that drops the executable at the container root."""
        return (
            f"cargo build --release -vv --target={self.config.target_triple} "
            "-Z unstable-options --out-dir=/"
        )

    def shell_command(self, mode: BuildMode, context: ProjectContext) -> str:
        return f"{self.cargo_command()} && {self.packager.packaging_step(mode, context)}"

    def reproduce_command(self, image: str, mounts: List[VolumeMount], shell_command: str) -> str:
        """Equivalent `docker run` line for running the build by hand."""
        docker_cmd = ['docker', 'run', '-i', '--rm']
        for mount in mounts:
            docker_cmd.extend(['-v', mount.as_volume_arg()])
        docker_cmd.extend(['-w', self.config.container_workdir, image])
        docker_cmd.extend(CONTAINER_SHELL)
        docker_cmd.append(shell_command)
        return shlex.join(docker_cmd)

    def run(self, mode: BuildMode, mounts: List[VolumeMount], builder_image: BuilderImage,
            context: ProjectContext) -> CommandResult:
        """Compile and package inside the builder image.

        Waits for the container without a timeout. Failures are returned in
        the result rather than raised.
        """
        shell_command = self.shell_command(mode, context)
        command = self.reproduce_command(builder_image.name, mounts, shell_command)
        logger.debug(f"Running: {command}")

        volumes = VolumeMounter.to_volumes(mounts)
        try:
            container = self.docker_service.run_container(
                image=builder_image.name,
                command=CONTAINER_SHELL + [shell_command],
                volumes=volumes,
                working_dir=self.config.container_workdir,
            )
            exit_code, stdout, stderr = self.docker_service.wait_for_container(container)
        except DockerServiceError as e:
            return CommandResult(stdout="", stderr=str(e), success=False, command=command)

        logger.debug(f"Build container exited with {exit_code}")
        return CommandResult(stdout=stdout, stderr=stderr, success=exit_code == 0, command=command)
