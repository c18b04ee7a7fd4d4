"""Packaging of compiled binaries into deployable artifacts."""

import logging
import shlex

from ..models.build import Artifact, BuildMode, CommandResult, ProjectContext
from ..models.config import BuildConfig
from ..services.docker_service import DockerService, format_build_log
from ..services.exceptions import DockerServiceError, ImageBuildError, PackagingError
from .constants import DOCKERFILE_NAME, DOCKERIGNORE_NAME
from .dockerfile_template import generate_project_dockerfile, generate_project_dockerignore

logger = logging.getLogger(__name__)


class ArtifactPackager:
    """Produces a Lambda zip or a scratch Docker image from the compiled binary.

    The in-container half of packaging is a shell step chained after the
    compile command, so it sees the binary the compiler just wrote. Docker
    mode also has a host-side half that builds the project image.
    """

    def __init__(self, docker_service: DockerService, config: BuildConfig):
        self.docker_service = docker_service
        self.config = config

    def image_tag(self, context: ProjectContext) -> str:
        return f"{self.config.image_prefix}{context.name}".lower()

    def archive_path(self, mode: BuildMode, context: ProjectContext):
        """Host path of the archive written inside the container."""
        suffix = ".zip" if mode is BuildMode.LAMBDA else ".tar.gz"
        return context.output_dir / f"{context.name}{suffix}"

    def packaging_step(self, mode: BuildMode, context: ProjectContext) -> str:
        """Shell command run in the builder container after compilation."""
        binary = shlex.quote(f"/{context.name}")
        out_dir = self.config.output_subdir
        if mode is BuildMode.LAMBDA:
            entrypoint = shlex.quote(f"/{self.config.lambda_entrypoint}")
            archive = shlex.quote(f"{out_dir}/{context.name}.zip")
            return f"mv {binary} {entrypoint} && zip -j {archive} {entrypoint}"
        archive = shlex.quote(f"{out_dir}/{context.name}.tar.gz")
        return f"tar -czf {archive} {binary}"

    def package(self, mode: BuildMode, context: ProjectContext, on_image_build=None) -> Artifact:
        """Finish packaging after a successful compile.

        Raises:
            PackagingError: If the project Dockerfile cannot be written or the image fails to build
        """
        if mode is BuildMode.LAMBDA:
            return Artifact(mode=mode, path=self.archive_path(mode, context))

        tag = self.image_tag(context)
        command = f"docker build --no-cache -t {tag} {shlex.quote(str(context.output_dir))}"
        dockerfile_path = context.output_dir / DOCKERFILE_NAME
        try:
            dockerfile_path.write_text(generate_project_dockerfile(context.name))
            (context.output_dir / DOCKERIGNORE_NAME).write_text(generate_project_dockerignore(context.name))
        except OSError as e:
            result = CommandResult(stdout="", stderr=str(e), success=False, command=command)
            raise PackagingError(f"Unable to write project Dockerfile to {context.output_dir}", result=result) from e
        logger.debug(f"Wrote project Dockerfile {dockerfile_path}")

        if on_image_build:
            on_image_build(tag)
        try:
            _, build_log = self.docker_service.build_image(
                path=str(context.output_dir),
                tag=tag,
                dockerfile=DOCKERFILE_NAME,
                nocache=True,
            )
        except ImageBuildError as e:
            result = CommandResult(stdout=e.build_log, stderr=str(e), success=False, command=command)
            raise PackagingError("Project image failed", result=result) from e
        except DockerServiceError as e:
            result = CommandResult(stdout="", stderr=str(e), success=False, command=command)
            raise PackagingError("Project image failed", result=result) from e

        logger.debug(format_build_log(build_log))
        return Artifact(mode=mode, image_tag=tag)
