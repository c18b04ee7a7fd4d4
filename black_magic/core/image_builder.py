"""Builder image management."""

import logging
from typing import Optional

from ..models.build import BuilderImage, ProjectContext
from ..models.config import DEFAULT_TOOLCHAIN_TAG, BuildConfig
from ..services.docker_service import DockerService
from ..services.exceptions import (
    BuilderSetupError,
    DockerServiceError,
    ImageBuildError,
    ImageNotFoundError,
)
from .constants import DOCKERFILE_NAME
from .dockerfile_template import generate_builder_dockerfile

logger = logging.getLogger(__name__)


class BuilderImageManager:
    """Makes sure the toolchain image exists, building it on first use."""

    def __init__(self, docker_service: DockerService, context: ProjectContext, config: BuildConfig):
        """Initialize image manager."""
        self.docker_service = docker_service
        self.context = context
        self.config = config

    def ensure_builder_image(self, name: Optional[str] = None, force_rebuild: bool = False,
                             on_build=None) -> BuilderImage:
        """Return the builder image, building it if it is missing.

        Args:
            name: Image name, defaults to the configured builder image name
            force_rebuild: Remove and rebuild an existing image
            on_build: Called with the image name before a build starts

        Raises:
            BuilderSetupError: If the image cannot be built
        """
        name = name or self.config.builder_image_name
        dockerfile = generate_builder_dockerfile(self.config)

        try:
            exists = self.docker_service.image_exists(name)
        except DockerServiceError as e:
            raise BuilderSetupError(str(e)) from e

        if exists and not force_rebuild:
            logger.debug(f"Reusing builder image {name}")
            if self.config.toolchain_tag != DEFAULT_TOOLCHAIN_TAG:
                logger.warning(
                    f"Builder image {name} already exists, toolchain tag {self.config.toolchain_tag} "
                    f"only takes effect with --rebuild-builder"
                )
            return BuilderImage(name=name, exists=True, dockerfile=dockerfile)

        if exists:
            try:
                self.docker_service.remove_image(name)
            except ImageNotFoundError:
                pass  # Image was already gone
            except DockerServiceError as e:
                raise BuilderSetupError(f"Unable to remove `{name}` image: {e}") from e

        if on_build:
            on_build(name)
        self._build(name, dockerfile)
        return BuilderImage(name=name, exists=True, dockerfile=dockerfile)

    def _build(self, name: str, dockerfile: str):
        """Write the Dockerfile into the scratch directory and build it."""
        build_dir = self.context.builder_dir
        try:
            build_dir.mkdir(parents=True, exist_ok=True)
            (build_dir / DOCKERFILE_NAME).write_text(dockerfile)
        except OSError as e:
            raise BuilderSetupError(f"Unable to write builder Dockerfile to {build_dir}: {e}") from e

        try:
            self.docker_service.build_image(path=str(build_dir), tag=name)
        except ImageBuildError as e:
            raise BuilderSetupError(
                f"Unable to build `{name}` image. Dockerfile saved at: {build_dir / DOCKERFILE_NAME}",
                build_log=e.build_log,
            ) from e
        except DockerServiceError as e:
            raise BuilderSetupError(f"Unable to build `{name}` image: {e}") from e
        logger.info(f"Built builder image {name}")
