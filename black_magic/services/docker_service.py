"""Docker service for abstracting Docker operations."""

import logging
import subprocess
from typing import Any, Optional

import docker
import docker.errors
from docker.models.containers import Container
from docker.models.images import Image

from .exceptions import (
    DockerServiceError,
    ImageBuildError,
    ImageNotFoundError,
)

logger = logging.getLogger(__name__)

# Stderr prefixes printed by `docker image inspect` for a missing image
MISSING_IMAGE_PREFIXES = (
    "Error: No such image: ",
    "Error response from daemon: No such image: ",
)


def _decode(output: Any) -> str:
    if isinstance(output, bytes):
        return output.decode('utf-8', errors='replace')
    return output or ""


def format_build_log(build_log) -> str:
    """Flatten Docker SDK build log chunks into text."""
    lines = []
    for chunk in build_log or []:
        if 'stream' in chunk:
            lines.append(chunk['stream'])
        elif 'error' in chunk:
            lines.append(chunk['error'] + '\n')
    return ''.join(lines)


def inspect_reports_missing(stderr: str, image_name: str) -> bool:
    """Check `docker image inspect` stderr for the missing-image message."""
    return any(stderr.startswith(prefix + image_name) for prefix in MISSING_IMAGE_PREFIXES)


class DockerService:
    """Service for Docker operations with clean abstractions."""

    def __init__(self):
        """Initialize Docker service and test connection."""
        try:
            self.client = docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DockerServiceError(
                    "Docker daemon is not running. Please start Docker Desktop or the Docker service."
                ) from e
            else:
                raise DockerServiceError(f"Failed to connect to Docker: {e}") from e

    def build_image(
        self,
        path: str,
        tag: str,
        dockerfile: str = "Dockerfile",
        rm: bool = True,
        nocache: bool = False,
    ) -> tuple[Image, list[dict[str, Any]]]:
        """Build a Docker image.

        Args:
            path: Path to the build context
            tag: Tag for the image
            dockerfile: Path to the Dockerfile relative to the build context
            rm: Remove intermediate containers after build
            nocache: Do not use cache when building

        Returns:
            Tuple of (built image, build logs)

        Raises:
            ImageBuildError: If the Dockerfile fails to build
            DockerServiceError: If the daemon rejects the request
        """
        logger.debug(f"Building image {tag} from {path}")
        try:
            image, logs = self.client.images.build(
                path=path,
                dockerfile=dockerfile,
                tag=tag,
                rm=rm,
                nocache=nocache,
            )
            return image, list(logs)
        except docker.errors.BuildError as e:
            raise ImageBuildError(
                f"Failed to build image: {e}", build_log=format_build_log(e.build_log)
            ) from e
        except docker.errors.APIError as e:
            raise ImageBuildError(f"Failed to build image: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error building image: {e}") from e

    def image_exists(self, image_name: str) -> bool:
        """Check if an image exists.

        Uses the SDK lookup, falling back to matching the output of
        `docker image inspect` when the lookup fails for another reason.

        Args:
            image_name: Name of the image

        Returns:
            True if image exists, False otherwise
        """
        try:
            self.client.images.get(image_name)
            return True
        except docker.errors.ImageNotFound:
            return False
        except docker.errors.APIError as e:
            logger.warning(f"Error checking image existence: {e}")
            return self._inspect_image(image_name)

    def _inspect_image(self, image_name: str) -> bool:
        result = subprocess.run(
            ['docker', 'image', 'inspect', image_name],
            capture_output=True,
            text=True,
        )
        if result.returncode == 0:
            return True
        if inspect_reports_missing(result.stderr, image_name):
            return False
        raise DockerServiceError(
            f"Unable to test for `{image_name}` image: {result.stderr.strip()}"
        )

    def remove_image(self, image_name: str, force: bool = True) -> None:
        """Remove a Docker image.

        Args:
            image_name: Name of the image
            force: Force removal

        Raises:
            ImageNotFoundError: If image not found
            DockerServiceError: If removal fails
        """
        try:
            self.client.images.remove(image_name, force=force)
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image_name}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to remove image: {e}") from e

    def run_container(
        self,
        image: str,
        command: Optional[list[str]] = None,
        volumes: Optional[dict[str, dict[str, str]]] = None,
        working_dir: Optional[str] = None,
    ) -> Container:
        """Start a detached container.

        Args:
            image: Image name
            command: Command to run
            volumes: Volume mappings
            working_dir: Working directory inside the container

        Returns:
            The started container

        Raises:
            ImageNotFoundError: If image not found
            DockerServiceError: If run fails
        """
        try:
            return self.client.containers.run(
                image=image,
                command=command,
                volumes=volumes,
                working_dir=working_dir,
                stdin_open=True,
                detach=True,
                remove=False,
            )
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to run container: {e}") from e

    def wait_for_container(self, container: Container) -> tuple[int, str, str]:
        """Block until a container exits, collect its output and remove it.

        Returns:
            Tuple of (exit code, stdout, stderr)

        Raises:
            DockerServiceError: If the daemon fails while waiting
        """
        try:
            result = container.wait()
            exit_code = result.get('StatusCode', 1)
            stdout = _decode(container.logs(stdout=True, stderr=False))
            stderr = _decode(container.logs(stdout=False, stderr=True))
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed waiting for container: {e}") from e
        finally:
            try:
                container.remove(force=True)
            except docker.errors.APIError as e:
                logger.warning(f"Could not remove container {container.id}: {e}")
        return exit_code, stdout, stderr
