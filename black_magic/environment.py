import logging
import subprocess
from pathlib import Path
from typing import Optional

from .models.build import ProjectContext
from .services.exceptions import NotAProjectError, RuntimeUnavailableError

logger = logging.getLogger(__name__)

DOCKER_VERSION_SIGNATURE = "Docker version"


class EnvironmentProbe:
    def __init__(self, project_root: Optional[Path] = None, output_subdir: str = "target/black_magic"):
        self.project_root = project_root or Path.cwd()
        self.output_subdir = output_subdir

    def check_runtime_available(self) -> bool:
        """Check that `docker --version` reports a Docker installation"""
        try:
            result = subprocess.run(['docker', '--version'], capture_output=True, text=True)
        except OSError as e:
            logger.debug(f"Unable to run docker: {e}")
            return False
        return result.stdout.startswith(DOCKER_VERSION_SIGNATURE)

    def require_runtime(self):
        if not self.check_runtime_available():
            raise RuntimeUnavailableError(
                "It looks like Docker is not installed on your system. "
                "Running `docker --version` did not produce expected result."
            )

    def resolve_project_context(self) -> ProjectContext:
        """Build the project context, requiring a Cargo.toml at the root"""
        context = ProjectContext.from_directory(self.project_root, self.output_subdir)
        if not context.manifest_path.is_file():
            raise NotAProjectError(
                "This doesn't look like a rust project. Are you in the right place? "
                f"No `{context.manifest_path.name}` was found in this directory."
            )
        return context
