"""Volume mounts for the builder container."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..models.build import ProjectContext, VolumeMount, dedupe_mounts
from ..utils.path_finder import PathFinder
from .constants import CARGO_CACHE_DIRS

logger = logging.getLogger(__name__)


class VolumeMounter:
    """Computes the host directories bound into the builder container."""

    def __init__(self, container_workdir: str = "/workdir"):
        self.container_workdir = container_workdir

    def compute_mounts(self, context: ProjectContext, cache_root: Optional[Path] = None) -> List[VolumeMount]:
        """Mount the project root plus whichever Cargo caches exist on the host."""
        cache_root = cache_root or PathFinder.cargo_home()
        mounts = [VolumeMount.from_path(context.root, self.container_workdir)]

        for subdir, container_path in CARGO_CACHE_DIRS.items():
            host_dir = PathFinder.existing_dir(cache_root / subdir)
            if host_dir is None:
                logger.debug(f"No cargo {subdir} cache at {cache_root / subdir}")
                continue
            mounts.append(VolumeMount.from_path(host_dir, container_path))

        return dedupe_mounts(mounts)

    @staticmethod
    def to_volumes(mounts: List[VolumeMount]) -> Dict[str, Dict[str, str]]:
        """Convert mounts to the Docker SDK ``volumes`` mapping."""
        return {m.host_path: {'bind': m.container_path, 'mode': 'rw'} for m in mounts}
