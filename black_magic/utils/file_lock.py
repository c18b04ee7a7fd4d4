"""
Per-project build lock.

Holds an exclusive, non-blocking lock on a file in the build-output
directory so two builds of the same project cannot interleave writes.
Uses msvcrt.locking() on Windows and fcntl.flock() elsewhere.
"""

import contextlib
import logging
import platform
from pathlib import Path

from ..services.exceptions import BuildEnvironmentError, BuildLockedError

log = logging.getLogger(__name__)

_IS_WINDOWS = platform.system() == "Windows"

if _IS_WINDOWS:
    import msvcrt
else:
    import fcntl


def _acquire(file_handle) -> None:
    if _IS_WINDOWS:
        file_handle.seek(0)
        msvcrt.locking(file_handle.fileno(), msvcrt.LK_NBLCK, 1)
    else:
        fcntl.flock(file_handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)


def _release(file_handle) -> None:
    if _IS_WINDOWS:
        file_handle.seek(0)
        msvcrt.locking(file_handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)


@contextlib.contextmanager
def build_lock(lock_path: Path):
    """
    Hold the build lock for the duration of the block.

    Raises:
        BuildLockedError: If another process already holds the lock
        BuildEnvironmentError: If the lock file cannot be created
    """
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        file_handle = open(lock_path, "a+b")
    except OSError as e:
        raise BuildEnvironmentError(f"Unable to create build lock {lock_path}: {e}") from e
    with file_handle:
        try:
            _acquire(file_handle)
        except OSError as e:
            raise BuildLockedError(
                f"Another build is already running for this project (lock: {lock_path})."
            ) from e
        log.debug(f"Build lock acquired: {lock_path}")
        try:
            yield
        finally:
            try:
                _release(file_handle)
                log.debug("Build lock released")
            except OSError as e:
                log.error(f"Error releasing build lock: {e}")
