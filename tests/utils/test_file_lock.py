import pytest

from black_magic.services.exceptions import BuildEnvironmentError, BuildLockedError
from black_magic.utils.file_lock import build_lock


class TestBuildLock:
    """Tests for the per-project build lock."""

    def test_creates_lock_file(self, tmp_path):
        lock_path = tmp_path / "target" / "black_magic" / ".lock"

        with build_lock(lock_path):
            assert lock_path.exists()

    def test_second_holder_rejected(self, tmp_path):
        lock_path = tmp_path / ".lock"

        with build_lock(lock_path):
            with pytest.raises(BuildLockedError, match="Another build is already running"):
                with build_lock(lock_path):
                    pass

    def test_released_after_block(self, tmp_path):
        lock_path = tmp_path / ".lock"

        with build_lock(lock_path):
            pass
        with build_lock(lock_path):
            pass

    def test_released_on_error(self, tmp_path):
        lock_path = tmp_path / ".lock"

        with pytest.raises(RuntimeError):
            with build_lock(lock_path):
                raise RuntimeError("boom")
        with build_lock(lock_path):
            pass

    def test_unusable_lock_dir(self, tmp_path):
        blocker = tmp_path / "target"
        blocker.write_text("not a directory")

        with pytest.raises(BuildEnvironmentError, match="Unable to create build lock") as exc_info:
            with build_lock(blocker / "black_magic" / ".lock"):
                pass

        assert exc_info.value.exit_code == 3
