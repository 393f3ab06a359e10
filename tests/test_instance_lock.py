import os
from unittest.mock import patch

import pytest

from nas_monitor.core.exceptions import InstanceLockError
from nas_monitor.utils.instance_lock import InstanceLock

MODULE = "nas_monitor.utils.instance_lock"


@pytest.fixture
def lock_path(tmp_path):
    return tmp_path / "nas-monitor.lock"


class TestInstanceLock:
    def test_acquire_writes_own_pid(self, lock_path):
        lock = InstanceLock(str(lock_path))

        lock.acquire()

        assert lock_path.read_text() == str(os.getpid())
        lock.release()
        assert not lock_path.exists()

    def test_live_owner_refuses_second_instance(self, lock_path):
        lock_path.write_text("4242")

        with patch(f"{MODULE}._pid_alive", return_value=True):
            with pytest.raises(InstanceLockError) as exc_info:
                InstanceLock(str(lock_path)).acquire()

        assert exc_info.value.pid == 4242
        assert "Another instance is already running (PID: 4242" in str(exc_info.value)
        assert lock_path.read_text() == "4242"

    def test_stale_lock_is_replaced(self, lock_path, caplog):
        caplog.set_level("INFO")
        lock_path.write_text("4242")

        with patch(f"{MODULE}._pid_alive", return_value=False):
            InstanceLock(str(lock_path)).acquire()

        assert lock_path.read_text() == str(os.getpid())
        assert "Removing stale lock file" in caplog.text

    def test_garbage_lock_is_replaced(self, lock_path):
        lock_path.write_text("not a pid")

        InstanceLock(str(lock_path)).acquire()

        assert lock_path.read_text() == str(os.getpid())

    def test_release_leaves_foreign_lock(self, lock_path):
        lock = InstanceLock(str(lock_path))
        lock.acquire()
        lock_path.write_text("4242")

        lock.release()

        assert lock_path.read_text() == "4242"

    def test_context_manager(self, lock_path):
        with InstanceLock(str(lock_path)) as lock:
            assert lock.path == lock_path
            assert lock_path.exists()

        assert not lock_path.exists()

    def test_creates_parent_directory(self, tmp_path):
        lock_path = tmp_path / "run" / "nas-monitor.lock"

        with InstanceLock(str(lock_path)):
            assert lock_path.exists()
