"""
Single-instance lock file.

Stores the owner's PID. A lock whose PID no longer exists is stale and
is replaced; a lock held by a live process refuses the second instance.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..core.exceptions import InstanceLockError


def _pid_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but belongs to someone else
        return True
    return True


def _read_pid(path: Path) -> Optional[int]:
    try:
        return int(path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


class InstanceLock:
    def __init__(self, path: str):
        self._path = Path(path)
        self._held = False

    @property
    def path(self) -> Path:
        return self._path

    def acquire(self) -> None:
        if self._path.exists():
            pid = _read_pid(self._path)
            if pid is not None and pid != os.getpid() and _pid_alive(pid):
                raise InstanceLockError(str(self._path), pid)
            logging.info("Removing stale lock file")
            self._path.unlink(missing_ok=True)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(str(os.getpid()), encoding="utf-8")
        self._held = True
        logging.debug(f"Acquired instance lock: {self._path}")

    def release(self) -> None:
        if not self._held:
            return
        if _read_pid(self._path) == os.getpid():
            self._path.unlink(missing_ok=True)
        self._held = False

    def __enter__(self) -> "InstanceLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
