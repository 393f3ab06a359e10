# nas_monitor/core/exceptions.py


class UnsupportedPlatformError(Exception):
    """Raised when there is no mount backend for the running OS."""
    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Platform {system} not supported for network mounting")


class InstanceLockError(Exception):
    """Raised when another live daemon instance holds the lock file."""
    def __init__(self, lock_path: str, pid: int):
        self.lock_path = lock_path
        self.pid = pid
        super().__init__(f"Another instance is already running (PID: {pid}, lock: {lock_path})")
