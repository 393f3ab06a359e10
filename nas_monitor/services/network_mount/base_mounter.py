"""Abstract Base Mounter - platform mount backend interface."""

from abc import ABC, abstractmethod

from ...models import MountResult, MountTarget


class BaseMounter(ABC):
    """Abstract base class for platform-specific mount operations."""

    def __init__(self, mount_timeout: float = 30.0, query_timeout: float = 5.0):
        self._mount_timeout = mount_timeout
        self._query_timeout = query_timeout

    @abstractmethod
    async def is_mounted(self, target: MountTarget) -> bool:
        """Check whether the share is currently mounted."""
        pass

    @abstractmethod
    async def mount(self, target: MountTarget) -> MountResult:
        """Mount the share. Idempotent; bounded by the mount timeout."""
        pass

    @abstractmethod
    def get_platform_name(self) -> str:
        """Get platform name for logging."""
        pass
