"""Platform Factory - platform detection and mounter creation."""

import platform

from .base_mounter import BaseMounter
from ...core.exceptions import UnsupportedPlatformError


class PlatformFactory:
    """Factory for creating platform-specific mount implementations."""

    def detect_platform(self) -> str:
        """Detect current platform. Returns: linux or macos."""
        system = platform.system().lower()

        if system == "linux":
            return "linux"
        elif system == "darwin":
            return "macos"
        else:
            raise UnsupportedPlatformError(system)

    def create_mounter(
        self, mount_timeout: float = 30.0, query_timeout: float = 5.0
    ) -> BaseMounter:
        """Create platform-specific mounter instance."""
        platform_name = self.detect_platform()

        if platform_name == "linux":
            from .gio_mounter import GioMounter

            return GioMounter(mount_timeout=mount_timeout, query_timeout=query_timeout)
        else:
            from .macos_mounter import MacOSMounter

            return MacOSMounter(mount_timeout=mount_timeout, query_timeout=query_timeout)
