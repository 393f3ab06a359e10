"""Network Mount Service - the mount provider the reconciler talks to."""

import logging
from typing import Optional

from .base_mounter import BaseMounter
from .platform_factory import PlatformFactory
from .reachability import ReachabilityChecker
from ...config import Settings
from ...core.exceptions import UnsupportedPlatformError
from ...models import MountResult, MountTarget


class NetworkMountService:
    """
    Facade over the platform mounter and the reachability checker.

    Every call is bounded in time by the backends and never raises:
    unexpected errors are logged and reported as "not mounted",
    "unreachable" or a failed MountResult.
    """

    def __init__(
        self,
        mounter: Optional[BaseMounter],
        reachability: ReachabilityChecker,
    ):
        self._mounter = mounter
        self._reachability = reachability

    @classmethod
    def from_settings(cls, settings: Settings) -> "NetworkMountService":
        mounter: Optional[BaseMounter] = None
        try:
            mounter = PlatformFactory().create_mounter(
                mount_timeout=settings.mount_timeout_seconds,
                query_timeout=settings.probe_timeout_seconds,
            )
            logging.info(f"Initialized {mounter.get_platform_name()} mounter")
        except UnsupportedPlatformError as e:
            logging.error(f"Error initializing network mounter: {e}")

        return cls(
            mounter=mounter,
            reachability=ReachabilityChecker(timeout_seconds=settings.ping_timeout_seconds),
        )

    @property
    def is_available(self) -> bool:
        return self._mounter is not None

    async def is_mounted(self, target: MountTarget) -> bool:
        if not self._mounter:
            return False
        try:
            return await self._mounter.is_mounted(target)
        except Exception as e:
            logging.error(f"Error checking mount state of {target}: {e}")
            return False

    async def is_reachable(self, target: MountTarget) -> bool:
        try:
            return await self._reachability.is_reachable(target.host)
        except Exception as e:
            logging.error(f"Error checking reachability of {target.host}: {e}")
            return False

    async def mount(self, target: MountTarget) -> MountResult:
        if not self._mounter:
            return MountResult(success=False, error_message="No mounter for this platform")
        try:
            return await self._mounter.mount(target)
        except Exception as e:
            logging.error(f"Exception during mount attempt for {target}: {e}")
            return MountResult(success=False, error_message=str(e))

    def get_platform_info(self) -> dict:
        """Get platform and mounter information."""
        return {
            "platform": self._mounter.get_platform_name() if self._mounter else "unsupported",
            "mounter_available": self.is_available,
        }
