import logging
import time
from typing import Callable, Dict, Sequence

from .interval_policy import is_battery_critical
from .reconciliation_state import ReconciliationState
from ..network_mount.mount_service import NetworkMountService
from ..notifications.notification_sink import NotificationSink
from ...config import Settings
from ...models import EnvironmentSnapshot, MountTarget, TargetOutcome


class TargetReconciler:
    """
    Brings every configured target towards "mounted" while on a home network.

    Per target: already mounted -> reset failures; unreachable -> count a
    failure without calling mount; otherwise mount and count the result.
    Only the first failure since the last success is notified. A failing
    target never stops the others from being attempted.
    """

    def __init__(
        self,
        settings: Settings,
        mount_service: NetworkMountService,
        notifier: NotificationSink,
        state: ReconciliationState,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._mount_service = mount_service
        self._notifier = notifier
        self._state = state
        self._clock = clock

    async def reconcile_all(
        self, targets: Sequence[MountTarget], snapshot: EnvironmentSnapshot
    ) -> Dict[MountTarget, TargetOutcome]:
        # Only attempt mounting on home network
        if not snapshot.is_home_network:
            return {}

        if is_battery_critical(snapshot, self._settings.min_battery_level):
            logging.info(
                f"Skipping mount attempts - critical battery level ({snapshot.battery_level}%)"
            )
            return {}

        outcomes: Dict[MountTarget, TargetOutcome] = {}
        for target in targets:
            try:
                outcome = await self._reconcile_target(target)
            except Exception as e:
                count = self._state.record_failure(target)
                logging.error(
                    f"Unexpected error reconciling {target} (attempt {count}): {e}",
                    exc_info=True,
                )
                outcome = TargetOutcome.FAILED
            self._state.last_outcome[target] = outcome
            outcomes[target] = outcome
        return outcomes

    async def _reconcile_target(self, target: MountTarget) -> TargetOutcome:
        if await self._mount_service.is_mounted(target):
            self._state.reset_failures(target)
            return TargetOutcome.ALREADY_MOUNTED

        if self._state.is_suspended(target, self._clock()):
            logging.debug(f"Mount attempts for {target} suspended by circuit breaker")
            return TargetOutcome.SUSPENDED

        # Check connectivity before mount attempt
        if not await self._mount_service.is_reachable(target):
            count = self._state.record_failure(target)
            logging.warning(f"Cannot reach {target.host} (attempt {count})")
            await self._maybe_open_breaker(target, count)
            return TargetOutcome.UNREACHABLE

        result = await self._mount_service.mount(target)
        if result.success:
            logging.info(f"Successfully mounted {target}")
            self._state.reset_failures(target)
            await self._notify("NAS Connected", f"{target} is now available")
            return TargetOutcome.MOUNTED

        count = self._state.record_failure(target)
        logging.warning(
            f"Failed to mount {target} (attempt {count})"
            + (f": {result.error_message}" if result.error_message else "")
        )
        if count == 1:
            await self._notify("NAS Mount Failed", f"Cannot connect to {target}")
        await self._maybe_open_breaker(target, count)
        return TargetOutcome.FAILED

    async def _maybe_open_breaker(self, target: MountTarget, count: int) -> None:
        if not self._settings.circuit_breaker_enabled:
            return
        if count < self._settings.max_failed_attempts:
            return

        cooldown = self._settings.failed_target_cooldown_seconds
        self._state.suspended_until[target] = self._clock() + cooldown
        logging.warning(
            f"Suspending mount attempts for {target} for {cooldown}s "
            f"after {count} consecutive failures"
        )
        if count == self._settings.max_failed_attempts:
            await self._notify(
                "NAS Mount Suspended",
                f"{target} failed {count} times; retrying in {cooldown}s",
            )

    async def _notify(self, title: str, body: str) -> None:
        if not self._settings.enable_notifications:
            return
        try:
            await self._notifier.notify(title, body)
        except Exception as e:
            logging.debug(f"Notification failed (ignored): {e}")
