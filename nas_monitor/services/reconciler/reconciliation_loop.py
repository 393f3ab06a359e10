import asyncio
import logging
import time
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from .environment_classifier import classify_environment
from .interval_policy import IntervalPolicy, is_battery_critical
from .reconciliation_state import ReconciliationState
from .status_reporter import StatusReporter
from .target_reconciler import TargetReconciler
from ..environment.probe import EnvironmentProbe
from ..network_mount.mount_service import NetworkMountService
from ..notifications.notification_sink import NotificationSink
from ...config import Settings
from ...models import CycleReport, MonitorStatus, TargetStatus


class ReconciliationLoop:
    """
    Drives one reconciliation cycle after another until stopped.

    Each cycle, in order: classify the environment, compute the interval,
    log status if due, reconcile all targets, then sleep. Cycles never
    overlap: the only suspension point between cycles is the sleep, and
    request_immediate_cycle() only shortens that sleep.
    """

    def __init__(
        self,
        settings: Settings,
        probe: EnvironmentProbe,
        mount_service: NetworkMountService,
        notifier: NotificationSink,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._probe = probe
        self._clock = clock
        self._targets = settings.mount_targets
        self._home_networks = settings.home_network_set

        self._state = ReconciliationState()
        self._interval_policy = IntervalPolicy(
            settings.check_intervals, settings.min_battery_level
        )
        self._status_reporter = StatusReporter(
            self._state, settings.status_log_interval_seconds, clock
        )
        self._reconciler = TargetReconciler(
            settings, mount_service, notifier, self._state, clock
        )

        self._is_running = False
        self._loop_task: Optional[asyncio.Task] = None
        self._wake_event = asyncio.Event()

    @property
    def state(self) -> ReconciliationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def run_cycle(self) -> CycleReport:
        # A wake request made during this cycle must still cut the next sleep
        self._wake_event.clear()

        snapshot = await classify_environment(self._probe, self._home_networks)
        self._state.apply_snapshot(snapshot)

        interval = self._interval_policy.compute(snapshot)
        self._state.check_interval_seconds = interval

        self._status_reporter.maybe_log(snapshot, interval)

        gate_active = snapshot.is_home_network and is_battery_critical(
            snapshot, self._settings.min_battery_level
        )
        self._state.battery_gate_active = gate_active
        outcomes = await self._reconciler.reconcile_all(self._targets, snapshot)

        self._state.cycle_count += 1
        self._state.last_cycle_at = datetime.now()

        report = CycleReport(
            cycle_number=self._state.cycle_count,
            snapshot=snapshot,
            check_interval_seconds=interval,
            battery_gate_active=gate_active,
            outcomes={target.key: outcome for target, outcome in outcomes.items()},
        )
        logging.debug(
            f"Cycle {report.cycle_number} complete: {snapshot.network_label}, "
            f"{snapshot.power_label}, next check in {interval}s"
        )
        return report

    async def start(self, initial_delay: float = 0) -> None:
        if self._is_running:
            logging.warning("Reconciliation loop already running")
            return

        self._is_running = True
        self._loop_task = asyncio.create_task(self._monitoring_loop(initial_delay))
        logging.info("Reconciliation loop started")

    async def stop(self) -> None:
        if not self._is_running:
            return

        self._is_running = False
        self._wake_event.set()

        if self._loop_task:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None

        logging.info("Reconciliation loop stopped")

    async def run_forever(self, initial_delay: float = 0) -> None:
        """Run in the current task until cancelled or stop() is called."""
        self._is_running = True
        try:
            await self._monitoring_loop(initial_delay)
        finally:
            self._is_running = False

    def request_immediate_cycle(self) -> None:
        self._wake_event.set()

    async def _monitoring_loop(self, initial_delay: float = 0) -> None:
        if not self._targets:
            logging.warning("No NAS devices configured - monitor will idle")

        if initial_delay > 0:
            logging.info(f"Waiting {initial_delay}s for the desktop session before first check")
            await self._sleep(initial_delay)

        while self._is_running:
            interval = await self._run_cycle_safely()
            if not self._is_running:
                break
            await self._sleep(interval)

    async def _run_cycle_safely(self) -> int:
        try:
            report = await self.run_cycle()
            return report.check_interval_seconds
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logging.error(f"Error in reconciliation cycle: {e}", exc_info=True)
            return self._state.check_interval_seconds or self._settings.away_battery_interval

    async def _sleep(self, interval: int) -> None:
        try:
            await asyncio.wait_for(self._wake_event.wait(), timeout=interval)
            if self._is_running:
                logging.info("Immediate check requested")
        except asyncio.TimeoutError:
            pass

    def get_status(self) -> MonitorStatus:
        return MonitorStatus(
            is_running=self._is_running,
            cycle_count=self._state.cycle_count,
            current_network=self._state.current_network,
            is_home_network=self._state.is_home_network,
            on_ac_power=self._state.on_ac_power,
            battery_level=self._state.battery_level,
            check_interval_seconds=self._state.check_interval_seconds,
            battery_gate_active=self._state.battery_gate_active,
            last_cycle_at=self._state.last_cycle_at,
            target_count=len(self._targets),
        )

    def get_target_statuses(self) -> List[TargetStatus]:
        now = self._clock()
        statuses = []
        for target in self._targets:
            suspended_until = None
            if self._state.is_suspended(target, now):
                remaining = self._state.suspended_until[target] - now
                suspended_until = datetime.now() + timedelta(seconds=remaining)
            statuses.append(
                TargetStatus(
                    host=target.host,
                    share=target.share,
                    failure_count=self._state.get_failure_count(target),
                    last_outcome=self._state.last_outcome.get(target),
                    suspended_until=suspended_until,
                )
            )
        return statuses
