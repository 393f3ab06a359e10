import logging
import time
from typing import Callable

from .reconciliation_state import ReconciliationState
from ...models import EnvironmentSnapshot


class StatusReporter:
    """Throttled one-line status summary. Never influences control flow."""

    def __init__(
        self,
        state: ReconciliationState,
        interval_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._state = state
        self._interval_seconds = interval_seconds
        self._clock = clock

    def maybe_log(self, snapshot: EnvironmentSnapshot, check_interval: int) -> bool:
        now = self._clock()
        last = self._state.last_status_log_time
        if last is not None and now - last <= self._interval_seconds:
            return False

        logging.info(
            f"Status: {snapshot.network_label}, {snapshot.power_label}, "
            f"Check interval: {check_interval}s"
        )
        self._state.last_status_log_time = now
        return True
