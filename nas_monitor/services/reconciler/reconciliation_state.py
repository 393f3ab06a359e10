from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from ..environment.probe import DEFAULT_BATTERY_LEVEL
from ...models import EnvironmentSnapshot, MountTarget, TargetOutcome


@dataclass
class ReconciliationState:
    """
    Runtime state owned by one ReconciliationLoop.

    Created at process start and discarded at exit; nothing is persisted,
    so a fresh start treats every target as never attempted. Per-target
    entries are created lazily on first sight of a configured target.
    """

    current_network: str = ""
    is_home_network: bool = False
    on_ac_power: bool = False
    battery_level: int = DEFAULT_BATTERY_LEVEL
    check_interval_seconds: int = 0
    battery_gate_active: bool = False

    failure_count: Dict[MountTarget, int] = field(default_factory=dict)
    suspended_until: Dict[MountTarget, float] = field(default_factory=dict)
    last_outcome: Dict[MountTarget, TargetOutcome] = field(default_factory=dict)

    last_status_log_time: Optional[float] = None
    cycle_count: int = 0
    last_cycle_at: Optional[datetime] = None

    def apply_snapshot(self, snapshot: EnvironmentSnapshot) -> None:
        self.current_network = snapshot.current_network
        self.is_home_network = snapshot.is_home_network
        self.on_ac_power = snapshot.on_ac_power
        self.battery_level = snapshot.battery_level

    def get_failure_count(self, target: MountTarget) -> int:
        return self.failure_count.get(target, 0)

    def record_failure(self, target: MountTarget) -> int:
        count = self.failure_count.get(target, 0) + 1
        self.failure_count[target] = count
        return count

    def reset_failures(self, target: MountTarget) -> None:
        self.failure_count[target] = 0
        self.suspended_until.pop(target, None)

    def is_suspended(self, target: MountTarget, now: float) -> bool:
        until = self.suspended_until.get(target)
        return until is not None and now < until
