"""Check interval policy: how long to sleep before the next cycle."""

from ...models import CheckIntervals, EnvironmentSnapshot

LOW_BATTERY_THRESHOLD = 20
LOW_BATTERY_MULTIPLIER = 2
CRITICAL_BATTERY_MULTIPLIER = 4


def is_battery_critical(snapshot: EnvironmentSnapshot, min_battery_level: int) -> bool:
    """On battery and below the configured minimum: mount attempts are suspended."""
    return not snapshot.on_ac_power and snapshot.battery_level < min_battery_level


class IntervalPolicy:
    """
    Picks the base interval from the home/away x AC/battery table and slows
    it down as the battery drains.

    The two battery multipliers are independent and compound: below 20% the
    interval doubles, below min_battery_level it is multiplied by 4 on top,
    so a battery under both thresholds sleeps 8x the base. The result is
    not capped.
    """

    def __init__(self, intervals: CheckIntervals, min_battery_level: int):
        self._intervals = intervals
        self._min_battery_level = min_battery_level

    def base_interval(self, snapshot: EnvironmentSnapshot) -> int:
        return self._intervals.base_interval(snapshot.is_home_network, snapshot.on_ac_power)

    def compute(self, snapshot: EnvironmentSnapshot) -> int:
        interval = self.base_interval(snapshot)

        if not snapshot.on_ac_power:
            if snapshot.battery_level < LOW_BATTERY_THRESHOLD:
                interval *= LOW_BATTERY_MULTIPLIER
            if snapshot.battery_level < self._min_battery_level:
                interval *= CRITICAL_BATTERY_MULTIPLIER

        return interval
