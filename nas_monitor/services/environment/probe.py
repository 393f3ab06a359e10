"""Environment Probe - network identity and power state behind one interface."""

import logging
from typing import Optional, Sequence

from .base_power_source import PowerSource
from .network_detector import NmcliNetworkDetector
from .power_sources import AcpiPowerSource, SysfsPowerSource, UPowerSource

DEFAULT_BATTERY_LEVEL = 50


class EnvironmentProbe:
    """
    Queries the OS for network identity and power state.

    Power readings walk an ordered chain of sources; the first source that
    gives a definite answer wins. When every source fails the probe falls
    back to conservative defaults: battery power and a neutral 50% charge.
    Probe errors never propagate.
    """

    def __init__(
        self,
        network_detector: NmcliNetworkDetector,
        power_sources: Sequence[PowerSource],
    ):
        self._network_detector = network_detector
        self._power_sources = list(power_sources)

    @classmethod
    def create_default(cls, timeout: float = 5.0) -> "EnvironmentProbe":
        return cls(
            network_detector=NmcliNetworkDetector(timeout=timeout),
            power_sources=[
                UPowerSource(timeout=timeout),
                SysfsPowerSource(),
                AcpiPowerSource(timeout=timeout),
            ],
        )

    async def current_network(self) -> str:
        try:
            return await self._network_detector.current_network()
        except Exception as e:
            logging.warning(f"Network probe failed, assuming wired/unknown: {e}")
            return ""

    async def on_ac_power(self) -> bool:
        for source in self._power_sources:
            reading = await self._read(source, "AC state", source.read_ac_online)
            if reading is not None:
                return reading
        # Assume battery power if it can't be determined
        return False

    async def battery_level(self) -> int:
        for source in self._power_sources:
            reading = await self._read(source, "battery level", source.read_battery_level)
            if reading is not None:
                return max(0, min(100, reading))
        return DEFAULT_BATTERY_LEVEL

    async def _read(self, source: PowerSource, what: str, reader) -> Optional[object]:
        try:
            if not source.is_available():
                return None
            return await reader()
        except Exception as e:
            logging.debug(f"{source.get_source_name()} {what} probe failed: {e}")
            return None
