"""
Environment Probe Module

Components:
- EnvironmentProbe: Network identity + power state facade
- PowerSource: Abstract base class for one power reading strategy
- UPowerSource / SysfsPowerSource / AcpiPowerSource: The fallback chain
- NmcliNetworkDetector: Active wifi network via NetworkManager
"""

from .base_power_source import PowerSource
from .network_detector import NmcliNetworkDetector
from .power_sources import AcpiPowerSource, SysfsPowerSource, UPowerSource
from .probe import DEFAULT_BATTERY_LEVEL, EnvironmentProbe

__all__ = [
    "EnvironmentProbe",
    "PowerSource",
    "UPowerSource",
    "SysfsPowerSource",
    "AcpiPowerSource",
    "NmcliNetworkDetector",
    "DEFAULT_BATTERY_LEVEL",
]
