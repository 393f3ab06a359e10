"""Abstract Power Source - one strategy in the power probing chain."""

from abc import ABC, abstractmethod
from typing import Optional


class PowerSource(ABC):
    """
    A single way of reading the machine's power state.

    Both readings return None when this source cannot decide, which lets
    the probe fall through to the next source in the chain.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool or interface exists on this machine."""
        pass

    @abstractmethod
    async def read_ac_online(self) -> Optional[bool]:
        """True if any AC adapter is online, False if all are offline."""
        pass

    @abstractmethod
    async def read_battery_level(self) -> Optional[int]:
        """Battery charge percentage of the first battery found."""
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        """Get source name for logging."""
        pass
