"""Concrete power sources: upower, sysfs and the legacy acpi command."""

import logging
import re
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .base_power_source import PowerSource
from ...utils.process_utils import command_available, run_command

SYSFS_POWER_SUPPLY = Path("/sys/class/power_supply")

_PERCENT_RE = re.compile(r"(\d+)(?:[.,]\d+)?\s*%")
_ONLINE_RE = re.compile(r"^\s*online:\s*(\S+)", re.MULTILINE)
_PERCENTAGE_LINE_RE = re.compile(r"^\s*percentage:\s*(.+)$", re.MULTILINE)


def _parse_percent(text: str) -> Optional[int]:
    match = _PERCENT_RE.search(text)
    if not match:
        return None
    return int(match.group(1))


class UPowerSource(PowerSource):
    """Structured power-management query via upower (most reliable)."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    def is_available(self) -> bool:
        return command_available("upower")

    async def _list_devices(self) -> list[str]:
        result = await run_command(["upower", "-e"], self._timeout)
        if result is None or not result.ok:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    async def read_ac_online(self) -> Optional[bool]:
        # A definite "offline" also ends the chain; sysfs and acpi are not consulted
        adapters = [
            device
            for device in await self._list_devices()
            if "ADP" in device or "AC" in device
        ]
        if not adapters:
            return None

        saw_reading = False
        for adapter in adapters:
            result = await run_command(["upower", "-i", adapter], self._timeout)
            if result is None or not result.ok:
                continue
            match = _ONLINE_RE.search(result.stdout)
            if not match:
                continue
            saw_reading = True
            if match.group(1).lower() in ("yes", "true"):
                logging.debug(f"upower reports AC online: {adapter}")
                return True
        return False if saw_reading else None

    async def read_battery_level(self) -> Optional[int]:
        batteries = [device for device in await self._list_devices() if "BAT" in device]
        for battery in batteries:
            result = await run_command(["upower", "-i", battery], self._timeout)
            if result is None or not result.ok:
                continue
            match = _PERCENTAGE_LINE_RE.search(result.stdout)
            if match:
                level = _parse_percent(match.group(1))
                if level is not None:
                    return level
        return None

    def get_source_name(self) -> str:
        return "upower"


class SysfsPowerSource(PowerSource):
    """Raw kernel power-supply files under /sys/class/power_supply."""

    def __init__(self, root: Path = SYSFS_POWER_SUPPLY):
        self._root = root

    def is_available(self) -> bool:
        return self._root.is_dir()

    async def _read_value(self, path: Path) -> Optional[str]:
        try:
            if not await aiofiles.os.path.isfile(path):
                return None
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return (await f.read()).strip()
        except OSError as e:
            logging.debug(f"Could not read {path}: {e}")
            return None

    async def read_ac_online(self) -> Optional[bool]:
        adapters = sorted(self._root.glob("AC*")) + sorted(self._root.glob("ADP*"))
        saw_reading = False
        for adapter in adapters:
            value = await self._read_value(adapter / "online")
            if value is None:
                continue
            saw_reading = True
            if value == "1":
                logging.debug(f"sysfs reports AC online: {adapter.name}")
                return True
        return False if saw_reading else None

    async def read_battery_level(self) -> Optional[int]:
        for battery in sorted(self._root.glob("BAT*")):
            value = await self._read_value(battery / "capacity")
            if value is None:
                continue
            try:
                return int(value)
            except ValueError:
                logging.debug(f"Unexpected capacity value in {battery.name}: {value!r}")
        return None

    def get_source_name(self) -> str:
        return "sysfs"


class AcpiPowerSource(PowerSource):
    """Legacy power-info command (acpi)."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    def is_available(self) -> bool:
        return command_available("acpi")

    async def read_ac_online(self) -> Optional[bool]:
        result = await run_command(["acpi", "-a"], self._timeout)
        if result is None or not result.ok:
            return None
        if "on-line" in result.stdout:
            return True
        if "off-line" in result.stdout:
            return False
        return None

    async def read_battery_level(self) -> Optional[int]:
        result = await run_command(["acpi", "-b"], self._timeout)
        if result is None or not result.ok:
            return None
        for line in result.stdout.splitlines():
            level = _parse_percent(line)
            if level is not None:
                return level
        return None

    def get_source_name(self) -> str:
        return "acpi"
