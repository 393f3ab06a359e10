"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from nas_monitor.config import Settings
from nas_monitor.dependencies import reset_singletons
from nas_monitor.models import MountResult
from nas_monitor.services.environment import EnvironmentProbe
from nas_monitor.services.network_mount import NetworkMountService
from nas_monitor.services.notifications import NotificationSink


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 10_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before each test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def make_settings(tmp_path):
    """Factory for Settings that never reads a settings file."""

    def _make(**overrides) -> Settings:
        values = dict(
            home_networks="Home",
            nas_devices="nas.local/share",
            home_ac_interval=10,
            home_battery_interval=20,
            away_ac_interval=30,
            away_battery_interval=40,
            min_battery_level=10,
            startup_delay_seconds=0,
            lock_file_path=str(tmp_path / "nas-monitor.lock"),
            log_file_path=str(tmp_path / "logs" / "nas-monitor.log"),
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def probe():
    """Probe reporting the home network on AC power."""
    mock_probe = Mock(spec=EnvironmentProbe)
    mock_probe.current_network = AsyncMock(return_value="Home")
    mock_probe.on_ac_power = AsyncMock(return_value=True)
    mock_probe.battery_level = AsyncMock(return_value=80)
    return mock_probe


@pytest.fixture
def mount_service():
    """Mount provider where nothing is mounted, hosts answer and mounts succeed."""
    service = Mock(spec=NetworkMountService)
    service.is_mounted = AsyncMock(return_value=False)
    service.is_reachable = AsyncMock(return_value=True)
    service.mount = AsyncMock(return_value=MountResult(success=True))
    return service


@pytest.fixture
def notifier():
    sink = Mock(spec=NotificationSink)
    sink.notify = AsyncMock()
    return sink
