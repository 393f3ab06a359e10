import getpass
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import CheckIntervals, MountTarget
from .utils.host_config import get_hostname_settings_file

MIN_INTERVAL_SECONDS = 5
MAX_INTERVAL_SECONDS = 3600


def _default_lock_file() -> str:
    try:
        user = getpass.getuser()
    except (OSError, KeyError):
        user = "unknown"
    return f"/tmp/nas-monitor-{user}.lock"


def _default_log_file() -> str:
    return str(Path.home() / ".local" / "share" / "nas-monitor" / "nas-monitor.log")


def _split_entries(raw: str) -> list[str]:
    return [entry.strip() for entry in raw.split(",")]


class Settings(BaseSettings):
    # Network detection
    home_networks: str = ""  # Comma-separated SSIDs, empty entry = wired counts as home
    nas_devices: str = ""  # Comma-separated host/share entries

    # Check intervals (seconds)
    home_ac_interval: int = Field(default=15, ge=MIN_INTERVAL_SECONDS, le=MAX_INTERVAL_SECONDS)
    home_battery_interval: int = Field(default=60, ge=MIN_INTERVAL_SECONDS, le=MAX_INTERVAL_SECONDS)
    away_ac_interval: int = Field(default=180, ge=MIN_INTERVAL_SECONDS, le=MAX_INTERVAL_SECONDS)
    away_battery_interval: int = Field(default=600, ge=MIN_INTERVAL_SECONDS, le=MAX_INTERVAL_SECONDS)

    # Behavior
    min_battery_level: int = Field(default=10, ge=0, le=100)
    max_failed_attempts: int = Field(default=0, ge=0)  # 0 = retry every cycle
    failed_target_cooldown_seconds: int = Field(default=600, ge=0)
    enable_notifications: bool = True
    status_log_interval_seconds: int = Field(default=3600, ge=1)
    startup_delay_seconds: int = Field(default=10, ge=0)  # Wait for desktop session

    # Collaborator timeouts
    probe_timeout_seconds: float = Field(default=5.0, gt=0)
    ping_timeout_seconds: int = Field(default=3, ge=1)
    mount_timeout_seconds: float = Field(default=30.0, gt=0)

    # Process
    lock_file_path: str = Field(default_factory=_default_lock_file)

    # Logging configuration
    log_level: str = "INFO"
    log_file_path: str = Field(default_factory=_default_log_file)
    log_retention_days: int = 14

    # Status API (localhost only)
    status_api_enabled: bool = False
    status_api_host: str = "127.0.0.1"
    status_api_port: int = Field(default=8765, ge=1, le=65535)

    model_config = SettingsConfigDict(
        env_file=get_hostname_settings_file(),
        env_prefix="NAS_MONITOR_",
        extra="ignore",
        frozen=True,
    )

    @field_validator("nas_devices")
    @classmethod
    def _validate_nas_devices(cls, value: str) -> str:
        seen: set[MountTarget] = set()
        for entry in _split_entries(value):
            if not entry:
                continue
            target = MountTarget.from_device_string(entry)
            if target in seen:
                raise ValueError(f"Duplicate NAS device: {target.key}")
            seen.add(target)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def home_network_set(self) -> frozenset[str]:
        """Home network identifiers; may contain '' for wired connections."""
        # Only an explicit empty entry ("Home," or ",") admits wired
        if not self.home_networks.strip():
            return frozenset()
        return frozenset(_split_entries(self.home_networks))

    @property
    def mount_targets(self) -> list[MountTarget]:
        """Configured targets in configuration order."""
        return [
            MountTarget.from_device_string(entry)
            for entry in _split_entries(self.nas_devices)
            if entry
        ]

    @property
    def check_intervals(self) -> CheckIntervals:
        return CheckIntervals(
            home_ac=self.home_ac_interval,
            home_battery=self.home_battery_interval,
            away_ac=self.away_ac_interval,
            away_battery=self.away_battery_interval,
        )

    @property
    def circuit_breaker_enabled(self) -> bool:
        return self.max_failed_attempts > 0

    @property
    def log_directory(self) -> Path:
        """Returns log directory as Path object"""
        return Path(self.log_file_path).parent

    @property
    def config_file_info(self) -> dict:
        """Return information about which configuration file is being used."""
        from .utils.host_config import get_hostname, list_all_settings_files

        return {
            "hostname": get_hostname(),
            "active_config_file": get_hostname_settings_file(),
            "all_available_configs": list_all_settings_files(),
        }
