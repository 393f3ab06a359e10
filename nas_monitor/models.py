from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TargetOutcome(str, Enum):
    """
    Result of reconciling a single mount target in one cycle.

    Workflow: Unmounted -> (reachability) -> (mount) -> Mounted
    Alternative: -> Unreachable / Failed (failure count grows)
    """

    ALREADY_MOUNTED = "AlreadyMounted"  # Mounted before this cycle touched it
    MOUNTED = "Mounted"  # Mounted by this cycle
    UNREACHABLE = "Unreachable"  # Host did not answer, mount not attempted
    FAILED = "Failed"  # Mount call failed
    SUSPENDED = "Suspended"  # Circuit breaker open, attempt skipped


class MountTarget(BaseModel):
    """
    One remote share the daemon keeps mounted while on a home network.

    Targets are immutable and hashable so they can key runtime state.
    """

    host: str = Field(..., min_length=1, description="NAS hostname or IP address")
    share: str = Field(..., min_length=1, description="SMB share path on the host")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"host": "nas.local", "share": "media"}},
    )

    @classmethod
    def from_device_string(cls, device: str) -> "MountTarget":
        """Parse a 'host/share' entry (share may itself contain slashes)."""
        host, sep, share = device.strip().partition("/")
        if not sep or not host.strip() or not share.strip():
            raise ValueError(f"Invalid NAS device '{device}', expected host/share")
        return cls(host=host.strip(), share=share.strip().strip("/"))

    @property
    def key(self) -> str:
        return f"{self.host}/{self.share}"

    @property
    def share_url(self) -> str:
        return f"smb://{self.host}/{self.share}"

    def __str__(self) -> str:
        return self.key


class CheckIntervals(BaseModel):
    """The 2x2 base interval table: {home, away} x {AC, battery}, in seconds."""

    home_ac: int = Field(..., gt=0)
    home_battery: int = Field(..., gt=0)
    away_ac: int = Field(..., gt=0)
    away_battery: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    def base_interval(self, is_home_network: bool, on_ac_power: bool) -> int:
        if is_home_network:
            return self.home_ac if on_ac_power else self.home_battery
        return self.away_ac if on_ac_power else self.away_battery


class EnvironmentSnapshot(BaseModel):
    """
    The classification in effect for one whole reconciliation cycle.

    Probed once at the start of a cycle and never re-read mid-cycle.
    """

    current_network: str = Field(
        default="", description="Active network identity, '' for wired/unknown"
    )
    is_home_network: bool = Field(..., description="current_network in home_networks")
    on_ac_power: bool = Field(..., description="Any AC adapter reports online")
    battery_level: int = Field(..., ge=0, le=100, description="Battery percentage")
    probed_at: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(frozen=True)

    @property
    def network_label(self) -> str:
        return f"Home({self.current_network})" if self.is_home_network else "Away"

    @property
    def power_label(self) -> str:
        return "AC Power" if self.on_ac_power else f"Battery({self.battery_level}%)"


class MountResult(BaseModel):
    """Outcome of a single mount call. Failures are values, not exceptions."""

    success: bool
    error_message: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class CycleReport(BaseModel):
    """Summary of one completed reconciliation cycle."""

    cycle_number: int = Field(..., ge=1)
    snapshot: EnvironmentSnapshot
    check_interval_seconds: int = Field(..., ge=0)
    battery_gate_active: bool = Field(
        default=False, description="All targets skipped on critical battery"
    )
    outcomes: dict[str, TargetOutcome] = Field(
        default_factory=dict, description="Per-target outcome keyed by host/share"
    )
    completed_at: datetime = Field(default_factory=datetime.now)


class TargetStatus(BaseModel):
    """Per-target runtime status exposed by the status API."""

    host: str
    share: str
    failure_count: int = Field(default=0, ge=0)
    last_outcome: Optional[TargetOutcome] = None
    suspended_until: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "host": "nas.local",
                "share": "media",
                "failure_count": 2,
                "last_outcome": "Unreachable",
                "suspended_until": None,
            }
        }
    )


class MonitorStatus(BaseModel):
    """Daemon-wide status exposed by the status API."""

    is_running: bool
    cycle_count: int = Field(default=0, ge=0)
    current_network: str = ""
    is_home_network: bool = False
    on_ac_power: bool = False
    battery_level: int = Field(default=50, ge=0, le=100)
    check_interval_seconds: int = Field(default=0, ge=0)
    battery_gate_active: bool = False
    last_cycle_at: Optional[datetime] = None
    target_count: int = Field(default=0, ge=0)
