from typing import Any, Dict, Optional

from .config import Settings
from .services.environment import EnvironmentProbe
from .services.network_mount import NetworkMountService
from .services.notifications import DesktopNotifier, LogNotifier, NotificationSink
from .services.reconciler import ReconciliationLoop
from .utils.process_utils import command_available

# Global singleton instances
_singletons: Dict[str, Any] = {}


def configure(settings: Settings, config_path: Optional[str] = None) -> None:
    """Install the Settings every other singleton is built from."""
    _singletons["settings"] = settings
    _singletons["config_path"] = config_path


def get_config_path() -> Optional[str]:
    """Settings file given on the command line, None when resolved by hostname."""
    return _singletons.get("config_path")


def get_settings() -> Settings:
    """Get Settings singleton instance."""
    if "settings" not in _singletons:
        _singletons["settings"] = Settings()
    return _singletons["settings"]


def get_environment_probe() -> EnvironmentProbe:
    if "environment_probe" not in _singletons:
        _singletons["environment_probe"] = EnvironmentProbe.create_default(
            timeout=get_settings().probe_timeout_seconds
        )
    return _singletons["environment_probe"]


def get_network_mount_service() -> NetworkMountService:
    if "network_mount_service" not in _singletons:
        _singletons["network_mount_service"] = NetworkMountService.from_settings(
            get_settings()
        )
    return _singletons["network_mount_service"]


def get_notifier() -> NotificationSink:
    if "notifier" not in _singletons:
        if command_available("notify-send"):
            _singletons["notifier"] = DesktopNotifier()
        else:
            _singletons["notifier"] = LogNotifier()
    return _singletons["notifier"]


def get_reconciliation_loop() -> ReconciliationLoop:
    if "reconciliation_loop" not in _singletons:
        _singletons["reconciliation_loop"] = ReconciliationLoop(
            settings=get_settings(),
            probe=get_environment_probe(),
            mount_service=get_network_mount_service(),
            notifier=get_notifier(),
        )
    return _singletons["reconciliation_loop"]


def set_singleton(name: str, instance: Optional[Any]) -> None:
    """Override a singleton, e.g. with a fake in tests."""
    if instance is None:
        _singletons.pop(name, None)
    else:
        _singletons[name] = instance


def reset_singletons() -> None:
    """Reset all singletons (useful for testing)."""
    _singletons.clear()
