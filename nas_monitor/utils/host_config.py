"""
Host-specific configuration file resolution.

Handles selection of the settings file the daemon loads at startup.
"""

import logging
import os
import socket
from pathlib import Path

CONFIG_ENV_VAR = "NAS_MONITOR_CONFIG"


def get_config_directory() -> Path:
    """Return the per-user configuration directory (~/.config/nas-monitor)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / "nas-monitor"


def get_hostname() -> str:
    """Get the current hostname (without domain)."""
    return socket.gethostname().split(".")[0]


def get_hostname_settings_file() -> str:
    """
    Get the settings file for this host.

    Logic:
    1. $NAS_MONITOR_CONFIG wins if set
    2. {config_dir}/{hostname}-settings.env if it exists
    3. {config_dir}/settings.env otherwise (may not exist yet)

    Returns:
        str: Path to the settings file to load
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return override

    config_dir = get_config_directory()
    host_settings = config_dir / f"{get_hostname()}-settings.env"
    if host_settings.exists():
        logging.debug(f"Using host-specific configuration: {host_settings}")
        return str(host_settings)

    return str(config_dir / "settings.env")


def list_all_settings_files() -> list[str]:
    """List all settings files (base + host-specific) in the config directory."""
    config_dir = get_config_directory()
    if not config_dir.exists():
        return []

    settings_files = []
    if (config_dir / "settings.env").exists():
        settings_files.append(str(config_dir / "settings.env"))
    for file_path in sorted(config_dir.glob("*-settings.env")):
        settings_files.append(str(file_path))
    return settings_files
