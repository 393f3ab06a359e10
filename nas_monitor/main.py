import argparse
import asyncio
import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from .api import status
from .config import Settings
from .core.exceptions import InstanceLockError
from .dependencies import (
    configure,
    get_config_path,
    get_network_mount_service,
    get_reconciliation_loop,
    get_settings,
)
from .logging_config import setup_logging
from .utils.instance_lock import InstanceLock


def log_configuration(settings: Settings, config_path: Optional[str] = None) -> None:
    config_info = settings.config_file_info
    source = config_path or config_info["active_config_file"]
    logging.info(f"Configuration loaded from: {source}")
    logging.info(f"Running on hostname: {config_info['hostname']}")

    home_networks = ", ".join(repr(n) for n in sorted(settings.home_network_set)) or "(none)"
    devices = ", ".join(t.key for t in settings.mount_targets) or "(none)"
    logging.info(f"  Home networks: {home_networks}")
    logging.info(f"  NAS devices: {devices}")
    logging.info(
        f"  Intervals: AC({settings.home_ac_interval}) Battery({settings.home_battery_interval}) "
        f"Away-AC({settings.away_ac_interval}) Away-Battery({settings.away_battery_interval})"
    )
    if settings.circuit_breaker_enabled:
        logging.info(
            f"  Circuit breaker: {settings.max_failed_attempts} failures, "
            f"{settings.failed_target_cooldown_seconds}s cooldown"
        )

    platform_info = get_network_mount_service().get_platform_info()
    logging.info(f"  Mount backend: {platform_info['platform']}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = get_settings()
    setup_logging(settings)
    log_configuration(settings, get_config_path())

    loop = get_reconciliation_loop()
    await loop.start(initial_delay=settings.startup_delay_seconds)

    yield

    logging.info("NAS monitor stopping")
    await loop.stop()


app = FastAPI(
    title="NAS Monitor",
    description="Power-aware NAS mount daemon status API",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(status.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "nas-monitor"}


async def run_daemon(settings: Settings, *, once: bool = False, startup_delay: float = 0) -> None:
    loop = get_reconciliation_loop()

    if once:
        report = await loop.run_cycle()
        outcomes = ", ".join(f"{key}={outcome.value}" for key, outcome in report.outcomes.items())
        logging.info(
            f"Single check complete: {report.snapshot.network_label}, "
            f"{report.snapshot.power_label}, interval {report.check_interval_seconds}s"
            + (f", targets: {outcomes}" if outcomes else "")
        )
        return

    task = asyncio.create_task(loop.run_forever(initial_delay=startup_delay))
    event_loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        event_loop.add_signal_handler(sig, task.cancel)

    try:
        await task
    except asyncio.CancelledError:
        pass
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            event_loop.remove_signal_handler(sig)
        logging.info("NAS monitor stopping")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nas-monitor",
        description="Keeps NAS shares mounted while on a home network, power-aware",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file to load (default: host-specific file in ~/.config/nas-monitor)",
    )
    parser.add_argument(
        "--no-startup-delay",
        action="store_true",
        help="Start checking immediately instead of waiting for the desktop session",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single reconciliation cycle and exit",
    )
    parser.add_argument(
        "--api",
        action="store_true",
        help="Serve the localhost status API (also enabled by status_api_enabled)",
    )
    return parser


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings(_env_file=config_path)
    return Settings()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ValidationError as e:
        print(f"ERROR: Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    configure(settings, args.config)
    setup_logging(settings)
    logging.info("Starting power-aware NAS monitor")

    lock = InstanceLock(settings.lock_file_path)
    try:
        lock.acquire()
    except InstanceLockError as e:
        logging.error(str(e))
        return 1

    try:
        if (args.api or settings.status_api_enabled) and not args.once:
            if args.no_startup_delay:
                settings = settings.model_copy(update={"startup_delay_seconds": 0})
                configure(settings, args.config)
            uvicorn.run(
                app,
                host=settings.status_api_host,
                port=settings.status_api_port,
                log_level="warning",
            )
        else:
            log_configuration(settings, args.config)
            startup_delay = 0 if args.no_startup_delay else settings.startup_delay_seconds
            asyncio.run(run_daemon(settings, once=args.once, startup_delay=startup_delay))
    finally:
        lock.release()

    return 0


if __name__ == "__main__":
    sys.exit(main())
