"""Notification sinks - fire-and-forget presentation of user-facing events."""

import logging
from abc import ABC, abstractmethod

from ...utils.process_utils import command_available, run_command


class NotificationSink(ABC):
    """Best-effort notifier. Implementations must never raise."""

    @abstractmethod
    async def notify(self, title: str, body: str) -> None:
        pass


class DesktopNotifier(NotificationSink):
    """Desktop notifications through notify-send (libnotify)."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    async def notify(self, title: str, body: str) -> None:
        if not command_available("notify-send"):
            logging.debug(f"notify-send not available, notification dropped: {title}")
            return
        try:
            result = await run_command(["notify-send", title, body], self._timeout)
            if result is None or not result.ok:
                logging.debug(f"Desktop notification failed: {title}")
        except Exception as e:
            logging.debug(f"Desktop notification error ignored: {e}")


class LogNotifier(NotificationSink):
    """Writes notifications to the log only, for headless sessions."""

    async def notify(self, title: str, body: str) -> None:
        logging.info(f"Notification: {title} - {body}")
