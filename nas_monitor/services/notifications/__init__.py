from .notification_sink import DesktopNotifier, LogNotifier, NotificationSink

__all__ = ["NotificationSink", "DesktopNotifier", "LogNotifier"]
