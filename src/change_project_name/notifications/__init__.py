"""Progress notification providers."""

from change_project_name.notifications.base import (
    ConsoleNotifier,
    Notification,
    Notifier,
    NullNotifier,
    RecordingNotifier,
)

__all__ = [
    "ConsoleNotifier",
    "Notification",
    "Notifier",
    "NullNotifier",
    "RecordingNotifier",
]
