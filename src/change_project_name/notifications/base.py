"""Progress notification interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

NotificationLevel = Literal["info", "success", "warning", "error"]


class Notifier(ABC):
    """Abstract base class for rename progress consumers."""

    @abstractmethod
    def notify(
        self,
        title: str,
        message: str = "",
        level: NotificationLevel = "info",
    ) -> None:
        """Emit a notification.

        Args:
            title: One-line summary
            message: Optional detail shown below the title
            level: Severity level
        """

    def info(self, title: str, message: str = "") -> None:
        """Send an info notification."""
        self.notify(title, message, "info")

    def success(self, title: str, message: str = "") -> None:
        """Send a success notification."""
        self.notify(title, message, "success")

    def warning(self, title: str, message: str = "") -> None:
        """Send a warning notification."""
        self.notify(title, message, "warning")

    def error(self, title: str, message: str = "") -> None:
        """Send an error notification."""
        self.notify(title, message, "error")


class ConsoleNotifier(Notifier):
    """Console notifier using Rich."""

    STYLES = {
        "info": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }
    ICONS = {
        "info": "i",
        "success": "+",
        "warning": "!",
        "error": "x",
    }

    def __init__(self, console: Console | None = None) -> None:
        from rich.console import Console

        self.console = console or Console()

    def notify(
        self,
        title: str,
        message: str = "",
        level: NotificationLevel = "info",
    ) -> None:
        """Print notification to console with appropriate styling."""
        style = self.STYLES.get(level, "blue")
        icon = self.ICONS.get(level, "i")

        self.console.print(f"[{style}]\\[{icon}] {escape(title)}[/{style}]", highlight=False)
        if message:
            self.console.print(f"    {escape(message)}", highlight=False)


class NullNotifier(Notifier):
    """No-op notifier for testing or quiet runs."""

    def notify(
        self,
        title: str,
        message: str = "",
        level: NotificationLevel = "info",
    ) -> None:
        """Do nothing."""


@dataclass(frozen=True)
class Notification:
    """A captured notification."""

    title: str
    message: str
    level: NotificationLevel


class RecordingNotifier(Notifier):
    """Keeps every notification in order, for programmatic consumers."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(
        self,
        title: str,
        message: str = "",
        level: NotificationLevel = "info",
    ) -> None:
        self.notifications.append(Notification(title, message, level))

    @property
    def titles(self) -> list[str]:
        return [n.title for n in self.notifications]
