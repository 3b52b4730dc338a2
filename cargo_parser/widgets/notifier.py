"""
Standalone notifications.

Diagnostics without a usable location, panics and the hidden-panics summary
cannot be shown inline in an editor. They are turned into Notification
records and handed to a host-provided notifier.
"""

from typing import List, Optional, Protocol

from loguru import logger

from ..core.data_structures import DiagnosticMessage, Notification, PanicRecord
from ..core.enums import MessageSeverity


class Notifier(Protocol):
    """Protocol for hosts that display notifications."""

    def notify(self, notification: Notification) -> None:
        """Show a notification."""
        ...


class NotificationCollector:
    """Notifier that keeps everything it receives."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


class LoguruNotifier:
    """Notifier that writes notifications to the log."""

    _LEVELS = {
        MessageSeverity.ERROR: "ERROR",
        MessageSeverity.WARNING: "WARNING",
        MessageSeverity.INFO: "INFO",
    }

    def notify(self, notification: Notification) -> None:
        text = notification.text
        if notification.detail:
            text += f"\n{notification.detail}"
        if notification.stack:
            text += f"\n{notification.stack}"
        logger.log(self._LEVELS[notification.severity], text)


def message_notification(msg: DiagnosticMessage) -> Notification:
    """Notification for a diagnostic that has no usable location."""
    return Notification(severity=msg.severity, text=msg.text)


def panic_notification(panic: PanicRecord) -> Notification:
    """Notification for a reported panic, linked to its file when it was resolved."""
    return Notification(
        severity=MessageSeverity.ERROR,
        text=f"A thread panicked at line {panic.line} in {panic.file}",
        detail=panic.message,
        stack=panic.stack,
        link=panic.file_path,
    )


def hidden_panics_notification(hidden: int) -> Optional[Notification]:
    """Summary for panics beyond the display limit."""
    if hidden <= 0:
        return None
    if hidden == 1:
        text = "One more panic is hidden"
    else:
        text = f"{hidden} more panics are hidden"
    return Notification(severity=MessageSeverity.ERROR, text=text)
