"""
Console formatter widget.

This module provides functionality to format parsed cargo output for console display
with colorized output based on message severity.
"""

from typing import List

from termcolor import colored

from ..core.data_structures import CargoOutput, DiagnosticMessage, Notification
from ..core.enums import MessageSeverity


class ConsoleFormatterWidget:
    """Widget for formatting cargo diagnostics for console display."""

    def __init__(self):
        """Initialize the console formatter widget."""
        self.color_map = {
            MessageSeverity.ERROR: "red",
            MessageSeverity.WARNING: "yellow",
            MessageSeverity.INFO: "blue",
        }

    def format_summary(self, cargo_output: CargoOutput) -> str:
        """Format a summary of the parsed output."""
        lines = [
            "\nCargo Output Summary:",
            f"Working Directory: {cargo_output.work_dir or '.'}",
            f"Total Messages: {len(cargo_output.messages)}",
            f"Errors: {len(cargo_output.errors)}",
            f"Warnings: {len(cargo_output.warnings)}",
            f"Info: {len(cargo_output.infos)}",
            f"Panics: {len(cargo_output.panics)}",
        ]
        return "\n".join(lines)

    def format_message(self, msg: DiagnosticMessage, colorize: bool = True) -> List[str]:
        """Format a diagnostic and its trace, one string per output line."""
        location = f"{msg.location}: " if msg.location else ""
        head = f"{msg.kind.value.upper()}: {location}{msg.text}"
        if colorize:
            head = colored(head, self.color_map.get(msg.severity, "white"))

        lines = [head]
        for entry in msg.trace:
            entry_location = f" ({entry.location})" if entry.location else ""
            text = entry.url or entry.text
            first, *rest = text.splitlines() or [""]
            lines.append(f"    {entry.kind.value.lower()}: {first}{entry_location}")
            lines.extend(f"      {extra}" for extra in rest)
        return lines

    def format_notification(
        self, notification: Notification, colorize: bool = True
    ) -> str:
        """Format a standalone notification."""
        text = f"[{notification.severity.value}] {notification.text}"
        if notification.link:
            text += f" -> {notification.link}"
        if colorize:
            text = colored(text, self.color_map.get(notification.severity, "white"))
        return text

    def get_formatted_output(
        self, cargo_output: CargoOutput, colorize: bool = False
    ) -> str:
        """Get the whole output as a string."""
        lines = [self.format_summary(cargo_output), "\nMessages:"]

        for msg in cargo_output.messages:
            lines.extend(self.format_message(msg, colorize))

        if cargo_output.panics:
            lines.append("\nPanics:")
            for panic in cargo_output.panics:
                lines.extend(self.format_message(panic.to_message(), colorize))

        if cargo_output.notifications:
            lines.append("\nNotifications:")
            for notification in cargo_output.notifications:
                lines.append(self.format_notification(notification, colorize))

        return "\n".join(lines)

    def colorize_output(self, cargo_output: CargoOutput) -> None:
        """Print the output with colors based on message severity."""
        print(self.get_formatted_output(cargo_output, colorize=True))
