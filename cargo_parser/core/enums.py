"""
Enums for cargo parser.

This module contains all the enumeration types used throughout the cargo parser system.
"""

from enum import Enum, StrEnum, auto


class MessageSeverity(StrEnum):
    """Coarse severity used to group diagnostics for display."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def from_level(cls, level: str) -> "MessageSeverity":
        """Convert a compiler level token (error, warning, note, help) to a severity."""
        mapping = {
            "error": cls.ERROR,
            "warning": cls.WARNING,
            "note": cls.INFO,
            "help": cls.INFO,
        }
        # Unknown levels are reported as errors so they stay visible
        return mapping.get(level, cls.ERROR)

    @classmethod
    def from_string(cls, severity: str) -> "MessageSeverity":
        """Convert a severity name to enum value."""
        normalized = severity.lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported severity: {severity}")


class MessageKind(StrEnum):
    """Kind of a diagnostic message or of one of its trace entries."""

    ERROR = "Error"
    WARNING = "Warning"
    NOTE = "Note"
    HELP = "Help"
    PANIC = "Panic"
    EXPLANATION = "Explanation"
    STACK = "Stack"
    MACRO = "Macro"

    @classmethod
    def from_level(cls, level: str) -> "MessageKind":
        """Convert a compiler level token to a message kind."""
        mapping = {
            "error": cls.ERROR,
            "warning": cls.WARNING,
            "note": cls.NOTE,
            "help": cls.HELP,
        }
        return mapping.get(level, cls.ERROR)


class BacktraceType(StrEnum):
    """Verbosity of the stack backtraces attached to panics."""

    OFF = "Off"
    COMPACT = "Compact"
    FULL = "Full"

    @classmethod
    def from_string(cls, name: str) -> "BacktraceType":
        """Convert a case-insensitive name to enum value."""
        normalized = name.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unsupported backtrace type: {name}. Valid types: {valid}")


class OutputFormat(Enum):
    """Enumeration of supported export formats."""

    JSON = auto()
    CSV = auto()

    @classmethod
    def from_string(cls, format_name: str) -> "OutputFormat":
        """Convert string format name to enum value."""
        name = format_name.upper()
        if name in cls.__members__:
            return cls[name]
        raise ValueError(f"Unsupported output format: {format_name}")


class Disposition(Enum):
    """What happens to a normalized message."""

    DISPLAY = auto()  # Has a usable location, goes to the diagnostics list
    NOTIFY = auto()  # No location, shown as a standalone notification
    DROP = auto()  # Build summary noise, discarded
