"""
Data structures for cargo parser.

This module contains the core data structures used to represent source locations,
diagnostic messages, panics and the result of parsing one build output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import MessageKind, MessageSeverity
from .paths import is_rust_source_link, is_synthetic_buffer


@dataclass
class Location:
    """A source range. A missing file means there is no usable location."""

    file: Optional[str]
    line: int
    line_end: Optional[int] = None
    col: int = 1
    col_end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.line_end is None:
            self.line_end = self.line
        if self.col_end is None:
            # Highlight a single character unless told otherwise
            self.col_end = self.col + 1

    @property
    def is_usable(self) -> bool:
        """True if the location points at a real file of the project."""
        if not self.file:
            return False
        return not (is_synthetic_buffer(self.file) or is_rust_source_link(self.file))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Location to a dictionary."""
        return {
            "file": self.file,
            "line": self.line,
            "line_end": self.line_end,
            "col": self.col,
            "col_end": self.col_end,
        }

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.col}"


@dataclass
class MessageExtra:
    """Values collected while a message is built, merged into the text by the normalizer."""

    span_label: Optional[str] = None
    error_code: Optional[str] = None


@dataclass
class DiagnosticMessage:
    """A compiler diagnostic together with its notes, help and explanations."""

    text: str
    kind: MessageKind
    severity: MessageSeverity
    location: Optional[Location] = None
    trace: List[DiagnosticMessage] = field(default_factory=list)
    extra: Optional[MessageExtra] = None
    order: Optional[int] = None
    url: Optional[str] = None

    @classmethod
    def from_level(
        cls,
        level: str,
        text: str,
        location: Optional[Location] = None,
        *,
        with_extra: bool = True,
    ) -> DiagnosticMessage:
        """Create a message from a raw compiler level token."""
        return cls(
            text=text,
            kind=MessageKind.from_level(level),
            severity=MessageSeverity.from_level(level),
            location=location,
            extra=MessageExtra() if with_extra else None,
        )

    @property
    def has_usable_location(self) -> bool:
        return self.location is not None and self.location.is_usable

    def add_trace(self, entry: DiagnosticMessage) -> DiagnosticMessage:
        """Append an entry to the trace and return it."""
        self.trace.append(entry)
        return entry

    def to_dict(self) -> Dict[str, Any]:
        """Convert the DiagnosticMessage to a dictionary."""
        result: Dict[str, Any] = {
            "text": self.text,
            "kind": self.kind.value,
            "severity": self.severity.value,
        }
        if self.location is not None:
            result["location"] = self.location.to_dict()
        if self.url is not None:
            result["url"] = self.url
        if self.trace:
            result["trace"] = [entry.to_dict() for entry in self.trace]
        return result


@dataclass
class PanicRecord:
    """A runtime panic found in the build output."""

    id: str
    message: str
    file: Optional[str]
    line: int
    file_path: Optional[str] = None
    stack: Optional[str] = None

    def to_message(self) -> DiagnosticMessage:
        """Represent the panic as a diagnostic with the backtrace as its trace."""
        msg = DiagnosticMessage(
            text=self.message,
            kind=MessageKind.PANIC,
            severity=MessageSeverity.ERROR,
            location=Location(file=self.file_path or self.file, line=self.line),
        )
        if self.stack:
            msg.add_trace(
                DiagnosticMessage(
                    text=self.stack,
                    kind=MessageKind.STACK,
                    severity=MessageSeverity.INFO,
                )
            )
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert the PanicRecord to a dictionary."""
        return {
            "id": self.id,
            "message": self.message,
            "file": self.file,
            "file_path": self.file_path,
            "line": self.line,
            "stack": self.stack,
        }


@dataclass
class Notification:
    """A standalone notification for things that cannot be shown inline."""

    severity: MessageSeverity
    text: str
    detail: Optional[str] = None
    stack: Optional[str] = None
    link: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Notification to a dictionary."""
        result: Dict[str, Any] = {"severity": self.severity.value, "text": self.text}
        for key in ("detail", "stack", "link"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass
class CargoOutput:
    """Data class representing the structured result of one build output."""

    work_dir: Optional[str] = None
    messages: List[DiagnosticMessage] = field(default_factory=list)
    panics: List[PanicRecord] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)
    hidden_panics: int = 0

    def add_message(self, message: DiagnosticMessage) -> None:
        """Add a message to the output."""
        self.messages.append(message)

    def get_messages_by_severity(
        self, severity: MessageSeverity
    ) -> List[DiagnosticMessage]:
        """Get all messages with the specified severity."""
        return [msg for msg in self.messages if msg.severity == severity]

    @property
    def errors(self) -> List[DiagnosticMessage]:
        """Get all error messages."""
        return self.get_messages_by_severity(MessageSeverity.ERROR)

    @property
    def warnings(self) -> List[DiagnosticMessage]:
        """Get all warning messages."""
        return self.get_messages_by_severity(MessageSeverity.WARNING)

    @property
    def infos(self) -> List[DiagnosticMessage]:
        """Get all info messages."""
        return self.get_messages_by_severity(MessageSeverity.INFO)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the CargoOutput to a dictionary."""
        return {
            "work_dir": self.work_dir,
            "messages": [msg.to_dict() for msg in self.messages],
            "panics": [panic.to_dict() for panic in self.panics],
            "notifications": [n.to_dict() for n in self.notifications],
            "hidden_panics": self.hidden_panics,
        }
