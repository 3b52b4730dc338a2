"""
Base parser interface.

This module defines the protocol that all line parsers must implement, the
partial result they return and the scan state of one build output pass.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from ..core.data_structures import DiagnosticMessage, PanicRecord


@dataclass
class ParseStep:
    """Outcome of one parse attempt. ``consumed == 0`` means no match."""

    consumed: int = 0
    messages: List[DiagnosticMessage] = field(default_factory=list)
    open_sub: Optional[DiagnosticMessage] = None
    panic: Optional[PanicRecord] = None

    @property
    def matched(self) -> bool:
        return self.consumed > 0


@dataclass
class ParserState:
    """Mutable scan state owned by the dispatch loop for a single pass."""

    work_dir: Optional[str] = None
    main: Optional[DiagnosticMessage] = None
    sub: Optional[DiagnosticMessage] = None
    panics_seen: int = 0

    def close(self) -> None:
        """Forget the currently open main message and submessage."""
        self.main = None
        self.sub = None


class LineParser(Protocol):
    """Protocol defining interface for build output line parsers."""

    def try_parse(
        self, lines: Sequence[str], index: int, state: ParserState
    ) -> ParseStep:
        """Try to parse the lines starting at ``index``."""
        ...
