"""
JSON rustc output parser.

This module parses diagnostics emitted one JSON object per line, either by
``rustc --error-format=json`` directly or wrapped by ``cargo --message-format=json``.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.data_structures import DiagnosticMessage, Location
from ..core.enums import MessageKind, MessageSeverity
from ..core.errors import JsonMessageError
from ..core.paths import is_synthetic_buffer
from .base import ParserState, ParseStep
from .std import EXPLANATION_ORDER


class RustcSpanText(BaseModel):
    """One line of source text covered by a span."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str
    highlight_start: int = 0
    highlight_end: int = 0


class RustcSpan(BaseModel):
    """A source range referenced by a diagnostic."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_name: str
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    is_primary: bool = False
    label: Optional[str] = None
    text: List[RustcSpanText] = Field(default_factory=list)
    expansion: Optional[RustcExpansion] = None

    @property
    def location(self) -> Location:
        return Location(
            file=self.file_name,
            line=self.line_start,
            line_end=self.line_end,
            col=self.column_start,
            col_end=self.column_end,
        )


class RustcExpansion(BaseModel):
    """The macro invocation a span was expanded from."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    span: RustcSpan
    macro_decl_name: Optional[str] = None


class RustcCode(BaseModel):
    """Error code with its long-form explanation."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    code: str
    explanation: Optional[str] = None


class RustcDiagnostic(BaseModel):
    """A compiler diagnostic as serialized by rustc."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str
    level: str
    code: Optional[RustcCode] = None
    spans: List[RustcSpan] = Field(default_factory=list)
    children: List[RustcDiagnostic] = Field(default_factory=list)
    rendered: Optional[str] = None


RustcSpan.model_rebuild()
RustcExpansion.model_rebuild()
RustcDiagnostic.model_rebuild()


class JsonParser:
    """Parser for line-delimited JSON diagnostics."""

    def try_parse(
        self, lines: Sequence[str], index: int, state: ParserState
    ) -> ParseStep:
        """Parse the JSON object on one line. Non-diagnostic objects are consumed silently."""
        line = lines[index]
        if not line.startswith("{"):
            return ParseStep()

        step = ParseStep(consumed=1)
        message = self.parse_message(line)
        if message is not None:
            step.messages.append(message)
        return step

    def parse_message(self, line: str) -> Optional[DiagnosticMessage]:
        """
        Build a message from one JSON line.

        Returns:
            The message, or None if the object is not a compiler diagnostic.

        Raises:
            JsonMessageError: If the line is not valid JSON or the diagnostic is malformed.
        """
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise JsonMessageError(f"Invalid JSON diagnostic: {e}", line) from e

        payload = self._unwrap(data)
        if payload is None:
            logger.debug("Ignoring JSON object without a compiler message")
            return None

        try:
            diagnostic = RustcDiagnostic.model_validate(payload)
        except ValidationError as e:
            raise JsonMessageError(
                f"Malformed compiler message: {e}", line, error_code="INVALID_MESSAGE"
            ) from e

        return self.build_message(diagnostic)

    @staticmethod
    def _unwrap(data: Any) -> Optional[dict]:
        if not isinstance(data, dict):
            return None
        if "reason" in data:
            # cargo --message-format=json wraps diagnostics, other reasons are build status
            if data["reason"] == "compiler-message" and isinstance(
                data.get("message"), dict
            ):
                return data["message"]
            return None
        if "level" not in data or "message" not in data:
            return None
        return data

    def build_message(self, diagnostic: RustcDiagnostic) -> DiagnosticMessage:
        """Convert a validated diagnostic and its children into a message tree."""
        msg = DiagnosticMessage.from_level(diagnostic.level, diagnostic.message)
        self._parse_spans(diagnostic.spans, msg)

        for child in diagnostic.children:
            sub = DiagnosticMessage.from_level(child.level, child.message)
            self._parse_spans(child.spans, sub)
            msg.add_trace(sub)

        if diagnostic.code is not None:
            if diagnostic.code.code:
                msg.extra.error_code = diagnostic.code.code
            if diagnostic.code.explanation:
                msg.add_trace(
                    DiagnosticMessage(
                        text=diagnostic.code.explanation,
                        kind=MessageKind.EXPLANATION,
                        severity=MessageSeverity.INFO,
                        order=EXPLANATION_ORDER,
                    )
                )
        return msg

    def _parse_spans(self, spans: Sequence[RustcSpan], msg: DiagnosticMessage) -> None:
        for span in spans:
            self.resolve_span(span, msg, span.is_primary)

    def resolve_span(
        self, span: RustcSpan, msg: DiagnosticMessage, primary: bool
    ) -> bool:
        """
        Copy location data from a span into ``msg``.

        Spans inside synthetic buffers are replaced by the span of the macro
        invocation they were expanded from, as deep as the chain goes.

        Returns:
            True if a span in a real file was found.
        """
        if span.is_primary:
            if span.label and msg.extra is not None:
                msg.extra.span_label = span.label
            if is_synthetic_buffer(span.file_name) and span.text:
                msg.add_trace(
                    DiagnosticMessage(
                        text=span.text[0].text,
                        kind=MessageKind.MACRO,
                        severity=MessageSeverity.INFO,
                    )
                )

        if not is_synthetic_buffer(span.file_name):
            if not primary and span.label:
                msg.add_trace(
                    DiagnosticMessage(
                        text=span.label,
                        kind=MessageKind.NOTE,
                        severity=MessageSeverity.INFO,
                        location=span.location,
                    )
                )
            if primary or msg.location is None:
                msg.location = span.location
            return True

        if span.expansion is not None:
            return self.resolve_span(span.expansion.span, msg, primary)
        return False
