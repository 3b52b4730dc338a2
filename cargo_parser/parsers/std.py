"""
Human-readable rustc output parser.

This module parses the default (non-JSON) diagnostic format of rustc and cargo:

    error[E0023]: Some error message
      --> src/main.rs:157:12
       |
    157|     some code here
       |            ^^^^ additional text
       = note: additional note

as well as the single-line format used by old toolchains and inside macros:

    <std macros>:1:33: 1:58 error: Some message
    src/main.rs:157:12: 157:18 warning: Some message
"""

import re
from typing import Optional, Sequence, Tuple

from loguru import logger

from ..core.data_structures import DiagnosticMessage, Location
from ..core.enums import MessageKind, MessageSeverity
from .base import ParserState, ParseStep

ERROR_INDEX_URL = "https://doc.rust-lang.org/error-index.html#{code}"

# Trace entries carrying an order are sorted after everything else
EXPLANATION_ORDER = 100

_TOP_LEVEL_SEVERITIES = (MessageSeverity.ERROR, MessageSeverity.WARNING)


class StdParser:
    """Parser for the human-readable diagnostic format."""

    def __init__(self):
        """Initialize the human-readable output parser."""
        self.header_pattern = re.compile(
            r"^(?P<level>error|warning|note|help)(?:\[(?P<code>E\d+)\])?: (?P<message>.*)"
        )
        self.pointer_pattern = re.compile(
            r"^\s*--> (?P<file>.+):(?P<line>\d+):(?P<col>\d+)"
        )
        self.inline_pattern = re.compile(
            r"^\s*(?P<file>.+?):(?P<line>\d+):(?P<col>\d+):"
            r"(?: (?P<line_end>\d+):(?P<col_end>\d+):?)?"
            r" (?P<level>error|warning|note|help):\s*(?P<message>.*)"
        )
        self.bare_pattern = re.compile(
            r"^\s*(?P<level>error|warning|note|help)(?:\[(?P<code>E\d+)\])?:\s*(?P<message>.*)"
        )
        self.code_pattern = re.compile(r"^\s*(?P<line_no>\d*)\s*\|.*")
        self.span_pattern = re.compile(
            r"^[\s\d]*\|(?P<indent>\s+)(?P<light>[\^-]+)\s*(?P<label>.*)"
        )
        self.aux_pattern = re.compile(r"^\s*= (?P<level>note|help): (?P<message>.+)")
        # Source echo of toolchains prior to 1.12
        self.legacy_source_pattern = re.compile(r"^[^:]*:(\d+)\s+.*")
        self.legacy_caret_pattern = re.compile(r"^\s+\^.*")

    def try_parse(
        self, lines: Sequence[str], index: int, state: ParserState
    ) -> ParseStep:
        """
        Parse one top-level diagnostic block with all of its submessages.

        A note or help block that does not directly follow its parent attaches
        to the main message still open in ``state``.
        """
        step = ParseStep()
        step.consumed = self._parse_block(lines, index, step, None)
        if not step.matched and state.main is not None:
            step.consumed = self.parse_sub_block(lines, index, step, state.main)
        return step

    def parse_sub_block(
        self,
        lines: Sequence[str],
        index: int,
        step: ParseStep,
        parent: DiagnosticMessage,
    ) -> int:
        """Parse a note or help block into the trace of ``parent``."""
        return self._parse_block(lines, index, step, parent)

    def parse_header(
        self, lines: Sequence[str], i: int
    ) -> Optional[Tuple[DiagnosticMessage, int]]:
        """
        Detect a message header.

        Returns:
            The new message and the number of lines the header spans, or None.
        """
        line = lines[i]

        if match := self.header_pattern.match(line):
            if i + 1 < len(lines) and (
                pointer := self.pointer_pattern.match(lines[i + 1])
            ):
                msg = DiagnosticMessage.from_level(
                    match.group("level"),
                    match.group("message"),
                    Location(
                        file=pointer.group("file"),
                        line=int(pointer.group("line")),
                        col=int(pointer.group("col")),
                    ),
                )
                self._attach_error_code(msg, match.group("code"))
                return msg, 2

        if match := self.inline_pattern.match(line):
            line_no = int(match.group("line"))
            col = int(match.group("col"))
            line_end = match.group("line_end")
            col_end = match.group("col_end")
            msg = DiagnosticMessage.from_level(
                match.group("level"),
                match.group("message"),
                Location(
                    file=match.group("file"),
                    line=line_no,
                    line_end=int(line_end) if line_end else None,
                    col=col,
                    col_end=int(col_end) if col_end else None,
                ),
            )
            return msg, 1

        if match := self.bare_pattern.match(line):
            msg = DiagnosticMessage.from_level(
                match.group("level"), match.group("message")
            )
            if match.group("code"):
                msg.extra.error_code = match.group("code")
            return msg, 1

        return None

    def _attach_error_code(self, msg: DiagnosticMessage, code: Optional[str]) -> None:
        if not code:
            return
        msg.extra.error_code = code
        msg.add_trace(
            DiagnosticMessage(
                text=f"Explain error {code}",
                kind=MessageKind.EXPLANATION,
                severity=MessageSeverity.INFO,
                order=EXPLANATION_ORDER,
                url=ERROR_INDEX_URL.format(code=code),
            )
        )

    def parse_code_block(
        self,
        lines: Sequence[str],
        i: int,
        msg: DiagnosticMessage,
        owner: DiagnosticMessage,
        step: ParseStep,
    ) -> int:
        """
        Parse the source excerpt that follows a header.

        Span information refines ``msg``; secondary spans and ``= note:`` lines
        are appended to the trace of ``owner``.

        Returns:
            The number of parsed lines.
        """
        l = i
        span_line_no: Optional[int] = None
        while l < len(lines) and lines[l] != "":
            line = lines[l]
            if code_match := self.code_pattern.match(line):
                if code_match.group("line_no"):
                    span_line_no = int(code_match.group("line_no"))
                elif span_match := self.span_pattern.match(line):
                    self._apply_span(span_match, msg, owner, span_line_no)
            elif aux_match := self.aux_pattern.match(line):
                step.open_sub = owner.add_trace(
                    DiagnosticMessage.from_level(
                        aux_match.group("level"),
                        aux_match.group("message"),
                        with_extra=False,
                    )
                )
            elif line.startswith("..."):
                # Gaps in the source code are displayed this way
                pass
            elif not (
                self.legacy_source_pattern.match(line)
                or self.legacy_caret_pattern.match(line)
            ):
                break
            l += 1

        return l - i

    def _apply_span(
        self,
        span_match: "re.Match[str]",
        msg: DiagnosticMessage,
        owner: DiagnosticMessage,
        span_line_no: Optional[int],
    ) -> None:
        start_col = len(span_match.group("indent"))
        light = span_match.group("light")
        label = span_match.group("label") or None

        if light[0] == "^":
            # Primary span: refine the highlighted range of the message itself
            if msg.location is not None:
                msg.location.col_end = msg.location.col + len(light)
            if msg.extra is not None:
                msg.extra.span_label = label
        elif label:
            location = None
            if msg.location is not None:
                line_no = span_line_no if span_line_no is not None else msg.location.line
                location = Location(
                    file=msg.location.file,
                    line=line_no,
                    col=start_col,
                    col_end=start_col + len(light),
                )
            owner.add_trace(
                DiagnosticMessage(
                    text=label,
                    kind=MessageKind.NOTE,
                    severity=MessageSeverity.INFO,
                    location=location,
                )
            )

    def _parse_block(
        self,
        lines: Sequence[str],
        i: int,
        step: ParseStep,
        parent: Optional[DiagnosticMessage],
    ) -> int:
        header = self.parse_header(lines, i)
        if header is None:
            return 0
        msg, header_qty = header

        # Only errors and warnings open a message, only notes and help attach to one
        is_top_level = msg.severity in _TOP_LEVEL_SEVERITIES
        if (parent is None) != is_top_level:
            return 0

        l = i + header_qty
        if parent is None:
            logger.debug(f"Found {msg.kind} at line {i + 1}: {msg.text}")
            step.messages.append(msg)
        else:
            step.open_sub = parent.add_trace(msg)

        l += self.parse_code_block(lines, l, msg, parent or msg, step)

        if parent is None:
            while l < len(lines):
                sub_qty = self._parse_block(lines, l, step, msg)
                if sub_qty == 0:
                    break
                l += sub_qty

        return l - i
