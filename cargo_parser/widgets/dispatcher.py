"""
Build output dispatch loop.

This module walks the lines of one build output, hands each position to the
panic parser and to the parser of the configured dialect, keeps track of the
open message and submessage, and finally runs the normalizer over everything
that was collected.
"""

from typing import List, Optional

from loguru import logger

from ..core.config import PANICS_LIMIT, ParserConfig
from ..core.data_structures import (
    CargoOutput,
    DiagnosticMessage,
    Notification,
    PanicRecord,
)
from ..parsers.base import LineParser, ParserState
from ..parsers.json_parser import JsonParser
from ..parsers.panic import PanicParser
from ..parsers.std import StdParser
from .normalizer import DiagnosticNormalizer
from .notifier import Notifier, hidden_panics_notification, panic_notification


class OutputDispatcher:
    """Turns raw cargo output into normalized diagnostics, one build at a time."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.config = config or ParserConfig()
        self.notifier = notifier
        self.panic_parser = PanicParser(self.config.backtrace_type)
        self.dialect_parser: LineParser = (
            JsonParser() if self.config.json_errors else StdParser()
        )
        self.normalizer = DiagnosticNormalizer(self.config.rust_src_path)

    def parse(self, output: str, work_dir: Optional[str] = None) -> CargoOutput:
        """
        Parse the complete output of one build.

        Args:
            output: Captured stdout/stderr of the build
            work_dir: Directory the build ran in, used to resolve panic locations

        Returns:
            CargoOutput with displayable diagnostics, panics and notifications

        Raises:
            JsonMessageError: If a JSON diagnostic line is malformed
        """
        lines = output.splitlines()
        state = ParserState(work_dir=work_dir)
        result = CargoOutput(work_dir=work_dir)
        raw_messages: List[DiagnosticMessage] = []

        i = 0
        while i < len(lines):
            i += self._dispatch(lines, i, state, raw_messages, result)

        displayed, notifications = self.normalizer.process(raw_messages, work_dir)
        for msg in displayed:
            result.add_message(msg)
        for notification in notifications:
            self._emit(notification, result)

        hidden = state.panics_seen - PANICS_LIMIT
        if summary := hidden_panics_notification(hidden):
            result.hidden_panics = hidden
            self._emit(summary, result)

        logger.debug(
            f"Parsed {len(lines)} lines: {len(result.messages)} diagnostics, "
            f"{len(result.panics)} panics, {len(result.notifications)} notifications"
        )
        return result

    def _dispatch(
        self,
        lines: List[str],
        i: int,
        state: ParserState,
        raw_messages: List[DiagnosticMessage],
        result: CargoOutput,
    ) -> int:
        """Handle the line at ``i`` and return how many lines were consumed."""
        line = lines[i]

        step = self.panic_parser.try_parse(lines, i, state)
        if step.matched:
            state.close()
            self._report_panic(step.panic, state, result)
            return step.consumed

        if not line.strip():
            state.close()
            return 1

        step = self.dialect_parser.try_parse(lines, i, state)
        if step.matched:
            raw_messages.extend(step.messages)
            if step.messages:
                state.main = step.messages[-1]
            state.sub = step.open_sub
            return step.consumed

        # Plain text continues the open submessage, anything else is noise
        if state.sub is not None:
            state.sub.text += "\n" + line
        return 1

    def _report_panic(
        self, panic: PanicRecord, state: ParserState, result: CargoOutput
    ) -> None:
        result.panics.append(panic)
        if state.panics_seen < PANICS_LIMIT:
            self._emit(panic_notification(panic), result)
        state.panics_seen += 1

    def _emit(self, notification: Notification, result: CargoOutput) -> None:
        result.notifications.append(notification)
        if self.notifier is not None:
            self.notifier.notify(notification)
