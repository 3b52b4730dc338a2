"""
Diagnostic normalizer.

Every parsed message goes through the normalizer once before it is emitted:
staged span labels and error codes are merged into the text, locations are
repaired and deduplicated between a message and its trace, explanations are
moved to the end and the message is classified for display.
"""

import os
import re
from typing import List, Optional, Tuple

from loguru import logger

from ..core.data_structures import DiagnosticMessage, Location, Notification
from ..core.enums import Disposition
from ..core.paths import normalize_path
from ..parsers.redundant_labels import is_redundant_label
from .notifier import message_notification

# Build summaries that carry no information of their own
META_PATTERNS = (
    re.compile(r"^aborting due to (?:\d+ |the )?previous errors?"),
    re.compile(r"^could not compile `[^`]+`"),
    re.compile(r"^build failed"),
    re.compile(r"^\d+ warnings? emitted"),
)

MAIN_NOT_FOUND = "main function not found"
ENTRY_FILE = os.path.join("src", "main.rs")


class DiagnosticNormalizer:
    """Post-processes raw messages produced by the parsers."""

    def __init__(self, rust_src_path: Optional[str] = None):
        self.rust_src_path = rust_src_path

    def normalize(
        self, msg: DiagnosticMessage, work_dir: Optional[str] = None
    ) -> DiagnosticMessage:
        """Normalize a message in place. Running it twice changes nothing."""
        self._synthesize_entry_location(msg, work_dir)
        self._merge_extra(msg)
        for entry in msg.trace:
            self._merge_extra(entry)
        self._rewrite_toolchain_paths(msg)
        self._deduplicate_locations(msg)
        # Entries with an explicit order (explanations) go last, the rest keep their order
        msg.trace.sort(key=lambda entry: (entry.order is not None, entry.order or 0))
        return msg

    def classify(self, msg: DiagnosticMessage) -> Disposition:
        """Decide where a normalized message goes."""
        if msg.has_usable_location:
            return Disposition.DISPLAY
        if any(pattern.search(msg.text) for pattern in META_PATTERNS):
            return Disposition.DROP
        return Disposition.NOTIFY

    def process(
        self, messages: List[DiagnosticMessage], work_dir: Optional[str] = None
    ) -> Tuple[List[DiagnosticMessage], List[Notification]]:
        """
        Normalize and classify raw messages.

        Returns:
            The displayable messages and the notifications for the rest.
        """
        displayed: List[DiagnosticMessage] = []
        notifications: List[Notification] = []
        for msg in messages:
            self.normalize(msg, work_dir)
            match self.classify(msg):
                case Disposition.DISPLAY:
                    displayed.append(msg)
                case Disposition.NOTIFY:
                    notifications.append(message_notification(msg))
                case Disposition.DROP:
                    logger.debug(f"Dropping build summary: {msg.text}")
        return displayed, notifications

    @staticmethod
    def _merge_extra(msg: DiagnosticMessage) -> None:
        extra = msg.extra
        if extra is None:
            return
        label = extra.span_label
        if label and label not in msg.text and not is_redundant_label(label, msg.text):
            msg.text += f" ({label})"
        if extra.error_code:
            msg.text += f" [{extra.error_code}]"
        msg.extra = None

    def _rewrite_toolchain_paths(self, msg: DiagnosticMessage) -> None:
        if not self.rust_src_path:
            return
        for entry in (msg, *msg.trace):
            if entry.location is not None and entry.location.file:
                entry.location.file = normalize_path(
                    entry.location.file, self.rust_src_path
                )

    @staticmethod
    def _deduplicate_locations(msg: DiagnosticMessage) -> None:
        for entry in msg.trace:
            if entry.location is None:
                continue
            if not msg.has_usable_location and entry.location.is_usable:
                # Promote the first usable location to the message itself
                msg.location = entry.location
                entry.location = None
            elif not entry.location.is_usable or entry.location == msg.location:
                entry.location = None

    @staticmethod
    def _synthesize_entry_location(
        msg: DiagnosticMessage, work_dir: Optional[str]
    ) -> None:
        if msg.location is not None or msg.text != MAIN_NOT_FOUND:
            return
        if any(entry.has_usable_location for entry in msg.trace):
            return
        file = os.path.join(work_dir, ENTRY_FILE) if work_dir else ENTRY_FILE
        msg.location = Location(file=file, line=1)
