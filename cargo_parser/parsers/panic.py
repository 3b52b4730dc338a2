"""
Panic and stack backtrace parser.

This module recognizes runtime panics printed by test and run targets:

    thread 'main' panicked at 'index out of bounds', src/lib.rs:42
    stack backtrace:
       1:     0x10d4ea4b3 - std::sys::backtrace::write::h8a3b2c1d
                            at ../src/libstd/sys/backtrace.rs:46
       2:     0x10d4f1f8c - app::main::h0f1e2d3c
                            at src/main.rs:7
"""

import itertools
import os
import re
from pathlib import PureWindowsPath
from typing import List, Optional, Sequence

from loguru import logger

from ..core.data_structures import PanicRecord
from ..core.enums import BacktraceType
from ..core.paths import is_rust_source_link
from .base import ParserState, ParseStep

PANIC_ID_PREFIX = "cargo-panic-"

# Process-wide, ids never repeat across builds or parser instances
_panic_ids = itertools.count(1)


def _is_absolute(file_path: str) -> bool:
    return os.path.isabs(file_path) or PureWindowsPath(file_path).is_absolute()


class PanicParser:
    """Parser for panics and their stack backtraces."""

    def __init__(self, backtrace_type: BacktraceType = BacktraceType.COMPACT):
        """Initialize the panic parser."""
        self.backtrace_type = backtrace_type
        self.panic_pattern = re.compile(
            r"(?P<message>thread '.+' panicked at '.+'), "
            r"(?P<file>(?:[A-Za-z]:)?[^:]+):(?P<line>\d+)"
        )
        self.frame_pattern = re.compile(
            r"^(?P<index>\s+\d+):\s+(?:0x[a-f0-9]+ - )?"
            r"(?:(?P<hashed>.+)::h[0-9a-f]+|(?P<symbol>.+))$"
        )
        self.link_pattern = re.compile(
            r"(?P<link>at (?P<file>.+?):(?P<line>\d+)(?::\d+)?)$"
        )

    def try_parse(
        self, lines: Sequence[str], index: int, state: ParserState
    ) -> ParseStep:
        """Parse a panic header and the backtrace that may follow it."""
        match = self.panic_pattern.search(lines[index])
        if not match:
            return ParseStep()

        header_file = match.group("file")
        panic = PanicRecord(
            id=f"{PANIC_ID_PREFIX}{next(_panic_ids)}",
            message=match.group("message"),
            file=None if is_rust_source_link(header_file) else header_file,
            line=int(match.group("line")),
        )
        consumed = 1 + self.parse_stack_trace(lines, index + 1, panic)

        if panic.file:
            panic.file_path = self.resolve_path(panic.file, state.work_dir)
        else:
            # No frame inside the project, fall back to the toolchain's location
            panic.file = header_file

        logger.debug(f"Found panic {panic.id} at {panic.file}:{panic.line}")
        return ParseStep(consumed=consumed, panic=panic)

    def parse_stack_trace(
        self, lines: Sequence[str], i: int, panic: PanicRecord
    ) -> int:
        """
        Parse a ``stack backtrace:`` block into ``panic.stack``.

        The first frame located in the project replaces a panic location
        that points into the toolchain sources.

        Returns:
            The number of parsed lines.
        """
        if i >= len(lines) or not lines[i].startswith("stack backtrace:"):
            return 0

        parsed = 1
        stack_lines: List[str] = []
        for line in lines[i + 1 :]:
            if frame := self.frame_pattern.match(line):
                if self.backtrace_type == BacktraceType.COMPACT:
                    symbol = frame.group("hashed") or frame.group("symbol")
                    line = f"{frame.group('index')}:  {symbol}"
                stack_lines.append(line)
            elif link := self.link_pattern.search(line):
                if not panic.file and not is_rust_source_link(link.group("file")):
                    panic.file = link.group("file")
                    panic.line = int(link.group("line"))
                stack_lines.append("  " + link.group("link"))
            else:
                break
            parsed += 1

        panic.stack = "\n".join(stack_lines)
        return parsed

    @staticmethod
    def resolve_path(file_path: str, work_dir: Optional[str]) -> str:
        """Make a panic file path absolute relative to the build directory."""
        if _is_absolute(file_path):
            return file_path
        if work_dir:
            return os.path.normpath(os.path.join(work_dir, file_path))
        return os.path.abspath(file_path)
