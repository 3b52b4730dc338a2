"""
Shared fixtures for the cargo parser tests.
"""

import json
from typing import Any, Dict, List, Optional

import pytest

from cargo_parser.core.config import ParserConfig
from cargo_parser.parsers.base import ParserState
from cargo_parser.utils.logging_config import setup_logging
from cargo_parser.widgets.dispatcher import OutputDispatcher
from cargo_parser.widgets.notifier import NotificationCollector

WORK_DIR = "/home/user/project"


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind the log sink after tests that captured stderr."""
    yield
    setup_logging("INFO")


@pytest.fixture
def state() -> ParserState:
    """Fresh scan state rooted at the sample project directory."""
    return ParserState(work_dir=WORK_DIR)


@pytest.fixture
def collector() -> NotificationCollector:
    return NotificationCollector()


@pytest.fixture
def std_dispatcher(collector: NotificationCollector) -> OutputDispatcher:
    """Dispatcher for the human-readable dialect."""
    return OutputDispatcher(ParserConfig(rust_src_path=None), collector)


@pytest.fixture
def json_dispatcher(collector: NotificationCollector) -> OutputDispatcher:
    """Dispatcher for the JSON dialect."""
    return OutputDispatcher(ParserConfig(json_errors=True, rust_src_path=None), collector)


def make_span(
    file_name: str = "src/main.rs",
    line: int = 1,
    col: int = 1,
    col_end: Optional[int] = None,
    is_primary: bool = True,
    label: Optional[str] = None,
    expansion: Optional[Dict[str, Any]] = None,
    text: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build a span object shaped like rustc's JSON output."""
    return {
        "file_name": file_name,
        "byte_start": 0,
        "byte_end": 0,
        "line_start": line,
        "line_end": line,
        "column_start": col,
        "column_end": col_end if col_end is not None else col + 1,
        "is_primary": is_primary,
        "text": [
            {"text": t, "highlight_start": 1, "highlight_end": 2} for t in (text or [])
        ],
        "label": label,
        "suggested_replacement": None,
        "expansion": (
            {"span": expansion, "macro_decl_name": "m!", "def_site_span": None}
            if expansion
            else None
        ),
    }


def make_diagnostic(
    message: str,
    level: str = "error",
    spans: Optional[List[Dict[str, Any]]] = None,
    children: Optional[List[Dict[str, Any]]] = None,
    code: Optional[str] = None,
    explanation: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a diagnostic object shaped like rustc's JSON output."""
    return {
        "message": message,
        "code": {"code": code, "explanation": explanation} if code else None,
        "level": level,
        "spans": spans or [],
        "children": children or [],
        "rendered": None,
    }


def to_line(obj: Dict[str, Any]) -> str:
    return json.dumps(obj)
