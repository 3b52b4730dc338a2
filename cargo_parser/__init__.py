"""
Cargo Output Parser

This module turns the captured output of a cargo/rustc build into structured
diagnostics for editors and CI tools.

Features:
- Human-readable rustc diagnostics, including the pre-1.12 single-line format
- Line-delimited JSON diagnostics (rustc and cargo wrappers)
- Runtime panics with stack backtraces, capped per build
- Normalization: span labels, error codes, location repair, build summary filtering
- JSON/CSV export and colorized console output
"""

from typing import Any, Dict, Optional

from .core import (
    BacktraceType,
    CargoOutput,
    CargoParserError,
    ConfigurationError,
    DiagnosticMessage,
    JsonMessageError,
    Location,
    MessageKind,
    MessageSeverity,
    Notification,
    OutputFormat,
    PANICS_LIMIT,
    PanicRecord,
    ParserConfig,
)
from .parsers import JsonParser, PanicParser, StdParser
from .widgets import (
    CargoParserWidget,
    CargoProcessorWidget,
    ConsoleFormatterWidget,
    DiagnosticNormalizer,
    LoguruNotifier,
    NotificationCollector,
    Notifier,
    OutputDispatcher,
)
from .writers import WriterFactory
from .utils import main_cli, parse_args, setup_logging

# Module metadata
__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"

setup_logging("INFO")


def parse_cargo_output(
    output: str,
    work_dir: Optional[str] = None,
    json_errors: bool = False,
    backtrace_type: str = "Compact",
    notifier: Optional[Notifier] = None,
) -> Dict[str, Any]:
    """
    Parse captured cargo output and return structured data.

    Args:
        output: Raw stdout/stderr of the build
        work_dir: Directory the build ran in
        json_errors: Whether the output uses the JSON diagnostic format
        backtrace_type: Off, Compact or Full
        notifier: Optional receiver for standalone notifications

    Returns:
        Dictionary with diagnostics, panics and notifications
    """
    config = ParserConfig(json_errors=json_errors, backtrace_type=backtrace_type)
    widget = CargoParserWidget(config, notifier)
    return widget.parse_from_string(output, work_dir).to_dict()


def parse_cargo_file(
    file_path: str,
    work_dir: Optional[str] = None,
    json_errors: bool = False,
    backtrace_type: str = "Compact",
) -> Dict[str, Any]:
    """
    Parse cargo output stored in a file and return structured data.

    Args:
        file_path: Path to the file containing captured output
        work_dir: Directory the build ran in
        json_errors: Whether the output uses the JSON diagnostic format
        backtrace_type: Off, Compact or Full

    Returns:
        Dictionary with diagnostics, panics and notifications
    """
    config = ParserConfig(json_errors=json_errors, backtrace_type=backtrace_type)
    widget = CargoParserWidget(config)
    return widget.parse_from_file(file_path, work_dir).to_dict()


def get_tool_info() -> dict:
    """
    Return metadata about this tool.

    Returns:
        dict: Name, version, description, supported formats and functions.
    """
    return {
        "name": "cargo_parser",
        "version": __version__,
        "description": "Parse cargo/rustc build output into structured diagnostics",
        "license": __license__,
        "dialects": ["human-readable", "legacy", "json"],
        "export_formats": [fmt.name.lower() for fmt in OutputFormat],
        "panics_limit": PANICS_LIMIT,
        "functions": ["parse_cargo_output", "parse_cargo_file", "get_tool_info"],
        "requirements": ["loguru", "pydantic>=2", "termcolor"],
    }


__all__ = [
    "BacktraceType",
    "CargoOutput",
    "CargoParserError",
    "ConfigurationError",
    "DiagnosticMessage",
    "JsonMessageError",
    "Location",
    "MessageKind",
    "MessageSeverity",
    "Notification",
    "OutputFormat",
    "PANICS_LIMIT",
    "PanicRecord",
    "ParserConfig",
    "JsonParser",
    "PanicParser",
    "StdParser",
    "CargoParserWidget",
    "CargoProcessorWidget",
    "ConsoleFormatterWidget",
    "DiagnosticNormalizer",
    "LoguruNotifier",
    "NotificationCollector",
    "Notifier",
    "OutputDispatcher",
    "WriterFactory",
    "main_cli",
    "parse_args",
    "setup_logging",
    "parse_cargo_output",
    "parse_cargo_file",
    "get_tool_info",
]
