"""
Core module for cargo parser.

This module contains the fundamental data structures, enums, errors and
configuration used throughout the cargo parser system.
"""

from .enums import BacktraceType, Disposition, MessageKind, MessageSeverity, OutputFormat
from .data_structures import (
    CargoOutput,
    DiagnosticMessage,
    Location,
    MessageExtra,
    Notification,
    PanicRecord,
)
from .errors import CargoParserError, ConfigurationError, JsonMessageError
from .config import PANICS_LIMIT, ParserConfig

__all__ = [
    "BacktraceType",
    "Disposition",
    "MessageKind",
    "MessageSeverity",
    "OutputFormat",
    "CargoOutput",
    "DiagnosticMessage",
    "Location",
    "MessageExtra",
    "Notification",
    "PanicRecord",
    "CargoParserError",
    "ConfigurationError",
    "JsonMessageError",
    "PANICS_LIMIT",
    "ParserConfig",
]
