"""
Parser modules for the different kinds of cargo output.

This module provides parsers for human-readable diagnostics, JSON diagnostics
and runtime panics.
"""

from .base import LineParser, ParserState, ParseStep
from .std import StdParser
from .json_parser import JsonParser
from .panic import PanicParser
from .redundant_labels import REDUNDANT_LABELS, is_redundant_label

__all__ = [
    "LineParser",
    "ParserState",
    "ParseStep",
    "StdParser",
    "JsonParser",
    "PanicParser",
    "REDUNDANT_LABELS",
    "is_redundant_label",
]
