"""
Utility modules for cargo parser.

This module provides logging setup and CLI support.
"""

from .cli import parse_args, main_cli
from .logging_config import setup_logging

__all__ = [
    'parse_args',
    'main_cli',
    'setup_logging'
]
