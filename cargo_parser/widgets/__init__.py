"""
Widget modules for cargo parser.

This module provides widgets for dispatching, normalizing, formatting and
managing parsed cargo output.
"""

from .notifier import (
    LoguruNotifier,
    NotificationCollector,
    Notifier,
    hidden_panics_notification,
    message_notification,
    panic_notification,
)
from .normalizer import DiagnosticNormalizer
from .dispatcher import OutputDispatcher
from .formatter import ConsoleFormatterWidget
from .processor import CargoProcessorWidget
from .main_widget import CargoParserWidget

__all__ = [
    "LoguruNotifier",
    "NotificationCollector",
    "Notifier",
    "hidden_panics_notification",
    "message_notification",
    "panic_notification",
    "DiagnosticNormalizer",
    "OutputDispatcher",
    "ConsoleFormatterWidget",
    "CargoProcessorWidget",
    "CargoParserWidget",
]
