#!/usr/bin/env python3
"""
Exception hierarchy for the cargo parser.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger


class CargoParserError(Exception):
    """Base exception for cargo parser errors."""

    def __init__(
        self, message: str, *, error_code: Optional[str] = None, **kwargs: Any
    ):
        super().__init__(message)
        self.error_code = error_code
        self.context = kwargs

        # Log the exception with context
        logger.bind(error_code=error_code, context=kwargs).error(
            "CargoParserError: {}", message
        )


class JsonMessageError(CargoParserError):
    """Raised when a JSON diagnostic line cannot be decoded or has the wrong shape."""

    def __init__(self, message: str, line: str, **kwargs: Any):
        kwargs.setdefault("error_code", "INVALID_JSON")
        super().__init__(message, line=line, **kwargs)
        self.line = line


class ConfigurationError(CargoParserError):
    """Raised when the parser configuration is invalid or cannot be loaded."""

    def __init__(
        self,
        message: str,
        config_file: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("error_code", "INVALID_CONFIG")
        super().__init__(
            message,
            config_file=str(config_file) if config_file else None,
            **kwargs,
        )
        self.config_file = Path(config_file) if config_file else None
