#!/usr/bin/env python3
"""
Parser configuration with validation and file loading.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .enums import BacktraceType
from .errors import ConfigurationError

# Max number of panics reported individually per build output
PANICS_LIMIT = 10


class ParserConfig(BaseModel):
    """Settings read by the parsers during one pass. Never changed by the pass itself."""

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True, str_strip_whitespace=True
    )

    json_errors: bool = Field(
        default=False,
        description="Parse line-delimited JSON diagnostics instead of the human-readable output",
    )
    backtrace_type: BacktraceType = Field(
        default=BacktraceType.COMPACT, description="How panic backtraces are rendered"
    )
    rust_src_path: Optional[str] = Field(
        default_factory=lambda: os.environ.get("RUST_SRC_PATH") or None,
        description="Location of the toolchain sources used to resolve ../src/ links",
    )

    @field_validator("backtrace_type", mode="before")
    @classmethod
    def validate_backtrace_type(cls, v: Any) -> Any:
        """Accept backtrace types in any letter case."""
        if isinstance(v, str) and not isinstance(v, BacktraceType):
            return BacktraceType.from_string(v)
        return v

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> ParserConfig:
        """
        Load parser configuration from a JSON or TOML file.

        Args:
            file_path: Path to the configuration file.

        Returns:
            ParserConfig: Validated configuration.

        Raises:
            ConfigurationError: If the file is missing, unsupported, unreadable or invalid.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", config_file=config_path
            )

        suffix = config_path.suffix.lower()
        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}", config_file=config_path
            ) from e

        logger.debug(f"Loading {suffix[1:].upper()} configuration from {config_path}")
        match suffix:
            case ".json":
                try:
                    data = json.loads(content)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(
                        f"Invalid JSON configuration: {e}",
                        config_file=config_path,
                        line=e.lineno,
                        column=e.colno,
                    ) from e
            case ".toml":
                try:
                    data = tomllib.loads(content)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigurationError(
                        f"Invalid TOML configuration: {e}", config_file=config_path
                    ) from e
            case _:
                raise ConfigurationError(
                    f"Unsupported configuration file format: {suffix}. Supported formats: .json, .toml",
                    config_file=config_path,
                )

        return cls.from_mapping(data, config_path)

    @classmethod
    def from_mapping(
        cls, data: Any, source_file: Optional[Path] = None
    ) -> ParserConfig:
        """Validate a configuration mapping."""
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be an object/dictionary", config_file=source_file
            )

        # A [cargo_parser] table may hold the settings in shared TOML files
        section: Dict[str, Any] = data.get("cargo_parser", data)
        try:
            return cls.model_validate(section)
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", config_file=source_file
            ) from e
