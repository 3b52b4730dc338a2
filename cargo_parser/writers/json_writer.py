"""
JSON export: the full diagnostic tree with panics and notifications.
"""

import json
from pathlib import Path

from loguru import logger

from ..core.data_structures import CargoOutput


class JsonWriter:
    """Writes ``CargoOutput.to_dict()`` as an indented JSON document."""

    extension = "json"

    def write(self, cargo_output: CargoOutput, output_path: Path) -> None:
        data = cargo_output.to_dict()
        with output_path.open("w", encoding="utf-8") as json_file:
            # Rust identifiers and messages may contain non-ASCII text
            json.dump(data, json_file, indent=2, ensure_ascii=False)
        logger.info(
            f"JSON output written to {output_path} ({len(cargo_output.messages)} messages)"
        )
