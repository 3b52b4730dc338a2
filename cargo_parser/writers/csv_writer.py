"""
CSV output writer.

This module provides functionality to write parsed cargo output to CSV format.
"""

import csv
from pathlib import Path

from loguru import logger

from ..core.data_structures import CargoOutput

FIELDNAMES = ["file", "line", "col", "severity", "kind", "message", "notes"]


class CsvWriter:
    """Writer for CSV output format, one row per diagnostic or panic."""

    extension = "csv"

    def write(self, cargo_output: CargoOutput, output_path: Path) -> None:
        """Write parsed output to a CSV file."""
        messages = list(cargo_output.messages)
        messages.extend(panic.to_message() for panic in cargo_output.panics)

        rows = []
        for msg in messages:
            rows.append(
                {
                    "file": msg.location.file if msg.location else None,
                    "line": msg.location.line if msg.location else None,
                    "col": msg.location.col if msg.location else None,
                    "severity": msg.severity.value,
                    "kind": msg.kind.value,
                    "message": msg.text,
                    "notes": " | ".join(entry.text for entry in msg.trace),
                }
            )

        with output_path.open("w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=FIELDNAMES)
            writer.writeheader()
            writer.writerows(rows)
        logger.info(f"CSV output written to {output_path}")
