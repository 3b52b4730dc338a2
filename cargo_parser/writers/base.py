"""
Export interface.

Writers turn one parsed build output into a file. Each writer knows the file
extension it produces so callers can name or recognize its output.
"""

from pathlib import Path
from typing import ClassVar, Protocol

from ..core.data_structures import CargoOutput


class OutputWriter(Protocol):
    """Protocol for exporters of parsed cargo output."""

    extension: ClassVar[str]

    def write(self, cargo_output: CargoOutput, output_path: Path) -> None:
        """Export diagnostics, panics and notifications to ``output_path``."""
        ...
