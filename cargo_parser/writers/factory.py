"""
Lookup of export writers by format name or output file.
"""

from pathlib import Path
from typing import Dict, Type, Union

from ..core.enums import OutputFormat
from .base import OutputWriter
from .csv_writer import CsvWriter
from .json_writer import JsonWriter

_WRITERS: Dict[OutputFormat, Type[OutputWriter]] = {
    OutputFormat.JSON: JsonWriter,
    OutputFormat.CSV: CsvWriter,
}


class WriterFactory:
    """Creates the writer for an export format."""

    @staticmethod
    def create_writer(format_type: Union[OutputFormat, str]) -> OutputWriter:
        """
        Create the writer for ``format_type``.

        Raises:
            ValueError: If the format is not supported.
        """
        if isinstance(format_type, str):
            format_type = OutputFormat.from_string(format_type)
        return _WRITERS[format_type]()

    @staticmethod
    def for_path(output_path: Union[str, Path]) -> OutputWriter:
        """Pick the writer whose extension matches ``output_path``."""
        suffix = Path(output_path).suffix.lower().lstrip(".")
        for writer_cls in _WRITERS.values():
            if writer_cls.extension == suffix:
                return writer_cls()
        raise ValueError(f"Cannot infer output format from file name: {output_path}")
