"""
Exporters for parsed cargo output (JSON tree, flat CSV table).
"""

from .base import OutputWriter
from .csv_writer import CsvWriter
from .json_writer import JsonWriter
from .factory import WriterFactory

__all__ = ["OutputWriter", "CsvWriter", "JsonWriter", "WriterFactory"]
