"""
Main cargo parser widget.

This module provides the main widget that orchestrates the entire parsing process,
integrating all the sub-widgets for a complete solution.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.config import ParserConfig
from ..core.data_structures import CargoOutput
from ..core.enums import MessageSeverity, OutputFormat
from ..writers.factory import WriterFactory
from .formatter import ConsoleFormatterWidget
from .notifier import Notifier
from .processor import CargoProcessorWidget


def _to_severities(
    filter_severities: Optional[List[Union[MessageSeverity, str]]],
) -> Optional[List[MessageSeverity]]:
    if not filter_severities:
        return None
    return [
        MessageSeverity.from_string(sev) if isinstance(sev, str) else sev
        for sev in filter_severities
    ]


class CargoParserWidget:
    """Main widget for orchestrating cargo output parsing and processing."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize the main cargo parser widget."""
        self.config = config or ParserConfig()
        self.processor = CargoProcessorWidget(self.config, notifier)
        self.formatter = ConsoleFormatterWidget()

    def parse_from_string(
        self,
        output: str,
        work_dir: Optional[str] = None,
        filter_severities: Optional[List[Union[MessageSeverity, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> CargoOutput:
        """Parse cargo output from a string."""
        cargo_output = self.processor.process_string(output, work_dir)
        return self.processor.filter_messages(
            cargo_output, _to_severities(filter_severities), file_pattern
        )

    def parse_from_file(
        self,
        file_path: Union[str, Path],
        work_dir: Optional[str] = None,
        filter_severities: Optional[List[Union[MessageSeverity, str]]] = None,
        file_pattern: Optional[str] = None,
    ) -> CargoOutput:
        """Parse cargo output from a file."""
        cargo_output = self.processor.process_file(file_path, work_dir)
        return self.processor.filter_messages(
            cargo_output, _to_severities(filter_severities), file_pattern
        )

    def write_output(
        self,
        cargo_output: CargoOutput,
        output_format: Optional[Union[OutputFormat, str]],
        output_path: Union[str, Path],
    ) -> None:
        """Write parsed output to a file, inferring the format from its name if not given."""
        if output_format is None:
            writer = WriterFactory.for_path(output_path)
        else:
            writer = WriterFactory.create_writer(output_format)
        writer.write(cargo_output, Path(output_path))

    def display_output(self, cargo_output: CargoOutput, colorize: bool = True) -> None:
        """Display parsed output on the console."""
        if colorize:
            self.formatter.colorize_output(cargo_output)
        else:
            print(self.formatter.get_formatted_output(cargo_output))

    def generate_statistics(self, cargo_outputs: List[CargoOutput]) -> Dict[str, Any]:
        """Generate statistics from parsed outputs."""
        return self.processor.generate_statistics(cargo_outputs)

    def process_and_export(
        self,
        input_files: List[Union[str, Path]],
        output_format: Union[OutputFormat, str],
        output_path: Optional[Union[str, Path]],
        work_dir: Optional[str] = None,
        filter_severities: Optional[List[Union[MessageSeverity, str]]] = None,
        file_pattern: Optional[str] = None,
        display_stats: bool = False,
        display_output: bool = False,
        colorize: bool = True,
    ) -> CargoOutput:
        """Complete processing pipeline: parse, filter, combine, and export."""
        severities = _to_severities(filter_severities)
        outputs = [
            self.processor.filter_messages(output, severities, file_pattern)
            for output in self.processor.process_files(input_files, work_dir)
        ]
        combined = self.processor.combine_outputs(outputs) or CargoOutput(
            work_dir=work_dir
        )

        if output_path is not None:
            self.write_output(combined, output_format, output_path)

        if display_stats:
            stats = self.generate_statistics(outputs)
            print("\nStatistics:")
            print(json.dumps(stats, indent=4))

        if display_output:
            self.display_output(combined, colorize)

        return combined
