"""
Cargo processor widget.

This module provides functionality to process captured cargo output from strings
and files, with filtering and statistics generation.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from ..core.config import ParserConfig
from ..core.data_structures import CargoOutput
from ..core.enums import MessageSeverity
from .dispatcher import OutputDispatcher
from .notifier import Notifier


class CargoProcessorWidget:
    """Widget for processing captured cargo output."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize the processor widget with optional configuration."""
        self.config = config or ParserConfig()
        self.dispatcher = OutputDispatcher(self.config, notifier)

    def process_string(self, output: str, work_dir: Optional[str] = None) -> CargoOutput:
        """Process a string containing cargo output."""
        return self.dispatcher.parse(output, work_dir)

    def process_file(
        self, file_path: Union[str, Path], work_dir: Optional[str] = None
    ) -> CargoOutput:
        """Process a single file containing cargo output."""
        file_path = Path(file_path)

        logger.info(f"Processing file: {file_path}")

        try:
            output = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error(f"File not found: {file_path}")
            raise
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {e}")
            raise
        return self.process_string(output, work_dir)

    def process_files(
        self, file_paths: List[Union[str, Path]], work_dir: Optional[str] = None
    ) -> List[CargoOutput]:
        """Process several captured outputs, one build at a time."""
        results = []
        for file_path in file_paths:
            results.append(self.process_file(file_path, work_dir))
            logger.info(f"Successfully processed {file_path}")
        return results

    def filter_messages(
        self,
        cargo_output: CargoOutput,
        severities: Optional[List[MessageSeverity]] = None,
        file_pattern: Optional[str] = None,
    ) -> CargoOutput:
        """Filter messages by severity and/or file pattern."""
        if not severities and not file_pattern:
            return cargo_output

        filtered = CargoOutput(
            work_dir=cargo_output.work_dir,
            panics=list(cargo_output.panics),
            notifications=list(cargo_output.notifications),
            hidden_panics=cargo_output.hidden_panics,
        )

        for msg in cargo_output.messages:
            severity_match = not severities or msg.severity in severities
            file_match = not file_pattern or (
                msg.location is not None
                and re.search(file_pattern, msg.location.file or "")
            )
            if severity_match and file_match:
                filtered.add_message(msg)

        return filtered

    def combine_outputs(self, cargo_outputs: List[CargoOutput]) -> Optional[CargoOutput]:
        """Combine multiple parsed outputs into a single one."""
        if not cargo_outputs:
            return None

        combined = CargoOutput(work_dir=cargo_outputs[0].work_dir)
        for output in cargo_outputs:
            combined.messages.extend(output.messages)
            combined.panics.extend(output.panics)
            combined.notifications.extend(output.notifications)
            combined.hidden_panics += output.hidden_panics

        return combined

    def generate_statistics(self, cargo_outputs: List[CargoOutput]) -> Dict[str, Any]:
        """Generate statistics from a list of parsed outputs."""
        stats: Dict[str, Any] = {
            "total_outputs": len(cargo_outputs),
            "total_messages": 0,
            "by_severity": {"error": 0, "warning": 0, "info": 0},
            "by_file": {},
            "panics": 0,
            "notifications": 0,
            "outputs_with_errors": 0,
        }

        for output in cargo_outputs:
            errors = len(output.errors)
            stats["total_messages"] += len(output.messages)
            stats["by_severity"]["error"] += errors
            stats["by_severity"]["warning"] += len(output.warnings)
            stats["by_severity"]["info"] += len(output.infos)
            stats["panics"] += len(output.panics)
            stats["notifications"] += len(output.notifications)

            if errors > 0:
                stats["outputs_with_errors"] += 1

            for msg in output.messages:
                file = msg.location.file if msg.location else None
                stats["by_file"][file] = stats["by_file"].get(file, 0) + 1

        return stats
