"""
Command-line interface utilities.

This module provides CLI argument parsing and main function for command-line operation.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..core.config import ParserConfig
from ..core.errors import CargoParserError
from ..widgets.main_widget import CargoParserWidget
from .logging_config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Parse captured cargo/rustc output into structured diagnostics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse a captured build log
  cargo build 2> build.log; cargo-parser build.log

  # Parse JSON diagnostics from stdin and export them as CSV
  cargo build --message-format=json | cargo-parser - --json-errors --output-format csv
""",
    )

    parser.add_argument(
        "file_paths", nargs="+", help="Files with captured output, '-' reads stdin."
    )

    parser.add_argument(
        "--json-errors",
        action="store_true",
        default=None,
        help="Input is line-delimited JSON diagnostics.",
    )

    parser.add_argument(
        "--backtrace",
        choices=["off", "compact", "full"],
        help="How panic backtraces are rendered (default: compact).",
    )

    parser.add_argument(
        "--work-dir",
        default=None,
        help="Directory the build ran in (default: current directory).",
    )

    parser.add_argument("--config", help="JSON or TOML file with parser settings.")

    parser.add_argument(
        "--output-format",
        choices=["json", "csv"],
        default="json",
        help="Output format (default: json).",
    )

    parser.add_argument(
        "--output-file",
        default="cargo_output",
        help="Base name for the output file without extension (default: cargo_output).",
    )

    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for output files (default: current directory).",
    )

    parser.add_argument(
        "--no-export", action="store_true", help="Only display, do not write a file."
    )

    parser.add_argument(
        "--filter",
        nargs="*",
        choices=["error", "warning", "info"],
        help="Filter by message severity types.",
    )

    parser.add_argument(
        "--file-pattern", help="Regular expression to filter files by name."
    )

    parser.add_argument(
        "--stats", action="store_true", help="Include statistics in the output."
    )

    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging output."
    )

    parser.add_argument(
        "--no-color", action="store_true", help="Disable colorized output."
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Combine the optional config file with command-line overrides."""
    config = (
        ParserConfig.load_from_file(args.config) if args.config else ParserConfig()
    )
    overrides = {}
    if args.json_errors is not None:
        overrides["json_errors"] = args.json_errors
    if args.backtrace is not None:
        overrides["backtrace_type"] = args.backtrace
    if overrides:
        config = ParserConfig.from_mapping({**config.model_dump(), **overrides})
    return config


def main_cli(argv: Optional[List[str]] = None) -> int:
    """Main function for command-line operation."""
    args = parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")

    work_dir = str(Path(args.work_dir or ".").resolve())
    output_path = None
    if not args.no_export:
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"{args.output_file}.{args.output_format.lower()}"

    try:
        widget = CargoParserWidget(build_config(args))

        if args.file_paths == ["-"]:
            result = widget.parse_from_string(
                sys.stdin.read(), work_dir, args.filter, args.file_pattern
            )
            if output_path is not None:
                widget.write_output(result, args.output_format, output_path)
            if args.stats:
                print("\nStatistics:")
                print(json.dumps(widget.generate_statistics([result]), indent=4))
            widget.display_output(result, colorize=not args.no_color)
        else:
            result = widget.process_and_export(
                input_files=args.file_paths,
                output_format=args.output_format,
                output_path=output_path,
                work_dir=work_dir,
                filter_severities=args.filter,
                file_pattern=args.file_pattern,
                display_stats=args.stats,
                display_output=True,
                colorize=not args.no_color,
            )

        if output_path is not None:
            print(f"\nOutput saved to: {output_path}")

        if result.messages:
            print(f"Processed {len(result.messages)} messages successfully.")
        else:
            print("No compiler messages found or all messages were filtered out.")

    except (CargoParserError, OSError) as e:
        logger.error(f"Error processing cargo output: {e}")
        return 1

    return 0
