import csv
import json

import pytest
from loguru import logger

from conftest import WORK_DIR

from cargo_parser import get_tool_info, parse_cargo_output
from cargo_parser.core.config import ParserConfig
from cargo_parser.core.data_structures import Notification
from cargo_parser.core.enums import MessageSeverity
from cargo_parser.widgets.formatter import ConsoleFormatterWidget
from cargo_parser.widgets.main_widget import CargoParserWidget
from cargo_parser.widgets.notifier import LoguruNotifier
from cargo_parser.widgets.processor import CargoProcessorWidget
from cargo_parser.writers.factory import WriterFactory

BUILD_LOG = "\n".join(
    [
        "error[E0308]: mismatched types",
        " --> src/main.rs:10:5",
        "",
        "warning: unused import: `std::io`",
        " --> src/lib.rs:1:5",
        "",
        "warning: unused manifest key: package.foo",
        "thread 'main' panicked at 'boom', src/main.rs:2",
    ]
)


@pytest.fixture
def processor():
    return CargoProcessorWidget(ParserConfig(rust_src_path=None))


@pytest.fixture
def parsed(processor):
    return processor.process_string(BUILD_LOG, WORK_DIR)


def test_filter_by_severity(processor, parsed):
    filtered = processor.filter_messages(parsed, [MessageSeverity.WARNING])

    assert [m.location.file for m in filtered.messages] == ["src/lib.rs"]
    assert filtered.panics == parsed.panics
    assert filtered.notifications == parsed.notifications


def test_filter_by_file_pattern(processor, parsed):
    filtered = processor.filter_messages(parsed, file_pattern=r"main\.rs$")

    assert [m.severity for m in filtered.messages] == [MessageSeverity.ERROR]


def test_statistics(processor, parsed):
    stats = processor.generate_statistics([parsed, parsed])

    assert stats["total_outputs"] == 2
    assert stats["total_messages"] == 4
    assert stats["by_severity"] == {"error": 2, "warning": 2, "info": 0}
    assert stats["by_file"] == {"src/main.rs": 2, "src/lib.rs": 2}
    assert stats["panics"] == 2
    assert stats["notifications"] == 4
    assert stats["outputs_with_errors"] == 2


def test_process_file_missing(processor, tmp_path):
    with pytest.raises(FileNotFoundError):
        processor.process_file(tmp_path / "nope.log")


def test_process_and_export_json(tmp_path):
    log = tmp_path / "build.log"
    log.write_text(BUILD_LOG)
    out = tmp_path / "out.json"

    widget = CargoParserWidget(ParserConfig(rust_src_path=None))
    combined = widget.process_and_export([log, log], "json", out, WORK_DIR)

    data = json.loads(out.read_text())
    assert len(combined.messages) == 4
    assert len(data["messages"]) == 4
    assert data["messages"][0]["location"]["line"] == 10
    assert data["panics"][0]["file_path"] == f"{WORK_DIR}/src/main.rs"
    assert [n["severity"] for n in data["notifications"]] == [
        "error",
        "warning",
        "error",
        "warning",
    ]


def test_csv_writer(tmp_path, parsed):
    out = tmp_path / "out.csv"

    WriterFactory.create_writer("csv").write(parsed, out)

    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["kind"] for row in rows] == ["Error", "Warning", "Panic"]
    assert rows[0]["message"] == "mismatched types [E0308]"
    assert rows[0]["notes"] == "Explain error E0308"
    assert rows[2]["file"] == f"{WORK_DIR}/src/main.rs"


def test_unknown_writer_format():
    with pytest.raises(ValueError):
        WriterFactory.create_writer("xml")


def test_format_inferred_from_file_name(tmp_path, parsed):
    out = tmp_path / "report.CSV"

    CargoParserWidget().write_output(parsed, None, out)

    assert out.read_text().startswith("file,line,col,severity,kind,message,notes")
    with pytest.raises(ValueError):
        WriterFactory.for_path(tmp_path / "report.txt")


def test_formatter_plain_output(parsed):
    text = ConsoleFormatterWidget().get_formatted_output(parsed)

    assert "Errors: 1" in text
    assert "ERROR: src/main.rs:10:5: mismatched types [E0308]" in text
    assert "https://doc.rust-lang.org/error-index.html#E0308" in text
    assert "PANIC: /home/user/project/src/main.rs:2:1:" in text
    assert "[warning] unused manifest key: package.foo" in text


def test_loguru_notifier_logs_detail():
    records = []
    handler_id = logger.add(records.append, format="{level} {message}", level="DEBUG")
    try:
        LoguruNotifier().notify(
            Notification(
                severity=MessageSeverity.WARNING, text="headline", detail="more"
            )
        )
    finally:
        logger.remove(handler_id)

    assert records == ["WARNING headline\nmore\n"]


def test_parse_cargo_output_api():
    data = parse_cargo_output(BUILD_LOG, WORK_DIR, backtrace_type="full")

    assert len(data["messages"]) == 2
    assert data["panics"][0]["id"].startswith("cargo-panic-")


def test_panic_ids_unique_across_calls():
    output = "thread 'main' panicked at 'boom', src/main.rs:1"

    first = parse_cargo_output(output, WORK_DIR)["panics"][0]["id"]
    second = parse_cargo_output(output, WORK_DIR)["panics"][0]["id"]

    assert first != second


def test_tool_info():
    info = get_tool_info()

    assert info["name"] == "cargo_parser"
    assert info["export_formats"] == ["json", "csv"]
