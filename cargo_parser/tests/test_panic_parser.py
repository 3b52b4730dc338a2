import pytest

from conftest import WORK_DIR

from cargo_parser.core.enums import BacktraceType
from cargo_parser.parsers.panic import PanicParser

BACKTRACE = [
    "thread 'main' panicked at 'called `Option::unwrap()` on a `None` value', ../src/libcore/option.rs:335",
    "stack backtrace:",
    "   1:     0x10d4ea4b3 - std::sys::backtrace::write::h8a3b2c1d",
    "                        at ../src/libstd/sys/backtrace.rs:46",
    "   2:     0x10d4f1f8c - app::main::h0f1e2d3c",
    "                        at src/main.rs:7",
]


def test_panic_without_backtrace(state):
    line = "thread 'main' panicked at 'index out of bounds', src/lib.rs:42"

    step = PanicParser().try_parse([line], 0, state)

    assert step.consumed == 1
    panic = step.panic
    assert panic.message == "thread 'main' panicked at 'index out of bounds'"
    assert panic.file == "src/lib.rs"
    assert panic.line == 42
    assert panic.file_path == f"{WORK_DIR}/src/lib.rs"
    assert panic.stack is None


def test_compact_backtrace_prefers_project_frame(state):
    step = PanicParser(BacktraceType.COMPACT).try_parse(BACKTRACE, 0, state)

    assert step.consumed == len(BACKTRACE)
    panic = step.panic
    assert panic.file == "src/main.rs"
    assert panic.line == 7
    assert panic.file_path == f"{WORK_DIR}/src/main.rs"
    assert panic.stack.splitlines() == [
        "   1:  std::sys::backtrace::write",
        "  at ../src/libstd/sys/backtrace.rs:46",
        "   2:  app::main",
        "  at src/main.rs:7",
    ]


def test_full_backtrace_keeps_frames(state):
    step = PanicParser(BacktraceType.FULL).try_parse(BACKTRACE, 0, state)

    stack = step.panic.stack.splitlines()
    assert stack[0] == BACKTRACE[2]
    assert stack[2] == BACKTRACE[4]


def test_backtrace_without_project_frame(state):
    lines = BACKTRACE[:4]

    step = PanicParser().try_parse(lines, 0, state)

    panic = step.panic
    assert panic.file == "../src/libcore/option.rs"
    assert panic.line == 335
    assert panic.file_path is None


def test_backtrace_stops_at_unrelated_line(state):
    lines = BACKTRACE + ["", "error: process didn't exit successfully"]

    step = PanicParser().try_parse(lines, 0, state)

    assert step.consumed == len(BACKTRACE)


def test_absolute_path_is_kept(state):
    line = "thread 'worker' panicked at 'boom', /abs/src/lib.rs:3"

    panic = PanicParser().try_parse([line], 0, state).panic

    assert panic.file_path == "/abs/src/lib.rs"


def panic_number(panic_id):
    prefix, number = panic_id.rsplit("-", 1)
    assert prefix == "cargo-panic"
    return int(number)


def test_ids_increase_across_parsers(state):
    line = "thread 'main' panicked at 'boom', src/main.rs:1"

    ids = [PanicParser().try_parse([line], 0, state).panic.id for _ in range(3)]

    numbers = [panic_number(panic_id) for panic_id in ids]
    assert numbers == sorted(set(numbers))
    assert numbers[2] - numbers[0] == 2


@pytest.mark.parametrize(
    "line",
    [
        "   Compiling app v0.1.0",
        "error: aborting due to previous error",
        "test tests::it_works ... ok",
    ],
)
def test_non_panic_lines(state, line):
    assert not PanicParser().try_parse([line], 0, state).matched
