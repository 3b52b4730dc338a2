import json

import pytest

from conftest import make_diagnostic, make_span, to_line

from cargo_parser.core.enums import MessageKind, MessageSeverity
from cargo_parser.core.errors import JsonMessageError
from cargo_parser.parsers.json_parser import JsonParser


@pytest.fixture
def parser():
    return JsonParser()


def test_primary_span_sets_location_and_label(parser, state):
    line = to_line(
        make_diagnostic(
            "mismatched types",
            spans=[make_span(line=10, col=5, col_end=9, label="expected `u32`")],
            code="E0308",
            explanation="Expected type did not match the received type.",
        )
    )

    step = parser.try_parse([line], 0, state)

    assert step.consumed == 1
    msg = step.messages[0]
    assert msg.severity == MessageSeverity.ERROR
    assert msg.location.file == "src/main.rs"
    assert (msg.location.line, msg.location.col, msg.location.col_end) == (10, 5, 9)
    assert msg.extra.span_label == "expected `u32`"
    assert msg.extra.error_code == "E0308"
    assert msg.trace[-1].kind == MessageKind.EXPLANATION
    assert msg.trace[-1].text.startswith("Expected type")


def test_children_become_trace_entries(parser, state):
    line = to_line(
        make_diagnostic(
            "unused variable: `x`",
            level="warning",
            spans=[make_span(line=2, col=9)],
            children=[
                make_diagnostic("`#[warn(unused_variables)]` on by default", level="note"),
                make_diagnostic(
                    "prefix it with an underscore",
                    level="help",
                    spans=[make_span(line=2, col=9, label="_x")],
                ),
            ],
        )
    )

    msg = parser.try_parse([line], 0, state).messages[0]

    assert [entry.kind for entry in msg.trace] == [MessageKind.NOTE, MessageKind.HELP]
    assert msg.trace[0].location is None
    assert msg.trace[1].location.line == 2
    assert msg.trace[1].extra.span_label == "_x"


def test_secondary_span_with_label_adds_note(parser, state):
    line = to_line(
        make_diagnostic(
            "borrow of moved value: `v`",
            spans=[
                make_span(line=4, col=22, label="value borrowed here after move"),
                make_span(line=3, col=13, is_primary=False, label="value moved here"),
            ],
        )
    )

    msg = parser.try_parse([line], 0, state).messages[0]

    assert msg.location.line == 4
    assert len(msg.trace) == 1
    note = msg.trace[0]
    assert note.kind == MessageKind.NOTE
    assert note.text == "value moved here"
    assert (note.location.line, note.location.col) == (3, 13)


def test_first_span_used_without_primary(parser, state):
    line = to_line(
        make_diagnostic(
            "something",
            spans=[
                make_span(line=7, is_primary=False),
                make_span(line=9, is_primary=False),
            ],
        )
    )

    msg = parser.try_parse([line], 0, state).messages[0]

    assert msg.location.line == 7


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_expansion_chain_resolves_to_real_file(parser, state, depth):
    span = make_span(file_name="src/lib.rs", line=12, col=3, is_primary=False)
    for level in range(depth):
        span = make_span(
            file_name=f"<macro {level}>",
            line=1,
            col=1,
            is_primary=level == depth - 1,
            expansion=span,
            text=[f"expanded {level}"],
        )
    line = to_line(make_diagnostic("bad macro input", spans=[span]))

    msg = parser.try_parse([line], 0, state).messages[0]

    assert msg.location.file == "src/lib.rs"
    assert (msg.location.line, msg.location.col) == (12, 3)
    assert msg.trace[0].kind == MessageKind.MACRO
    assert msg.trace[0].text == f"expanded {depth - 1}"


def test_expansion_chain_without_real_file(parser, state):
    span = make_span(file_name="<std macros>", text=["panic!()"])
    line = to_line(make_diagnostic("inside a macro", spans=[span]))

    msg = parser.try_parse([line], 0, state).messages[0]

    assert msg.location is None
    assert [entry.kind for entry in msg.trace] == [MessageKind.MACRO]


def test_cargo_wrapper_is_unwrapped(parser, state):
    wrapped = {
        "reason": "compiler-message",
        "package_id": "app 0.1.0",
        "target": {"name": "app"},
        "message": make_diagnostic("unused import", level="warning", spans=[make_span()]),
    }

    step = parser.try_parse([json.dumps(wrapped)], 0, state)

    assert step.messages[0].text == "unused import"
    assert step.messages[0].severity == MessageSeverity.WARNING


@pytest.mark.parametrize(
    "obj",
    [
        {"reason": "compiler-artifact", "package_id": "app 0.1.0"},
        {"reason": "build-finished", "success": False},
        {"unrelated": True},
    ],
)
def test_non_diagnostic_objects_are_ignored(parser, state, obj):
    step = parser.try_parse([json.dumps(obj)], 0, state)

    assert step.consumed == 1
    assert step.messages == []


def test_non_json_line_is_not_matched(parser, state):
    step = parser.try_parse(["   Compiling app v0.1.0"], 0, state)

    assert not step.matched


def test_malformed_json_raises(parser, state):
    with pytest.raises(JsonMessageError) as excinfo:
        parser.try_parse(['{"message": "oops", "level":'], 0, state)

    assert excinfo.value.error_code == "INVALID_JSON"
    assert excinfo.value.line.startswith('{"message"')


def test_wrong_shape_raises(parser, state):
    line = json.dumps({"message": "x", "level": "error", "spans": [{"file_name": 3}]})

    with pytest.raises(JsonMessageError) as excinfo:
        parser.try_parse([line], 0, state)

    assert excinfo.value.error_code == "INVALID_MESSAGE"
