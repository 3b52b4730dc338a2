"""
Span labels that restate the main message.

A primary span label is appended to the message text unless the message
already carries the same information in different wording. Each entry pairs
a label pattern with the message pattern of the diagnostic it belongs to.
"""

import re
from typing import NamedTuple, Pattern, Tuple


class RedundantLabel(NamedTuple):
    code: str
    label: Pattern[str]
    message: Pattern[str]


def _entry(code: str, label: str, message: str) -> RedundantLabel:
    return RedundantLabel(code, re.compile(label), re.compile(message))


REDUNDANT_LABELS: Tuple[RedundantLabel, ...] = (
    _entry("E0001", r"this is an unreachable pattern", r"unreachable pattern"),
    _entry(
        "E0004",
        r"pattern `.+` not covered",
        r"non-exhaustive patterns: `.+` not covered",
    ),
    _entry(
        "E0023",
        r"expected \d+ fields, found \d+",
        r"this pattern has \d+ field, but the corresponding variant has \d+ fields",
    ),
    _entry(
        "E0026",
        r"struct `.+` does not have field `.+`",
        r"struct `.+` does not have a field named `.+`",
    ),
    _entry("E0027", r"missing field `.+`", r"pattern does not mention field `.+`"),
    _entry(
        "E0029",
        r"ranges require char or numeric types",
        r"only char and numeric types are allowed in range patterns",
    ),
    _entry("E0040", r"call to destructor method", r"explicit use of destructor method"),
    _entry(
        "E0046",
        r"missing `.+` in implementation",
        r"not all trait items implemented, missing: `.+`",
    ),
    _entry(
        "E0057",
        r"expected \d+ parameter[s]?",
        r"this function takes \d+ parameter[s]? but \d+ parameter[s]? (was|were) supplied",
    ),
    _entry("E0062", r"used more than once", r"field `.+` specified more than once"),
    _entry(
        "E0067",
        r"invalid expression for left-hand side",
        r"invalid left-hand side expression",
    ),
    _entry(
        "E0068",
        r"return type is not \(\)",
        r"`return;` in a function whose return type is not `\(\)`",
    ),
    _entry(
        "E0071", r"not a struct", r"`.+` does not name a struct or a struct variant"
    ),
    _entry(
        "E0072",
        r"recursive type has infinite size",
        r"recursive type `.+` has infinite size",
    ),
    _entry(
        "E0087",
        r"expected \d+ parameter[s]?",
        r"too many type parameters provided: expected at most \d+ parameter[s]?, found \d+ parameter[s]?",
    ),
    _entry("E0091", r"unused type parameter", r"type parameter `.+` is unused"),
    _entry(
        "E0101",
        r"cannot resolve type of expression",
        r"cannot determine a type for this expression: unconstrained type",
    ),
    _entry(
        "E0102",
        r"cannot resolve type of variable",
        r"cannot determine a type for this local variable: unconstrained type",
    ),
    _entry("E0106", r"expected lifetime parameter", r"missing lifetime specifier"),
    _entry(
        "E0107",
        r"(un)?expected (\d+ )?lifetime parameter[s]?",
        r"wrong number of lifetime parameters: expected \d+, found \d+",
    ),
    _entry(
        "E0109",
        r"type parameter not allowed",
        r"type parameters are not allowed on this type",
    ),
    _entry(
        "E0110",
        r"lifetime parameter not allowed",
        r"lifetime parameters are not allowed on this type",
    ),
    _entry(
        "E0116",
        r"impl for type defined outside of crate",
        r"cannot define inherent `.+` for a type outside of the crate where the type is defined",
    ),
    _entry(
        "E0117",
        r"impl doesn't use types inside crate",
        r"only traits defined in the current crate can be implemented for arbitrary types",
    ),
    _entry(
        "E0119",
        r"conflicting implementation for `.+`",
        r"conflicting implementations of trait `.+` for type `.+`",
    ),
    _entry(
        "E0120",
        r"implementing Drop requires a struct",
        r"the Drop trait may only be implemented on structures",
    ),
    _entry(
        "E0121",
        r"not allowed in type signatures",
        r"the type placeholder `_` is not allowed within types on item signatures",
    ),
    _entry("E0124", r"field already declared", r"field `.+` is already declared"),
    _entry(
        "E0368",
        r"cannot use `[<>+&|^\-]?=` on type `.+`",
        r"binary assignment operation `[<>+&|^\-]?=` cannot be applied to type `.+`",
    ),
    _entry(
        "E0387",
        r"cannot borrow mutably",
        r"cannot borrow immutable local variable `.+` as mutable",
    ),
)


def is_redundant_label(label: str, message: str) -> bool:
    """Check if ``label`` only restates ``message``."""
    return any(
        entry.label.search(label) and entry.message.search(message)
        for entry in REDUNDANT_LABELS
    )
