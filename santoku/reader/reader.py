"""Convert a generic syntax tree into a tree of Santoku values.

The reader only looks at node tags and text: a tag containing `number`,
`symbol`, `bool` or `string` becomes the matching leaf value, while the root
and `sexpr`/`qexpr` nodes become containers filled with their children.
Bracket characters and `regex` marker nodes are skipped.
"""

from __future__ import annotations

from santoku.reader.ast import ROOT_TAG, AstNode
from santoku.reader.escapes import unescape
from santoku.types.errors import ErrorKind
from santoku.types.symbol import Symbol
from santoku.types.values import (
    INT64_MAX,
    INT64_MIN,
    Boolean,
    Error,
    Expr,
    Number,
    QExpr,
    SExpr,
    String,
    Value,
)

SKIPPED_CONTENTS = frozenset({"(", ")", "{", "}"})
TRUE_TOKEN = "#t"


def read_number(node: AstNode) -> Value:
    try:
        n = int(node.contents, 10)
    except ValueError:
        return Error("invalid number", ErrorKind.NUMBER)
    if not INT64_MIN <= n <= INT64_MAX:
        return Error("invalid number", ErrorKind.NUMBER)
    return Number(n)


def read_string(node: AstNode) -> Value:
    # Remove the quote characters around the raw literal
    return String(unescape(node.contents[1:-1]))


def read(node: AstNode) -> Value:
    """Recursively read `node` into a Value tree."""
    tag = node.tag
    if "number" in tag:
        return read_number(node)
    if "symbol" in tag:
        return Symbol(node.contents)
    if "bool" in tag:
        return Boolean(node.contents == TRUE_TOKEN)
    if "string" in tag:
        return read_string(node)

    x: Expr
    if tag == ROOT_TAG or "sexpr" in tag:
        x = SExpr()
    elif "qexpr" in tag:
        x = QExpr()
    else:
        return Error(f"unknown syntax node '{tag}'", ErrorKind.SYNTAX)

    for child in node.children:
        if child.contents in SKIPPED_CONTENTS or child.tag == "regex":
            continue
        x.append(read(child))
    return x
