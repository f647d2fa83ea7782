"""
  Santoku Lexer and Parser

- Turns source text into the generic syntax tree of santoku.reader.ast
- Grammar:

    number  : /-?[0-9]+/ ;
    symbol  : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&]+/ ;
    bool    : /#[tf]/ ;
    string  : /"(\\\\.|[^"])*"/ ;
    sexpr   : '(' <expr>* ')' ;
    qexpr   : '{' <expr>* '}' ;
    expr    : <number> | <symbol> | <bool> | <string> | <sexpr> | <qexpr> ;
    lispy   : /^/ <expr>* /$/ ;

- Alternatives are tried in order at each position, so `-5` is a number and
  `-` alone is a symbol. `;` starts a comment that runs to end of line.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from santoku.reader.ast import ROOT_TAG, AstNode
from santoku.types.errors import SantokuSyntaxError

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<space>\s+)"  # whitespace between tokens
    r"|(?P<number>-?[0-9]+)"  # numbers win over symbols
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&]+)"  # identifiers and operators
    r"|(?P<bool>#[tf])"  # #t / #f
    r'|(?P<string>"(?:\\.|[^"])*")'  # double-quoted strings
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})",  # }
    re.DOTALL,
)

LEAF_KINDS = ("number", "symbol", "bool", "string")

OPENERS: dict[str, tuple[str, str, str]] = {
    # token type -> (container tag, closing token type, closing char)
    "lparen": ("sexpr", "rparen", ")"),
    "lbrace": ("qexpr", "rbrace", "}"),
}

Token = tuple[str, str, int, int]


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, line, column) tuples."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            column = pos - line_start + 1
            raise SantokuSyntaxError(
                f"unexpected character {source[pos]!r}",
                filename,
                line,
                column,
                expected=["expression"],
            )
        kind = m.lastgroup
        text = m.group()
        if kind not in ("comment", "space"):
            yield kind, text, line, pos - line_start + 1
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rindex("\n") + 1
        pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], filename: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.filename = filename
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def _error_at_end(self, message: str, expected: list[str]) -> SantokuSyntaxError:
        if self.last is None:
            return SantokuSyntaxError(message, self.filename, 1, 1, expected)
        _, text, line, column = self.last
        return SantokuSyntaxError(message, self.filename, line, column + len(text), expected)

    def parse_expr(self) -> Optional[AstNode]:
        """Parse one expression, or return None at end of input."""
        tok = self.peek()
        if tok is None:
            return None
        tok_type, tok_val, line, column = tok

        if tok_type in LEAF_KINDS:
            self.advance()
            return AstNode(f"expr|{tok_type}|regex", tok_val, [], line, column)

        if tok_type in OPENERS:
            tag, close_type, close_char = OPENERS[tok_type]
            self.advance()
            children = [AstNode("char", tok_val, [], line, column)]
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise self._error_at_end(
                        "unexpected end of input", ["expression", f"'{close_char}'"]
                    )
                if nxt[0] == close_type:
                    self.advance()
                    children.append(AstNode("char", nxt[1], [], nxt[2], nxt[3]))
                    break
                if nxt[0] in ("rparen", "rbrace"):
                    raise SantokuSyntaxError(
                        f"unexpected '{nxt[1]}'",
                        self.filename,
                        nxt[2],
                        nxt[3],
                        ["expression", f"'{close_char}'"],
                    )
                children.append(self.parse_expr())
            return AstNode(f"expr|{tag}|>", "", children, line, column)

        raise SantokuSyntaxError(
            f"unexpected '{tok_val}'",
            self.filename,
            line,
            column,
            ["expression", "end of input"],
        )

    def parse_all(self) -> Iterator[AstNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> AstNode:
    """Parse a whole input into a root node.

    Raises SantokuSyntaxError when the text does not match the grammar.
    """
    stream = TokenStream(lex(source, filename), filename)
    try:
        exprs = list(stream.parse_all())
    except SantokuSyntaxError as e:
        logger.debug("parse failed: %s", e)
        raise
    return AstNode(
        ROOT_TAG,
        "",
        [AstNode("regex"), *exprs, AstNode("regex")],
    )
