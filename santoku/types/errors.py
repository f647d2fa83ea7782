"""Error classification and host-level exceptions for Santoku.

Language-level failures are ordinary values (santoku.types.values.Error) that
carry an ErrorKind. Python exceptions are reserved for problems outside the
language: malformed source text that cannot be parsed at all.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Structured reason attached to an Error value."""

    ARITY = "arity"
    TYPE = "type"
    EMPTY = "empty"
    UNBOUND = "unbound"
    FORMAT = "format"
    DIVISION = "division"
    NUMBER = "number"
    SYNTAX = "syntax"
    OTHER = "other"


class SantokuError(Exception):
    """ Base class for all Santoku errors"""
    pass


class SantokuSyntaxError(SantokuError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, filename: str = "<stdin>", line: int = 1,
                 column: int = 1, expected: list[str] | None = None):
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        self.expected = expected or []
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.filename}:{self.line}:{self.column}: error: {self.message}"
        if self.expected:
            text += f" (expected {' or '.join(self.expected)})"
        return text
