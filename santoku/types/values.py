"""Runtime values for Santoku.

Every datum the interpreter touches is a Value: numbers, booleans, strings,
symbols, first-class errors, functions, and the two expression containers.
SExpr holds evaluable code, QExpr holds quoted data; both own their items and
hand out copies whenever a value must live in two places at once.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator

from santoku.reader.escapes import escape
from santoku.types.errors import ErrorKind

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(n: int) -> int:
    """Reduce `n` into signed 64-bit range, two's complement style."""
    return ((n - INT64_MIN) & 0xFFFF_FFFF_FFFF_FFFF) + INT64_MIN


class Value:
    """Base class for every runtime datum."""

    __slots__ = ()

    # Display name used in type-mismatch messages
    kind_name = "Unknown"

    def copy(self) -> Value:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class Number(Value):
    __slots__ = ("value",)
    kind_name = "Number"

    def __init__(self, value: int):
        self.value = value

    def copy(self) -> Number:
        return Number(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __str__(self) -> str:
        return str(self.value)


class Boolean(Value):
    __slots__ = ("value",)
    kind_name = "Boolean"

    def __init__(self, value: bool):
        self.value = bool(value)

    def copy(self) -> Boolean:
        return Boolean(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Boolean) and self.value == other.value

    def __str__(self) -> str:
        return "#t" if self.value else "#f"


class String(Value):
    __slots__ = ("value",)
    kind_name = "String"

    def __init__(self, value: str):
        self.value = value

    def copy(self) -> String:
        return String(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.value == other.value

    def __str__(self) -> str:
        return f'"{escape(self.value)}"'


class Error(Value):
    """A first-class error value.

    Errors compare by message text only; `kind` classifies the failure for
    callers but does not take part in equality.
    """

    __slots__ = ("message", "kind")
    kind_name = "Error"

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.OTHER):
        self.message = message
        self.kind = kind

    def copy(self) -> Error:
        return Error(self.message, self.kind)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __str__(self) -> str:
        return f"Error: {self.message}"


class Function(Value):
    """Common base of Builtin and Lambda."""

    __slots__ = ()
    kind_name = "Function"


class Expr(Value):
    """Ordered, exclusively-owned sequence of values."""

    __slots__ = ("items",)
    open_char = ""
    close_char = ""

    def __init__(self, items: list[Value] | None = None):
        # Avoid shared default lists across instances
        self.items: list[Value] = items if items is not None else []

    def copy(self) -> Expr:
        return type(self)([item.copy() for item in self.items])

    # --- container protocol ---
    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def append(self, value: Value) -> Expr:
        self.items.append(value)
        return self

    def pop(self, index: int = 0) -> Value:
        """Remove and return the item at `index`."""
        return self.items.pop(index)

    def take(self, index: int) -> Value:
        """Return the item at `index`, releasing every other item."""
        value = self.items[index]
        self.items.clear()
        return value

    def join(self, other: Expr) -> Expr:
        """Move every item of `other` onto the end of this expression."""
        self.items.extend(other.items)
        other.items = []
        return self

    # --- relabelling moves the item list, it never copies it ---
    def to_qexpr(self) -> QExpr:
        items, self.items = self.items, []
        return QExpr(items)

    def to_sexpr(self) -> SExpr:
        items, self.items = self.items, []
        return SExpr(items)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.items == other.items

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_char)
            buffer.write(" ".join(str(item) for item in self.items))
            buffer.write(self.close_char)
            return buffer.getvalue()


class SExpr(Expr):
    __slots__ = ()
    kind_name = "S-Expression"
    open_char = "("
    close_char = ")"


class QExpr(Expr):
    __slots__ = ()
    kind_name = "Q-Expression"
    open_char = "{"
    close_char = "}"
