from __future__ import annotations
import sys

from santoku.types.values import Value


class Symbol(Value):
    __slots__ = ("name",)
    kind_name = "Symbol"

    def __init__(self, name: str):
        self.name = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
