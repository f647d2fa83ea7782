"""Function values for Santoku: native builtins and user-defined lambdas."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from santoku.types.environment import Environment
from santoku.types.values import Function, QExpr, SExpr, Value

BuiltinFn = Callable[[Environment, SExpr], Value]


class Builtin(Function):
    """A primitive operation implemented in Python.

    `fn` receives the calling environment and the evaluated argument SExpr,
    which it owns. Builtins are immutable, so copies share the same callable
    and two builtins are equal only when they wrap the very same callable.
    """

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: SExpr) -> Value:
        return self.fn(env, args)

    def copy(self) -> Builtin:
        return Builtin(self.name, self.fn)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class Lambda(Function):
    """A first-class lambda with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: SExpr, env: Environment | None = None):
        self.formals: QExpr = formals
        self.body: SExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        # The closure is shared, never copied
        return Lambda(self.formals.copy(), self.body.copy(), self.env)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
        )

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            # Show the body quoted so the rendering reads back as source
            buffer.write(str(QExpr(self.body.items)))
            buffer.write(")")
            return buffer.getvalue()
