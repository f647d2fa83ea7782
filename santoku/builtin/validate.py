"""Argument validation helpers shared by every builtin.

Each helper returns None when the check passes, or an Error value describing
the failure. Builtins chain them with `or` so the first failure wins and no
later check inspects arguments an earlier check already rejected:

    err = check_count("head", args, 1) or check_type("head", args, 0, QExpr)
    if err:
        return err
"""

from __future__ import annotations

from typing import Optional

from santoku.types.errors import ErrorKind
from santoku.types.symbol import Symbol
from santoku.types.values import Error, Expr, SExpr, Value


def check_count(fname: str, args: SExpr, expected: int) -> Optional[Error]:
    if len(args) != expected:
        return Error(
            f"function '{fname}' passed incorrect number of arguments. "
            f"Expected {expected}, got {len(args)}",
            ErrorKind.ARITY,
        )
    return None


def check_some(fname: str, args: SExpr) -> Optional[Error]:
    if not len(args):
        return Error(f"function '{fname}' passed no arguments", ErrorKind.ARITY)
    return None


def check_type(fname: str, args: SExpr, index: int, expected: type[Value]) -> Optional[Error]:
    actual = args[index]
    if not isinstance(actual, expected):
        return Error(
            f"function '{fname}' argument {index} was type {actual.kind_name}, "
            f"expected {expected.kind_name}",
            ErrorKind.TYPE,
        )
    return None


def check_all_types(fname: str, args: SExpr, expected: type[Value]) -> Optional[Error]:
    for i in range(len(args)):
        err = check_type(fname, args, i, expected)
        if err:
            return err
    return None


def check_not_empty(fname: str, args: SExpr, index: int) -> Optional[Error]:
    container = args[index]
    if isinstance(container, Expr) and not len(container):
        return Error(f"function '{fname}' passed {{}} for argument {index}", ErrorKind.EMPTY)
    return None


def check_symbols(fname: str, symbols: Expr) -> Optional[Error]:
    """Every item of `symbols` must be a Symbol."""
    for i, item in enumerate(symbols):
        if not isinstance(item, Symbol):
            return Error(
                f"function '{fname}' can only define items of type {Symbol.kind_name}. "
                f"Argument {i} is type {item.kind_name}",
                ErrorKind.TYPE,
            )
    return None
