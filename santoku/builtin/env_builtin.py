"""Built-in functions for the Santoku runtime environment.

This module defines list processing, arithmetic, comparison, branching,
variable definition and lambda construction, plus the registration helper
that installs them into a root Environment. Every builtin takes the calling
environment and the evaluated argument S-expression, validates it, and
returns either a result or an Error value.
"""
from __future__ import annotations

import logging
import operator
from enum import Enum
from functools import partial

from santoku.builtin.validate import (
    check_all_types,
    check_count,
    check_not_empty,
    check_some,
    check_symbols,
    check_type,
)
from santoku.evaluation.evaluator import evaluate
from santoku.types.environment import Environment
from santoku.types.errors import ErrorKind
from santoku.types.lambda_fn import Builtin, BuiltinFn, Lambda
from santoku.types.symbol import Symbol
from santoku.types.values import (
    Boolean,
    Error,
    Number,
    QExpr,
    SExpr,
    Value,
    wrap_int64,
)

logger = logging.getLogger(__name__)


class ArithOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class OrderOp(Enum):
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


class EqualityOp(Enum):
    EQ = "=="
    NE = "!="


_ARITH_FUNCS = {
    ArithOp.ADD: operator.add,
    ArithOp.SUB: operator.sub,
    ArithOp.MUL: operator.mul,
}

_ORDER_FUNCS = {
    OrderOp.GT: operator.gt,
    OrderOp.GE: operator.ge,
    OrderOp.LT: operator.lt,
    OrderOp.LE: operator.le,
}


# -------------------------------
# List functions
# -------------------------------
def list_builtin(env: Environment, args: SExpr) -> Value:
    """Relabel the argument list as a Q-expression."""
    return args.to_qexpr()


def head(env: Environment, args: SExpr) -> Value:
    """Return a Q-expression holding only the first element of the argument."""
    err = (
        check_count("head", args, 1)
        or check_type("head", args, 0, QExpr)
        or check_not_empty("head", args, 0)
    )
    if err:
        return err
    v = args.take(0)
    del v.items[1:]
    return v


def tail(env: Environment, args: SExpr) -> Value:
    """Return the argument Q-expression without its first element."""
    err = (
        check_count("tail", args, 1)
        or check_type("tail", args, 0, QExpr)
        or check_not_empty("tail", args, 0)
    )
    if err:
        return err
    v = args.take(0)
    v.pop(0)
    return v


def eval_builtin(env: Environment, args: SExpr) -> Value:
    """Evaluate a Q-expression as an S-expression in the calling environment."""
    err = check_count("eval", args, 1) or check_type("eval", args, 0, QExpr)
    if err:
        return err
    return evaluate(env, args.take(0).to_sexpr())


def join(env: Environment, args: SExpr) -> Value:
    """Concatenate Q-expressions in order."""
    err = check_all_types("join", args, QExpr)
    if err:
        return err
    result = QExpr()
    for q in args:
        result.join(q)
    return result


# -------------------------------
# Arithmetic
# -------------------------------
def _trunc_div(a: int, b: int) -> int:
    # Integer division rounding toward zero, as machine integers do
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def arithmetic(env: Environment, args: SExpr, op: ArithOp) -> Value:
    """Fold `op` over the numeric arguments left to right; unary `-` negates."""
    err = check_some(op.value, args)
    if err:
        return err
    for item in args:
        if not isinstance(item, Number):
            return Error("cannot operate on a non-number", ErrorKind.TYPE)

    x = args.pop(0).value
    if op is ArithOp.SUB and not len(args):
        x = wrap_int64(-x)

    while len(args):
        y = args.pop(0).value
        if op is ArithOp.DIV:
            if y == 0:
                return Error("division by zero", ErrorKind.DIVISION)
            x = wrap_int64(_trunc_div(x, y))
        else:
            x = wrap_int64(_ARITH_FUNCS[op](x, y))
    return Number(x)


# -------------------------------
# Comparison
# -------------------------------
def compare_order(env: Environment, args: SExpr, op: OrderOp) -> Value:
    """Numeric ordering of exactly two numbers."""
    err = check_count(op.value, args, 2) or check_all_types(op.value, args, Number)
    if err:
        return err
    x, y = args.pop(0), args.pop(0)
    return Boolean(_ORDER_FUNCS[op](x.value, y.value))


def compare_equality(env: Environment, args: SExpr, op: EqualityOp) -> Value:
    """Structural (in)equality of exactly two values of any type."""
    err = check_count(op.value, args, 2)
    if err:
        return err
    same = args[0] == args[1]
    return Boolean(same if op is EqualityOp.EQ else not same)


# -------------------------------
# Branching
# -------------------------------
def if_builtin(env: Environment, args: SExpr) -> Value:
    """(if cond {then} {else}): evaluate the branch selected by a Boolean."""
    if len(args) not in (2, 3):
        return Error(
            f"'if' statements require 2 or 3 arguments. Got {len(args)}",
            ErrorKind.ARITY,
        )
    err = check_type("if", args, 0, Boolean) or check_type("if", args, 1, QExpr)
    if not err and len(args) == 3:
        err = check_type("if", args, 2, QExpr)
    if err:
        return err

    cond = args.pop(0)
    then_expr = args.pop(0).to_sexpr()
    # Missing else-branch evaluates to the empty expression
    else_expr = args.pop(0).to_sexpr() if len(args) else SExpr()

    return evaluate(env, then_expr if cond.value else else_expr)


# -------------------------------
# Variables and lambdas
# -------------------------------
def define_variables(env: Environment, args: SExpr, fname: str, local: bool) -> Value:
    """Bind each symbol of the first argument to the matching remaining argument.

    `def` binds in the root frame, `=` in the calling frame. Nothing is bound
    unless every check passes.
    """
    err = check_some(fname, args) or check_type(fname, args, 0, QExpr)
    if err:
        return err
    symbols = args[0]
    err = check_symbols(fname, symbols)
    if err:
        return err
    if len(symbols) != len(args) - 1:
        return Error(
            f"function '{fname}' cannot define an incorrect number of values to symbols. "
            f"Num values: {len(args) - 1}, num symbols: {len(symbols)}",
            ErrorKind.ARITY,
        )

    bind = env.define_local if local else env.define_global
    for sym, value in zip(symbols, args.items[1:]):
        bind(sym, value)
    return SExpr()


def make_lambda(env: Environment, args: SExpr) -> Value:
    """(\\ {formals} {body}): build a Lambda closing over the calling env."""
    err = (
        check_count("\\", args, 2)
        or check_type("\\", args, 0, QExpr)
        or check_type("\\", args, 1, QExpr)
    )
    if err:
        return err

    for item in args[0]:
        if not isinstance(item, Symbol):
            return Error(
                f"cannot define a non-symbol. Got {item.kind_name}, expected {Symbol.kind_name}",
                ErrorKind.TYPE,
            )

    formals = args.pop(0)
    body = args.pop(0).to_sexpr()
    return Lambda(formals, body, env)


def define_function(env: Environment, args: SExpr) -> Value:
    """(fun {name formals...} {body}): bind a named lambda in the root frame.

    The lambda closes over the calling environment, the same one `\\` would
    capture at this point.
    """
    err = (
        check_count("fun", args, 2)
        or check_type("fun", args, 0, QExpr)
        or check_type("fun", args, 1, QExpr)
        or check_not_empty("fun", args, 0)
        or check_symbols("fun", args[0])
    )
    if err:
        return err

    signature = args.pop(0)
    body = args.pop(0).to_sexpr()
    name = signature.pop(0)
    env.define_global(name, Lambda(signature, body, env))
    return SExpr()


def builtin_table() -> dict[str, BuiltinFn]:
    """Name -> native operation, with operator tags bound once here."""
    table: dict[str, BuiltinFn] = {
        # List functions
        "list": list_builtin,
        "head": head,
        "tail": tail,
        "eval": eval_builtin,
        "join": join,
        # Branching
        "if": if_builtin,
        # Variable functions
        "def": partial(define_variables, fname="def", local=False),
        "=": partial(define_variables, fname="=", local=True),
        # Lambdas
        "\\": make_lambda,
        "fun": define_function,
    }
    for op in ArithOp:
        table[op.value] = partial(arithmetic, op=op)
    for op in OrderOp:
        table[op.value] = partial(compare_order, op=op)
    for op in EqualityOp:
        table[op.value] = partial(compare_equality, op=op)
    return table


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    table = builtin_table()
    env.update({name: Builtin(name, fn) for name, fn in table.items()})
    logger.debug("registered %d builtins", len(table))
