"""Core evaluator for the Santoku interpreter.

Evaluation is a plain recursive walk over the Value tree. Symbols resolve
through the environment chain, S-expressions evaluate their children left to
right and then apply the head, and everything else evaluates to itself.
Errors are values: the leftmost Error among the evaluated children of an
S-expression becomes the result of the whole expression.
"""

from __future__ import annotations

from santoku.evaluation.apply import apply
from santoku.types.environment import Environment
from santoku.types.errors import ErrorKind
from santoku.types.symbol import Symbol
from santoku.types.values import Error, Function, SExpr, Value


def evaluate(env: Environment, value: Value) -> Value:
    """Reduce `value` to a result in `env`; `value` is consumed."""
    if isinstance(value, Symbol):
        return env.lookup(value.name)
    if isinstance(value, SExpr):
        return evaluate_sexpr(env, value)
    # --- Atoms, Q-expressions, functions and errors return as-is ---
    return value


def evaluate_sexpr(env: Environment, sexpr: SExpr) -> Value:
    items = sexpr.items
    for i, item in enumerate(items):
        items[i] = evaluate(env, item)

    for item in items:
        if isinstance(item, Error):
            items.clear()
            return item

    if not items:
        return sexpr

    if len(items) == 1:
        return sexpr.take(0)

    head = sexpr.pop(0)
    if not isinstance(head, Function):
        items.clear()
        return Error(
            "s-expression starts with incorrect type. "
            f"Expected {Function.kind_name}, got {head.kind_name}",
            ErrorKind.TYPE,
        )

    # The remaining children are the argument list
    return apply(env, head, sexpr, evaluate)
