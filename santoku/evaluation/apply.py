"""Application engine for Santoku.

This module centralizes function application semantics for the interpreter:
- Builtins are called directly with the calling environment and the argument
  S-expression, which they own from then on.
- Lambdas bind arguments positionally into a fresh frame whose parent is the
  closure captured when the lambda was created (lexical scoping).
- `& name` in the formals binds every remaining argument as a Q-expression.
- Supplying fewer arguments than formals returns a partially applied Lambda
  whose closure is the partially populated frame (currying).
"""

from __future__ import annotations

import logging

from santoku import EvaluatorFn
from santoku.types.environment import Environment
from santoku.types.errors import ErrorKind
from santoku.types.lambda_fn import Builtin, Lambda
from santoku.types.values import Error, Function, QExpr, SExpr, Value

logger = logging.getLogger(__name__)

VARIADIC_MARKER = "&"


def _format_error() -> Error:
    return Error(
        "function format invalid. "
        f"Symbol '{VARIADIC_MARKER}' not followed by a single symbol",
        ErrorKind.FORMAT,
    )


def apply_lambda(fn: Lambda, args: SExpr, evaluate_fn: EvaluatorFn) -> Value:
    """Apply a Lisp Lambda value.

    Parameters:
    - fn: The Lambda being applied; it is never mutated.
    - args: The already-evaluated argument values (consumed).
    - evaluate_fn: Evaluator used to run the body once every formal is bound.

    Returns the body's value, a partially applied Lambda, or an Error for
    too many arguments or a malformed `&` list.
    """
    formals = fn.formals.copy()
    given = len(args)
    total = len(formals)
    frame = Environment(outer=fn.env)

    while len(args):
        if not len(formals):
            args.items.clear()
            return Error(
                "Function passed too many arguments. "
                f"Expected {total}, got {given}",
                ErrorKind.ARITY,
            )

        sym = formals.pop(0)
        if sym.name == VARIADIC_MARKER:
            if len(formals) != 1:
                return _format_error()
            frame.define_local(formals.pop(0), args.to_qexpr())
            break

        frame.define_local(sym, args.pop(0))

    # A variadic tail with nothing left to bind gets the empty list
    if len(formals) and formals[0].name == VARIADIC_MARKER:
        if len(formals) != 2:
            return _format_error()
        formals.pop(0)
        frame.define_local(formals.pop(0), QExpr())

    if len(formals):
        logger.debug("partial application: %d of %d formals still unbound", len(formals), total)
        return Lambda(formals, fn.body.copy(), frame)

    return evaluate_fn(frame, fn.body.copy())


def apply(
    env: Environment,
    head: Function,
    args: SExpr,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Lambda or a Builtin to the argument S-expression.

    - For Lambda, defer to apply_lambda (handling partials and `&` tails).
    - For Builtin, invoke with the calling env and the argument list.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    if isinstance(head, Builtin):
        return head(env, args)
    return Error(f"cannot apply a value of type {head.kind_name}", ErrorKind.TYPE)
