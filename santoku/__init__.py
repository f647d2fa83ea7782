# Core type aliases for Santoku's runtime.
# Every runtime datum is a santoku.types.values.Value; code and data share the
# same two container kinds (SExpr for evaluable forms, QExpr for quoted data).
#
# EvaluatorFn is the signature of santoku.evaluation.evaluator.evaluate, handed
# to helpers that must re-enter evaluation without importing the evaluator.

from typing import Any, Callable

__version__ = "0.0.1"

# Evaluator function type: (env, value) -> value
EvaluatorFn = Callable[..., Any]
