from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from santoku.builtin.env_builtin import register
from santoku.config import get_prelude_file
from santoku.evaluation.evaluator import evaluate
from santoku.reader.ast import AstNode
from santoku.reader.parser import parse
from santoku.reader.reader import read
from santoku.types.environment import Environment
from santoku.types.values import Error, SExpr, Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates parsing, reading and evaluating Santoku code.
    Maintains the root Environment across calls, so definitions persist.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_file()
            if path.is_file():
                logger.debug("loading prelude %s", path)
                self.eval_prelude(path.read_text(encoding="utf-8"), str(path))
            else:
                # Be permissive: no prelude found -> proceed
                logger.debug("no prelude at %s", path)
        elif prelude:
            self.eval_prelude(prelude)

    def parse(self, code: str, filename: str = "<stdin>") -> AstNode:
        return parse(code, filename)

    def read(self, code: str, filename: str = "<stdin>") -> SExpr:
        """Parse and read `code` into the root S-expression."""
        return read(self.parse(code, filename))

    def eval(self, code: str, filename: str = "<stdin>") -> Value:
        """Evaluate the whole input as one S-expression, as the REPL does.

        `+ 1 2` therefore evaluates to 3, and an empty input to `()`.
        """
        return evaluate(self.env, self.read(code, filename))

    def eval_all(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level expression separately, in order."""
        root = self.read(code, filename)
        return [evaluate(self.env, expr) for expr in root.items]

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> None:
        for result in self.eval_all(code, filename):
            if isinstance(result, Error):
                logger.warning("prelude %s: %s", filename, result)

    def load_file(self, path: Path) -> list[Value]:
        """Evaluate every top-level expression of the file at `path`."""
        logger.debug("loading %s", path)
        return self.eval_all(Path(path).read_text(encoding="utf-8"), str(path))
