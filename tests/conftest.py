import pytest

from santoku.builtin.env_builtin import register
from santoku.evaluation.evaluator import evaluate
from santoku.interpreter import Interpreter
from santoku.reader.parser import parse
from santoku.reader.reader import read
from santoku.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate one line of source against the `env` fixture, REPL style."""
    def _run(source: str):
        return evaluate(env, read(parse(source)))
    return _run


@pytest.fixture
def interp():
    return Interpreter(prelude=None)


@pytest.fixture
def prelude_interp(monkeypatch):
    """Interpreter with the bundled prelude loaded."""
    monkeypatch.delenv("SANTOKU_PRELUDE_PATH", raising=False)
    return Interpreter()
