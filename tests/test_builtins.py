import pytest

from santoku.builtin.env_builtin import join
from santoku.types.errors import ErrorKind
from santoku.types.values import Error, Number, SExpr


@pytest.mark.parametrize(
    "source,expected",
    [
        ("list 1 2 3", "{1 2 3}"),
        ("list", "<builtin>"),
        ("list (+ 1 2) {x}", "{3 {x}}"),
        ("head {1 2 3}", "{1}"),
        ("head {{1 2} 3}", "{{1 2}}"),
        ("tail {1 2 3}", "{2 3}"),
        ("tail {1}", "{}"),
        ("eval {+ 1 2}", "3"),
        ("eval {}", "()"),
        ("eval {head {5 6}}", "{5}"),
        ("eval (head {(+ 1 2) (+ 10 20)})", "3"),
        ("join {1} {2 3} {}", "{1 2 3}"),
        ("join {1 2}", "{1 2}"),
        ("head (list 1 2 3 4)", "{1}"),
        ("eval (tail {tail tail {5 6 7}})", "{6 7}"),
    ],
)
def test_list_builtins(run, source, expected):
    assert str(run(source)) == expected


def test_join_with_no_arguments(env):
    assert str(join(env, SExpr())) == "{}"


@pytest.mark.parametrize(
    "source,message,kind",
    [
        ("head {}", "function 'head' passed {} for argument 0", ErrorKind.EMPTY),
        ("tail {}", "function 'tail' passed {} for argument 0", ErrorKind.EMPTY),
        ("head 1", "function 'head' argument 0 was type Number, expected Q-Expression", ErrorKind.TYPE),
        ("head {1} {2}",
         "function 'head' passed incorrect number of arguments. Expected 1, got 2",
         ErrorKind.ARITY),
        ("tail #t", "function 'tail' argument 0 was type Boolean, expected Q-Expression", ErrorKind.TYPE),
        ("eval 1", "function 'eval' argument 0 was type Number, expected Q-Expression", ErrorKind.TYPE),
        ("eval {1} {2}",
         "function 'eval' passed incorrect number of arguments. Expected 1, got 2",
         ErrorKind.ARITY),
        ("join {1} 2", "function 'join' argument 1 was type Number, expected Q-Expression", ErrorKind.TYPE),
        ('join {1} "s"', "function 'join' argument 1 was type String, expected Q-Expression", ErrorKind.TYPE),
    ],
)
def test_list_builtin_errors(run, source, message, kind):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message
    assert result.kind is kind


@pytest.mark.parametrize(
    "source,expected",
    [
        ("== 1 1", "#t"),
        ("== 1 2", "#f"),
        ("!= 1 2", "#t"),
        ("== {1 {2}} {1 {2}}", "#t"),
        ("== {1 2} {1 3}", "#f"),
        ("== {} {}", "#t"),
        ("== {1} 1", "#f"),
        ('== "a" "a"', "#t"),
        ('!= "a" "b"', "#t"),
        ("== #t #t", "#t"),
        ("== #t #f", "#f"),
        ("== + +", "#t"),
        ("== + -", "#f"),
        ("== (\\ {x} {x}) (\\ {x} {x})", "#t"),
        ("== (\\ {x} {x}) (\\ {y} {y})", "#f"),
        ("!= (\\ {x} {x}) +", "#t"),
    ],
)
def test_equality(run, source, expected):
    assert str(run(source)) == expected


def test_equality_arity(run):
    result = run("== 1 2 3")
    assert result == Error("function '==' passed incorrect number of arguments. Expected 2, got 3")
    assert result.kind is ErrorKind.ARITY


@pytest.mark.parametrize(
    "source,expected",
    [
        ("> 2 1", "#t"),
        ("> 1 2", "#f"),
        (">= 2 2", "#t"),
        ("< -1 0", "#t"),
        ("<= 3 2", "#f"),
        ("<= 2 2", "#t"),
    ],
)
def test_ordering(run, source, expected):
    assert str(run(source)) == expected


@pytest.mark.parametrize(
    "source,message",
    [
        ("> 1 {2}", "function '>' argument 1 was type Q-Expression, expected Number"),
        ("< #t 1", "function '<' argument 0 was type Boolean, expected Number"),
        (">= 1", "function '>=' passed incorrect number of arguments. Expected 2, got 1"),
    ],
)
def test_ordering_errors(run, source, message):
    assert run(source) == Error(message)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("if #t {1} {2}", "1"),
        ("if #f {1} {2}", "2"),
        ("if (> 3 2) {+ 1 1} {undefined}", "2"),
        ("if #t {1}", "1"),
        ("if #f {1}", "()"),
        ("if #t {} {2}", "()"),
        ("if #t {{1 2}} {2}", "{1 2}"),
    ],
)
def test_if(run, source, expected):
    assert str(run(source)) == expected


@pytest.mark.parametrize(
    "source,message,kind",
    [
        ("if #t", "'if' statements require 2 or 3 arguments. Got 1", ErrorKind.ARITY),
        ("if #t {1} {2} {3}", "'if' statements require 2 or 3 arguments. Got 4", ErrorKind.ARITY),
        ("if 1 {1} {2}", "function 'if' argument 0 was type Number, expected Boolean", ErrorKind.TYPE),
        ("if #t 1 {2}", "function 'if' argument 1 was type Number, expected Q-Expression", ErrorKind.TYPE),
        ("if #t {1} 2", "function 'if' argument 2 was type Number, expected Q-Expression", ErrorKind.TYPE),
    ],
)
def test_if_errors(run, source, message, kind):
    result = run(source)
    assert result == Error(message)
    assert result.kind is kind


def test_def_binds_globally(env, run):
    assert str(run("def {x y} 1 {2}")) == "()"
    assert env.lookup("x") == Number(1)
    assert str(run("y")) == "{2}"
    assert str(run("def {x} (+ x 10)")) == "()"
    assert run("x") == Number(11)


def test_def_with_no_symbols(run):
    assert str(run("def {}")) == "()"


@pytest.mark.parametrize(
    "source,message,kind",
    [
        ("def {x y} 1",
         "function 'def' cannot define an incorrect number of values to symbols. "
         "Num values: 1, num symbols: 2",
         ErrorKind.ARITY),
        ("def {x 1} 1 2",
         "function 'def' can only define items of type Symbol. Argument 1 is type Number",
         ErrorKind.TYPE),
        ("def 1 2",
         "function 'def' argument 0 was type Number, expected Q-Expression",
         ErrorKind.TYPE),
        ("= {a} 1 2",
         "function '=' cannot define an incorrect number of values to symbols. "
         "Num values: 2, num symbols: 1",
         ErrorKind.ARITY),
    ],
)
def test_def_errors(run, source, message, kind):
    result = run(source)
    assert result == Error(message)
    assert result.kind is kind


def test_failed_def_binds_nothing(env, run):
    run("def {a b} 1")
    assert "a" not in env
    assert "b" not in env


def test_def_inside_lambda_is_global(env, run):
    run("def {setter} (\\ {v} {def {inner} v})")
    run("setter 5")
    assert env.lookup("inner") == Number(5)


def test_local_assignment_stays_in_call_frame(env, run):
    run("def {local} (\\ {v} {tail (list (= {tmp} v) (+ tmp 1))})")
    assert str(run("local 5")) == "{6}"
    assert "tmp" not in env
    assert run("tmp") == Error("unbound symbol 'tmp'")


def test_builtin_values_are_first_class(run):
    run("def {add} +")
    assert run("add 2 3") == Number(5)
    assert str(run("head (list + -)")) == "{<builtin>}"
