import io
import logging
import sys

import pytest

from santoku.repl import EXIT_FAILED, EXIT_FATAL, EXIT_OK, PROMPT, main, run_repl


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch):
    """main() installs a log handler and a recursion limit; undo both afterwards."""
    monkeypatch.delenv("SANTOKU_PRELUDE_PATH", raising=False)
    limit = sys.getrecursionlimit()
    yield
    sys.setrecursionlimit(limit)
    santoku_logger = logging.getLogger("santoku")
    for handler in list(santoku_logger.handlers):
        santoku_logger.removeHandler(handler)
    santoku_logger.setLevel(logging.NOTSET)


def feeder(lines, end=EOFError):
    prompts = []
    pending = iter(lines)

    def read_line(prompt):
        prompts.append(prompt)
        try:
            return next(pending)
        except StopIteration:
            raise end()

    return read_line, prompts


def test_repl_session(interp):
    read_line, prompts = feeder(["+ 1 2", "", "   ", "(", "def {x} 5", "x", "nope"])
    out = io.StringIO()
    assert run_repl(interp, read_line, out) == EXIT_OK
    assert out.getvalue() == "\n".join([
        "Lispy version 0.0.1",
        "Press ctrl+c to exit",
        "3",
        "<stdin>:1:2: error: unexpected end of input (expected expression or ')')",
        "()",
        "5",
        "Error: unbound symbol 'nope'",
        "",
        "",
    ])
    assert set(prompts) == {PROMPT}
    assert len(prompts) == 8


def test_repl_exits_on_interrupt(interp):
    read_line, _ = feeder(["list 1 2"], end=KeyboardInterrupt)
    out = io.StringIO()
    assert run_repl(interp, read_line, out) == EXIT_OK
    assert out.getvalue().endswith("{1 2}\n\n")


def test_eval_option(capsys):
    assert main(["--no-prelude", "-e", "+ 1 2"]) == EXIT_OK
    assert capsys.readouterr().out == "3\n"


def test_eval_option_loads_prelude(capsys):
    assert main(["-e", "sum {1 2 3}"]) == EXIT_OK
    assert capsys.readouterr().out == "6\n"


def test_eval_option_error_result(capsys):
    assert main(["--no-prelude", "-e", "/ 1 0"]) == EXIT_FAILED
    assert capsys.readouterr().out == "Error: division by zero\n"


def test_eval_option_syntax_error(capsys):
    assert main(["--no-prelude", "-e", "{1"]) == EXIT_FAILED
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("<expr>:1:3: error: unexpected end of input")


def test_run_files(tmp_path, capsys):
    good = tmp_path / "good.lspy"
    good.write_text("(def {x} 1)\n(+ x 1)\n", encoding="utf-8")
    assert main(["--no-prelude", str(good)]) == EXIT_OK
    assert capsys.readouterr().err == ""


def test_run_files_reports_error_values(tmp_path, capsys):
    bad = tmp_path / "bad.lspy"
    bad.write_text("(head {})\n", encoding="utf-8")
    assert main(["--no-prelude", str(bad)]) == EXIT_FAILED
    assert capsys.readouterr().err == f"{bad}: Error: function 'head' passed {{}} for argument 0\n"


def test_run_files_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.lspy"
    assert main(["--no-prelude", str(missing)]) == EXIT_FAILED
    assert capsys.readouterr().err.startswith(f"{missing}: cannot read file: ")


def test_run_files_syntax_error(tmp_path, capsys):
    broken = tmp_path / "broken.lspy"
    broken.write_text("(+ 1 2))\n", encoding="utf-8")
    assert main(["--no-prelude", str(broken)]) == EXIT_FAILED
    assert capsys.readouterr().err.startswith(f"{broken}:1:8: error: unexpected ')'")


def test_unbounded_recursion_is_fatal(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("SANTOKU_RECURSION_LIMIT", "800")
    script = tmp_path / "loop.lspy"
    script.write_text("(def {loop} (\\ {x} {loop x}))\n(loop 1)\n", encoding="utf-8")
    with caplog.at_level(logging.CRITICAL, logger="santoku"):
        assert main(["--no-prelude", str(script)]) == EXIT_FATAL
    assert "stack exhausted" in caplog.text


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "santoku 0.0.1"
