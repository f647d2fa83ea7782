"""
Santoku command line: interactive loop, one-shot expressions and scripts.
"""

from __future__ import annotations

import argparse
import atexit
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from santoku import __version__
from santoku.config import get_history_file, get_history_length, get_recursion_limit
from santoku.interpreter import Interpreter
from santoku.log import configure
from santoku.types.errors import SantokuSyntaxError
from santoku.types.values import Error

# Readline support for history and auto-completion
try:
    import readline
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
BANNER = ("Lispy version 0.0.1", "Press ctrl+c to exit")
COMPLETER_DELIMS = " \t\n(){}"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="santoku",
        description="Santoku - a small Lisp with S-expressions and Q-expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Interactive mode
  %(prog)s script.lspy          # Run a script
  %(prog)s -e "+ 1 2 3"         # Evaluate one expression
        """,
    )
    parser.add_argument("files", nargs="*", help="source files to evaluate")
    parser.add_argument("-e", "--eval", dest="expr", help="evaluate EXPR and print the result")
    parser.add_argument("--no-prelude", action="store_true", help="do not load the prelude")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_readline(interp: Interpreter) -> None:
    """Setup readline with history and auto-completion"""
    if not READLINE_AVAILABLE:
        return

    history_file = get_history_file()
    try:
        readline.read_history_file(history_file)
    except OSError:
        logger.debug("no readable history at %s", history_file)
    readline.set_history_length(get_history_length())

    def completer(text: str, state: int) -> Optional[str]:
        matches = [name for name in interp.env.names() if name.startswith(text)]
        return matches[state] if state < len(matches) else None

    readline.set_completer_delims(COMPLETER_DELIMS)
    readline.set_completer(completer)
    readline.parse_and_bind("tab: complete")
    atexit.register(_save_history, history_file)


def _save_history(history_file: Path) -> None:
    try:
        readline.write_history_file(history_file)
    except OSError as e:
        logger.warning("could not save history to %s: %s", history_file, e)


def run_repl(
    interp: Interpreter,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> int:
    """Read lines until EOF or Ctrl-C, printing the value of each."""
    out = out or sys.stdout
    for line in BANNER:
        print(line, file=out)

    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return EXIT_OK

        if not line.strip():
            continue
        try:
            result = interp.eval(line)
        except SantokuSyntaxError as e:
            print(e, file=out)
            continue
        print(result, file=out)


def run_expression(interp: Interpreter, expr: str, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    try:
        result = interp.eval(expr, "<expr>")
    except SantokuSyntaxError as e:
        print(e, file=sys.stderr)
        return EXIT_FAILED
    print(result, file=out)
    return EXIT_FAILED if isinstance(result, Error) else EXIT_OK


def run_files(interp: Interpreter, files: list[str]) -> int:
    """Evaluate each file in turn; Error results are reported on stderr."""
    status = EXIT_OK
    for name in files:
        try:
            results = interp.load_file(Path(name))
        except OSError as e:
            print(f"{name}: cannot read file: {e.strerror}", file=sys.stderr)
            status = EXIT_FAILED
            continue
        except SantokuSyntaxError as e:
            print(e, file=sys.stderr)
            status = EXIT_FAILED
            continue
        for result in results:
            if isinstance(result, Error):
                print(f"{name}: {result}", file=sys.stderr)
                status = EXIT_FAILED
    return status


def main(argv: list[str] | None = None) -> int:
    args = create_arg_parser().parse_args(argv)
    configure(args.verbose)
    sys.setrecursionlimit(get_recursion_limit())

    try:
        interp = Interpreter(prelude=None if args.no_prelude else "auto")
        if args.expr is not None:
            return run_expression(interp, args.expr)
        if args.files:
            return run_files(interp, args.files)
        setup_readline(interp)
        return run_repl(interp)
    except RecursionError:
        # Unbounded recursion is fatal, never an Error value
        logger.critical("stack exhausted: evaluation recursed too deeply")
        return EXIT_FATAL
