"""Interactive REPL and command line for choccy, powered by prompt_toolkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Protocol, Sequence, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, History, InMemoryHistory

from choccy import __version__, config
from choccy.errors import ChoccySyntaxError
from choccy.interpreter import Interpreter

LOGGER = logging.getLogger(__name__)


class LineSource(Protocol):
    def prompt(self, message: str) -> str: ...


def build_session(history_file: Optional[Path] = None) -> PromptSession:
    history: History
    if history_file is not None:
        history = FileHistory(str(history_file))
    else:
        history = InMemoryHistory()
    return PromptSession(history=history)


def run_repl(
    session: LineSource,
    interpreter: Interpreter,
    out: Optional[TextIO] = None,
    prompt: Optional[str] = None,
) -> int:
    """Read lines from `session` until Ctrl-C / Ctrl-D, printing each result."""
    out = out or sys.stdout
    prompt = prompt or config.get_prompt()
    print(f"choccy v{__version__}", file=out)
    print("To exit, press ctrl+c", file=out)
    while True:
        try:
            line = session.prompt(prompt)
        except (KeyboardInterrupt, EOFError):
            break
        if not line.strip():
            continue
        try:
            text = interpreter.eval_to_text(line)
        except ChoccySyntaxError as e:
            print(e, file=out)
            continue
        print(text, file=out)
    LOGGER.debug("REPL session finished")
    return 0


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="choccy", description="A small Lisp-like expression evaluator."
    )
    ap.add_argument(
        "-e", "--eval", dest="exprs", action="append", metavar="EXPR",
        help="evaluate EXPR and print the result (may be repeated)",
    )
    ap.add_argument("--max-depth", type=_positive_int, default=None, help="nesting limit")
    ap.add_argument("--log-level", default=None, help="logging level, e.g. DEBUG")
    ap.add_argument("--version", action="version", version=f"choccy v{__version__}")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=_log_level(args.log_level or config.get_log_level()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    interpreter = Interpreter(max_depth=args.max_depth)

    if args.exprs:
        status = 0
        for expr in args.exprs:
            try:
                print(interpreter.eval_to_text(expr))
            except ChoccySyntaxError as e:
                print(e, file=sys.stderr)
                status = 1
        return status

    session = build_session(config.get_history_file())
    return run_repl(session, interpreter)


if __name__ == "__main__":
    sys.exit(main())
