"""Interactive shell and command-line entry point.

The shell is a thin loop around the core pipeline: read a line, lex, parse,
interpret, print the result or the error message, repeat. A bad expression
never ends the session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from intcalc.config import LOG_LEVELS, Config
from intcalc.errors import CalculatorError
from intcalc.interpreter import interpret
from intcalc.lexer import lex, render_tokens
from intcalc.nodes import to_source
from intcalc.parser import parse

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HELP_TOPICS = {
    'general': (
        "Integer calculator help:\n"
        "Enter an arithmetic expression over 64-bit integers and press Enter.\n"
        "Examples:\n"
        "  1 + 2 * 3 -> 7\n"
        "  3 * (2 + -4) ^ 4 / 2 -> 24\n"
        "  2 ^ 3 ^ 2 -> 512\n"
        "  -7 / 2 -> -3\n"
        "Commands:\n"
        "  help, :help [topic]    show help (topics: operators)\n"
        "  exit, quit, :exit      leave the calculator (Ctrl-D also works)\n"
    ),
    'operators': (
        "Operators and precedence (high -> low):\n"
        "  prefix: - (negation, binds tighter than every infix operator)\n"
        "  ^ (exponentiation, right-assoc; exponent must be >= 0)\n"
        "  * / (left-assoc; division truncates toward zero)\n"
        "  + - (left-assoc)\n"
        "Notes:\n"
        "  - Parentheses group sub-expressions.\n"
        "  - Results outside the signed 64-bit range are reported as overflow.\n"
        "  - -2 ^ 2 == 4, because negation applies before '^'.\n"
    ),
}

_EXIT_COMMANDS = {'exit', 'quit', ':exit', ':quit'}


def show_help(topic: Optional[str] = None) -> str:
    """Return help text for topic or general if None."""
    if not topic:
        return _HELP_TOPICS['general']
    return _HELP_TOPICS.get(topic.lower(), f"No help available for topic '{topic}'")


class REPL:
    """Read-Eval-Print Loop for the calculator."""

    def __init__(self, config: Optional[Config] = None, session: Optional[Any] = None):
        self.config = config or Config()
        self._session = session

    @property
    def session(self) -> Any:
        if self._session is None:
            self._session = PromptSession(history=FileHistory(self.config.history_file))
        return self._session

    def _process_command(self, line: str) -> Optional[str]:
        """Handle help/exit commands. Returns the response, or None for expressions."""
        s = line.strip()
        if s.lower() in _EXIT_COMMANDS:
            raise EOFError()
        parts = s.split(None, 1)
        if parts and parts[0].lower() in {'help', ':help'}:
            return show_help(parts[1].strip() if len(parts) > 1 else None)
        return None

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        if not line.strip():
            return True, ""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out

        out: List[str] = []
        try:
            tokens = lex(line.strip())
            if self.config.show_tokens:
                out.append(f"tokens: {render_tokens(tokens)}")
            ast = parse(tokens)
            if self.config.show_ast:
                out.append(f"ast: {to_source(ast)}")
            result = interpret(ast)
        except CalculatorError as e:
            out.append(f"Error: {e}")
            return False, "\n".join(out)
        except Exception as e:
            logger.exception("Unhandled error evaluating %r", line)
            out.append(f"Unhandled error: {e}")
            return False, "\n".join(out)
        out.append(str(result))
        return True, "\n".join(out)

    def repl_loop(self) -> None:
        """Interactive loop; runs until EOF or an exit command."""
        print("Integer calculator. Type help for help. Ctrl-D or exit to quit.")
        while True:
            try:
                line = self.session.prompt(self.config.prompt)
                ok, out = self.evaluate_line(line)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if out:
                print(out)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcalc",
        description="Evaluate integer arithmetic expressions.",
    )
    parser.add_argument(
        "-e",
        "--expr",
        type=str,
        help="Evaluate a single expression and exit.",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Print the token stream before each result.",
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        default=None,
        help="Print the parsed expression tree before each result.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING, or INTCALC_LOG_LEVEL).",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        help="File used for interactive history (default: ~/.intcalc_history).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = Config.from_env()
    if args.tokens is not None:
        config.show_tokens = args.tokens
    if args.ast is not None:
        config.show_ast = args.ast
    if args.log_level:
        config.log_level = args.log_level
    if args.history_file:
        config.history_file = args.history_file

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    repl = REPL(config)
    if args.expr is not None:
        try:
            ok, out = repl.evaluate_line(args.expr)
        except EOFError:
            return 0
        print(out, file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1
    repl.repl_loop()
    return 0
