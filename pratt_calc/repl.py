from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .config import Settings
from .environment import Environment
from .errors import CalculatorError
from .evaluator import Evaluator
from .lexer import lex
from .parser import parse
from .printer import format_tokens, format_tree, format_value

logger = logging.getLogger(__name__)

HELP_TEXT = (
    ".tree:   show or hide the pretty-printed parse tree\n"
    ".tokens: show or hide the token list\n"
    ".vars:   list assigned variables\n"
    ".exit:   exits the repl\n"
    ".help:   list available commands"
)


class REPL:
    """Read-Eval-Print Loop for the calculator.

    All lines share one Environment, so variables assigned on one line are
    visible on the next. Lines starting with '.' are meta-commands.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.env = Environment()
        self.evaluator = Evaluator(self.env, self.settings.max_exponent)
        self.show_tokens = self.settings.show_tokens
        self.show_tree = self.settings.show_tree
        self._commands: Dict[str, Callable[[List[str]], str]] = {
            'tree': self._toggle_tree,
            'tokens': self._toggle_tokens,
            'vars': self._list_vars,
            'help': lambda args: HELP_TEXT,
            'exit': self._exit,
        }

    # --------------------------
    # Meta-commands
    # --------------------------

    def _toggle_tree(self, args: List[str]) -> str:
        self.show_tree = not self.show_tree
        return f"{'enabled' if self.show_tree else 'disabled'} tree pretty printing"

    def _toggle_tokens(self, args: List[str]) -> str:
        self.show_tokens = not self.show_tokens
        return f"{'enabled' if self.show_tokens else 'disabled'} token printing"

    def _list_vars(self, args: List[str]) -> str:
        items = list(self.env.items())
        if not items:
            return "(no variables)"
        return "\n".join(f"{k} = {format_value(v)}" for k, v in items)

    def _exit(self, args: List[str]) -> str:
        raise EOFError()

    def _run_command(self, line: str) -> str:
        """Execute a '.' command. '.exit' raises EOFError for the loop to handle."""
        parts = line[1:].split()
        if not parts or parts[0] not in self._commands:
            raise CalculatorError(f"unrecognized command {line.strip()}")
        return self._commands[parts[0]](parts[1:])

    # --------------------------
    # Evaluation
    # --------------------------

    def _evaluate(self, line: str) -> str:
        out: List[str] = []
        tokens = lex(line)
        if self.show_tokens:
            out.append(format_tokens(tokens))
        root = parse(tokens)
        if self.show_tree:
            out.append(format_tree(root))
        if self.settings.rollback_on_error:
            with self.env.transaction():
                value = self.evaluator.evaluate(root)
        else:
            value = self.evaluator.evaluate(root)
        out.append(f"= {format_value(value)}")
        return "\n".join(out)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        try:
            if line.lstrip().startswith('.'):
                return True, self._run_command(line.lstrip())
            return True, self._evaluate(line)
        except EOFError:
            # let callers handle EOF by propagating
            raise
        except CalculatorError as e:
            logger.info("rejected %r: %s", line, e)
            return False, f"error: {e}"
        except Exception as e:
            logger.exception("unexpected failure evaluating %r", line)
            return False, f"unexpected error: {e}"

    # --------------------------
    # Loop
    # --------------------------

    def _handle(self, line: str, stdout: TextIO) -> None:
        if not line.strip():
            return
        ok, out = self.evaluate_line(line)
        print(out, file=stdout)

    def repl_loop(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        """Read lines until EOF or '.exit'. Uses prompt_toolkit when attached to a terminal."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        try:
            if stdin.isatty():
                session: PromptSession = PromptSession(history=FileHistory(self.settings.history_file))
                print("Pratt calculator. Type .help for commands, Ctrl-D or .exit to quit.", file=stdout)
                while True:
                    try:
                        line = session.prompt(self.settings.prompt)
                    except KeyboardInterrupt:
                        print("^C", file=stdout)
                        continue
                    self._handle(line, stdout)
            else:
                for line in stdin:
                    self._handle(line.rstrip('\r\n'), stdout)
        except EOFError:
            pass
