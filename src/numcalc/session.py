"""Interactive session: one environment, one parser, one line at a time."""

from __future__ import annotations

import cmd
import logging
import threading
from dataclasses import dataclass, field

from .ast import Expr, render
from .environment import Environment
from .errors import EvalError, ParseError
from .evaluator import evaluate
from .parser import Parser
from .values import Value, stringify

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Parse and evaluate lines against a persistent environment.

    The whole parse+evaluate cycle of a line runs under the session lock, so
    a session may be shared between threads.
    """

    env: Environment = field(default_factory=Environment)
    debug: bool = False

    def __post_init__(self) -> None:
        self.parser = Parser(self.env)
        self._lock = threading.RLock()

    def parse(self, line: str) -> Expr:
        return self.parser.parse(line)

    def run(self, line: str) -> Value:
        with self._lock:
            expr = self.parse(line)
            logger.debug("parsed %r as\n%s", line, render(expr))
            result = evaluate(self.env, expr)
            logger.debug("bound _ to %r", result)
            return result

    def respond(self, line: str) -> str:
        """Text shown for ``line``: the result, the AST in debug mode, or the error."""
        if self.debug:
            try:
                return render(self.parse(line))
            except ParseError as exc:
                return f"syntax error: {exc}"
        try:
            return f"= {stringify(self.run(line))}"
        except ParseError as exc:
            return f"syntax error: {exc}"
        except EvalError as exc:
            return f"error: {exc}"


class Shell(cmd.Cmd):
    """Calculator read-eval-print loop."""

    intro = "numcalc :: type an expression, ':debug' to toggle AST mode, ':quit' to exit."
    prompt = "? "

    def __init__(self, session: Session, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.session = session

    def default(self, line: str) -> bool:
        stripped = line.strip()
        if stripped == ":quit":
            return True
        if stripped == ":debug":
            self.session.debug = not self.session.debug
            self.stdout.write(f"debug {'on' if self.session.debug else 'off'}\n\n")
            return False
        self.stdout.write(self.session.respond(stripped) + "\n\n")
        return False

    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        self.stdout.write("\n")
        return True
