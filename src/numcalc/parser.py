"""Context-sensitive recursive-descent parser for the calculator language.

Grammar::

    expr  = function-application | operator-application | unit
    unit  = group | array-literal | number | identifier
    group = "(" expr ")"

Whether a word starts a function application (and how many arguments it
takes) or continues an infix application is decided by asking the
environment, so the grammar never hardcodes operator or function names.
Infix applications are right-associative with uniform precedence.
"""

from __future__ import annotations

import threading
from decimal import DecimalException

from .ast import Apply, ArrayLiteral, BinaryOp, Expr, Group, Identifier, Number
from .environment import Environment
from .errors import MalformedNumber, ParseError, UnexpectedEndOfInput, UnexpectedToken
from .lexer import CLOSE_PAREN, OPEN_PAREN, Token, tokenize
from .values import DECIMAL_CONTEXT


class Parser:
    """Parser bound to an environment.

    A parser keeps its token buffer and cursor between helper calls, so
    :meth:`parse` holds a lock for the whole call; one instance may be shared
    between threads.
    """

    def __init__(self, env: Environment) -> None:
        self.env = env
        self.tokens: list[Token] = []
        self.index = 0
        self._lock = threading.Lock()

    def parse(self, source: str) -> Expr:
        with self._lock:
            self.tokens = tokenize(source)
            self.index = 0
            expr = self._parse_required()
            self._expect_end()
            return expr

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_next(self) -> Token:
        return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        if tok.kind != "EOF":
            self.index += 1
        return tok

    def _done(self) -> bool:
        return self._peek().kind == "EOF"

    def _error(self, tok: Token, *, cls: type[ParseError] = UnexpectedToken, message: str | None = None, expected: tuple[str, ...] = ()) -> ParseError:
        detail = message if message is not None else "Unexpected token"
        return cls(detail, tok.pos, tok.end, expected=expected, found=tok.describe())

    def _expect_end(self) -> None:
        tok = self._peek()
        if tok.kind != "EOF":
            raise self._error(tok, expected=("EOF",))

    def _parse_required(self) -> Expr:
        # The empty-group placeholder is only valid directly inside parentheses.
        tok = self._peek()
        expr = self._parse_expression()
        if expr is None:
            raise self._error(tok, message="Unexpected closing parenthesis")
        return expr

    def _parse_expression(self) -> Expr | None:
        if self._done():
            tok = self._peek()
            raise self._error(tok, cls=UnexpectedEndOfInput, message="Unexpected end of input")

        arity = self.env.function_arity(self._peek().text)
        if arity is not None and self._peek().kind == "WORD":
            name = self._advance().text
            args = tuple(self._parse_required() for _ in range(arity))
            return Apply(name=name, args=args)

        left = self._parse_unit()
        if left is None:
            return None

        tok = self._peek()
        if tok.kind == "WORD" and self.env.is_operator(tok.text):
            self._advance()
            right = self._parse_required()
            return BinaryOp(op=tok.text, left=left, right=right)
        return left

    def _parse_unit(self) -> Expr | None:
        tok = self._peek()
        if tok.matches(CLOSE_PAREN):
            return None
        if tok.matches(OPEN_PAREN):
            return self._parse_group()
        if tok.kind == "NUMBER" and self._peek_next().kind == "NUMBER":
            return self._parse_array()
        if tok.kind == "NUMBER":
            return self._parse_number()
        return Identifier(name=self._advance().text)

    def _parse_group(self) -> Group:
        self._advance()
        inner = self._parse_expression()
        tok = self._peek()
        if not tok.matches(CLOSE_PAREN):
            raise self._error(tok, message="Expected closing parenthesis", expected=(CLOSE_PAREN.describe(),))
        self._advance()
        return Group(inner=inner)

    def _parse_array(self) -> ArrayLiteral:
        values: list[Number] = []
        while self._peek().kind == "NUMBER":
            values.append(self._parse_number())
        return ArrayLiteral(values=tuple(values))

    def _parse_number(self) -> Number:
        tok = self._advance()
        try:
            value = DECIMAL_CONTEXT.create_decimal(tok.text)
        except DecimalException:
            raise self._error(tok, cls=MalformedNumber, message=f"Invalid numeric literal {tok.text!r}") from None
        return Number(value=value)


def parse(source: str, env: Environment | None = None) -> Expr:
    parser = Parser(Environment() if env is None else env)
    return parser.parse(source)
