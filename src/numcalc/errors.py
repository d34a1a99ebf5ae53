"""Structured error types for parser/runtime separation."""

from __future__ import annotations


class CalcError(Exception):
    """Base class for structured numcalc errors."""


class ParseError(CalcError, SyntaxError):
    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


class UnexpectedEndOfInput(ParseError):
    """Input ended where a token was required."""


class UnexpectedToken(ParseError):
    """A token other than the expected one (mismatched or missing parenthesis, trailing input)."""


class MalformedNumber(ParseError):
    """Numeric literal text that is not a valid decimal."""


class EvalError(CalcError):
    """Generic runtime failure after successful parse."""


class UndefinedIdentifierError(EvalError, NameError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not defined")
        self.name = name


class UndefinedOperatorError(EvalError):
    def __init__(self, name: str) -> None:
        super().__init__(f"operator {name} is not defined")
        self.name = name


class UndefinedFunctionError(EvalError):
    def __init__(self, name: str) -> None:
        super().__init__(f"function {name} is not defined")
        self.name = name


class ArityError(EvalError, TypeError):
    """Wrong number of arguments passed to an operator or function."""


class DispatchError(EvalError, TypeError):
    """No handler registered for the runtime type signature of the arguments."""


class LengthMismatchError(EvalError, ValueError):
    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"array length mismatch: {left} and {right}")
        self.left = left
        self.right = right


class IndexOutOfBoundsError(EvalError, IndexError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of bounds for array of length {length}")
        self.index = index
        self.length = length


class NumericError(EvalError, ArithmeticError):
    """Decimal arithmetic left the representable range or had no defined result."""


class InvalidAssignmentTargetError(EvalError):
    """Left side of an assignment is not an identifier."""


class GeneratorExhaustedError(EvalError):
    def __init__(self, produced: int, requested: int) -> None:
        super().__init__(f"generator ran out after {produced} of {requested} values")
        self.produced = produced
        self.requested = requested


class EmptyGroupError(EvalError):
    """An empty group `()` reached evaluation."""


class BadExpressionError(EvalError):
    """Unrecognized expression node."""
