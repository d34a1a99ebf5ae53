"""numcalc public API."""

from .ast import render
from .environment import Environment
from .errors import (
    ArityError,
    BadExpressionError,
    CalcError,
    DispatchError,
    EmptyGroupError,
    EvalError,
    GeneratorExhaustedError,
    IndexOutOfBoundsError,
    InvalidAssignmentTargetError,
    LengthMismatchError,
    MalformedNumber,
    NumericError,
    ParseError,
    UndefinedFunctionError,
    UndefinedIdentifierError,
    UndefinedOperatorError,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .evaluator import evaluate
from .parser import Parser, parse
from .session import Session
from .values import Array, Generator, ValueKind, stringify

__all__ = [
    "parse",
    "Parser",
    "evaluate",
    "render",
    "stringify",
    "Environment",
    "Session",
    "Array",
    "Generator",
    "ValueKind",
    "CalcError",
    "ParseError",
    "UnexpectedEndOfInput",
    "UnexpectedToken",
    "MalformedNumber",
    "EvalError",
    "UndefinedIdentifierError",
    "UndefinedOperatorError",
    "UndefinedFunctionError",
    "ArityError",
    "DispatchError",
    "LengthMismatchError",
    "NumericError",
    "IndexOutOfBoundsError",
    "InvalidAssignmentTargetError",
    "GeneratorExhaustedError",
    "EmptyGroupError",
    "BadExpressionError",
]
