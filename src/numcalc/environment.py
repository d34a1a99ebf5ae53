"""Name tables for operators, functions and variable bindings."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Iterator

from .builtins import builtin_functions, builtin_operators
from .dispatch import Function, Operator
from .errors import UndefinedFunctionError, UndefinedIdentifierError, UndefinedOperatorError
from .values import Value, validate_value


class Environment(MutableMapping[str, Value]):
    """Operator, function and variable tables shared by the parser and evaluator.

    The mapping interface covers variables only; operators and functions are
    reached through their own lookups. The parser only reads from it.
    """

    def __init__(self, data: MutableMapping[str, Value] | None = None) -> None:
        self.operators: dict[str, Operator] = builtin_operators()
        self.functions: dict[str, Function] = builtin_functions()
        self.variables: dict[str, Value] = {}
        for name, value in ({} if data is None else dict(data)).items():
            self[name] = value

    def __getitem__(self, key: str) -> Value:
        return self.variables[key]

    def __setitem__(self, key: str, value: Value) -> None:
        validate_value(value, where=f"env[{key!r}]")
        self.variables[key] = value

    def __delitem__(self, key: str) -> None:
        del self.variables[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def __contains__(self, key: object) -> bool:
        return key in self.variables

    def is_operator(self, name: str) -> bool:
        return name in self.operators

    def function_arity(self, name: str) -> int | None:
        fn = self.functions.get(name)
        return None if fn is None else fn.arity

    def variable(self, name: str) -> Value:
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedIdentifierError(name) from None

    def operator(self, name: str) -> Operator:
        try:
            return self.operators[name]
        except KeyError:
            raise UndefinedOperatorError(name) from None

    def function(self, name: str) -> Function:
        try:
            return self.functions[name]
        except KeyError:
            raise UndefinedFunctionError(name) from None

    def define_operator(self, op: Operator) -> None:
        self.operators[op.name] = op

    def define_function(self, fn: Function) -> None:
        self.functions[fn.name] = fn
