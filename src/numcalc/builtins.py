"""Built-in operators and functions seeded into every environment."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Final

import numpy as np

from .dispatch import Function, Operator
from .errors import GeneratorExhaustedError, IndexOutOfBoundsError, LengthMismatchError
from .values import DECIMAL_CONTEXT, Array, Generator, ValueKind, count_up

if TYPE_CHECKING:
    from .environment import Environment

NUMBER: Final = ValueKind.NUMBER
ARRAY: Final = ValueKind.ARRAY
GENERATOR: Final = ValueKind.GENERATOR

ASSIGNMENT_OPERATOR: Final[str] = ":="

_decimal_add = np.frompyfunc(DECIMAL_CONTEXT.add, 2, 1)
_decimal_sub = np.frompyfunc(DECIMAL_CONTEXT.subtract, 2, 1)
_decimal_mul = np.frompyfunc(DECIMAL_CONTEXT.multiply, 2, 1)


def _split_array_scalar(left, right) -> tuple[Array, Decimal]:
    if isinstance(left, Array):
        return left, right
    return right, left


def _same_length(left: Array, right: Array) -> None:
    if len(left) != len(right):
        raise LengthMismatchError(len(left), len(right))


def _to_index(value: Decimal, length: int) -> int:
    index = int(value)
    if index < 0 or index >= length:
        raise IndexOutOfBoundsError(index, length)
    return index


def _split_generator_scalar(left, right) -> tuple[Generator, Decimal]:
    if isinstance(left, Generator):
        return left, right
    return right, left


add = Operator("+")


@add.register((NUMBER, NUMBER))
def _add_numbers(env: "Environment", left: Decimal, right: Decimal) -> Decimal:
    return DECIMAL_CONTEXT.add(left, right)


@add.register((ARRAY, ARRAY))
def _add_arrays(env: "Environment", left: Array, right: Array) -> Array:
    _same_length(left, right)
    return Array(_decimal_add(left.values, right.values))


@add.register((ARRAY, NUMBER), (NUMBER, ARRAY))
def _add_broadcast(env: "Environment", left, right) -> Array:
    arr, scalar = _split_array_scalar(left, right)
    return Array(_decimal_add(arr.values, scalar))


@add.register((GENERATOR, NUMBER), (NUMBER, GENERATOR))
def _add_generator(env: "Environment", left, right) -> Generator:
    gen, scalar = _split_generator_scalar(left, right)
    return gen.fork().chain(lambda value: DECIMAL_CONTEXT.add(value, scalar))


subtract = Operator("-")


@subtract.register((NUMBER, NUMBER))
def _subtract_numbers(env: "Environment", left: Decimal, right: Decimal) -> Decimal:
    return DECIMAL_CONTEXT.subtract(left, right)


@subtract.register((ARRAY, ARRAY))
def _subtract_arrays(env: "Environment", left: Array, right: Array) -> Array:
    _same_length(left, right)
    return Array(_decimal_sub(left.values, right.values))


@subtract.register((ARRAY, NUMBER))
def _subtract_scalar(env: "Environment", left: Array, right: Decimal) -> Array:
    return Array(_decimal_sub(left.values, right))


@subtract.register((NUMBER, ARRAY))
def _subtract_from_scalar(env: "Environment", left: Decimal, right: Array) -> Array:
    return Array(_decimal_sub(left, right.values))


multiply = Operator("*")


@multiply.register((NUMBER, NUMBER))
def _multiply_numbers(env: "Environment", left: Decimal, right: Decimal) -> Decimal:
    return DECIMAL_CONTEXT.multiply(left, right)


@multiply.register((ARRAY, NUMBER), (NUMBER, ARRAY))
def _multiply_broadcast(env: "Environment", left, right) -> Array:
    arr, scalar = _split_array_scalar(left, right)
    return Array(_decimal_mul(arr.values, scalar))


@multiply.register((GENERATOR, NUMBER), (NUMBER, GENERATOR))
def _multiply_generator(env: "Environment", left, right) -> Generator:
    gen, scalar = _split_generator_scalar(left, right)
    return gen.fork().chain(lambda value: DECIMAL_CONTEXT.multiply(value, scalar))


range_ = Operator("..")


@range_.register((NUMBER, NUMBER))
def _range(env: "Environment", lower: Decimal, upper: Decimal) -> Array:
    return Array(Decimal(i) for i in range(int(lower), int(upper)))


access = Operator("@")


@access.register((ARRAY, ARRAY))
def _gather(env: "Environment", source: Array, indices: Array) -> Array:
    length = len(source)
    positions = np.fromiter((_to_index(value, length) for value in indices), dtype=np.intp, count=len(indices))
    return Array(source.values[positions])


@access.register((ARRAY, NUMBER), (NUMBER, ARRAY))
def _pick(env: "Environment", left, right) -> Decimal:
    arr, index = _split_array_scalar(left, right)
    return arr[_to_index(index, len(arr))]


fill = Operator("!=")


@fill.register((ARRAY, NUMBER), (NUMBER, ARRAY))
def _fill(env: "Environment", left, right) -> Array:
    arr, scalar = _split_array_scalar(left, right)
    return Array(np.full(len(arr), scalar, dtype=object))


take = Operator("---")


@take.register((GENERATOR, NUMBER))
def _take(env: "Environment", gen: Generator, count: Decimal) -> Array:
    requested = int(count)
    pulled: list[Decimal] = []
    while len(pulled) < requested:
        value = gen.next()
        if value is None:
            raise GeneratorExhaustedError(len(pulled), requested)
        pulled.append(value)
    return Array(pulled)


# Parsed as an operator, intercepted by the evaluator before dispatch.
assign = Operator(ASSIGNMENT_OPERATOR)


abs_ = Function("abs", 1)


@abs_.register((NUMBER,))
def _abs(env: "Environment", value: Decimal) -> Decimal:
    return value.copy_abs()


neg = Function("neg", 1)


@neg.register((NUMBER,))
def _neg(env: "Environment", value: Decimal) -> Decimal:
    return value.copy_negate()


len_ = Function("len", 1)


@len_.register((ARRAY,))
def _len(env: "Environment", value: Array) -> Decimal:
    return Decimal(len(value))


until = Function("...", 1)


@until.register((NUMBER,))
def _until(env: "Environment", bound: Decimal) -> Array:
    return Array(Decimal(i) for i in range(int(bound)))


lazy_until = Function("...$", 1)


@lazy_until.register((NUMBER,))
def _lazy_until(env: "Environment", bound: Decimal) -> Generator:
    return count_up(bound)


def builtin_operators() -> dict[str, Operator]:
    return {op.name: op for op in (add, subtract, multiply, range_, access, fill, take, assign)}


def builtin_functions() -> dict[str, Function]:
    return {fn.name: fn for fn in (abs_, neg, len_, until, lazy_until)}
