"""Runtime value model, type tags and rendering for the calculator evaluator."""

from __future__ import annotations

import decimal
import os
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Flag, auto
from typing import Callable, Final, Iterable, Iterator, Optional, Union

import numpy as np

PRECISION: Final[int] = max(1, int(os.environ.get("NUMCALC_PRECISION", "50")))
ARRAY_WRAP: Final[int] = max(1, int(os.environ.get("NUMCALC_ARRAY_WRAP", "10")))

DECIMAL_CONTEXT: Final = decimal.Context(
    prec=PRECISION,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)


class ValueKind(Flag):
    NUMBER = auto()
    ARRAY = auto()
    GENERATOR = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return (self.name or "unknown").lower()


Signature = tuple[ValueKind, ...]


class Array:
    """Fixed-length, read-only run of numbers backed by a numpy object array."""

    __slots__ = ("values",)

    def __init__(self, values: Iterable[Decimal] | np.ndarray) -> None:
        if isinstance(values, np.ndarray):
            arr = values.astype(object, copy=True).reshape(-1)
        else:
            items = list(values)
            arr = np.empty(len(items), dtype=object)
            arr[:] = items
        arr.flags.writeable = False
        self.values = arr

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __iter__(self) -> Iterator[Decimal]:
        return iter(self.values.tolist())

    def __getitem__(self, index: int) -> Decimal:
        return self.values[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Array([{', '.join(str(v) for v in self)}])"

    def tolist(self) -> list[Decimal]:
        return self.values.tolist()


Step = Callable[[Decimal], Optional[Decimal]]


@dataclass
class Generator:
    """Lazy, possibly infinite sequence of numbers.

    ``step`` maps the current value to the next raw value, or ``None`` once the
    sequence is exhausted. Chained ``transforms`` are applied in registration
    order to every value handed out by :meth:`next`; a transform returning
    ``None`` also ends the sequence.
    """

    current: Decimal
    step: Step
    transforms: list[Step] = field(default_factory=list)
    done: bool = False

    def next(self) -> Decimal | None:
        if self.done:
            return None
        raw = self.step(self.current)
        if raw is None:
            self.done = True
            return None
        out: Decimal | None = self.current
        for transform in self.transforms:
            out = transform(out)
            if out is None:
                self.done = True
                return None
        self.current = raw
        return out

    def chain(self, transform: Step) -> "Generator":
        self.transforms.append(transform)
        return self

    def fork(self) -> "Generator":
        return Generator(current=self.current, step=self.step, transforms=list(self.transforms), done=self.done)

    def __iter__(self) -> Iterator[Decimal]:
        return self

    def __next__(self) -> Decimal:
        value = self.next()
        if value is None:
            raise StopIteration
        return value


Value = Union[Decimal, Array, Generator]


def count_up(bound: Decimal) -> Generator:
    """Generator over 0, 1, ... stopping before ``bound``."""

    def step(current: Decimal) -> Decimal | None:
        following = DECIMAL_CONTEXT.add(current, 1)
        if following > bound:
            return None
        return following

    return Generator(current=Decimal(0), step=step)


def kind_of(value: object) -> ValueKind:
    if isinstance(value, Decimal):
        return ValueKind.NUMBER
    if isinstance(value, Array):
        return ValueKind.ARRAY
    if isinstance(value, Generator):
        return ValueKind.GENERATOR
    return ValueKind.UNKNOWN


def signature_of(*values: object) -> Signature:
    return tuple(kind_of(value) for value in values)


def format_signature(signature: Signature) -> str:
    return ",".join(str(kind) for kind in signature)


def validate_value(value: object, *, where: str = "value") -> None:
    if kind_of(value) is ValueKind.UNKNOWN:
        raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")


def _format_number(value: Decimal) -> str:
    """Shortest ``%g`` text: exponent form once the exponent is below -4 or at least 6."""
    if value.is_nan():
        return "NaN"
    if value.is_infinite():
        return "-Inf" if value.is_signed() else "+Inf"
    if value.is_zero():
        return "-0" if value.is_signed() else "0"
    value = value.normalize(DECIMAL_CONTEXT)
    exponent = value.adjusted()
    if -4 <= exponent < 6:
        return format(value, "f")
    sign, digits, _ = value.as_tuple()
    mantissa = "".join(str(digit) for digit in digits)
    if len(mantissa) > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"
    return f"{'-' if sign else ''}{mantissa}e{exponent:+03d}"


def _format_array(value: Array) -> str:
    cells = [_format_number(item) for item in value]
    if not cells:
        return ""
    width = max(len(cell) for cell in cells)
    padded = [cell.rjust(width) for cell in cells]
    rows = [" ".join(padded[i : i + ARRAY_WRAP]) for i in range(0, len(padded), ARRAY_WRAP)]
    return "\n".join(rows)


def stringify(value: Value) -> str:
    if isinstance(value, Decimal):
        return _format_number(value)
    if isinstance(value, Array):
        return _format_array(value)
    if isinstance(value, Generator):
        return f"<generator of {ValueKind.NUMBER}>"
    raise TypeError(f"Cannot render unsupported runtime type {type(value).__name__}")
