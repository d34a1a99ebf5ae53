"""AST nodes for the calculator language."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Number:
    value: Decimal


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Group:
    inner: "Expr | None" = None


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Apply:
    name: str
    args: tuple["Expr", ...]


@dataclass(frozen=True)
class ArrayLiteral:
    values: tuple[Number, ...]


Expr = Union[Number, Identifier, Group, BinaryOp, Apply, ArrayLiteral]


def _format_number(value: Decimal) -> str:
    return format(value, ".10g")


def render(expr: Expr, indent: int = 0) -> str:
    """Pretty-print an expression as an indented s-expression."""
    pad = "\n" + " " * (indent + 2)

    if isinstance(expr, Number):
        return f"(num {_format_number(expr.value)})"

    if isinstance(expr, Identifier):
        return f"(id {expr.name})"

    if isinstance(expr, Group):
        if expr.inner is None:
            return "(group empty)"
        return f"(group{pad}{render(expr.inner, indent + 2)})"

    if isinstance(expr, BinaryOp):
        left = render(expr.left, indent + 2)
        right = render(expr.right, indent + 2)
        return f"(op {expr.op}{pad}{left}{pad}{right})"

    if isinstance(expr, Apply):
        if not expr.args:
            return f"(app {expr.name})"
        args = pad.join(render(arg, indent + 2) for arg in expr.args)
        return f"(app {expr.name}{pad}{args})"

    if isinstance(expr, ArrayLiteral):
        values = pad.join(render(value, indent + 2) for value in expr.values)
        return f"(array{pad}{values})"

    raise TypeError(f"Unsupported expression node: {type(expr)!r}")
