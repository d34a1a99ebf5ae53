"""Signature-keyed dispatch tables for operators and functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import DecimalException
from typing import TYPE_CHECKING, Callable, ClassVar

from .errors import ArityError, DispatchError, NumericError
from .values import Signature, Value, ValueKind, format_signature, signature_of

if TYPE_CHECKING:
    from .environment import Environment

Handler = Callable[..., Value]


@dataclass
class _DispatchTable:
    name: str
    arity: int
    handlers: dict[Signature, Handler] = field(default_factory=dict)
    kind: ClassVar[str] = "callable"

    def register(self, *signatures: Signature) -> Callable[[Handler], Handler]:
        """Register the decorated handler under every given signature.

        Signatures are ordered. A handler that does not care about argument
        order is registered under each ordering and finds its operands itself.
        """
        for signature in signatures:
            if len(signature) != self.arity:
                raise ValueError(f"{self.kind} {self.name} takes {self.arity} arguments, got signature {format_signature(signature)}")

        def decorator(handler: Handler) -> Handler:
            for signature in signatures:
                self.handlers[tuple(signature)] = handler
            return handler

        return decorator

    def supports(self, *kinds: ValueKind) -> bool:
        return tuple(kinds) in self.handlers

    def dispatch(self, env: "Environment", *args: Value) -> Value:
        if len(args) != self.arity:
            raise ArityError(f"{self.kind} {self.name} expects {self.arity} arguments but got {len(args)}")
        signature = signature_of(*args)
        handler = self.handlers.get(signature)
        if handler is None:
            raise DispatchError(f"{self.kind} {self.name} does not implement {format_signature(signature)}")
        try:
            return handler(env, *args)
        except DecimalException as exc:
            reason = type(exc).__name__.lower()
            raise NumericError(f"numeric {reason} in {self.kind} {self.name}") from exc


class Operator(_DispatchTable):
    """Binary infix operator."""

    kind: ClassVar[str] = "operator"

    def __init__(self, name: str, handlers: dict[Signature, Handler] | None = None) -> None:
        super().__init__(name=name, arity=2, handlers={} if handlers is None else dict(handlers))


class Function(_DispatchTable):
    """Prefix function with a fixed arity."""

    kind: ClassVar[str] = "function"

    def __init__(self, name: str, arity: int, handlers: dict[Signature, Handler] | None = None) -> None:
        if arity < 0:
            raise ValueError(f"function {name} cannot have negative arity")
        super().__init__(name=name, arity=arity, handlers={} if handlers is None else dict(handlers))
