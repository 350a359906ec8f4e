# src/valuecheck/adapters.py
"""OperatorAdapter: an adapter for Python classes that use the standard dunders.

Most Python value objects express equality, ordering, hashing and
arithmetic through ``==``, ``<``, ``hash()``, ``+`` and friends. This
adapter maps the engine's operations onto those operators so such a class
can be checked without writing an adapter by hand.

Capabilities are still declared by the caller; nothing is inferred.
Representation and successor operations have no operator equivalent, so
they exist on an OperatorAdapter only when callables are supplied.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from typing import Any

from valuecheck.contracts.enums import Comparison


class OperatorAdapter:
    """Adapter backed by a class's own operators.

    Construction args are applied as keywords when they are a mapping, as
    positional arguments when they are a list or tuple, and as a single
    argument otherwise.

    Example:
        adapter = OperatorAdapter(
            Money,
            dump=lambda m: {"amount": str(m.amount), "currency": m.currency},
            load=lambda d: Money(Decimal(d["amount"]), d["currency"]),
        )
    """

    def __init__(
        self,
        value_type: type,
        *,
        dump: Callable[[Any], Mapping[str, Any]] | None = None,
        load: Callable[[Mapping[str, Any]], Any] | None = None,
        successor: Callable[[Any], Any | None] | None = None,
    ) -> None:
        if (dump is None) != (load is None):
            raise ValueError("dump and load must be supplied together")
        self.value_type = value_type
        if dump is not None and load is not None:
            self.to_representation = dump
            self.from_representation = load
        if successor is not None:
            self.successor = successor

    def construct(self, args: Any) -> Any:
        if isinstance(args, Mapping):
            return self.value_type(**args)
        if isinstance(args, list | tuple):
            return self.value_type(*args)
        return self.value_type(args)

    def equals(self, a: Any, b: Any) -> bool:
        return bool(a == b)

    def hash(self, a: Any) -> int:
        return hash(a)

    def inspect(self, a: Any) -> str:
        return repr(a)

    def compare(self, a: Any, b: Any) -> Comparison:
        """Three-way comparison through ``<`` and ``==``.

        TypeError from the operators (the usual answer to an unrelated
        operand) means INCOMPARABLE.
        """
        if not isinstance(b, self.value_type):
            return Comparison.INCOMPARABLE
        try:
            if a < b:
                return Comparison.LESS
            if b < a:
                return Comparison.GREATER
            if a == b:
                return Comparison.EQUAL
        except TypeError:
            return Comparison.INCOMPARABLE
        return Comparison.INCOMPARABLE

    def add(self, a: Any, b: Any) -> Any:
        return _apply(operator.add, a, b)

    def sub(self, a: Any, b: Any) -> Any:
        return _apply(operator.sub, a, b)

    def mul(self, a: Any, b: Any) -> Any:
        return _apply(operator.mul, a, b)

    def div(self, a: Any, b: Any) -> Any:
        return _apply(operator.truediv, a, b)

    def negate(self, a: Any) -> Any:
        try:
            return -a
        except TypeError:
            return NotImplemented


def _apply(op: Callable[[Any, Any], Any], a: Any, b: Any) -> Any:
    """Apply a binary operator; an unsupported operand pair is NotImplemented."""
    try:
        return op(a, b)
    except TypeError:
        return NotImplemented
