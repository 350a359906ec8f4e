# src/valuecheck/contracts/adapter.py
"""Adapter protocols: what the engine needs from a candidate type.

An adapter is a stateless set of operations bound to one candidate type.
The engine never touches candidate instances except through these
operations, so any construction API shape can be checked.

Protocol Pattern:
    - ValueObjectAdapter names the operations every adapter must provide
    - One protocol per optional capability group names its extra operations
    - Declaring a capability flag without the matching operations is a
      ConfigurationError at validation time

Conventions:
    - Every operation is referentially transparent: no hidden global state
    - equals, compare, hash and inspect must not raise for in-scope inputs
    - from_representation may raise RepresentationError for malformed input
    - Arithmetic operations return NotImplemented for unsupported operand
      pairs (e.g. mismatched units); those pairs are skipped
    - successor returns None where no successor exists
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from valuecheck.contracts.enums import Capability, Comparison

REQUIRED_OPERATIONS: tuple[str, ...] = ("construct", "equals", "inspect")

# Operations each capability flag depends on. Arithmetic only requires add;
# sub, mul, div and negate widen which laws are checked.
CAPABILITY_OPERATIONS: dict[Capability, tuple[str, ...]] = {
    Capability.ORDERED: ("compare",),
    Capability.HASHABLE: ("hash",),
    Capability.ARITHMETIC: ("add",),
    Capability.SERIALIZABLE: ("to_representation", "from_representation"),
    Capability.SUCC: ("successor", "compare"),
}


@runtime_checkable
class ValueObjectAdapter(Protocol):
    """Operations every adapter provides."""

    def construct(self, args: Any) -> Any:
        """Build an instance from caller-supplied construction args."""
        ...

    def equals(self, a: Any, b: Any) -> bool:
        """Structural equality. ``b`` may be a value of an unrelated type."""
        ...

    def inspect(self, a: Any) -> str:
        """Debug representation of an instance."""
        ...


@runtime_checkable
class HashableAdapter(ValueObjectAdapter, Protocol):
    """Adapter for types declared ``hashable``."""

    def hash(self, a: Any) -> int:
        """Hash consistent with ``equals``."""
        ...


@runtime_checkable
class OrderedAdapter(ValueObjectAdapter, Protocol):
    """Adapter for types declared ``ordered``."""

    def compare(self, a: Any, b: Any) -> Comparison:
        """Three-way comparison; INCOMPARABLE for unrelated values."""
        ...


@runtime_checkable
class SerializableAdapter(ValueObjectAdapter, Protocol):
    """Adapter for types declared ``serializable``."""

    def to_representation(self, a: Any) -> Mapping[str, Any]:
        """Structured mapping representation of an instance."""
        ...

    def from_representation(self, representation: Mapping[str, Any]) -> Any:
        """Rebuild an instance; raise RepresentationError for malformed input."""
        ...


@runtime_checkable
class ArithmeticAdapter(ValueObjectAdapter, Protocol):
    """Adapter for types declared ``arithmetic``.

    Only ``add`` is mandatory. ``sub``, ``mul``, ``div`` and ``negate`` are
    picked up when present.
    """

    def add(self, a: Any, b: Any) -> Any:
        """Sum of two instances, or NotImplemented."""
        ...


@runtime_checkable
class SuccessorAdapter(OrderedAdapter, Protocol):
    """Adapter for types declared ``succ``."""

    def successor(self, a: Any) -> Any | None:
        """Next value after ``a``, or None if ``a`` has no successor."""
        ...


def implements(adapter: object, *operations: str) -> bool:
    """Check whether every named operation is a callable attribute of the adapter.

    Stricter than an isinstance() check against a runtime_checkable
    Protocol, which only tests attribute presence.

    Args:
        adapter: Adapter under inspection
        operations: Operation names to look for

    Returns:
        True if all operations are present and callable
    """
    return all(callable(getattr(adapter, name, None)) for name in operations)


def missing_operations(adapter: object, operations: tuple[str, ...]) -> list[str]:
    """Names from ``operations`` the adapter does not implement, in order."""
    return [name for name in operations if not implements(adapter, name)]
