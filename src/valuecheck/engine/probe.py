# src/valuecheck/engine/probe.py
"""AdapterProbe: guarded access to a caller-supplied adapter.

Every adapter call made by a property goes through the probe. The probe
turns anything the adapter raises, and any return value of the wrong type,
into an AdapterFault. That lets the unit runner tell adapter misbehaviour
(recorded as a Violation) apart from bugs in the engine itself (which
propagate and crash the run).

RepresentationError from from_representation is the one exception that
passes through untouched: for malformed input it is the expected answer.
"""

from collections.abc import Mapping
from typing import Any

from valuecheck.contracts.adapter import implements
from valuecheck.contracts.enums import Comparison
from valuecheck.contracts.errors import AdapterFault, RepresentationError

_COMPARISON_VALUES = frozenset(c.value for c in Comparison)


class AdapterProbe:
    """Type-checked, fault-capturing wrapper around one adapter."""

    __slots__ = ("_adapter",)

    def __init__(self, adapter: object) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> object:
        return self._adapter

    def supports(self, operation: str) -> bool:
        """Whether the adapter implements an optional operation."""
        return implements(self._adapter, operation)

    def _call(self, operation: str, *args: Any) -> Any:
        fn = getattr(self._adapter, operation)
        try:
            return fn(*args)
        except Exception as exc:
            raise AdapterFault.from_exception(operation, exc) from exc

    def construct(self, args: Any) -> Any:
        return self._call("construct", args)

    def equals(self, a: Any, b: Any) -> bool:
        result = self._call("equals", a, b)
        if not isinstance(result, bool):
            raise AdapterFault.bad_return("equals", result, "bool")
        return result

    def hash(self, a: Any) -> int:
        result = self._call("hash", a)
        if not isinstance(result, int) or isinstance(result, bool):
            raise AdapterFault.bad_return("hash", result, "int")
        return result

    def compare(self, a: Any, b: Any) -> Comparison:
        result = self._call("compare", a, b)
        if isinstance(result, Comparison):
            return result
        # Plain strings matching a member value are accepted
        if isinstance(result, str) and result in _COMPARISON_VALUES:
            return Comparison(result)
        raise AdapterFault.bad_return("compare", result, "Comparison")

    def inspect(self, a: Any) -> str:
        result = self._call("inspect", a)
        if not isinstance(result, str):
            raise AdapterFault.bad_return("inspect", result, "str")
        return result

    def to_representation(self, a: Any) -> Mapping[str, Any]:
        result = self._call("to_representation", a)
        if not isinstance(result, Mapping):
            raise AdapterFault.bad_return("to_representation", result, "Mapping")
        return result

    def from_representation(self, representation: Any) -> Any:
        fn = self._adapter.from_representation  # type: ignore[attr-defined]
        try:
            return fn(representation)
        except RepresentationError:
            raise
        except Exception as exc:
            raise AdapterFault.from_exception("from_representation", exc) from exc

    def arithmetic(self, operation: str, *operands: Any) -> Any:
        """Apply add/sub/mul/div/negate. May return NotImplemented."""
        return self._call(operation, *operands)

    def successor(self, a: Any) -> Any | None:
        return self._call("successor", a)
