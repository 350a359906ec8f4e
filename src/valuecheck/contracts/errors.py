# src/valuecheck/contracts/errors.py
"""Error taxonomy for conformance runs.

Only ConfigurationError ends a run early. Every other failure mode is
captured where it happens and surfaces as a Violation in the Report.
"""

from collections.abc import Sequence
from typing import TypedDict


class FaultDetail(TypedDict):
    """Schema for an adapter fault captured during a unit."""

    operation: str  # Adapter operation that misbehaved (e.g. "equals")
    exception: str  # String representation of the exception, or the bad return value
    type: str  # Exception class name, or the offending return type


class ConfigurationError(ValueError):
    """Raised when a descriptor is inconsistent with itself or its adapter.

    Raised during validation, before any property runs. No Report is
    produced for a run that fails this way.

    Attributes:
        problems: Every inconsistency found, in the order it was detected
    """

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems = tuple(problems)
        joined = "; ".join(self.problems)
        super().__init__(f"Invalid conformance configuration: {joined}")


class RepresentationError(ValueError):
    """Raised by an adapter's ``from_representation`` for malformed input.

    Expected when a malformed edge case is fed back in. Never expected for a
    representation the adapter itself produced.
    """


class AdapterFault(Exception):
    """An adapter operation raised unexpectedly or broke its return contract.

    Internal carrier between the guarded adapter proxy and the unit runner.
    It never escapes a run: pair and triple checks record it against the
    offending pair, and the unit runner records any other as a Violation.

    Attributes:
        operation: Adapter operation name
        cause: Original exception, if the operation raised
        detail: Structured description for the report
    """

    def __init__(self, operation: str, detail: FaultDetail, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.detail = detail
        self.cause = cause
        super().__init__(f"{operation} raised {detail['type']}: {detail['exception']}")

    @classmethod
    def from_exception(cls, operation: str, exc: BaseException) -> "AdapterFault":
        """Wrap an exception raised inside an adapter operation."""
        return cls(
            operation,
            {"operation": operation, "exception": str(exc), "type": type(exc).__name__},
            cause=exc,
        )

    @classmethod
    def bad_return(cls, operation: str, value: object, expected: str) -> "AdapterFault":
        """Describe an adapter operation that returned the wrong kind of value."""
        return cls(
            operation,
            {
                "operation": operation,
                "exception": f"returned {value!r}, expected {expected}",
                "type": type(value).__name__,
            },
        )

    def describe(self) -> str:
        """Human-readable summary used in violation messages."""
        if self.cause is None:
            return f"adapter {self.operation} {self.detail['exception']}"
        return f"adapter {self.operation} raised {self.detail['type']}: {self.detail['exception']}"


class VerifierStateError(RuntimeError):
    """Raised when a Verifier is asked to run outside its lifecycle.

    A Verifier runs exactly once; build a fresh one per run.
    """
