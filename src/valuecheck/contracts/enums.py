# src/valuecheck/contracts/enums.py
"""All status codes, kinds and phases used across subsystem boundaries."""

from enum import StrEnum


class Comparison(StrEnum):
    """Outcome of an adapter ``compare`` call.

    INCOMPARABLE is the only acceptable answer when one operand is a value
    of an unrelated type.
    """

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    INCOMPARABLE = "incomparable"

    def mirrored(self) -> "Comparison":
        """The answer expected when the operands are swapped."""
        if self is Comparison.LESS:
            return Comparison.GREATER
        if self is Comparison.GREATER:
            return Comparison.LESS
        return self


class Severity(StrEnum):
    """How serious a recorded violation is.

    Both severities make a report non-passing.
    """

    FAIL = "fail"
    WARN = "warn"


class ViolationKind(StrEnum):
    """What produced a violation.

    Values:
        CONTRACT: A property's assertion did not hold
        ADAPTER_FAULT: An adapter operation raised or returned the wrong type
        TIMEOUT: A unit did not finish within its time bound
    """

    CONTRACT = "contract"
    ADAPTER_FAULT = "adapter_fault"
    TIMEOUT = "timeout"


class Capability(StrEnum):
    """Optional behaviour groups a candidate type may declare.

    Values match the CapabilityDescriptor field names.
    """

    ORDERED = "ordered"
    HASHABLE = "hashable"
    ARITHMETIC = "arithmetic"
    SERIALIZABLE = "serializable"
    SUCC = "succ"


class EdgeKind(StrEnum):
    """Kind of caller-supplied edge case.

    BOUNDARY and INFINITE carry construction args and are checked like any
    other sample. MALFORMED carries a representation that
    ``from_representation`` is expected to reject.
    """

    BOUNDARY = "boundary"
    INFINITE = "infinite"
    MALFORMED = "malformed"


class VerifierPhase(StrEnum):
    """Lifecycle of a single Verifier run."""

    CONFIGURING = "configuring"
    VALIDATING = "validating"
    RUNNING = "running"
    REPORTING = "reporting"
    DONE = "done"


class UnitStatus(StrEnum):
    """Terminal status of one (property, anchor) unit of work."""

    PASSED = "passed"
    VIOLATED = "violated"
    FAULTED = "faulted"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"
