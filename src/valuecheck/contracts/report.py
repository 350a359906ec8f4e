# src/valuecheck/contracts/report.py
"""Violations and reports: the only output of a conformance run.

These types answer: "What did the run find?"

IMPORTANT:
- Violation and Report are frozen; a run builds them once and never mutates them
- Report.passed is exactly ``not violations``; WARN violations also fail a report
- Report.complete is False only for a cancelled run
- to_dict() output is JSON-safe whatever the samples contain
"""

from __future__ import annotations

import base64
import math
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, TypedDict

from valuecheck.contracts.enums import Severity, ViolationKind


class ViolationRecord(TypedDict):
    """Serialised form of a Violation."""

    property: str
    message: str
    samples: list[Any]
    severity: str
    kind: str


class ReportRecord(TypedDict):
    """Serialised form of a Report."""

    passed: bool
    complete: bool
    violations: list[ViolationRecord]
    stats: dict[str, int]


def to_jsonable(value: Any) -> Any:
    """Convert a sample value to JSON-safe primitives.

    Mappings keep string keys, sequences become lists, finite numbers pass
    through. Non-finite floats and Decimals become strings (samples for
    "infinite" edge cases are expected to carry them). Anything else becomes
    its repr, so reports built from any sample set can be serialised.
    """
    if value is None or isinstance(value, bool | str | int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, bytes):
        return {"__bytes__": base64.b64encode(value).decode("ascii")}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [to_jsonable(v) for v in value]
    if isinstance(value, set | frozenset):
        return sorted((to_jsonable(v) for v in value), key=repr)
    return repr(value)


@dataclass(frozen=True, slots=True)
class Violation:
    """A recorded deviation from an expected property.

    Attributes:
        property: Name of the property that was violated (e.g. "hash-consistency")
        samples: Offending samples: construction args, representations or
            foreign values, in the order the property examined them
        message: Expected vs observed behaviour
        severity: FAIL or WARN
        kind: CONTRACT, ADAPTER_FAULT or TIMEOUT
    """

    property: str
    samples: tuple[Any, ...]
    message: str
    severity: Severity = Severity.FAIL
    kind: ViolationKind = ViolationKind.CONTRACT

    def to_dict(self) -> ViolationRecord:
        return {
            "property": self.property,
            "message": self.message,
            "samples": [to_jsonable(s) for s in self.samples],
            "severity": self.severity.value,
            "kind": self.kind.value,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Outcome of one Verifier run.

    Violations are ordered by property declaration order, then by sample
    order within each property.

    Attributes:
        violations: Every violation found
        complete: False when the run was cancelled before every unit ran
        stats: Unit counters (units, passed, violated, faulted, timed_out, skipped),
            read-only
    """

    violations: tuple[Violation, ...] = ()
    complete: bool = True
    stats: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    @property
    def passed(self) -> bool:
        """True when the run found no violations of any severity."""
        return not self.violations

    def failures(self) -> tuple[Violation, ...]:
        """Violations with FAIL severity."""
        return tuple(v for v in self.violations if v.severity == Severity.FAIL)

    def warnings(self) -> tuple[Violation, ...]:
        """Violations with WARN severity."""
        return tuple(v for v in self.violations if v.severity == Severity.WARN)

    def by_property(self) -> dict[str, list[Violation]]:
        """Group violations by property name, keeping report order."""
        grouped: dict[str, list[Violation]] = defaultdict(list)
        for violation in self.violations:
            grouped[violation.property].append(violation)
        return dict(grouped)

    def to_dict(self) -> ReportRecord:
        return {
            "passed": self.passed,
            "complete": self.complete,
            "violations": [v.to_dict() for v in self.violations],
            "stats": dict(self.stats),
        }

    def to_json(self) -> str:
        """Canonical (RFC 8785) JSON of to_dict()."""
        from valuecheck.core.canonical import canonical_json

        return canonical_json(self.to_dict())

    def fingerprint(self) -> str:
        """SHA-256 of the canonical JSON; equal for equal reports."""
        from valuecheck.core.canonical import stable_hash

        return stable_hash(self.to_dict())
