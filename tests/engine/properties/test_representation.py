# tests/engine/properties/test_representation.py
"""Tests for round-trip and malformed-representation checks."""

from __future__ import annotations

from typing import Any

from tests.fixtures.runs import run_properties
from tests.fixtures.value_objects import (
    CrashingRepresentationAdapter,
    LenientRepresentationAdapter,
    LossyRepresentationAdapter,
    QuantityAdapter,
)
from valuecheck.contracts.enums import Severity, ViolationKind
from valuecheck.contracts.errors import RepresentationError

MIXED_UNITS = [{"amount": 1, "unit": "m"}, {"amount": 2, "unit": "ft"}]
MALFORMED = {"kind": "malformed", "value": {"amount": "twelve"}, "label": "words"}


def _descriptor(**fields: Any) -> dict[str, Any]:
    return {"serializable": True, "sample_values": MIXED_UNITS, **fields}


class TestRoundTrip:
    def test_faithful_representation(self) -> None:
        report = run_properties(QuantityAdapter(), _descriptor(edge_cases=[MALFORMED]))

        assert report.passed

    def test_lossy_representation(self) -> None:
        report = run_properties(LossyRepresentationAdapter(), _descriptor(), "round-trip")

        (violation,) = report.violations
        assert violation.samples == (MIXED_UNITS[1], {"amount": 2})
        assert violation.message == "sample[1] did not survive a round-trip through {'amount': 2}"

    def test_rejecting_own_representation(self) -> None:
        class Picky(QuantityAdapter):
            def from_representation(self, representation: Any) -> Any:
                raise RepresentationError("never heard of it")

        report = run_properties(Picky(), _descriptor(), "round-trip")

        assert len(report.violations) == 2
        assert "never heard of it" in report.violations[0].message
        assert report.violations[0].kind is ViolationKind.CONTRACT

    def test_representation_is_copied_before_loading(self) -> None:
        """from_representation may consume its input without affecting the check."""

        class Consuming(QuantityAdapter):
            def from_representation(self, representation: Any) -> Any:
                restored = super().from_representation(representation)
                representation.clear()
                return restored

        report = run_properties(Consuming(), _descriptor(), "round-trip")

        assert report.passed


class TestMalformedRepresentation:
    def test_rejected_with_representation_error(self) -> None:
        report = run_properties(QuantityAdapter(), _descriptor(edge_cases=[MALFORMED]), "malformed-representation")

        assert report.passed
        assert report.stats["units"] == 1

    def test_accepted_is_a_warning(self) -> None:
        report = run_properties(LenientRepresentationAdapter(), _descriptor(edge_cases=[MALFORMED]), "malformed-representation")

        (violation,) = report.violations
        assert violation.severity is Severity.WARN
        assert violation.samples == ({"amount": "twelve"},)
        assert violation.message == "from_representation accepted malformed input words"
        assert not report.passed
        assert report.failures() == ()

    def test_other_exception_is_a_failure(self) -> None:
        report = run_properties(CrashingRepresentationAdapter(), _descriptor(edge_cases=[MALFORMED]), "malformed-representation")

        (violation,) = report.violations
        assert violation.severity is Severity.FAIL
        assert violation.kind is ViolationKind.CONTRACT
        assert "should raise RepresentationError" in violation.message
        assert "KeyError" in violation.message

    def test_no_malformed_inputs_no_units(self) -> None:
        report = run_properties(QuantityAdapter(), _descriptor(), "malformed-representation")

        assert report.stats["units"] == 0
        assert report.passed
