# tests/property/test_report_properties.py
"""Property-based tests for report determinism and serialisation."""

from __future__ import annotations

import json
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from tests.fixtures.value_objects import AlwaysLessAdapter, QuantityAdapter
from tests.property.conftest import quantity_samples, sample_payloads
from tests.property.settings import DETERMINISM_SETTINGS, RUN_SETTINGS
from valuecheck import CapabilityDescriptor, RunSettings, verify
from valuecheck.contracts.enums import Severity
from valuecheck.contracts.report import Report, Violation


class TestReportSerialisation:
    @given(samples=st.lists(sample_payloads, max_size=3), severity=st.sampled_from(list(Severity)))
    @DETERMINISM_SETTINGS
    def test_any_samples_serialise(self, samples: list[Any], severity: Severity) -> None:
        """Property: to_json() never fails and always parses back to JSON."""
        report = Report(violations=(Violation("symmetry", tuple(samples), "message", severity),))

        parsed = json.loads(report.to_json())

        assert parsed["passed"] is False
        assert len(parsed["violations"][0]["samples"]) == len(samples)

    @given(samples=st.lists(sample_payloads, max_size=3))
    @DETERMINISM_SETTINGS
    def test_fingerprint_is_deterministic(self, samples: list[Any]) -> None:
        first = Report(violations=(Violation("round-trip", tuple(samples), "m"),))
        second = Report(violations=(Violation("round-trip", tuple(samples), "m"),))

        assert first.fingerprint() == second.fingerprint()


class TestRunDeterminism:
    @given(samples=quantity_samples)
    @RUN_SETTINGS
    def test_identical_runs_give_identical_reports(self, samples: list[dict[str, Any]]) -> None:
        """Property: a run is a function of adapter, descriptor and samples."""
        descriptor = CapabilityDescriptor(hashable=True, arithmetic=True, serializable=True, sample_values=samples)
        settings = RunSettings(pool_size=1, unit_timeout_seconds=None)

        first = verify(QuantityAdapter(), descriptor, settings=settings)
        second = verify(QuantityAdapter(), descriptor, settings=settings)

        assert first.to_dict() == second.to_dict()
        assert first.fingerprint() == second.fingerprint()

    @given(samples=quantity_samples.filter(lambda s: len({(q["amount"], q["unit"]) for q in s}) > 1))
    @RUN_SETTINGS
    def test_pool_size_does_not_change_the_report(self, samples: list[dict[str, Any]]) -> None:
        descriptor = CapabilityDescriptor(ordered=True, hashable=True, sample_values=samples)

        serial = verify(AlwaysLessAdapter(), descriptor, settings=RunSettings(pool_size=1, unit_timeout_seconds=None))
        pooled = verify(AlwaysLessAdapter(), descriptor, settings=RunSettings(pool_size=4, unit_timeout_seconds=None))

        assert pooled.to_dict() == serial.to_dict()
