# tests/property/test_conformance_properties.py
"""Property-based tests: lawful candidates never produce violations."""

from __future__ import annotations

from fractions import Fraction
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from tests.fixtures.value_objects import QuantityAdapter
from tests.property.conftest import distinct_metres, quantity_samples
from tests.property.settings import RUN_SETTINGS
from valuecheck import CapabilityDescriptor, RunSettings, verify
from valuecheck.adapters import OperatorAdapter

SERIAL = RunSettings(pool_size=1, unit_timeout_seconds=None)


class TestLawfulCandidates:
    @given(values=st.lists(st.integers(min_value=-1000, max_value=1000), min_size=2, max_size=5, unique=True))
    @RUN_SETTINGS
    def test_integers_pass_everything(self, values: list[int]) -> None:
        descriptor = CapabilityDescriptor(
            ordered=True,
            hashable=True,
            arithmetic=True,
            succ=True,
            sample_values=values,
            additive_identity=0,
            multiplicative_identity=1,
        )
        adapter = OperatorAdapter(int, successor=lambda n: n + 1)

        report = verify(adapter, descriptor, settings=SERIAL)

        assert report.passed, report.to_dict()

    @given(pairs=st.lists(st.tuples(st.integers(-50, 50), st.integers(1, 50)), min_size=2, max_size=4))
    @RUN_SETTINGS
    def test_fractions_pass_without_ordering(self, pairs: list[tuple[int, int]]) -> None:
        descriptor = CapabilityDescriptor(
            hashable=True,
            arithmetic=True,
            sample_values=[list(pair) for pair in pairs],
            additive_identity=[0, 1],
        )

        report = verify(OperatorAdapter(Fraction), descriptor, settings=SERIAL)

        assert report.passed, report.to_dict()

    @given(samples=distinct_metres)
    @RUN_SETTINGS
    def test_quantities_pass_everything(self, samples: list[dict[str, Any]]) -> None:
        descriptor = CapabilityDescriptor(
            ordered=True,
            hashable=True,
            arithmetic=True,
            serializable=True,
            sample_values=samples,
            additive_identity={"amount": 0, "unit": "m"},
        )

        report = verify(QuantityAdapter(), descriptor, settings=SERIAL)

        assert report.passed, report.to_dict()

    @given(samples=quantity_samples)
    @RUN_SETTINGS
    def test_mixed_units_without_ordering(self, samples: list[dict[str, Any]]) -> None:
        """Unsupported unit pairs are skipped, never reported."""
        descriptor = CapabilityDescriptor(hashable=True, arithmetic=True, serializable=True, sample_values=samples)

        report = verify(QuantityAdapter(), descriptor, settings=SERIAL)

        assert report.passed, report.to_dict()
