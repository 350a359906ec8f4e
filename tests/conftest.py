# tests/conftest.py
"""Shared fixtures and Hypothesis profiles.

Value-object types and adapters used across the suite live in
tests/fixtures/value_objects.py. Each adapter is either well-behaved or
breaks exactly one convention, so a test can assert on the precise set of
violations a run reports.

Hypothesis profiles (select with HYPOTHESIS_PROFILE, default "ci"):
    ci       100 examples
    nightly  1000 examples
    debug    10 examples, verbose

    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from tests.fixtures.value_objects import QuantityAdapter
from valuecheck.core.config import CapabilityDescriptor, RunSettings

# Pool scheduling makes per-example timing noisy, so no profile sets a deadline
_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("ci", max_examples=100, phases=_ALL_PHASES, deadline=None)
settings.register_profile("nightly", max_examples=1000, phases=_ALL_PHASES, deadline=None)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=_ALL_PHASES,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


METRES = [{"amount": 1, "unit": "m"}, {"amount": 2, "unit": "m"}]


@pytest.fixture
def quantity_adapter() -> QuantityAdapter:
    return QuantityAdapter()


@pytest.fixture
def metres_descriptor() -> CapabilityDescriptor:
    """Two distinct lengths in metres, ordered and hashable."""
    return CapabilityDescriptor(ordered=True, hashable=True, sample_values=METRES)


@pytest.fixture
def serial_settings() -> RunSettings:
    return RunSettings(pool_size=1, unit_timeout_seconds=None)
