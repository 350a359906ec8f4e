# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import quantity_samples

    @given(samples=quantity_samples)
    def test_run_is_deterministic(samples: list[dict]) -> None:
        ...
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

# RFC 8785 (JCS) uses JavaScript-safe integers
_MAX_SAFE_INT = 2**53 - 1

units = st.sampled_from(["m", "s", "kg"])

# Amounts whose sums and differences stay exact
amounts = st.integers(min_value=-1000, max_value=1000)

quantity_args = st.fixed_dictionaries({"amount": amounts, "unit": units})

# At least two samples, duplicates allowed
quantity_samples = st.lists(quantity_args, min_size=2, max_size=5)

# At least two distinct samples in one unit, as ordering requires
distinct_metres = st.lists(amounts, min_size=2, max_size=5, unique=True).map(
    lambda values: [{"amount": v, "unit": "m"} for v in values]
)

# Sample payloads the report must be able to serialise
sample_payloads: st.SearchStrategy[Any] = st.recursive(
    st.none()
    | st.booleans()
    | st.integers(min_value=-_MAX_SAFE_INT, max_value=_MAX_SAFE_INT)
    | st.floats()
    | st.text(max_size=20)
    | st.decimals(allow_nan=False)
    | st.binary(max_size=8),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=20,
)
