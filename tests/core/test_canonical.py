# tests/core/test_canonical.py
"""Tests for canonical JSON and stable hashing."""

from __future__ import annotations

import hashlib

import pytest

from valuecheck.core.canonical import CANONICAL_VERSION, canonical_json, stable_hash


class TestCanonicalJson:
    def test_sorted_keys_no_whitespace(self) -> None:
        assert canonical_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_key_order_does_not_matter(self) -> None:
        assert canonical_json({"x": 1, "y": 2}) == canonical_json({"y": 2, "x": 1})

    def test_non_finite_floats_are_serialised(self) -> None:
        assert canonical_json({"amount": float("inf")}) == '{"amount":"inf"}'

    def test_large_integers_become_strings(self) -> None:
        assert canonical_json([2**60]) == f'["{2**60}"]'

    def test_tuples_are_lists(self) -> None:
        assert canonical_json((1, "m")) == '[1,"m"]'


class TestStableHash:
    def test_is_sha256_of_canonical_json(self) -> None:
        data = {"unit": "m", "amount": 1}

        assert stable_hash(data) == hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()

    def test_deterministic(self) -> None:
        assert stable_hash({"a": 1, "b": 2}) == stable_hash({"b": 2, "a": 1})

    def test_version_constant(self) -> None:
        assert CANONICAL_VERSION == "sha256-rfc8785-v1"

    def test_unknown_version_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported canonical version"):
            stable_hash({"a": 1}, version="md5-v0")
