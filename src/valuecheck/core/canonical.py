# src/valuecheck/core/canonical.py
"""
Canonical JSON for reports.

A Report is serialised in two steps:
1. Normalise: samples become JSON-safe primitives (contracts.report.to_jsonable)
2. Serialise: RFC 8785/JCS output from the rfc8785 package

Report fingerprints compare runs, not audit records. Anything a caller
sampled must serialise, so non-finite numbers, oversized integers and
arbitrary objects are turned into strings rather than rejected.
"""

from __future__ import annotations

import hashlib
from typing import Any

import rfc8785

from valuecheck.contracts.report import to_jsonable

# Recorded alongside fingerprints that are stored for later comparison
CANONICAL_VERSION = "sha256-rfc8785-v1"

# RFC 8785 only admits integers that survive an IEEE-754 double round-trip
_MAX_SAFE_INTEGER = 2**53 - 1


def _fit_integer_domain(data: Any) -> Any:
    """Stringify integers outside the interoperable JSON range."""
    if isinstance(data, dict):
        return {k: _fit_integer_domain(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_fit_integer_domain(v) for v in data]
    if isinstance(data, int) and not isinstance(data, bool) and abs(data) > _MAX_SAFE_INTEGER:
        return str(data)
    return data


def canonical_json(obj: Any) -> str:
    """Serialise ``obj`` with sorted keys and no insignificant whitespace.

    Equal inputs give byte-identical output regardless of dict insertion
    order.
    """
    encoded: bytes = rfc8785.dumps(_fit_integer_domain(to_jsonable(obj)))
    return encoded.decode("utf-8")


def stable_hash(obj: Any, version: str = CANONICAL_VERSION) -> str:
    """SHA-256 hex digest of ``canonical_json(obj)``.

    Raises:
        ValueError: If ``version`` names a scheme this module does not produce
    """
    if version != CANONICAL_VERSION:
        raise ValueError(f"Unsupported canonical version {version!r}; expected {CANONICAL_VERSION!r}")
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
