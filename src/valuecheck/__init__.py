"""
valuecheck: Conformance checking for value-object types.

Exercises a candidate type, through an adapter, against the behavioural
conventions every value object should satisfy and reports each violation.
"""

from valuecheck.contracts import (
    Comparison,
    ConfigurationError,
    RepresentationError,
    Report,
    Severity,
    Violation,
)
from valuecheck.core.config import CapabilityDescriptor, EdgeCase, RunSettings
from valuecheck.engine.verifier import Verifier, verify

__version__ = "0.1.0"

__all__ = [
    "CapabilityDescriptor",
    "Comparison",
    "ConfigurationError",
    "EdgeCase",
    "RepresentationError",
    "Report",
    "RunSettings",
    "Severity",
    "Verifier",
    "Violation",
    "verify",
]
