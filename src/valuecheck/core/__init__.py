# src/valuecheck/core/__init__.py
"""Core infrastructure: configuration, sample sets, logging, canonical JSON."""

from valuecheck.core.canonical import CANONICAL_VERSION, canonical_json, stable_hash
from valuecheck.core.config import (
    CapabilityDescriptor,
    EdgeCase,
    RunSettings,
    load_descriptor,
    load_settings,
)
from valuecheck.core.logging import configure_logging, get_logger
from valuecheck.core.samples import (
    BUILTIN_FOREIGN_VALUES,
    FOREIGN_SENTINEL,
    MalformedInput,
    Sample,
    SampleSet,
)

__all__ = [
    "BUILTIN_FOREIGN_VALUES",
    "CANONICAL_VERSION",
    "FOREIGN_SENTINEL",
    "CapabilityDescriptor",
    "EdgeCase",
    "MalformedInput",
    "RunSettings",
    "Sample",
    "SampleSet",
    "canonical_json",
    "configure_logging",
    "get_logger",
    "load_descriptor",
    "load_settings",
    "stable_hash",
]
