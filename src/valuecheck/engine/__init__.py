# src/valuecheck/engine/__init__.py
"""Conformance engine: property suite, unit execution and the Verifier."""

from valuecheck.engine.cancellation import CancellationToken, cancel_after
from valuecheck.engine.pool import ExceptionResult, UnitExecutor
from valuecheck.engine.probe import AdapterProbe
from valuecheck.engine.properties import PROPERTY_NAMES, SUITE, Property, select_properties
from valuecheck.engine.reorder_buffer import BufferEntry, ReorderBuffer
from valuecheck.engine.units import Unit, UnitOutcome, execute_unit, plan_units
from valuecheck.engine.verifier import Verifier, verify

__all__ = [
    "PROPERTY_NAMES",
    "SUITE",
    "AdapterProbe",
    "BufferEntry",
    "CancellationToken",
    "ExceptionResult",
    "Property",
    "ReorderBuffer",
    "Unit",
    "UnitExecutor",
    "UnitOutcome",
    "Verifier",
    "cancel_after",
    "execute_unit",
    "plan_units",
    "select_properties",
    "verify",
]
