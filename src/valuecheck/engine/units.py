# src/valuecheck/engine/units.py
"""Units of work and their outcomes.

A unit is one (property, anchor) execution: the grain of parallelism,
timeouts and fault isolation. Every unit ends in exactly one UnitOutcome;
an adapter fault or timeout never prevents another unit from running.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from valuecheck.contracts.enums import Severity, UnitStatus, ViolationKind
from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.engine.properties.base import (
    CheckContext,
    CheckEnvironment,
    Property,
    describe,
    fault_violation,
    payload,
)


@dataclass(frozen=True, slots=True)
class Unit:
    """One property run against one anchor.

    Attributes:
        position: Submission order across the whole run (report order)
        prop: The property to run
        anchor: The sample or malformed input the unit is responsible for
    """

    position: int
    prop: Property
    anchor: Any

    @property
    def label(self) -> str:
        return f"{self.prop.name}@{describe(self.anchor)}"


@dataclass(frozen=True, slots=True)
class UnitOutcome:
    """Terminal result of a unit. Use the factory methods."""

    unit: Unit
    status: UnitStatus
    violations: tuple[Violation, ...] = ()

    @classmethod
    def from_violations(cls, unit: Unit, violations: Sequence[Violation]) -> UnitOutcome:
        """PASSED, VIOLATED, or FAULTED when a pair-level adapter fault was recorded."""
        if any(v.kind is ViolationKind.ADAPTER_FAULT for v in violations):
            status = UnitStatus.FAULTED
        elif violations:
            status = UnitStatus.VIOLATED
        else:
            status = UnitStatus.PASSED
        return cls(unit=unit, status=status, violations=tuple(violations))

    @classmethod
    def faulted(cls, unit: Unit, found: Sequence[Violation], fault: AdapterFault) -> UnitOutcome:
        """The anchor itself faulted. Violations found before the fault are kept."""
        fault_found = fault_violation(unit.prop.name, fault, unit.anchor)
        return cls(unit=unit, status=UnitStatus.FAULTED, violations=(*found, fault_found))

    @classmethod
    def timed_out(cls, unit: Unit, timeout_seconds: float) -> UnitOutcome:
        violation = Violation(
            property=unit.prop.name,
            samples=(payload(unit.anchor),),
            message=f"checking {describe(unit.anchor)} did not finish within {timeout_seconds}s",
            severity=Severity.FAIL,
            kind=ViolationKind.TIMEOUT,
        )
        return cls(unit=unit, status=UnitStatus.TIMED_OUT, violations=(violation,))

    @classmethod
    def skipped(cls, unit: Unit) -> UnitOutcome:
        return cls(unit=unit, status=UnitStatus.SKIPPED)


def plan_units(properties: Sequence[Property], env: CheckEnvironment) -> list[Unit]:
    """Expand properties into units, property-major then anchor order."""
    units: list[Unit] = []
    for prop in properties:
        for anchor in prop.anchors(env.samples):
            units.append(Unit(position=len(units), prop=prop, anchor=anchor))
    return units


def execute_unit(unit: Unit, env: CheckEnvironment) -> UnitOutcome:
    """Run one unit, converting adapter faults into a Violation.

    Only AdapterFault is captured. Any other exception is a bug in the
    engine or a property and propagates.
    """
    ctx = CheckContext(env=env, property_name=unit.prop.name)
    found: list[Violation] = []
    try:
        for violation in unit.prop.check(ctx, unit.anchor):
            found.append(violation)
    except AdapterFault as fault:
        return UnitOutcome.faulted(unit, found, fault)
    return UnitOutcome.from_violations(unit, found)
