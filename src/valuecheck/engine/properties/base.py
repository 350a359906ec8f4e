# src/valuecheck/engine/properties/base.py
"""Property building blocks: what a check is and what it can see.

A Property is a named, capability-gated check. Its check function runs
once per anchor (a sample, or a malformed input) and yields Violations.
Pair and triple properties enumerate partners starting from the anchor, so
each (property, anchor) unit is independent of every other unit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from valuecheck.contracts.enums import Capability, Severity, ViolationKind
from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.config import CapabilityDescriptor, RunSettings
from valuecheck.core.samples import MalformedInput, Sample, SampleSet
from valuecheck.engine.probe import AdapterProbe

CheckFn = Callable[["CheckContext", Any], Iterator[Violation]]
AppliesFn = Callable[[CapabilityDescriptor, AdapterProbe], bool]
AnchorsFn = Callable[[SampleSet], Sequence[Any]]


def every_sample(samples: SampleSet) -> Sequence[Sample]:
    return samples.samples


def every_malformed_input(samples: SampleSet) -> Sequence[MalformedInput]:
    return samples.malformed


def payload(item: Any) -> Any:
    """What a Violation records for a sample-like item."""
    if isinstance(item, Sample):
        return item.args
    if isinstance(item, MalformedInput):
        return item.representation
    return item


def describe(item: Any) -> str:
    """Short label for messages."""
    if isinstance(item, Sample | MalformedInput):
        return item.label
    return repr(item)


@dataclass(frozen=True, slots=True)
class Property:
    """A named check from the suite.

    Attributes:
        name: Kebab-case name recorded on every Violation
        check: Generator over Violations for one anchor
        requires: Capability flag that must be declared, or None for always-on
        applies: Extra gate on descriptor and adapter (e.g. "sub" implemented)
        anchors: Which items the check is run once for
    """

    name: str
    check: CheckFn
    requires: Capability | None = None
    applies: AppliesFn | None = None
    anchors: AnchorsFn = every_sample

    def is_applicable(self, descriptor: CapabilityDescriptor, probe: AdapterProbe) -> bool:
        if self.requires is not None and not descriptor.declares(self.requires):
            return False
        return self.applies is None or self.applies(descriptor, probe)


@dataclass(frozen=True, slots=True)
class CheckEnvironment:
    """Everything shared, read-only, by all units of one run."""

    probe: AdapterProbe
    samples: SampleSet
    descriptor: CapabilityDescriptor
    settings: RunSettings


@dataclass(slots=True)
class CheckContext:
    """Per-unit view of the run.

    Owns a unit-local instance cache; units never share instances, so
    concurrent units cannot observe each other.
    """

    env: CheckEnvironment
    property_name: str
    _instances: dict[int, Any] = field(default_factory=dict)

    @property
    def probe(self) -> AdapterProbe:
        return self.env.probe

    @property
    def samples(self) -> SampleSet:
        return self.env.samples

    @property
    def descriptor(self) -> CapabilityDescriptor:
        return self.env.descriptor

    @property
    def settings(self) -> RunSettings:
        return self.env.settings

    def instance(self, sample: Sample) -> Any:
        """Instance built from the sample, cached for this unit."""
        if sample.index not in self._instances:
            self._instances[sample.index] = self.probe.construct(sample.fresh_args())
        return self._instances[sample.index]

    def twin(self, sample: Sample) -> Any:
        """A second, independently constructed instance of the sample."""
        return self.probe.construct(sample.fresh_args())

    def violation(
        self,
        message: str,
        *items: Any,
        severity: Severity = Severity.FAIL,
    ) -> Violation:
        return Violation(
            property=self.property_name,
            samples=tuple(payload(item) for item in items),
            message=message,
            severity=severity,
            kind=ViolationKind.CONTRACT,
        )

    def fault(self, fault: AdapterFault, *items: Any) -> Violation:
        """Adapter fault met while checking ``items``; the check moves on to its next pair."""
        return fault_violation(self.property_name, fault, *items)


def fault_violation(property_name: str, fault: AdapterFault, *items: Any) -> Violation:
    """ADAPTER_FAULT violation naming every item the failed call involved."""
    labels = ", ".join(describe(item) for item in items)
    return Violation(
        property=property_name,
        samples=tuple(payload(item) for item in items),
        message=f"{fault.describe()} while checking {labels}",
        severity=Severity.FAIL,
        kind=ViolationKind.ADAPTER_FAULT,
    )
