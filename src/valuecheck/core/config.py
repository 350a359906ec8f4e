# src/valuecheck/core/config.py
"""
Configuration schema and loading for conformance runs.

Uses Pydantic for validation. Descriptors and settings are frozen
(immutable) after construction, and nothing here reads process-wide state:
two runs with equal configuration check equal things.
"""

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, model_validator

from valuecheck.contracts.adapter import CAPABILITY_OPERATIONS, REQUIRED_OPERATIONS, implements, missing_operations
from valuecheck.contracts.enums import Capability, EdgeKind


class EdgeCase(BaseModel):
    """A caller-annotated edge-case input.

    Boundary and infinite edge cases carry construction args and join the
    checked instances. Malformed edge cases carry a representation mapping
    that ``from_representation`` must reject.

    Example YAML:
        edge_cases:
          - kind: infinite
            value: {amount: .inf, unit: m}
            label: positive infinity
          - kind: malformed
            value: {amount: "twelve"}
    """

    model_config = {"frozen": True, "extra": "forbid"}

    kind: EdgeKind = Field(description="How the engine uses this edge case")
    value: Any = Field(description="Construction args, or a representation for MALFORMED")
    label: str | None = Field(default=None, description="Name shown in reports")


class CapabilityDescriptor(BaseModel):
    """Which property groups apply to a candidate type, and what to check them on.

    Capability flags default to False; declare only what the adapter
    supports. Consistency with the adapter is checked by the Verifier before
    any property runs (see problems_with()).

    Example YAML:
        ordered: true
        hashable: true
        sample_values:
          - {amount: 1, unit: m}
          - {amount: 2, unit: m}
    """

    model_config = {"frozen": True, "extra": "forbid"}

    ordered: bool = Field(default=False, description="Enable ordering laws")
    hashable: bool = Field(default=False, description="Enable hash-consistency check")
    arithmetic: bool = Field(default=False, description="Enable arithmetic laws")
    serializable: bool = Field(default=False, description="Enable round-trip check")
    succ: bool = Field(default=False, description="Enable successor monotonicity")

    sample_values: tuple[Any, ...] = Field(
        min_length=2,
        description="Construction args for representative values (at least two)",
    )
    edge_cases: tuple[EdgeCase, ...] = Field(default=(), description="Boundary, infinite and malformed inputs")
    foreign_values: tuple[Any, ...] = Field(
        default=(),
        description="Extra values of unrelated types for heterogeneous-safety checks",
    )

    commutative: bool = Field(default=True, description="Check add(a, b) == add(b, a)")
    additive_identity: Any | None = Field(default=None, description="Construction args for the additive identity")
    multiplicative_identity: Any | None = Field(
        default=None,
        description="Construction args for the multiplicative identity",
    )

    @model_validator(mode="after")
    def _validate_edge_case_labels(self) -> Self:
        """Edge-case labels must be unique so reports can tell them apart."""
        labels = [e.label for e in self.edge_cases if e.label is not None]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"duplicate edge case labels: {duplicates}")
        return self

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "CapabilityDescriptor":
        """Build a descriptor from plain data (e.g. parsed YAML)."""
        return cls.model_validate(data)

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Capability flags set to True."""
        return frozenset(cap for cap in Capability if getattr(self, cap.value))

    def declares(self, capability: Capability) -> bool:
        """Whether a capability flag is set."""
        return capability in self.capabilities

    def problems_with(self, adapter: object) -> list[str]:
        """Inconsistencies between this descriptor and an adapter.

        Static checks only: no adapter operation is invoked. The Verifier
        adds sample-dependent checks (distinct values for ordering) on top.

        Args:
            adapter: Adapter bound to the candidate type

        Returns:
            Problem descriptions in detection order (empty if consistent)
        """
        problems: list[str] = []

        missing = missing_operations(adapter, REQUIRED_OPERATIONS)
        if missing:
            problems.append(f"adapter is missing required operations: {', '.join(missing)}")

        for capability in Capability:
            if not self.declares(capability):
                continue
            missing = missing_operations(adapter, CAPABILITY_OPERATIONS[capability])
            if missing:
                problems.append(f"'{capability.value}' is declared but the adapter lacks: {', '.join(missing)}")

        if any(e.kind == EdgeKind.MALFORMED for e in self.edge_cases) and not self.serializable:
            problems.append("malformed edge cases require 'serializable'")

        if self.additive_identity is not None and not self.arithmetic:
            problems.append("'additive_identity' requires 'arithmetic'")
        if self.multiplicative_identity is not None:
            if not self.arithmetic:
                problems.append("'multiplicative_identity' requires 'arithmetic'")
            elif not implements(adapter, "mul"):
                problems.append("'multiplicative_identity' is declared but the adapter lacks: mul")

        return problems


class RunSettings(BaseModel):
    """Execution options for a Verifier run.

    Attributes:
        pool_size: Units run concurrently (1 = serial)
        unit_timeout_seconds: Time bound per unit; None falls back to the run bound
        run_timeout_seconds: Cancel the whole run after this long; None = never
        successor_steps: How many successor applications to follow per sample
    """

    model_config = {"frozen": True, "extra": "forbid"}

    pool_size: int = Field(default=1, ge=1, description="Number of concurrent units")
    unit_timeout_seconds: float | None = Field(default=5.0, gt=0, description="Per-unit time bound in seconds")
    run_timeout_seconds: float | None = Field(default=None, gt=0, description="Whole-run time bound in seconds")
    successor_steps: int = Field(default=32, ge=1, description="Successor chain length to check")

    @model_validator(mode="after")
    def _validate_timeouts(self) -> Self:
        """A unit bound longer than the run bound could never fire."""
        if (
            self.unit_timeout_seconds is not None
            and self.run_timeout_seconds is not None
            and self.unit_timeout_seconds > self.run_timeout_seconds
        ):
            raise ValueError(
                f"unit_timeout_seconds ({self.unit_timeout_seconds}) cannot exceed run_timeout_seconds ({self.run_timeout_seconds})"
            )
        return self

    @property
    def unit_guard_seconds(self) -> float | None:
        """Bound applied to each unit: its own, else the run bound, else none.

        Cancellation never interrupts a unit that has started; with no unit
        bound set, the run bound guards each unit.
        """
        if self.unit_timeout_seconds is not None:
            return self.unit_timeout_seconds
        return self.run_timeout_seconds


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def load_descriptor(path: Path) -> CapabilityDescriptor:
    """Load a CapabilityDescriptor from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the top level is not a mapping
        pydantic.ValidationError: If the contents do not describe a valid descriptor
    """
    return CapabilityDescriptor.from_mapping(_load_yaml_mapping(path))


def load_settings(path: Path) -> RunSettings:
    """Load RunSettings from a YAML file (empty file = defaults)."""
    return RunSettings.model_validate(_load_yaml_mapping(path))
