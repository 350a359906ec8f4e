# src/valuecheck/core/samples.py
"""Sample set: the read-only inputs every property is checked against.

The caller's construction args are never handed to the adapter directly.
Each construction gets a fresh deep copy, so a candidate type that keeps a
reference to its args cannot corrupt the sample set, and the immutability
check can mutate its own copy freely.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from valuecheck.contracts.enums import EdgeKind
from valuecheck.core.config import CapabilityDescriptor


class _ForeignValue:
    """A value of a type no candidate can be related to."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<foreign value>"


FOREIGN_SENTINEL = _ForeignValue()

# Always offered to heterogeneous-safety checks, ahead of caller extras
BUILTIN_FOREIGN_VALUES: tuple[Any, ...] = (FOREIGN_SENTINEL, None)


@dataclass(frozen=True, slots=True)
class Sample:
    """One checked input.

    Attributes:
        index: Position in the sample set (report order)
        args: Caller-owned construction args; never passed to the adapter as-is
        label: Name shown in logs (edge-case label or "sample[i]")
        edge_kind: None for plain sample values, else BOUNDARY or INFINITE
    """

    index: int
    args: Any
    label: str
    edge_kind: EdgeKind | None = None

    def fresh_args(self) -> Any:
        """Deep copy of the construction args, safe to hand to the adapter."""
        return copy.deepcopy(self.args)


@dataclass(frozen=True, slots=True)
class MalformedInput:
    """A representation the adapter should refuse to rebuild from."""

    index: int
    representation: Any
    label: str


@dataclass(frozen=True, slots=True)
class SampleSet:
    """Ordered, read-only collection of samples, malformed inputs and foreign values.

    Samples are distinct by position only. Two entries may be logically
    equal; properties never assume otherwise.
    """

    samples: tuple[Sample, ...]
    malformed: tuple[MalformedInput, ...] = ()
    foreign_values: tuple[Any, ...] = BUILTIN_FOREIGN_VALUES

    @classmethod
    def from_descriptor(cls, descriptor: CapabilityDescriptor) -> SampleSet:
        """Collect sample values, then boundary/infinite edge cases, in declaration order."""
        samples: list[Sample] = [
            Sample(index=i, args=args, label=f"sample[{i}]") for i, args in enumerate(descriptor.sample_values)
        ]
        malformed: list[MalformedInput] = []
        for position, edge in enumerate(descriptor.edge_cases):
            if edge.kind == EdgeKind.MALFORMED:
                malformed.append(
                    MalformedInput(
                        index=len(malformed),
                        representation=edge.value,
                        label=edge.label or f"malformed[{position}]",
                    )
                )
                continue
            samples.append(
                Sample(
                    index=len(samples),
                    args=edge.value,
                    label=edge.label or f"{edge.kind.value}[{position}]",
                    edge_kind=edge.kind,
                )
            )
        return cls(
            samples=tuple(samples),
            malformed=tuple(malformed),
            foreign_values=BUILTIN_FOREIGN_VALUES + tuple(descriptor.foreign_values),
        )

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> Sample:
        return self.samples[index]

    @property
    def plain(self) -> tuple[Sample, ...]:
        """Samples that came from sample_values, not edge cases."""
        return tuple(s for s in self.samples if s.edge_kind is None)

    def later_than(self, index: int) -> tuple[Sample, ...]:
        """Samples after ``index``; used to enumerate each unordered pair once."""
        return self.samples[index + 1 :]
