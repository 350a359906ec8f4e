# src/valuecheck/engine/properties/hashing.py
"""Hash consistency for types declared ``hashable``.

Only equals(a, b) => hash(a) == hash(b) is required. Distinct values are
allowed to collide. Faults hashing the anchor end its unit; a fault in a
later pair is recorded against that pair only.
"""

from collections.abc import Iterator

from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


def check_hash_consistency(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    instance = ctx.instance(a)
    digest = ctx.probe.hash(instance)

    twin = ctx.twin(a)
    if ctx.probe.equals(instance, twin):
        twin_digest = ctx.probe.hash(twin)
        if twin_digest != digest:
            yield ctx.violation(
                f"two constructions of {a.label} are equal but hash to {digest} and {twin_digest}",
                a,
                a,
            )

    for b in ctx.samples.later_than(a.index):
        try:
            other = ctx.instance(b)
            if not ctx.probe.equals(instance, other):
                continue
            other_digest = ctx.probe.hash(other)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if other_digest != digest:
            yield ctx.violation(
                f"equals({a.label}, {b.label}) is True but their hashes differ ({digest} != {other_digest})",
                a,
                b,
            )
