# src/valuecheck/engine/properties/ordering.py
"""Ordering laws for types declared ``ordered``.

A fault in one pair or triple is recorded against it and the check moves on.
"""

from collections.abc import Iterator

from valuecheck.contracts.enums import Comparison
from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


def check_antisymmetry(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    left = ctx.instance(a)
    for b in ctx.samples.later_than(a.index):
        try:
            right = ctx.instance(b)
            forward = ctx.probe.compare(left, right)
            backward = ctx.probe.compare(right, left)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if backward != forward.mirrored():
            yield ctx.violation(
                f"compare({a.label}, {b.label}) is {forward.value} "
                f"but compare({b.label}, {a.label}) is {backward.value}, expected {forward.mirrored().value}",
                a,
                b,
            )


def check_order_transitivity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    first = ctx.instance(a)
    for b in ctx.samples:
        if b.index == a.index:
            continue
        try:
            middle = ctx.instance(b)
            below = ctx.probe.compare(first, middle) == Comparison.LESS
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if not below:
            continue
        for c in ctx.samples:
            if c.index in (a.index, b.index):
                continue
            try:
                last = ctx.instance(c)
                if ctx.probe.compare(middle, last) != Comparison.LESS:
                    continue
                outcome = ctx.probe.compare(first, last)
            except AdapterFault as fault:
                yield ctx.fault(fault, a, b, c)
                continue
            if outcome != Comparison.LESS:
                yield ctx.violation(
                    f"{a.label} < {b.label} and {b.label} < {c.label} "
                    f"but compare({a.label}, {c.label}) is {outcome.value}",
                    a,
                    b,
                    c,
                )


def check_order_consistency(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """compare(a, b) == EQUAL exactly when equals(a, b). Includes a against itself."""
    left = ctx.instance(a)
    for b in ctx.samples.samples[a.index :]:
        try:
            right = ctx.instance(b)
            outcome = ctx.probe.compare(left, right)
            equal = ctx.probe.equals(left, right)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if (outcome == Comparison.EQUAL) != equal:
            yield ctx.violation(
                f"compare({a.label}, {b.label}) is {outcome.value} but equals({a.label}, {b.label}) is {equal}",
                a,
                b,
            )


def check_heterogeneous_comparison(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    instance = ctx.instance(a)
    for foreign in ctx.samples.foreign_values:
        try:
            outcome = ctx.probe.compare(instance, foreign)
        except AdapterFault as fault:
            yield ctx.violation(
                f"compare({a.label}, {foreign!r}) must return incomparable for a foreign value; {fault.describe()}",
                a,
                foreign,
            )
            continue
        if outcome != Comparison.INCOMPARABLE:
            yield ctx.violation(
                f"compare({a.label}, {foreign!r}) is {outcome.value}, expected incomparable for a foreign value",
                a,
                foreign,
            )
