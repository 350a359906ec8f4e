# src/valuecheck/engine/properties/equality.py
"""Equality laws: reflexivity, symmetry, transitivity, heterogeneous safety.

These run for every candidate type regardless of declared capabilities.
A fault in one pair or triple is recorded against it and the check goes on
with the next one.
"""

from collections.abc import Iterator

from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


def check_reflexivity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    instance = ctx.instance(a)
    if not ctx.probe.equals(instance, instance):
        yield ctx.violation(f"equals({a.label}, {a.label}) is False; every value must equal itself", a)


def check_symmetry(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    left = ctx.instance(a)
    for b in ctx.samples.later_than(a.index):
        try:
            right = ctx.instance(b)
            forward = ctx.probe.equals(left, right)
            backward = ctx.probe.equals(right, left)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if forward != backward:
            yield ctx.violation(
                f"equals({a.label}, {b.label}) is {forward} but equals({b.label}, {a.label}) is {backward}",
                a,
                b,
            )


def check_transitivity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    first = ctx.instance(a)
    for b in ctx.samples:
        if b.index == a.index:
            continue
        try:
            middle = ctx.instance(b)
            linked = ctx.probe.equals(first, middle)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if not linked:
            continue
        for c in ctx.samples:
            if c.index in (a.index, b.index):
                continue
            try:
                last = ctx.instance(c)
                broken = ctx.probe.equals(middle, last) and not ctx.probe.equals(first, last)
            except AdapterFault as fault:
                yield ctx.fault(fault, a, b, c)
                continue
            if broken:
                yield ctx.violation(
                    f"equals({a.label}, {b.label}) and equals({b.label}, {c.label}) hold "
                    f"but equals({a.label}, {c.label}) is False",
                    a,
                    b,
                    c,
                )


def check_heterogeneous_equality(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """equals() against an unrelated type must answer, not raise.

    The answer itself is not judged: a loose equals that says True for a
    foreign value is the candidate's business, raising is not.
    """
    instance = ctx.instance(a)
    for foreign in ctx.samples.foreign_values:
        try:
            ctx.probe.equals(instance, foreign)
        except AdapterFault as fault:
            yield ctx.violation(
                f"equals({a.label}, {foreign!r}) must return a bool for a foreign value; {fault.describe()}",
                a,
                foreign,
            )
