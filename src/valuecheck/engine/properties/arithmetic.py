# src/valuecheck/engine/properties/arithmetic.py
"""Arithmetic laws for types declared ``arithmetic``.

Operations may return NotImplemented for operand pairs they do not support
(mismatched units, say); such pairs are skipped rather than reported. An
adapter fault is recorded against the pair that raised it.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any

from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


def _same(ctx: CheckContext, a: Any, b: Any) -> bool:
    return ctx.probe.equals(a, b)


def _commutes(ctx: CheckContext, a: Sample, b: Sample, left: Any) -> Violation | None:
    right = ctx.instance(b)
    forward = ctx.probe.arithmetic("add", left, right)
    if forward is NotImplemented:
        return None
    backward = ctx.probe.arithmetic("add", right, left)
    if backward is NotImplemented:
        return ctx.violation(f"add({a.label}, {b.label}) is defined but add({b.label}, {a.label}) is not", a, b)
    if not _same(ctx, forward, backward):
        return ctx.violation(f"add({a.label}, {b.label}) != add({b.label}, {a.label})", a, b)
    return None


def check_commutativity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    left = ctx.instance(a)
    for b in ctx.samples.later_than(a.index):
        try:
            found = _commutes(ctx, a, b, left)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if found is not None:
            yield found


def _inverts(ctx: CheckContext, a: Sample, b: Sample, left: Any, has_negate: bool) -> Violation | None:
    right = ctx.instance(b)
    difference = ctx.probe.arithmetic("sub", left, right)
    if difference is NotImplemented:
        return None
    if has_negate:
        negated = ctx.probe.arithmetic("negate", right)
        if negated is NotImplemented:
            return None
        expected = ctx.probe.arithmetic("add", left, negated)
        if expected is NotImplemented or _same(ctx, difference, expected):
            return None
        return ctx.violation(f"sub({a.label}, {b.label}) != add({a.label}, negate({b.label}))", a, b)
    restored = ctx.probe.arithmetic("add", difference, right)
    if restored is NotImplemented or _same(ctx, restored, left):
        return None
    return ctx.violation(f"add(sub({a.label}, {b.label}), {b.label}) != {a.label}", a, b)


def check_inverse(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """sub(a, b) == add(a, negate(b)); without negate, add(sub(a, b), b) == a."""
    left = ctx.instance(a)
    has_negate = ctx.probe.supports("negate")
    for b in ctx.samples:
        try:
            found = _inverts(ctx, a, b, left, has_negate)
        except AdapterFault as fault:
            yield ctx.fault(fault, a, b)
            continue
        if found is not None:
            yield found


def _additive_identity(ctx: CheckContext, a: Sample, instance: Any, identity: Any) -> Iterator[Violation]:
    zero = ctx.probe.construct(copy.deepcopy(identity))
    right = ctx.probe.arithmetic("add", instance, zero)
    if right is not NotImplemented and not _same(ctx, right, instance):
        yield ctx.violation(f"add({a.label}, zero) != {a.label}", a, identity)
    if ctx.descriptor.commutative:
        left = ctx.probe.arithmetic("add", zero, instance)
        if left is not NotImplemented and not _same(ctx, left, instance):
            yield ctx.violation(f"add(zero, {a.label}) != {a.label}", identity, a)


def _multiplicative_identity(ctx: CheckContext, a: Sample, instance: Any, identity: Any) -> Iterator[Violation]:
    one = ctx.probe.construct(copy.deepcopy(identity))
    product = ctx.probe.arithmetic("mul", instance, one)
    if product is not NotImplemented and not _same(ctx, product, instance):
        yield ctx.violation(f"mul({a.label}, one) != {a.label}", a, identity)
    if ctx.probe.supports("div"):
        quotient = ctx.probe.arithmetic("div", instance, one)
        if quotient is not NotImplemented and not _same(ctx, quotient, instance):
            yield ctx.violation(f"div({a.label}, one) != {a.label}", a, identity)


def check_identity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """Each declared identity is checked on its own; a fault in one leaves the other."""
    instance = ctx.instance(a)
    laws = (
        (ctx.descriptor.additive_identity, _additive_identity),
        (ctx.descriptor.multiplicative_identity, _multiplicative_identity),
    )
    for identity, law in laws:
        if identity is None:
            continue
        found: list[Violation] = []
        try:
            for violation in law(ctx, a, instance, identity):
                found.append(violation)
        except AdapterFault as fault:
            found.append(ctx.fault(fault, a, identity))
        yield from found
