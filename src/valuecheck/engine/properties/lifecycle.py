# src/valuecheck/engine/properties/lifecycle.py
"""Construction and inspection: stability, immutability, inspection safety."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from typing import Any

from valuecheck.contracts.errors import AdapterFault
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


class _Scrambled:
    """Marker written into mutated construction args."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<scrambled>"


SCRAMBLED = _Scrambled()


def scramble(obj: Any, _seen: set[int] | None = None) -> bool:
    """Mutate every mutable container reachable from ``obj`` in place.

    Nested containers are scrambled before their parent is cleared, so an
    instance that kept a reference to any inner list or dict sees it change.
    Attributes of plain objects are walked but never reassigned.

    Returns:
        True if anything was mutated
    """
    seen = _seen if _seen is not None else set()
    if id(obj) in seen:
        return False
    seen.add(id(obj))

    if isinstance(obj, dict):
        for value in list(obj.values()):
            scramble(value, seen)
        obj.clear()
        obj[SCRAMBLED] = SCRAMBLED
        return True
    if isinstance(obj, list):
        for value in list(obj):
            scramble(value, seen)
        obj.clear()
        obj.append(SCRAMBLED)
        return True
    if isinstance(obj, set):
        obj.clear()
        obj.add(SCRAMBLED)
        return True
    if isinstance(obj, bytearray):
        obj[:] = b"\xff"
        return True
    mutated = False
    if isinstance(obj, tuple | frozenset):
        for value in obj:
            mutated = scramble(value, seen) or mutated
        return mutated
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        for value in list(vars(obj).values()):
            mutated = scramble(value, seen) or mutated
    return mutated


def check_construction_stability(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    first = ctx.probe.construct(a.fresh_args())
    second = ctx.probe.construct(a.fresh_args())
    if not ctx.probe.equals(first, second):
        yield ctx.violation(f"two constructions from the args of {a.label} are not equal", a)
        return

    # Keyword-style args: key order is not part of the value
    args = a.fresh_args()
    if type(args) is dict and len(args) > 1:
        reordered = dict(reversed(list(args.items())))
        if not ctx.probe.equals(first, ctx.probe.construct(reordered)):
            yield ctx.violation(
                f"constructing {a.label} from the same keys in a different order gives an unequal value",
                a,
            )


def _readers(ctx: CheckContext, instance: Any, twin: Any) -> dict[str, Callable[[], Any]]:
    readers: dict[str, Callable[[], Any]] = {
        "inspect": lambda: ctx.probe.inspect(instance),
        "equals(twin)": lambda: ctx.probe.equals(instance, twin),
    }
    if ctx.descriptor.hashable:
        readers["hash"] = lambda: ctx.probe.hash(instance)
    if ctx.descriptor.serializable:
        readers["to_representation"] = lambda: copy.deepcopy(dict(ctx.probe.to_representation(instance)))
    return readers


def check_immutability(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """Mutating the caller's args after construction must not leak into the value.

    A reader that already fails before the mutation is left to its own
    property and not observed here.
    """
    args = a.fresh_args()
    instance = ctx.probe.construct(args)
    twin = ctx.twin(a)
    readers = _readers(ctx, instance, twin)

    before: dict[str, Any] = {}
    for name, read in readers.items():
        try:
            before[name] = read()
        except AdapterFault:
            continue

    if not scramble(args):
        return

    for name, value in before.items():
        try:
            after = readers[name]()
        except AdapterFault as fault:
            yield ctx.violation(
                f"{name} of {a.label} fails after its construction args were mutated; {fault.describe()}",
                a,
            )
            continue
        if after != value:
            yield ctx.violation(
                f"{name} of {a.label} changed after its construction args were mutated: {value!r} -> {after!r}",
                a,
            )


def check_inspection_safety(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    instance = ctx.instance(a)
    try:
        ctx.probe.inspect(instance)
    except AdapterFault as fault:
        yield ctx.violation(f"inspect({a.label}) must return a str without raising; {fault.describe()}", a)
