# src/valuecheck/engine/properties/representation.py
"""Round-trip conversion through the adapter's structured representation."""

import copy
from collections.abc import Iterator

from valuecheck.contracts.enums import Severity
from valuecheck.contracts.errors import AdapterFault, RepresentationError
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import MalformedInput, Sample
from valuecheck.engine.properties.base import CheckContext


def check_round_trip(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    instance = ctx.instance(a)
    representation = ctx.probe.to_representation(instance)
    try:
        restored = ctx.probe.from_representation(copy.deepcopy(representation))
    except RepresentationError as exc:
        yield ctx.violation(
            f"from_representation rejected {dict(representation)!r}, which to_representation produced for {a.label}: {exc}",
            a,
            dict(representation),
        )
        return
    if not ctx.probe.equals(restored, instance):
        yield ctx.violation(
            f"{a.label} did not survive a round-trip through {dict(representation)!r}",
            a,
            dict(representation),
        )


def check_malformed_representation(ctx: CheckContext, bad: MalformedInput) -> Iterator[Violation]:
    """Malformed input should be refused with RepresentationError.

    Accepting it is suspicious but not fatal (WARN). Failing any other way
    is a contract breach (FAIL).
    """
    try:
        ctx.probe.from_representation(copy.deepcopy(bad.representation))
    except RepresentationError:
        return
    except AdapterFault as fault:
        yield ctx.violation(
            f"from_representation({bad.label}) should raise RepresentationError; {fault.describe()}",
            bad,
        )
        return
    yield ctx.violation(
        f"from_representation accepted malformed input {bad.label}",
        bad,
        severity=Severity.WARN,
    )
