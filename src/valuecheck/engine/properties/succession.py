# src/valuecheck/engine/properties/succession.py
"""Successor monotonicity for types declared ``succ``."""

from collections.abc import Iterator

from valuecheck.contracts.enums import Comparison
from valuecheck.contracts.report import Violation
from valuecheck.core.samples import Sample
from valuecheck.engine.properties.base import CheckContext


def check_successor_monotonicity(ctx: CheckContext, a: Sample) -> Iterator[Violation]:
    """Each successor is strictly greater, and the chain never revisits a value.

    Follows at most ``settings.successor_steps`` applications. A None
    successor ends the chain without complaint.
    """
    current = ctx.instance(a)
    seen = [current]
    for step in range(1, ctx.settings.successor_steps + 1):
        following = ctx.probe.successor(current)
        if following is None:
            return
        outcome = ctx.probe.compare(current, following)
        if outcome != Comparison.LESS:
            yield ctx.violation(
                f"successor step {step} from {a.label} is not greater than its predecessor "
                f"(compare gave {outcome.value})",
                a,
            )
            return
        for earlier_step, earlier in enumerate(seen):
            if ctx.probe.equals(following, earlier):
                yield ctx.violation(
                    f"successor chain from {a.label} cycles: step {step} equals step {earlier_step}",
                    a,
                )
                return
        seen.append(following)
        current = following
