# src/valuecheck/engine/properties/__init__.py
"""The property suite.

SUITE order is report order: a Report lists violations property by
property in this order, then by anchor within each property.
"""

from valuecheck.contracts.enums import Capability
from valuecheck.core.config import CapabilityDescriptor
from valuecheck.engine.probe import AdapterProbe
from valuecheck.engine.properties.arithmetic import check_commutativity, check_identity, check_inverse
from valuecheck.engine.properties.base import (
    CheckContext,
    CheckEnvironment,
    Property,
    describe,
    every_malformed_input,
    every_sample,
    payload,
)
from valuecheck.engine.properties.equality import (
    check_heterogeneous_equality,
    check_reflexivity,
    check_symmetry,
    check_transitivity,
)
from valuecheck.engine.properties.hashing import check_hash_consistency
from valuecheck.engine.properties.lifecycle import (
    check_construction_stability,
    check_immutability,
    check_inspection_safety,
    scramble,
)
from valuecheck.engine.properties.ordering import (
    check_antisymmetry,
    check_heterogeneous_comparison,
    check_order_consistency,
    check_order_transitivity,
)
from valuecheck.engine.properties.representation import check_malformed_representation, check_round_trip
from valuecheck.engine.properties.succession import check_successor_monotonicity

SUITE: tuple[Property, ...] = (
    Property("reflexivity", check_reflexivity),
    Property("symmetry", check_symmetry),
    Property("transitivity", check_transitivity),
    Property("heterogeneous-safety", check_heterogeneous_equality),
    Property("construction-stability", check_construction_stability),
    Property("immutability", check_immutability),
    Property("inspection-safety", check_inspection_safety),
    Property("round-trip", check_round_trip, requires=Capability.SERIALIZABLE),
    Property(
        "malformed-representation",
        check_malformed_representation,
        requires=Capability.SERIALIZABLE,
        anchors=every_malformed_input,
    ),
    Property("ordering-antisymmetry", check_antisymmetry, requires=Capability.ORDERED),
    Property("ordering-transitivity", check_order_transitivity, requires=Capability.ORDERED),
    Property("ordering-consistency", check_order_consistency, requires=Capability.ORDERED),
    Property("ordering-heterogeneous-safety", check_heterogeneous_comparison, requires=Capability.ORDERED),
    Property("hash-consistency", check_hash_consistency, requires=Capability.HASHABLE),
    Property(
        "arithmetic-commutativity",
        check_commutativity,
        requires=Capability.ARITHMETIC,
        applies=lambda descriptor, probe: descriptor.commutative,
    ),
    Property(
        "arithmetic-inverse",
        check_inverse,
        requires=Capability.ARITHMETIC,
        applies=lambda descriptor, probe: probe.supports("sub"),
    ),
    Property(
        "arithmetic-identity",
        check_identity,
        requires=Capability.ARITHMETIC,
        applies=lambda descriptor, probe: (
            descriptor.additive_identity is not None or descriptor.multiplicative_identity is not None
        ),
    ),
    Property("successor-monotonicity", check_successor_monotonicity, requires=Capability.SUCC),
)

PROPERTY_NAMES: tuple[str, ...] = tuple(p.name for p in SUITE)


def select_properties(
    descriptor: CapabilityDescriptor,
    probe: AdapterProbe,
    suite: tuple[Property, ...] = SUITE,
) -> list[Property]:
    """Properties that apply to this descriptor and adapter, in suite order."""
    return [p for p in suite if p.is_applicable(descriptor, probe)]


__all__ = [
    "PROPERTY_NAMES",
    "SUITE",
    "CheckContext",
    "CheckEnvironment",
    "Property",
    "describe",
    "every_malformed_input",
    "every_sample",
    "payload",
    "scramble",
    "select_properties",
]
