"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.

Import patterns:
    from valuecheck.contracts import Comparison, Report, Violation
"""

from valuecheck.contracts.adapter import (
    CAPABILITY_OPERATIONS,
    REQUIRED_OPERATIONS,
    ArithmeticAdapter,
    HashableAdapter,
    OrderedAdapter,
    SerializableAdapter,
    SuccessorAdapter,
    ValueObjectAdapter,
    implements,
    missing_operations,
)
from valuecheck.contracts.enums import (
    Capability,
    Comparison,
    EdgeKind,
    Severity,
    UnitStatus,
    VerifierPhase,
    ViolationKind,
)
from valuecheck.contracts.errors import (
    AdapterFault,
    ConfigurationError,
    FaultDetail,
    RepresentationError,
    VerifierStateError,
)
from valuecheck.contracts.report import (
    Report,
    ReportRecord,
    Violation,
    ViolationRecord,
    to_jsonable,
)

__all__ = [
    "CAPABILITY_OPERATIONS",
    "REQUIRED_OPERATIONS",
    "AdapterFault",
    "ArithmeticAdapter",
    "Capability",
    "Comparison",
    "ConfigurationError",
    "EdgeKind",
    "FaultDetail",
    "HashableAdapter",
    "OrderedAdapter",
    "Report",
    "ReportRecord",
    "RepresentationError",
    "SerializableAdapter",
    "Severity",
    "SuccessorAdapter",
    "UnitStatus",
    "ValueObjectAdapter",
    "VerifierPhase",
    "VerifierStateError",
    "Violation",
    "ViolationKind",
    "ViolationRecord",
    "implements",
    "missing_operations",
]
