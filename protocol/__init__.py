"""Protocol - satisfiability checking and the mock prover."""

from protocol.checker import (
    CellNotAssigned,
    GateViolation,
    LookupViolation,
    Verdict,
    Violation,
    check,
    is_satisfied,
    iter_violations,
)
from protocol.mock_prover import MockProver

__all__ = [
    "CellNotAssigned",
    "GateViolation",
    "LookupViolation",
    "Verdict",
    "Violation",
    "check",
    "is_satisfied",
    "iter_violations",
    "MockProver",
]
