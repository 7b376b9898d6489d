"""Local satisfiability check of an assignment against a circuit shape.

For every gate and every row where its selector is enabled, each of the
gate's constraints must evaluate to zero. For every lookup rule and every row
where its selector is enabled, the input expression must equal the value of
some row of the lookup table. Rows where a selector is disabled impose
nothing.

Failures are returned as violations, not raised: a rejected witness is an
expected outcome. Structural misuse raises: checking before the witness is
assigned is a SequenceError, checking against another shape an
AssignmentError.

This is the non-succinct equivalent of what a proving backend would accept
for the same shape and assignment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, Union

from primitives.field import FF, is_zero
from circuit.columns import Column
from circuit.constraint_system import CircuitShape, Gate, LookupRule
from circuit.errors import AssignmentError
from circuit.expressions import Expression, Query
from witness.assignment import Assignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateViolation:
    """A gate constraint did not vanish at an enabled row."""
    gate_name: str
    constraint_name: str
    row: int

    def __str__(self) -> str:
        return f"Constraint '{self.constraint_name}' of gate '{self.gate_name}' is not satisfied at row {self.row}"


@dataclass(frozen=True)
class LookupViolation:
    """A lookup input at an enabled row is not in the table."""
    rule_name: str
    row: int
    value: int

    def __str__(self) -> str:
        return f"Lookup '{self.rule_name}' input {self.value} at row {self.row} is not in the table"


@dataclass(frozen=True)
class CellNotAssigned:
    """An enabled gate or lookup reads an advice cell that was never assigned."""
    name: str
    column: Column
    row: int

    def __str__(self) -> str:
        return f"'{self.name}' reads unassigned cell {self.column}@{self.row}"


Violation = Union[GateViolation, LookupViolation, CellNotAssigned]


@dataclass(frozen=True)
class Verdict:
    """Outcome of a check: accepted iff there are no violations."""
    violations: Tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    @property
    def gate_violations(self) -> Tuple[GateViolation, ...]:
        return tuple(v for v in self.violations if isinstance(v, GateViolation))

    @property
    def lookup_violations(self) -> Tuple[LookupViolation, ...]:
        return tuple(v for v in self.violations if isinstance(v, LookupViolation))


class _Unassigned(Exception):
    def __init__(self, column: Column, row: int):
        super().__init__(column, row)
        self.column = column
        self.row = row


def _resolver(assignment: Assignment, row: int) -> Callable[[Query], FF]:
    """Resolve queries at row; rotations wrap around the n rows."""
    n = assignment.n

    def resolve(query: Query) -> FF:
        at = (row + query.rotation.offset) % n
        value = assignment.value(query.column, at)
        if value is None:
            if query.column.is_fixed:
                return FF(0)
            raise _Unassigned(query.column, at)
        return value

    return resolve


def _evaluate(name: str, expr: Expression, assignment: Assignment, row: int) -> Union[FF, CellNotAssigned]:
    try:
        return expr.evaluate(_resolver(assignment, row))
    except _Unassigned as e:
        return CellNotAssigned(name, e.column, e.row)


def _check_gate(gate: Gate, assignment: Assignment) -> Iterator[Violation]:
    for row in assignment.enabled_rows(gate.selector):
        for cname, expr in gate.constraints:
            result = _evaluate(gate.name, expr, assignment, row)
            if isinstance(result, CellNotAssigned):
                yield result
            elif not is_zero(result):
                yield GateViolation(gate.name, cname, row)


def _check_lookup(rule: LookupRule, shape: CircuitShape, assignment: Assignment) -> Iterator[Violation]:
    table = shape.table_for(rule.table)
    values = {int(v) for v in assignment.table_values(table)}
    for row in assignment.enabled_rows(rule.selector):
        result = _evaluate(rule.name, rule.input, assignment, row)
        if isinstance(result, CellNotAssigned):
            yield result
        elif int(result) not in values:
            yield LookupViolation(rule.name, row, int(result))


def iter_violations(shape: CircuitShape, assignment: Assignment) -> Iterator[Violation]:
    """Yield violations: gates in declaration order, then lookups."""
    for gate in shape.gates:
        yield from _check_gate(gate, assignment)
    for rule in shape.lookups:
        yield from _check_lookup(rule, shape, assignment)


def check(shape: CircuitShape, assignment: Assignment, stop_at_first: bool = False) -> Verdict:
    """Check assignment against shape.

    Args:
        shape: Finalized circuit shape
        assignment: Completed assignment of one instance of shape
        stop_at_first: Return after the first violation instead of collecting all

    Returns:
        Verdict listing the violations found (empty when accepted)

    Raises:
        AssignmentError: If assignment was created for another shape
        SequenceError: If its tables or witness have not been assigned yet
    """
    if assignment.shape is not shape:
        raise AssignmentError("Assignment was not created for this circuit shape")
    assignment.mark_checked()

    violations = []
    for violation in iter_violations(shape, assignment):
        violations.append(violation)
        if stop_at_first:
            break
    verdict = Verdict(tuple(violations))

    if verdict.accepted:
        logger.info("Circuit satisfied (k=%d, %d gates, %d lookups)", shape.k, len(shape.gates), len(shape.lookups))
    else:
        logger.info("Circuit rejected with %d violation(s): %s", len(violations), violations[0])
    return verdict


def is_satisfied(shape: CircuitShape, assignment: Assignment) -> bool:
    return check(shape, assignment, stop_at_first=True).accepted
