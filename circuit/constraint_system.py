"""Constraint system builder and the immutable circuit shape.

Configuration happens in two steps:

1. A ConstraintSystem is mutated while a circuit declares its columns,
   selectors, gates, lookup rules and tables.
2. finalize(k) freezes the declarations into a CircuitShape with 2^k rows.

The CircuitShape is read-only and may be shared by any number of proving
instances, each with its own witness.assignment.Assignment.

Example:
    cs = ConstraintSystem()
    a, b = cs.advice_column(), cs.advice_column()
    q = cs.selector()
    cs.create_gate("sum check", q, [("sum check", cs.query_advice(a) + cs.query_advice(b) - 15)])
    shape = cs.finalize(k=9)
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from circuit.columns import Column, ColumnKind, Rotation, Selector
from circuit.errors import ConfigurationError
from circuit.expressions import Expression, Query, as_expression


@dataclass(frozen=True)
class Gate:
    """Named polynomial identities that must vanish where selector is enabled.

    Attributes:
        name: Gate name
        selector: Selector activating the gate
        constraints: (constraint name, expression) pairs
    """
    name: str
    selector: Selector
    constraints: Tuple[Tuple[str, Expression], ...]

    def degree(self) -> int:
        # The selector multiplies every constraint
        return 1 + max(expr.degree() for _, expr in self.constraints)


@dataclass(frozen=True)
class LookupRule:
    """At enabled rows, input must equal the table column at some table row."""
    name: str
    selector: Selector
    input: Expression
    table: Column

    def degree(self) -> int:
        return 1 + self.input.degree()


@dataclass(frozen=True)
class LookupTable:
    """Fixed column holding a lookup domain in rows [0, size)."""
    name: str
    column: Column
    size: int


@dataclass(frozen=True)
class CircuitShape:
    """Finalized, immutable description of a circuit.

    Attributes:
        k: Row budget exponent; the circuit has n = 2^k rows
        num_advice_columns: Number of advice columns
        num_fixed_columns: Number of fixed columns
        selectors: All allocated selectors
        gates: Gates in declaration order
        lookups: Lookup rules in declaration order
        tables: Lookup tables in declaration order
    """
    k: int
    num_advice_columns: int
    num_fixed_columns: int
    selectors: Tuple[Selector, ...]
    gates: Tuple[Gate, ...]
    lookups: Tuple[LookupRule, ...]
    tables: Tuple[LookupTable, ...]

    @property
    def n(self) -> int:
        return 1 << self.k

    def has_column(self, column: Column) -> bool:
        if column.kind is ColumnKind.ADVICE:
            return 0 <= column.index < self.num_advice_columns
        return 0 <= column.index < self.num_fixed_columns

    def has_selector(self, selector: Selector) -> bool:
        return selector in self.selectors

    def table_for(self, column: Column) -> LookupTable:
        for table in self.tables:
            if table.column == column:
                return table
        raise KeyError(f"Column {column} is not a lookup table")

    def degree(self) -> int:
        degrees = [g.degree() for g in self.gates] + [l.degree() for l in self.lookups]
        return max(degrees, default=0)


ConstraintsArg = Union[Expression, Iterable[Union[Expression, Tuple[str, Expression]]]]


class ConstraintSystem:
    """Mutable builder for a CircuitShape."""

    def __init__(self):
        self._num_advice = 0
        self._num_fixed = 0
        self._selectors: list[Selector] = []
        self._gates: list[Gate] = []
        self._lookups: list[LookupRule] = []
        self._tables: list[LookupTable] = []
        self._finalized = False

    # --- Allocation ---

    def advice_column(self) -> Column:
        self._check_open()
        column = Column(ColumnKind.ADVICE, self._num_advice)
        self._num_advice += 1
        return column

    def fixed_column(self) -> Column:
        self._check_open()
        column = Column(ColumnKind.FIXED, self._num_fixed)
        self._num_fixed += 1
        return column

    def selector(self) -> Selector:
        """Allocate a simple selector (gates only)."""
        return self._new_selector(simple=True)

    def complex_selector(self) -> Selector:
        """Allocate a complex selector (gates and lookups)."""
        return self._new_selector(simple=False)

    def _new_selector(self, simple: bool) -> Selector:
        self._check_open()
        selector = Selector(len(self._selectors), simple=simple)
        self._selectors.append(selector)
        return selector

    # --- Queries ---

    def query_advice(self, column: Column, rotation: Rotation = Rotation.cur()) -> Query:
        self._check_column(column, ColumnKind.ADVICE)
        return Query(column, rotation)

    def query_fixed(self, column: Column, rotation: Rotation = Rotation.cur()) -> Query:
        self._check_column(column, ColumnKind.FIXED)
        return Query(column, rotation)

    # --- Declarations ---

    def create_gate(self, name: str, selector: Selector, constraints: ConstraintsArg) -> Gate:
        """Register a gate whose constraints vanish wherever selector is enabled.

        Args:
            name: Gate name, unique within the circuit
            selector: Selector activating the gate
            constraints: A single expression, or an iterable of expressions or
                (name, expression) pairs. Unnamed constraints take the gate name.

        Returns:
            The registered Gate
        """
        self._check_open()
        self._check_selector(selector)
        if any(g.name == name for g in self._gates):
            raise ConfigurationError(f"Duplicate gate name '{name}'")
        if selector.simple and any(g.selector == selector for g in self._gates):
            raise ConfigurationError(f"Simple {selector} already activates another gate")

        if isinstance(constraints, Expression):
            constraints = [constraints]
        named = []
        for item in constraints:
            if isinstance(item, tuple):
                cname, expr = item
            else:
                cname, expr = name, item
            expr = as_expression(expr)
            self._check_expression(expr)
            named.append((cname, expr))
        if not named:
            raise ConfigurationError(f"Gate '{name}' has no constraints")

        gate = Gate(name, selector, tuple(named))
        self._gates.append(gate)
        return gate

    def register_table(self, name: str, column: Column, size: int) -> LookupTable:
        """Declare a fixed column as a lookup table with domain rows [0, size)."""
        self._check_open()
        self._check_column(column, ColumnKind.FIXED)
        if size < 1:
            raise ConfigurationError(f"Table '{name}' must have at least one row, got {size}")
        if any(t.column == column for t in self._tables):
            raise ConfigurationError(f"Column {column} is already a lookup table")
        table = LookupTable(name, column, size)
        self._tables.append(table)
        return table

    def lookup(self, name: str, selector: Selector, input_expr: Expression, table: Column) -> LookupRule:
        """Register a lookup: at enabled rows, input must appear in the table column."""
        self._check_open()
        self._check_selector(selector)
        if selector.simple:
            raise ConfigurationError(
                f"Lookup '{name}' needs a complex selector, got simple {selector}"
            )
        if not any(t.column == table for t in self._tables):
            raise ConfigurationError(f"Lookup '{name}' refers to {table}, which is not a table")
        input_expr = as_expression(input_expr)
        self._check_expression(input_expr)
        rule = LookupRule(name, selector, input_expr, table)
        self._lookups.append(rule)
        return rule

    def degree(self) -> int:
        degrees = [g.degree() for g in self._gates] + [l.degree() for l in self._lookups]
        return max(degrees, default=0)

    def finalize(self, k: int) -> CircuitShape:
        """Freeze declarations into a CircuitShape with 2^k rows."""
        self._check_open()
        if k < 1:
            raise ConfigurationError(f"k must be >= 1, got {k}")
        self._finalized = True
        return CircuitShape(
            k=k,
            num_advice_columns=self._num_advice,
            num_fixed_columns=self._num_fixed,
            selectors=tuple(self._selectors),
            gates=tuple(self._gates),
            lookups=tuple(self._lookups),
            tables=tuple(self._tables),
        )

    # --- Validation ---

    def _check_open(self) -> None:
        if self._finalized:
            raise ConfigurationError("Constraint system is finalized; no further declarations")

    def _check_column(self, column: Column, kind: ColumnKind) -> None:
        if not isinstance(column, Column):
            raise ConfigurationError(f"Expected a Column, got {column!r}")
        if column.kind is not kind:
            raise ConfigurationError(f"Expected a {kind.value} column, got {column}")
        count = self._num_advice if kind is ColumnKind.ADVICE else self._num_fixed
        if not 0 <= column.index < count:
            raise ConfigurationError(f"Column {column} was not allocated by this constraint system")

    def _check_selector(self, selector: Selector) -> None:
        if selector not in self._selectors:
            raise ConfigurationError(f"Selector {selector} was not allocated by this constraint system")

    def _check_expression(self, expr: Expression) -> None:
        for column in expr.columns():
            self._check_column(column, column.kind)
