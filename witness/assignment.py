"""Witness assignment for one proving instance.

An Assignment holds the concrete cell values and enabled selector rows of a
single proving instance of a CircuitShape. Selectors are sparse boolean
columns: a selector is enabled exactly at the rows recorded for it and
disabled everywhere else.

Lifecycle (see Phase):

    CONFIGURED -> TABLE_LOADED -> ASSIGNED -> CHECKED

The phase is derived from the contents: TABLE_LOADED once every lookup table
holds its full domain, ASSIGNED once any advice cell or selector has been
written, CHECKED once protocol.checker has run. Writing advice before the
tables are loaded, or writing anything after the check, is a SequenceError.

Writes normally arrive through witness.layouter.Region, which stages them and
commits a whole region at once.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

import numpy as np

from primitives.field import FF
from circuit.columns import Column, Selector
from circuit.constraint_system import CircuitShape, LookupTable
from circuit.errors import AssignmentError, SequenceError


class Phase(Enum):
    CONFIGURED = 0
    TABLE_LOADED = 1
    ASSIGNED = 2
    CHECKED = 3


@dataclass(frozen=True)
class AssignedCell:
    """Handle to a written cell.

    Attributes:
        name: Annotation given at assignment time
        column: Column written
        row: Absolute row
        value: Field value written
    """
    name: str
    column: Column
    row: int
    value: FF


# Staged writes: ((column, row), (annotation, value))
CellWrite = Tuple[Tuple[Column, int], Tuple[str, FF]]


class Assignment:
    """Cell values and selector rows of one proving instance."""

    def __init__(self, shape: CircuitShape):
        self.shape = shape
        self._cells: dict[Column, dict[int, FF]] = {}
        self._selectors: dict[Selector, set[int]] = {s: set() for s in shape.selectors}
        self._tables_loaded = not shape.tables
        self._has_witness = False
        self._checked = False

    @property
    def n(self) -> int:
        return self.shape.n

    @property
    def phase(self) -> Phase:
        if self._checked:
            return Phase.CHECKED
        if self._has_witness:
            return Phase.ASSIGNED
        if self.tables_loaded():
            return Phase.TABLE_LOADED
        return Phase.CONFIGURED

    # --- Reads ---

    def value(self, column: Column, row: int) -> Optional[FF]:
        """Value at (column, row), or None if unassigned."""
        return self._cells.get(column, {}).get(row)

    def is_assigned(self, column: Column, row: int) -> bool:
        return row in self._cells.get(column, {})

    def column_values(self, column: Column) -> FF:
        """Dense column of n values; unassigned cells read as zero."""
        values = np.zeros(self.n, dtype=np.uint64)
        for row, value in self._cells.get(column, {}).items():
            values[row] = int(value)
        return FF(values)

    def is_enabled(self, selector: Selector, row: int) -> bool:
        return row in self._selectors.get(selector, ())

    def enabled_rows(self, selector: Selector) -> list[int]:
        """Rows where selector is enabled, ascending."""
        return sorted(self._selectors.get(selector, ()))

    def tables_loaded(self) -> bool:
        """True once every table holds a value in each of its domain rows."""
        if not self._tables_loaded:
            self._tables_loaded = all(
                all(self.is_assigned(t.column, r) for r in range(t.size))
                for t in self.shape.tables
            )
        return self._tables_loaded

    def table_values(self, table: LookupTable) -> FF:
        """Values of table rows [0, size)."""
        column = self._cells.get(table.column, {})
        missing = [r for r in range(table.size) if r not in column]
        if missing:
            raise SequenceError(
                f"Table '{table.name}' is not loaded: {len(missing)} of {table.size} rows missing"
            )
        return FF(np.array([int(column[r]) for r in range(table.size)], dtype=np.uint64))

    # --- Writes ---

    def check_cell_write(self, column: Column, row: int, value: FF) -> None:
        """Raise if writing value at (column, row) is not allowed now."""
        self._check_writable()
        if not self.shape.has_column(column):
            raise AssignmentError(f"Column {column} does not belong to this circuit")
        self._check_row(row)
        current = self.value(column, row)
        if column.is_advice:
            if not self.tables_loaded():
                raise SequenceError("Lookup tables must be loaded before assigning advice cells")
            if current is not None:
                raise AssignmentError(f"Cell {column}@{row} is already assigned")
        elif current is not None and int(current) != int(value):
            raise AssignmentError(
                f"Fixed cell {column}@{row} already holds {int(current)}, cannot write {int(value)}"
            )

    def check_selector_enable(self, selector: Selector, row: int) -> None:
        """Raise if enabling selector at row is not allowed now."""
        self._check_writable()
        if not self.shape.has_selector(selector):
            raise AssignmentError(f"Selector {selector} does not belong to this circuit")
        self._check_row(row)
        if not self.tables_loaded():
            raise SequenceError("Lookup tables must be loaded before enabling selectors")

    def commit(self, cells: Iterable[CellWrite], selectors: Iterable[Tuple[Selector, int]]) -> None:
        """Apply a batch of writes atomically: all are validated before any is applied."""
        cells = list(cells)
        selectors = list(selectors)
        for (column, row), (_, value) in cells:
            self.check_cell_write(column, row, value)
        for selector, row in selectors:
            self.check_selector_enable(selector, row)

        for (column, row), (_, value) in cells:
            self._cells.setdefault(column, {})[row] = value
            if column.is_advice:
                self._has_witness = True
        for selector, row in selectors:
            self._selectors[selector].add(row)
            self._has_witness = True

    def mark_checked(self) -> None:
        if self.phase is Phase.CONFIGURED or self.phase is Phase.TABLE_LOADED:
            raise SequenceError(f"Cannot check an assignment in phase {self.phase.name}")
        self._checked = True

    def _check_writable(self) -> None:
        if self._checked:
            raise SequenceError("Assignment has already been checked; it is read-only")

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.n:
            raise AssignmentError(f"Row {row} is outside the row budget [0, {self.n})")
