"""Region-based witness assignment.

A Layouter places regions on the rows of an Assignment. Each region is a
scoped row-writer:

    with layouter.assign_region("Assign value") as region:
        region.enable_selector(q, 0)
        a_cell = region.assign_advice("a", col_a, 0, 9)

Writes made through the Region are staged and only reach the Assignment when
the with-block exits normally. If the block raises, every staged write of the
region is discarded and the exception propagates.

Region offsets are relative to the region's start row. Unpinned regions start
on the first row after every committed region that wrote advice cells or
enabled selectors. Regions writing only fixed cells (lookup tables) live in
their own columns and do not push witness regions down. Passing start= pins a
region to an absolute row.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from primitives.field import FF, FieldLike, to_ff
from circuit.columns import Column, ColumnKind, Selector
from circuit.errors import AssignmentError
from witness.assignment import AssignedCell, Assignment

logger = logging.getLogger(__name__)


class Region:
    """Staged writes of one region."""

    def __init__(self, name: str, assignment: Assignment, start: int):
        self.name = name
        self.start = start
        self._assignment = assignment
        self._cells: dict[tuple[Column, int], tuple[str, FF]] = {}
        self._selectors: set[tuple[Selector, int]] = set()
        self._height = 0

    @property
    def has_witness(self) -> bool:
        """True if the region wrote an advice cell or enabled a selector."""
        return bool(self._selectors) or any(column.is_advice for column, _ in self._cells)

    @property
    def height(self) -> int:
        """Number of rows spanned, from offset 0 to the highest offset used."""
        return self._height

    def enable_selector(self, selector: Selector, offset: int) -> None:
        row = self._row(offset)
        self._assignment.check_selector_enable(selector, row)
        self._selectors.add((selector, row))
        self._height = max(self._height, offset + 1)

    def assign_advice(self, name: str, column: Column, offset: int, value: FieldLike) -> AssignedCell:
        return self._assign(name, column, ColumnKind.ADVICE, offset, value)

    def assign_fixed(self, name: str, column: Column, offset: int, value: FieldLike) -> AssignedCell:
        return self._assign(name, column, ColumnKind.FIXED, offset, value)

    def _assign(self, name: str, column: Column, kind: ColumnKind, offset: int, value: FieldLike) -> AssignedCell:
        if column.kind is not kind:
            raise AssignmentError(f"'{name}': expected a {kind.value} column, got {column}")
        try:
            value = to_ff(value)
        except TypeError as e:
            raise AssignmentError(f"'{name}': {e}") from e

        row = self._row(offset)
        staged = self._cells.get((column, row))
        if staged is not None and (kind is ColumnKind.ADVICE or int(staged[1]) != int(value)):
            raise AssignmentError(f"'{name}': cell {column}@{row} already written in region '{self.name}'")
        self._assignment.check_cell_write(column, row, value)

        self._cells[(column, row)] = (name, value)
        self._height = max(self._height, offset + 1)
        return AssignedCell(name, column, row, value)

    def _row(self, offset: int) -> int:
        if offset < 0:
            raise AssignmentError(f"Region '{self.name}': negative offset {offset}")
        row = self.start + offset
        if row >= self._assignment.n:
            raise AssignmentError(
                f"Region '{self.name}': row {row} is outside the row budget [0, {self._assignment.n})"
            )
        return row

    def _commit(self) -> None:
        self._assignment.commit(self._cells.items(), self._selectors)


class Layouter:
    """Places regions on the rows of an Assignment."""

    def __init__(self, assignment: Assignment):
        self.assignment = assignment
        self._next_row = 0

    @property
    def shape(self):
        return self.assignment.shape

    @contextmanager
    def assign_region(self, name: str, start: Optional[int] = None) -> Iterator[Region]:
        """Open a region; its writes are committed on normal exit, discarded on error."""
        region = Region(name, self.assignment, self._next_row if start is None else start)
        try:
            yield region
        except BaseException:
            logger.debug("Region '%s' rolled back", name)
            raise
        region._commit()
        if region.has_witness:
            self._next_row = max(self._next_row, region.start + region.height)
        logger.debug("Region '%s' committed at rows [%d, %d)", name, region.start, region.start + region.height)
