"""Columns, selectors and rotations.

Columns and selectors are plain frozen handles. They carry no values; values
live in a witness.assignment.Assignment, one per proving instance.
"""

from dataclasses import dataclass
from enum import Enum


class ColumnKind(Enum):
    """Who supplies the values of a column."""
    ADVICE = "advice"  # witness-supplied, per instance
    FIXED = "fixed"    # part of the circuit shape


@dataclass(frozen=True)
class Column:
    """A vertical slice of the cell grid.

    Attributes:
        kind: ADVICE or FIXED, fixed for the column's lifetime
        index: Position among columns of the same kind
    """
    kind: ColumnKind
    index: int

    @property
    def is_advice(self) -> bool:
        return self.kind is ColumnKind.ADVICE

    @property
    def is_fixed(self) -> bool:
        return self.kind is ColumnKind.FIXED

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.index}]"


@dataclass(frozen=True)
class Selector:
    """Per-row boolean flag activating a gate or lookup.

    Simple selectors may only gate polynomial identities. Complex (compound)
    selectors may also activate lookups.
    """
    index: int
    simple: bool = True

    def __str__(self) -> str:
        kind = "selector" if self.simple else "complex_selector"
        return f"{kind}[{self.index}]"


@dataclass(frozen=True)
class Rotation:
    """Row offset of a query relative to the row being evaluated."""
    offset: int = 0

    @classmethod
    def cur(cls) -> "Rotation":
        return cls(0)

    @classmethod
    def next(cls) -> "Rotation":
        return cls(1)

    @classmethod
    def prev(cls) -> "Rotation":
        return cls(-1)
