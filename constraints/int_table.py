"""Fixed lookup table of the integers [0, MAX).

Row r of the table column holds r, for r in [0, MAX). Looking a value up in
this table is a range check: the value is one of 0, 1, ..., MAX-1.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from primitives.field import FF, int_range
from circuit.columns import Column
from circuit.constraint_system import ConstraintSystem, LookupTable
from circuit.errors import ConfigurationError, TableLoadError
from witness.layouter import Layouter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _domain(size: int) -> FF:
    # Shared by every instance, so frozen against writes.
    values = int_range(size)
    values.flags.writeable = False
    return values


@dataclass(frozen=True)
class IntRangeTable:
    """Handle to a configured [0, max) table.

    Attributes:
        value: Fixed column holding the table
        max: Exclusive upper bound of the domain
        registration: Table registration in the constraint system
    """
    value: Column
    max: int
    registration: LookupTable

    @classmethod
    def configure(cls, cs: ConstraintSystem, max: int, name: str = "range table") -> "IntRangeTable":
        """Allocate a fixed column and register it as a table of size max."""
        if max < 1:
            raise ConfigurationError(f"Table '{name}' needs max >= 1, got {max}")
        value = cs.fixed_column()
        registration = cs.register_table(name, value, max)
        return cls(value=value, max=max, registration=registration)

    def load(self, layouter: Layouter) -> None:
        """Assign r into row r of the table column, for r in [0, max).

        Loading again writes the same values and leaves the table unchanged.

        Raises:
            TableLoadError: If the circuit has fewer than max rows
        """
        n = layouter.shape.n
        if n < self.max:
            raise TableLoadError(
                f"Table '{self.registration.name}' needs {self.max} rows, circuit has {n} (k={layouter.shape.k})"
            )
        with layouter.assign_region("load table", start=0) as table:
            domain = _domain(self.max)
            for offset in range(self.max):
                table.assign_fixed("value", self.value, offset, domain[offset])
        logger.debug("Loaded table '%s' with %d rows", self.registration.name, self.max)
