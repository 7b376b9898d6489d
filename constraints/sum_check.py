"""Sum-check circuit.

Checks that two witness values in the same row sum to a constant SUM, and
that the first of them lies in [0, MAX) by looking it up in an IntRangeTable.

        a      b    |  q_sum_check  q_lookup
      -------------------------------------
        a      b    |       1           0      <- "Assign value"
        a           |       0           1      <- "Assign value for lookup check"

Gate "sum check":  q_sum_check * (a + b - SUM) = 0
Lookup "range":    q_lookup => a in table[0..MAX)

Only a is range-checked. b is bounded solely through the sum gate.
"""

from dataclasses import dataclass
from typing import Optional

from primitives.field import FieldLike
from circuit.columns import Column, Selector
from circuit.config import SumCheckParams
from circuit.constraint_system import ConstraintSystem
from circuit.errors import ConfigurationError
from witness.assignment import AssignedCell
from witness.layouter import Layouter
from .base import Circuit
from .int_table import IntRangeTable


@dataclass(frozen=True)
class SumConstrained:
    """Cells a and b constrained by the sum-check gate."""
    a: AssignedCell
    b: AssignedCell


@dataclass(frozen=True)
class RangeConstrained:
    """Cell constrained by the range lookup."""
    cell: AssignedCell


@dataclass(frozen=True)
class SumCheckConfig:
    """Configured sum-check gate and range lookup.

    Attributes:
        a: Advice column summed and range-checked
        b: Advice column summed only
        table: Range table backing the lookup
        params: SUM and MAX
    """
    a: Column
    b: Column
    table: IntRangeTable
    params: SumCheckParams
    _q_sum_check: Selector
    _q_lookup: Selector

    @classmethod
    def configure(cls, cs: ConstraintSystem, a: Column, b: Column, params: SumCheckParams) -> "SumCheckConfig":
        """Declare the sum-check gate, the range lookup and the backing table.

        Args:
            cs: ConstraintSystem being built
            a: Advice column for the first summand (range-checked)
            b: Advice column for the second summand
            params: SUM and MAX

        Raises:
            ConfigurationError: If a and b are not distinct advice columns of cs
        """
        if a == b:
            raise ConfigurationError(f"Sum-check needs two distinct advice columns, got {a} twice")
        a_cur = cs.query_advice(a)
        b_cur = cs.query_advice(b)

        q_sum_check = cs.selector()
        q_lookup = cs.complex_selector()
        table = IntRangeTable.configure(cs, params.max)

        # a + b - SUM vanishes iff a + b == SUM
        cs.create_gate("sum check", q_sum_check, [("sum check", a_cur + b_cur - params.sum_ff)])

        cs.lookup("range", q_lookup, a_cur, table.value)

        return cls(
            a=a,
            b=b,
            table=table,
            params=params,
            _q_sum_check=q_sum_check,
            _q_lookup=q_lookup,
        )

    def assign(
        self,
        layouter: Layouter,
        a: FieldLike,
        b: FieldLike,
        start: Optional[int] = None,
    ) -> SumConstrained:
        """Enable the sum gate and write a, b at offset 0 of a new region."""
        with layouter.assign_region("Assign value", start=start) as region:
            offset = 0
            region.enable_selector(self._q_sum_check, offset)
            a_cell = region.assign_advice("a", self.a, offset, a)
            b_cell = region.assign_advice("b", self.b, offset, b)
        return SumConstrained(a_cell, b_cell)

    def assign_lookup(
        self,
        layouter: Layouter,
        a: FieldLike,
        start: Optional[int] = None,
    ) -> RangeConstrained:
        """Enable the range lookup and write a at offset 0 of a new region."""
        with layouter.assign_region("Assign value for lookup check", start=start) as region:
            offset = 0
            region.enable_selector(self._q_lookup, offset)
            cell = region.assign_advice("value", self.a, offset, a)
        return RangeConstrained(cell)


@dataclass
class SumCircuit(Circuit):
    """One instance of the sum-check circuit with witness values a and b."""
    a: FieldLike
    b: FieldLike
    params: SumCheckParams

    def configure(self, cs: ConstraintSystem) -> SumCheckConfig:
        a = cs.advice_column()
        b = cs.advice_column()
        return SumCheckConfig.configure(cs, a, b, self.params)

    def synthesize(self, config: SumCheckConfig, layouter: Layouter) -> None:
        config.table.load(layouter)
        config.assign(layouter, self.a, self.b)
        config.assign_lookup(layouter, self.a)
