"""Tests for the sum-check circuit: a + b == SUM and a in [0, MAX)."""

import pytest

from circuit.columns import Column, ColumnKind
from circuit.config import SumCheckParams
from circuit.constraint_system import ConstraintSystem
from circuit.errors import AssignmentError, ConfigurationError
from constraints.sum_check import SumCheckConfig, SumCircuit
from protocol.checker import GateViolation, LookupViolation, check
from protocol.mock_prover import MockProver
from witness.assignment import Assignment
from witness.layouter import Layouter

from tests.conftest import K, MAX, SUM


def verdict(a: int, b: int, params: SumCheckParams):
    return MockProver.run(SumCircuit(a=a, b=b, params=params), k=K).verify()


class TestConfigure:
    """Shape produced by SumCheckConfig.configure."""

    def test_shape(self, params) -> None:
        cs = ConstraintSystem()
        a, b = cs.advice_column(), cs.advice_column()
        config = SumCheckConfig.configure(cs, a, b, params)
        shape = cs.finalize(K)

        assert (config.a, config.b) == (a, b)
        assert [g.name for g in shape.gates] == ["sum check"]
        assert shape.gates[0].selector.simple
        assert [l.name for l in shape.lookups] == ["range"]
        assert not shape.lookups[0].selector.simple
        assert shape.lookups[0].table == config.table.value
        assert shape.lookups[0].input.columns() == {a}
        assert shape.tables[0].size == MAX

    def test_only_a_is_looked_up(self, params) -> None:
        cs = ConstraintSystem()
        a, b = cs.advice_column(), cs.advice_column()
        SumCheckConfig.configure(cs, a, b, params)
        shape = cs.finalize(K)
        assert all(b not in rule.input.columns() for rule in shape.lookups)

    def test_same_column_twice(self, params) -> None:
        cs = ConstraintSystem()
        a = cs.advice_column()
        with pytest.raises(ConfigurationError):
            SumCheckConfig.configure(cs, a, a, params)

    def test_fixed_column_as_summand(self, params) -> None:
        cs = ConstraintSystem()
        a = cs.advice_column()
        f = cs.fixed_column()
        with pytest.raises(ConfigurationError):
            SumCheckConfig.configure(cs, a, f, params)


class TestScenarios:
    """SUM = 15, MAX = 10."""

    @pytest.mark.parametrize("a, b", [(9, 6), (8, 7)])
    def test_accepted(self, params, a: int, b: int) -> None:
        assert verdict(a, b, params).accepted

    def test_a_out_of_range(self, params) -> None:
        """10 + 5 = 15 passes the gate, but 10 is not in [0, 10)."""
        result = verdict(10, 5, params)
        assert not result.accepted
        assert result.gate_violations == ()
        assert [(v.rule_name, v.value) for v in result.lookup_violations] == [("range", 10)]

    def test_wrong_sum(self, params) -> None:
        """5 + 5 = 10 != 15."""
        result = verdict(5, 5, params)
        assert result.lookup_violations == ()
        assert [(v.gate_name, v.constraint_name) for v in result.gate_violations] == [("sum check", "sum check")]

    def test_large_b_wrong_sum(self, params) -> None:
        """9 + 600 != 15; b itself is never looked up."""
        result = verdict(9, 600, params)
        assert result.lookup_violations == ()
        assert len(result.gate_violations) == 1


class TestProperties:
    """Correctness, soundness and the asymmetry between a and b."""

    @pytest.mark.parametrize("a", range(MAX))
    def test_sum_gate_correctness(self, params, a: int) -> None:
        assert verdict(a, SUM - a, params).accepted

    @pytest.mark.parametrize("a, b", [(0, 0), (9, 7), (3, 3), (14, 0), (10, 6), (0, 16)])
    def test_sum_gate_soundness(self, params, a: int, b: int) -> None:
        result = verdict(a, b, params)
        assert not result.accepted
        assert [v.gate_name for v in result.gate_violations] == ["sum check"]

    @pytest.mark.parametrize("a", [MAX, MAX + 1, SUM, 1000])
    def test_lookup_soundness(self, params, a: int) -> None:
        result = verdict(a, SUM - a, params)
        assert result.gate_violations == ()
        assert [v.value for v in result.lookup_violations] == [a]

    def test_b_not_range_checked(self) -> None:
        """b = 5 - 9 wraps to p - 4, far outside [0, MAX), and is still accepted."""
        params = SumCheckParams(sum=5, max=10)
        assert verdict(9, 5 - 9, params).accepted

    def test_b_above_max_accepted(self) -> None:
        params = SumCheckParams(sum=100, max=10)
        assert verdict(1, 99, params).accepted


class TestAssign:
    """Cell handles and region placement."""

    def _setup(self, params):
        cs = ConstraintSystem()
        config = SumCheckConfig.configure(cs, cs.advice_column(), cs.advice_column(), params)
        shape = cs.finalize(K)
        assignment = Assignment(shape)
        layouter = Layouter(assignment)
        config.table.load(layouter)
        return config, shape, assignment, layouter

    def test_assign_returns_cells(self, params) -> None:
        config, _, _, layouter = self._setup(params)
        cells = config.assign(layouter, 9, 6)
        assert (cells.a.column, cells.b.column) == (config.a, config.b)
        assert cells.a.row == cells.b.row
        assert (int(cells.a.value), int(cells.b.value)) == (9, 6)

    def test_assign_lookup_uses_its_own_region(self, params) -> None:
        config, shape, assignment, layouter = self._setup(params)
        cells = config.assign(layouter, 9, 6)
        ranged = config.assign_lookup(layouter, 9)
        assert ranged.cell.column == config.a
        assert ranged.cell.row != cells.a.row
        assert check(shape, assignment).accepted

    def test_collision_with_previous_region(self, params) -> None:
        config, _, _, layouter = self._setup(params)
        config.assign(layouter, 9, 6, start=20)
        with pytest.raises(AssignmentError):
            config.assign_lookup(layouter, 9, start=20)

    def test_lookup_only_instance(self, params) -> None:
        """A lookup region alone is checked without the sum gate."""
        config, shape, assignment, layouter = self._setup(params)
        config.assign_lookup(layouter, 3)
        assert check(shape, assignment).accepted

    def test_sum_only_instance(self, params) -> None:
        """A sum region alone does not trigger the lookup on a."""
        config, shape, assignment, layouter = self._setup(params)
        config.assign(layouter, 12, 3)
        assert check(shape, assignment).accepted

    def test_collect_first_violation_only(self, params) -> None:
        config, shape, assignment, layouter = self._setup(params)
        config.assign(layouter, 20, 20)
        config.assign_lookup(layouter, 20)
        result = check(shape, assignment, stop_at_first=True)
        assert len(result.violations) == 1
        assert isinstance(result.violations[0], GateViolation)

    def test_collect_all_violations(self, params) -> None:
        config, shape, assignment, layouter = self._setup(params)
        config.assign(layouter, 20, 20)
        config.assign_lookup(layouter, 20)
        result = check(shape, assignment)
        assert [type(v) for v in result.violations] == [GateViolation, LookupViolation]


class TestRowBudget:
    """Tables filling the row budget leave room for the witness regions (k = 3, 8 rows)."""

    @pytest.mark.parametrize("max", [8, 7])
    def test_table_fills_row_budget(self, max: int) -> None:
        params = SumCheckParams(sum=10, max=max)
        prover = MockProver.run(SumCircuit(a=5, b=5, params=params), k=3)
        assert prover.verify().accepted

    def test_table_fills_row_budget_rejects_out_of_range(self) -> None:
        params = SumCheckParams(sum=10, max=8)
        result = MockProver.run(SumCircuit(a=8, b=2, params=params), k=3).verify()
        assert [v.value for v in result.lookup_violations] == [8]
        assert result.gate_violations == ()

    def test_witness_rows_overlap_table_rows(self) -> None:
        """a and b sit on rows 0 and 1 while the table occupies rows 0..7 of its own column."""
        params = SumCheckParams(sum=10, max=8)
        prover = MockProver.run(SumCircuit(a=5, b=5, params=params), k=3)
        a, b = Column(ColumnKind.ADVICE, 0), Column(ColumnKind.ADVICE, 1)
        assigned = prover.assignment.is_assigned
        assert [r for r in range(prover.shape.n) if assigned(a, r)] == [0, 1]
        assert [r for r in range(prover.shape.n) if assigned(b, r)] == [0]
