"""Tests for MockProver wiring and the circuit registry."""

import pytest

from circuit.config import DEFAULT_K
from circuit.errors import TableLoadError
from constraints import CIRCUIT_REGISTRY, get_circuit
from constraints.base import Circuit
from constraints.sum_check import SumCircuit
from protocol.mock_prover import MockProver
from witness.assignment import Phase

from tests.conftest import K


class TestMockProver:

    def test_run_and_verify(self, params) -> None:
        prover = MockProver.run(SumCircuit(a=8, b=7, params=params), k=K)
        assert prover.assignment.phase is Phase.ASSIGNED
        assert prover.verify().accepted
        assert prover.assignment.phase is Phase.CHECKED

    def test_shared_shape(self, params) -> None:
        """One shape, several instances, each with its own assignment."""
        shape, config = MockProver.configure(SumCircuit(a=0, b=0, params=params), k=K)
        provers = [
            MockProver.with_shape(shape, config, SumCircuit(a=a, b=b, params=params))
            for a, b in [(9, 6), (10, 5), (5, 5)]
        ]
        verdicts = [p.verify() for p in provers]
        assert [v.accepted for v in verdicts] == [True, False, False]
        assert all(p.shape is shape for p in provers)
        assert len({id(p.assignment) for p in provers}) == 3

    def test_default_row_budget(self, params) -> None:
        prover = MockProver.run(SumCircuit(a=9, b=6, params=params))
        assert prover.shape.k == DEFAULT_K
        assert prover.verify().accepted

    def test_row_budget_too_small(self, params) -> None:
        with pytest.raises(TableLoadError):
            MockProver.run(SumCircuit(a=9, b=6, params=params), k=3)

    def test_circuit_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Circuit()


class TestRegistry:

    def test_sum_check_registered(self) -> None:
        assert get_circuit("SumCheck") is SumCircuit
        assert "SumCheck" in CIRCUIT_REGISTRY

    def test_unknown_circuit(self) -> None:
        with pytest.raises(KeyError):
            get_circuit("Fibonacci")
