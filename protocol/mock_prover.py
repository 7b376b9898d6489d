"""Mock prover: configure, synthesize and check a circuit locally.

Wires the whole pipeline for one instance:

    ConstraintSystem -> circuit.configure -> finalize(k) -> CircuitShape
    Assignment(shape) -> circuit.synthesize(config, Layouter) -> check

Example:
    circuit = SumCircuit(a=9, b=6, params=SumCheckParams(sum=15, max=10))
    prover = MockProver.run(circuit, k=9)
    assert prover.verify().accepted

A shape can be built once and shared by many instances:

    shape, config = MockProver.configure(circuit)
    for instance in instances:
        MockProver.with_shape(shape, config, instance).verify()
"""

from typing import Any, Tuple

from circuit.config import DEFAULT_K
from circuit.constraint_system import CircuitShape, ConstraintSystem
from constraints.base import Circuit
from protocol.checker import Verdict, check
from witness.assignment import Assignment
from witness.layouter import Layouter


class MockProver:
    """Holds the shape and the synthesized assignment of one instance."""

    def __init__(self, shape: CircuitShape, assignment: Assignment):
        self.shape = shape
        self.assignment = assignment

    @staticmethod
    def configure(circuit: Circuit, k: int = DEFAULT_K) -> Tuple[CircuitShape, Any]:
        """Build the shape of circuit with 2^k rows."""
        cs = ConstraintSystem()
        config = circuit.configure(cs)
        return cs.finalize(k), config

    @classmethod
    def with_shape(cls, shape: CircuitShape, config: Any, circuit: Circuit) -> "MockProver":
        """Synthesize circuit's witness into a fresh assignment of shape."""
        assignment = Assignment(shape)
        circuit.synthesize(config, Layouter(assignment))
        return cls(shape, assignment)

    @classmethod
    def run(cls, circuit: Circuit, k: int = DEFAULT_K) -> "MockProver":
        shape, config = cls.configure(circuit, k)
        return cls.with_shape(shape, config, circuit)

    def verify(self, stop_at_first: bool = False) -> Verdict:
        return check(self.shape, self.assignment, stop_at_first=stop_at_first)
