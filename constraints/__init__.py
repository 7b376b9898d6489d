"""Circuit modules.

Each circuit pairs a config (configure + assignment helpers) with a Circuit
subclass that drives one proving instance. CIRCUIT_REGISTRY maps circuit
names to their Circuit classes.
"""

from .base import Circuit
from .int_table import IntRangeTable
from .sum_check import RangeConstrained, SumCheckConfig, SumCircuit, SumConstrained

# Registry mapping circuit names to Circuit classes
CIRCUIT_REGISTRY: dict[str, type[Circuit]] = {
    "SumCheck": SumCircuit,
}


def get_circuit(name: str) -> type[Circuit]:
    """Get the Circuit class registered under name.

    Raises:
        KeyError: If no circuit is registered under name
    """
    if name in CIRCUIT_REGISTRY:
        return CIRCUIT_REGISTRY[name]
    raise KeyError(
        f"No circuit named '{name}'. "
        f"Available: {list(CIRCUIT_REGISTRY.keys())}"
    )


__all__ = [
    "Circuit",
    "IntRangeTable",
    "SumCheckConfig",
    "SumCircuit",
    "SumConstrained",
    "RangeConstrained",
    "CIRCUIT_REGISTRY",
    "get_circuit",
]
