"""Circuit parameters.

SumCheckParams bundles the two configuration-time constants of the sum-check
circuit: the target SUM of the two advice cells and the exclusive upper bound
MAX of the range table. Both are validated once and then stored immutably in
the configured circuit.

Example:
    params = SumCheckParams(sum=15, max=10)
    params = SumCheckParams.from_json("circuit.json")  # {"sum": 15, "max": 10}
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from primitives.field import FF, GOLDILOCKS_PRIME
from circuit.errors import ConfigurationError

# Default row budget exponent: circuits have 2^k rows.
DEFAULT_K = 9


@dataclass(frozen=True)
class SumCheckParams:
    """Constants of the sum-check circuit.

    Attributes:
        sum: Value a + b must equal
        max: Exclusive upper bound of the range table domain [0, max)
    """
    sum: int
    max: int

    def __post_init__(self):
        for name in ("sum", "max"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if not 0 <= self.sum < GOLDILOCKS_PRIME:
            raise ConfigurationError(f"sum must be a field element in [0, p), got {self.sum}")
        if not 1 <= self.max < GOLDILOCKS_PRIME:
            raise ConfigurationError(f"max must be in [1, p), got {self.max}")

    @property
    def sum_ff(self) -> FF:
        return FF(self.sum)

    @classmethod
    def from_dict(cls, data: dict) -> "SumCheckParams":
        """Build from a mapping with 'sum' and 'max' keys."""
        missing = [key for key in ("sum", "max") if key not in data]
        if missing:
            raise ConfigurationError(f"Missing circuit parameters: {missing}")
        return cls(sum=data["sum"], max=data["max"])

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "SumCheckParams":
        """Load from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))
