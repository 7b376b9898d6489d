"""Shared fixtures for circuit tests."""

import pytest

from circuit.config import SumCheckParams

# Row budget and constants used throughout: SUM = 15, MAX = 10, 2^9 rows.
K = 9
SUM = 15
MAX = 10


@pytest.fixture
def params() -> SumCheckParams:
    return SumCheckParams(sum=SUM, max=MAX)
