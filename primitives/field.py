"""Goldilocks prime field GF(p).

Uses galois library for all field arithmetic. FF is the field type; circuit
code never does modular arithmetic by hand.
"""

from typing import Union

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

FieldLike = Union[int, FF]


def to_ff(value: FieldLike) -> FF:
    """Convert an integer (possibly negative) or field element to FF."""
    if isinstance(value, FF):
        return value
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Expected an integer or field element, got {type(value).__name__}")
    if isinstance(value, (int, np.integer)):
        return FF(int(value) % GOLDILOCKS_PRIME)
    raise TypeError(f"Expected an integer or field element, got {type(value).__name__}")


def is_zero(value: FF) -> bool:
    """True if value is the additive identity."""
    return int(value) == 0


def int_range(n: int) -> FF:
    """Field array [0, 1, ..., n-1]."""
    return FF(np.arange(n, dtype=np.uint64))
