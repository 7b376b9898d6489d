"""Primitives - Low-level mathematical building blocks."""

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    FieldLike,
    int_range,
    is_zero,
    to_ff,
)

__all__ = [
    "FF",
    "GOLDILOCKS_PRIME",
    "FieldLike",
    "int_range",
    "is_zero",
    "to_ff",
]
