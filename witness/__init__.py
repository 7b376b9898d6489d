"""Witness assignment: per-instance cell values and region layout."""

from .assignment import AssignedCell, Assignment, Phase
from .layouter import Layouter, Region

__all__ = [
    "AssignedCell",
    "Assignment",
    "Phase",
    "Layouter",
    "Region",
]
