"""Circuit shape: columns, selectors, expressions, gates, lookups and tables."""

from circuit.columns import Column, ColumnKind, Rotation, Selector
from circuit.config import DEFAULT_K, SumCheckParams
from circuit.constraint_system import (
    CircuitShape,
    ConstraintSystem,
    Gate,
    LookupRule,
    LookupTable,
)
from circuit.errors import (
    AssignmentError,
    CircuitError,
    ConfigurationError,
    SequenceError,
    TableLoadError,
)
from circuit.expressions import (
    Constant,
    Difference,
    Expression,
    Negated,
    Product,
    Query,
    Scaled,
    Sum,
)

__all__ = [
    # Columns
    "Column",
    "ColumnKind",
    "Rotation",
    "Selector",
    # Config
    "DEFAULT_K",
    "SumCheckParams",
    # Shape
    "CircuitShape",
    "ConstraintSystem",
    "Gate",
    "LookupRule",
    "LookupTable",
    # Errors
    "CircuitError",
    "ConfigurationError",
    "TableLoadError",
    "AssignmentError",
    "SequenceError",
    # Expressions
    "Expression",
    "Constant",
    "Query",
    "Negated",
    "Sum",
    "Difference",
    "Product",
    "Scaled",
]
