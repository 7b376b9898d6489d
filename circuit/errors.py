"""Exceptions raised while building, assigning and checking circuits.

Structural problems (bad declarations, bad writes, out-of-order calls) are
raised. A witness that merely fails to satisfy the circuit is not an error:
the checker returns violations as data (see protocol.checker).
"""


class CircuitError(Exception):
    """Base class for all circuit errors."""


class ConfigurationError(CircuitError, ValueError):
    """Malformed or conflicting column, selector, gate or lookup declaration."""


class TableLoadError(CircuitError):
    """Table domain does not fit in the circuit's row budget."""


class AssignmentError(CircuitError):
    """Double write to a cell, offset outside the row budget, or wrong column kind."""


class SequenceError(CircuitError, RuntimeError):
    """Operation invoked out of the configure -> load -> assign -> check order."""
