"""Polynomial expressions over cell values.

Gates and lookup rules are built from a small expression tree:

    Constant   - a field constant
    Query      - the value of a column at a rotation from the current row
    Negated    - -e
    Sum        - a + b
    Difference - a - b
    Product    - a * b
    Scaled     - e * c for a field constant c

Python operators build trees, so gate code reads like the relation it
enforces:

    a = cs.query_advice(col_a)
    b = cs.query_advice(col_b)
    expr = a + b - 15

Trees are evaluated one row at a time by a tree-walking evaluator. The caller
supplies a resolver mapping each Query to the field value it reads, which
keeps evaluation independent of how a witness is stored.
"""

from dataclasses import dataclass
from typing import Callable, FrozenSet

from primitives.field import FF, to_ff
from circuit.columns import Column, Rotation


class Expression:
    """Base class for expression nodes."""

    # Make numpy and galois arrays defer to our reflected operators.
    __array_ufunc__ = None

    def evaluate(self, resolve: Callable[["Query"], FF]) -> FF:
        """Evaluate the expression, reading cells through resolve."""
        raise NotImplementedError("Subclass must implement evaluate")

    def degree(self) -> int:
        """Polynomial degree in the queried cells."""
        raise NotImplementedError("Subclass must implement degree")

    def queries(self) -> FrozenSet["Query"]:
        """All cell queries appearing in the expression."""
        raise NotImplementedError("Subclass must implement queries")

    def columns(self) -> FrozenSet[Column]:
        return frozenset(q.column for q in self.queries())

    # --- Operator overloads ---

    def __add__(self, other) -> "Expression":
        return Sum(self, as_expression(other))

    def __radd__(self, other) -> "Expression":
        return Sum(as_expression(other), self)

    def __sub__(self, other) -> "Expression":
        return Difference(self, as_expression(other))

    def __rsub__(self, other) -> "Expression":
        return Difference(as_expression(other), self)

    def __mul__(self, other) -> "Expression":
        if isinstance(other, Expression):
            return Product(self, other)
        return Scaled(self, to_ff(other))

    def __rmul__(self, other) -> "Expression":
        return self.__mul__(other)

    def __neg__(self) -> "Expression":
        return Negated(self)


def as_expression(value) -> Expression:
    """Lift an int or field element to a Constant; pass expressions through."""
    if isinstance(value, Expression):
        return value
    return Constant(to_ff(value))


@dataclass(frozen=True, eq=False)
class Constant(Expression):
    value: FF

    def evaluate(self, resolve):
        return self.value

    def degree(self) -> int:
        return 0

    def queries(self):
        return frozenset()

    def __repr__(self) -> str:
        return f"Constant({int(self.value)})"


@dataclass(frozen=True)
class Query(Expression):
    """Value of column at (current row + rotation)."""
    column: Column
    rotation: Rotation = Rotation()

    def evaluate(self, resolve):
        return resolve(self)

    def degree(self) -> int:
        return 1

    def queries(self):
        return frozenset([self])

    def __repr__(self) -> str:
        return f"Query({self.column}, {self.rotation.offset:+d})"


@dataclass(frozen=True, eq=False)
class Negated(Expression):
    inner: Expression

    def evaluate(self, resolve):
        return -self.inner.evaluate(resolve)

    def degree(self) -> int:
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()


@dataclass(frozen=True, eq=False)
class Sum(Expression):
    left: Expression
    right: Expression

    def evaluate(self, resolve):
        return self.left.evaluate(resolve) + self.right.evaluate(resolve)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def queries(self):
        return self.left.queries() | self.right.queries()


@dataclass(frozen=True, eq=False)
class Difference(Expression):
    left: Expression
    right: Expression

    def evaluate(self, resolve):
        return self.left.evaluate(resolve) - self.right.evaluate(resolve)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def queries(self):
        return self.left.queries() | self.right.queries()


@dataclass(frozen=True, eq=False)
class Product(Expression):
    left: Expression
    right: Expression

    def evaluate(self, resolve):
        return self.left.evaluate(resolve) * self.right.evaluate(resolve)

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def queries(self):
        return self.left.queries() | self.right.queries()


@dataclass(frozen=True, eq=False)
class Scaled(Expression):
    inner: Expression
    factor: FF

    def evaluate(self, resolve):
        return self.inner.evaluate(resolve) * self.factor

    def degree(self) -> int:
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()
