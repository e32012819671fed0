"""Solver-independent linear/integer program model.

A `Problem` holds variables (looked up by a hashable key), linear constraints
and a linear objective. Expressions can be written with ordinary arithmetic::

    problem = Problem()
    x = problem.variable("x", VariableType.INTEGER, 0, 1)
    y = problem.variable("y", VariableType.INTEGER, 0, 1)
    problem.add_constraint((x + y).at_most(1))
    problem.objective = 3 * x + 2 * y
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Hashable, List, Mapping, Optional, Union

from optgraph.types.base import SolutionType


class VariableType(IntEnum):
    """Domain of a decision variable, within its bounds."""

    INTEGER = 1
    REAL = 2


class Relation(IntEnum):
    """Relation between a constraint's expression and its bound."""

    LESS_EQUAL = 1
    GREATER_EQUAL = 2
    EQUAL = 3


class OptimizationSense(IntEnum):
    MINIMIZE = 1
    MAXIMIZE = 2


@dataclass(eq=False)
class Variable:
    """A decision variable. Compared and hashed by identity."""

    key: Hashable
    type: VariableType = VariableType.REAL
    lower_bound: float = -math.inf
    upper_bound: float = math.inf

    def __add__(self, other: Operand) -> Expression:
        return Expression.of(self) + other

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Expression:
        return Expression.of(self) - other

    def __rsub__(self, other: Operand) -> Expression:
        return Expression.of(other) - self

    def __mul__(self, factor: float) -> Expression:
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        return Expression.of(self) * factor

    __rmul__ = __mul__

    def __neg__(self) -> Expression:
        return Expression.of(self) * -1.0

    def __repr__(self) -> str:
        return f"Variable({self.key!r})"


Operand = Union["Expression", Variable, int, float]


class Expression:
    """A linear expression ``sum(coefficient * variable) + constant``."""

    def __init__(
        self,
        terms: Optional[Mapping[Variable, float]] = None,
        constant: float = 0.0,
    ) -> None:
        self.terms: Dict[Variable, float] = dict(terms) if terms else {}
        self.constant = float(constant)

    @classmethod
    def of(cls, value: Operand) -> Expression:
        """Coerce a variable, number or expression into a new expression."""
        if isinstance(value, Expression):
            return cls(value.terms, value.constant)
        if isinstance(value, Variable):
            return cls({value: 1.0})
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(constant=value)
        raise TypeError(f"Cannot build a linear expression from {value!r}")

    def add_term(self, variable: Variable, coefficient: float) -> Expression:
        """Add ``coefficient * variable`` in place and return self."""
        self.terms[variable] = self.terms.get(variable, 0.0) + coefficient
        return self

    def __add__(self, other: Operand) -> Expression:
        result = Expression(self.terms, self.constant)
        rhs = Expression.of(other)
        for variable, coefficient in rhs.terms.items():
            result.add_term(variable, coefficient)
        result.constant += rhs.constant
        return result

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Expression:
        return self + Expression.of(other) * -1.0

    def __rsub__(self, other: Operand) -> Expression:
        return Expression.of(other) - self

    def __mul__(self, factor: float) -> Expression:
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        return Expression(
            {var: coef * factor for var, coef in self.terms.items()},
            self.constant * factor,
        )

    __rmul__ = __mul__

    def __neg__(self) -> Expression:
        return self * -1.0

    def at_most(self, bound: float) -> Constraint:
        return Constraint(self, Relation.LESS_EQUAL, bound)

    def at_least(self, bound: float) -> Constraint:
        return Constraint(self, Relation.GREATER_EQUAL, bound)

    def equals(self, bound: float) -> Constraint:
        return Constraint(self, Relation.EQUAL, bound)

    def evaluate(self, values: Mapping[Hashable, float]) -> float:
        """Evaluate the expression with variable values given by key."""
        return self.constant + sum(
            coef * values.get(var.key, 0.0) for var, coef in self.terms.items()
        )

    def __repr__(self) -> str:
        parts = [f"{coef:g}*{var.key!r}" for var, coef in self.terms.items()]
        if self.constant or not parts:
            parts.append(f"{self.constant:g}")
        return " + ".join(parts)


@dataclass(frozen=True)
class Constraint:
    """``expression <relation> bound``."""

    expression: Expression
    relation: Relation
    bound: float


class Problem:
    """A linear or mixed-integer program.

    Attributes:
        variables: Variables by key, in creation order.
        constraints: Linear constraints.
        objective: Linear objective expression.
        sense: Whether the objective is minimized or maximized.
    """

    def __init__(self, sense: OptimizationSense = OptimizationSense.MINIMIZE) -> None:
        self.variables: Dict[Hashable, Variable] = {}
        self.constraints: List[Constraint] = []
        self.objective = Expression()
        self.sense = sense

    def variable(
        self,
        key: Hashable,
        type: VariableType = VariableType.REAL,
        lower_bound: float = -math.inf,
        upper_bound: float = math.inf,
    ) -> Variable:
        """Return the variable with ``key``, creating it on first use.

        The type and bounds only apply when the variable is created.

        Raises:
            ValueError: If ``lower_bound > upper_bound``.
        """
        existing = self.variables.get(key)
        if existing is not None:
            return existing
        if lower_bound > upper_bound:
            raise ValueError(
                f"Variable {key!r}: lower bound {lower_bound} exceeds upper bound {upper_bound}"
            )
        variable = Variable(key, type, lower_bound, upper_bound)
        self.variables[key] = variable
        return variable

    def binary_variable(self, key: Hashable) -> Variable:
        return self.variable(key, VariableType.INTEGER, 0.0, 1.0)

    def add_constraint(self, constraint: Constraint) -> Constraint:
        """Append ``constraint``.

        Raises:
            ValueError: If it references a variable of another problem.
        """
        for variable in constraint.expression.terms:
            if self.variables.get(variable.key) is not variable:
                raise ValueError(f"{variable!r} does not belong to this problem.")
        self.constraints.append(constraint)
        return constraint


@dataclass(frozen=True)
class Solution:
    """Outcome of solving a `Problem`.

    Attributes:
        type: Classification of the outcome.
        objective_value: Objective at ``values``; None without a solution.
        values: Variable values by key; empty without a solution.
    """

    type: SolutionType
    objective_value: Optional[float] = None
    values: Mapping[Hashable, float] = field(default_factory=dict)

    def value(self, variable: Union[Variable, Hashable]) -> float:
        """Return the value of a variable (or variable key); 0.0 if absent."""
        key = variable.key if isinstance(variable, Variable) else variable
        return self.values.get(key, 0.0)
