import math

import pytest

from optgraph.lp.model import (
    Expression,
    OptimizationSense,
    Problem,
    Relation,
    Solution,
    VariableType,
)
from optgraph.types import SolutionType


def test_variable_is_created_once_per_key():
    problem = Problem()
    x = problem.variable("x", VariableType.INTEGER, 0, 5)
    assert problem.variable("x") is x
    assert x.type == VariableType.INTEGER
    assert (x.lower_bound, x.upper_bound) == (0, 5)
    assert list(problem.variables) == ["x"]


def test_binary_variable():
    x = Problem().binary_variable(("arc", 1))
    assert x.type == VariableType.INTEGER
    assert (x.lower_bound, x.upper_bound) == (0.0, 1.0)


def test_variable_bounds_validated():
    with pytest.raises(ValueError, match="exceeds upper bound"):
        Problem().variable("x", lower_bound=2, upper_bound=1)


def test_variable_defaults_are_unbounded_reals():
    x = Problem().variable("x")
    assert x.type == VariableType.REAL
    assert x.lower_bound == -math.inf
    assert x.upper_bound == math.inf


def test_expression_arithmetic():
    problem = Problem()
    x = problem.variable("x")
    y = problem.variable("y")

    expr = 2 * x + y - 3
    assert expr.terms == {x: 2.0, y: 1.0}
    assert expr.constant == -3.0

    expr = 1 - (x - y) * 4
    assert expr.terms == {x: -4.0, y: 4.0}
    assert expr.constant == 1.0

    assert (-x).terms == {x: -1.0}
    assert (x + x).terms == {x: 2.0}
    assert expr.evaluate({"x": 1.0, "y": 2.0}) == pytest.approx(5.0)


def test_expression_add_term_in_place():
    problem = Problem()
    x = problem.variable("x")
    expr = Expression()
    assert expr.add_term(x, 1.5) is expr
    expr.add_term(x, 0.5)
    assert expr.terms == {x: 2.0}
    assert repr(expr) == "2*'x'"
    assert repr(Expression()) == "0"


def test_expression_rejects_non_linear_operands():
    with pytest.raises(TypeError):
        Expression.of("x")


@pytest.mark.parametrize("factor", ["a", None, True, [2]])
def test_variable_rejects_non_numeric_factors(factor):
    x = Problem().variable("x")
    with pytest.raises(TypeError):
        x * factor
    with pytest.raises(TypeError):
        factor * x
    with pytest.raises(TypeError):
        (x + 1) * factor


def test_product_of_variables_is_rejected():
    problem = Problem()
    x, y = problem.variable("x"), problem.variable("y")
    with pytest.raises(TypeError):
        x * y


def test_constraints():
    problem = Problem()
    x = problem.variable("x")
    c = problem.add_constraint((x + 1).at_most(3))
    assert c.relation == Relation.LESS_EQUAL
    assert c.bound == 3
    assert problem.constraints == [c]
    assert (2 * x).at_least(1).relation == Relation.GREATER_EQUAL
    assert Expression.of(x).equals(0).relation == Relation.EQUAL


def test_constraint_with_foreign_variable_rejected():
    other = Problem().variable("x")
    problem = Problem()
    problem.variable("x")
    with pytest.raises(ValueError, match="does not belong"):
        problem.add_constraint(Expression.of(other).at_most(1))


def test_problem_sense():
    assert Problem().sense == OptimizationSense.MINIMIZE
    assert Problem(OptimizationSense.MAXIMIZE).sense == OptimizationSense.MAXIMIZE


def test_solution_values_default_to_zero():
    problem = Problem()
    x = problem.variable("x")
    solution = Solution(SolutionType.OPTIMAL, 1.0, {"x": 1.0})
    assert solution.value(x) == 1.0
    assert solution.value("x") == 1.0
    assert solution.value("missing") == 0.0
    assert Solution(SolutionType.INFEASIBLE).objective_value is None
