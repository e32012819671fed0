"""Solver contract and the SciPy/HiGHS backend.

A `Solver` turns a `Problem` into a `Solution`. Backends must only report the
four `SolutionType` outcomes; anything else (crashes, limits hit without any
feasible point) is raised as `SolverError`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp
from scipy.sparse import lil_matrix

from optgraph.config import SOLVER_CONFIG, SolverConfig
from optgraph.logging import get_logger
from optgraph.lp.model import (
    OptimizationSense,
    Problem,
    Relation,
    Solution,
    Variable,
    VariableType,
)
from optgraph.types.base import SolutionType

logger = get_logger(__name__)

# scipy.optimize.milp status codes
_STATUS_OPTIMAL = 0
_STATUS_LIMIT_REACHED = 1
_STATUS_INFEASIBLE = 2
_STATUS_UNBOUNDED = 3
_STATUS_OTHER = 4


class SolverError(RuntimeError):
    """The solver backend failed to produce a classified outcome."""


def _box_bounded_infeasible(message: str, variables: List[Variable]) -> bool:
    # HiGHS may only prove "infeasible or unbounded" during presolve
    if "infeasible" not in (message or "").lower():
        return False
    return all(
        math.isfinite(var.lower_bound) and math.isfinite(var.upper_bound)
        for var in variables
    )


class Solver(ABC):
    """Abstract LP/IP solver capability."""

    @abstractmethod
    def solve(self, problem: Problem) -> Solution:
        """Solve ``problem``.

        Raises:
            SolverError: If the backend fails.
        """


class ScipyMilpSolver(Solver):
    """Solve problems with ``scipy.optimize.milp`` (HiGHS).

    Pure LPs (no integer variables) go through the same call; HiGHS then runs
    its simplex/IPM path instead of branch-and-bound.
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config if config is not None else SOLVER_CONFIG

    def solve(self, problem: Problem) -> Solution:
        variables = list(problem.variables.values())
        if not variables:
            return self._solve_constant(problem)

        index = {id(var): i for i, var in enumerate(variables)}
        n = len(variables)

        c = np.zeros(n)
        for var, coef in problem.objective.terms.items():
            c[index[id(var)]] += coef
        maximize = problem.sense == OptimizationSense.MAXIMIZE
        if maximize:
            c = -c

        integrality = np.array(
            [1 if var.type == VariableType.INTEGER else 0 for var in variables]
        )
        bounds = Bounds(
            np.array([var.lower_bound for var in variables], dtype=float),
            np.array([var.upper_bound for var in variables], dtype=float),
        )

        constraints = []
        m = len(problem.constraints)
        if m:
            a = lil_matrix((m, n), dtype=np.float64)
            lb = np.full(m, -np.inf)
            ub = np.full(m, np.inf)
            for row, constraint in enumerate(problem.constraints):
                for var, coef in constraint.expression.terms.items():
                    a[row, index[id(var)]] += coef
                rhs = constraint.bound - constraint.expression.constant
                if constraint.relation != Relation.GREATER_EQUAL:
                    ub[row] = rhs
                if constraint.relation != Relation.LESS_EQUAL:
                    lb[row] = rhs
            constraints.append(LinearConstraint(a.tocsr(), lb, ub))

        logger.debug(
            "Solving problem with %d variables (%d integer) and %d constraints",
            n,
            int(integrality.sum()),
            m,
        )
        try:
            res = milp(
                c=c,
                integrality=integrality,
                bounds=bounds,
                constraints=constraints or None,
                options=self.config.to_options(),
            )
        except ValueError as exc:
            raise SolverError(f"HiGHS rejected the problem: {exc}") from exc

        logger.debug("HiGHS finished with status %s: %s", res.status, res.message)
        if res.status == _STATUS_INFEASIBLE:
            return Solution(SolutionType.INFEASIBLE)
        if res.status == _STATUS_UNBOUNDED:
            return Solution(SolutionType.UNBOUNDED)
        if res.status == _STATUS_OTHER and _box_bounded_infeasible(res.message, variables):
            # A box-bounded problem cannot be unbounded
            return Solution(SolutionType.INFEASIBLE)
        if res.status == _STATUS_OPTIMAL:
            solution_type = SolutionType.OPTIMAL
        elif res.status == _STATUS_LIMIT_REACHED and res.x is not None:
            solution_type = SolutionType.FEASIBLE
        else:
            raise SolverError(f"HiGHS failed (status {res.status}): {res.message}")

        values = {var.key: float(res.x[i]) for i, var in enumerate(variables)}
        objective = float(res.fun) * (-1.0 if maximize else 1.0)
        return Solution(
            solution_type,
            objective_value=objective + problem.objective.constant,
            values=values,
        )

    @staticmethod
    def _solve_constant(problem: Problem) -> Solution:
        # Without variables every constraint is a constant comparison
        for constraint in problem.constraints:
            lhs = constraint.expression.constant
            satisfied = {
                Relation.LESS_EQUAL: lhs <= constraint.bound,
                Relation.GREATER_EQUAL: lhs >= constraint.bound,
                Relation.EQUAL: lhs == constraint.bound,
            }[constraint.relation]
            if not satisfied:
                return Solution(SolutionType.INFEASIBLE)
        return Solution(
            SolutionType.OPTIMAL, objective_value=problem.objective.constant
        )


def default_solver(config: Optional[SolverConfig] = None) -> Solver:
    """Return the default backend (`ScipyMilpSolver`)."""
    return ScipyMilpSolver(config)

