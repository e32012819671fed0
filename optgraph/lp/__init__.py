"""Linear/integer programming: model, solvers and graph problems built on them."""

from optgraph.lp.matching import LpMaximumMatching, LpMinimumCostMatching
from optgraph.lp.model import (
    Constraint,
    Expression,
    OptimizationSense,
    Problem,
    Relation,
    Solution,
    Variable,
    VariableType,
)
from optgraph.lp.optimal_subgraph import CostFunction, OptimalSubgraph
from optgraph.lp.solver import ScipyMilpSolver, Solver, SolverError, default_solver

__all__ = [
    "Constraint",
    "CostFunction",
    "Expression",
    "LpMaximumMatching",
    "LpMinimumCostMatching",
    "OptimalSubgraph",
    "OptimizationSense",
    "Problem",
    "Relation",
    "ScipyMilpSolver",
    "Solution",
    "Solver",
    "SolverError",
    "Variable",
    "VariableType",
    "default_solver",
]
