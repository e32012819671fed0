"""Degree- and size-constrained optimal subgraph selection via integer programming.

`OptimalSubgraph` compiles a graph, per-node degree bounds, global arc-count
bounds and weighted cost functions into a `Problem` with one decision
variable per arc, hands it to a `Solver`, and decodes the variable values back
into a `Subgraph`.

Formulation, for arcs ``a`` with decision variable ``x_a``:

- degree of node ``n``: ``sum(x_a for a incident to n)``, where an arc counts
  once at each endpoint (a loop counts twice);
- in/out-degree of ``n``: the same sum restricted to directed arcs entering or
  leaving ``n``; edges have no orientation and do not count;
- ``min_arc_count <= sum(x_a) <= max_arc_count``;
- minimize ``sum_k weight_k * sum_a cost_k(a) * x_a``.

Infeasible and unbounded outcomes are reported through `solution_type` and
never produce a result graph.
"""

from __future__ import annotations

import math
import numbers
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from optgraph.config import SUBGRAPH_CONFIG
from optgraph.graph.base import Graph
from optgraph.graph.subgraph import Subgraph
from optgraph.logging import get_logger
from optgraph.lp.model import (
    Expression,
    OptimizationSense,
    Problem,
    Solution,
    Variable,
    VariableType,
)
from optgraph.lp.solver import Solver
from optgraph.types.base import SolutionType
from optgraph.types.ids import Arc, Node

logger = get_logger(__name__)

#: Largest finite arc-count bound; every integer up to it is exact as a float.
MAX_ARC_COUNT = 2**53

#: A per-node bound: a constant, a function of the node, or None for "no bound".
DegreeBound = Union[None, float, Callable[[Node], float]]


@dataclass(frozen=True)
class CostFunction:
    """An arc cost function together with its weight in the objective.

    Attributes:
        cost: Finite cost of each arc.
        objective_weight: Multiplier applied to the summed cost; negative
            weights turn the cost into a reward.
    """

    cost: Callable[[Arc], float]
    objective_weight: float = 1.0


def _as_float(value: object, name: str) -> float:
    try:
        return float(value)
    except (OverflowError, TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a representable number, got {value!r}") from exc


def _as_bound_function(
    value: DegreeBound, name: str
) -> Optional[Callable[[Node], float]]:
    if value is None:
        return None
    if callable(value):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        constant = _as_float(value, name)
        if math.isnan(constant):
            raise ValueError(f"{name} must not be NaN")
        return lambda _node: constant
    raise ValueError(f"{name} must be a number or a function of the node, got {value!r}")


def _check_arc_count(value: Union[int, float], name: str) -> Union[int, float]:
    if value == math.inf:
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    if value > MAX_ARC_COUNT:
        raise ValueError(f"{name} must not exceed {MAX_ARC_COUNT}, got {value}")
    return int(value)


class OptimalSubgraph:
    """Find a minimum-cost subgraph satisfying degree and size constraints.

    The configuration is fixed at construction. Each call to `run` recompiles
    the problem from the current state of the graph.

    Example:
        >>> graph = CompleteGraph(4)
        >>> task = OptimalSubgraph(graph, max_degree=1, min_arc_count=2,
        ...                        cost_functions=[CostFunction(lambda a: 1.0)])
        >>> task.run(ScipyMilpSolver())
        <SolutionType.OPTIMAL: 4>
        >>> task.result_graph.arc_count()
        2
    """

    def __init__(
        self,
        graph: Graph,
        *,
        min_degree: DegreeBound = None,
        max_degree: DegreeBound = None,
        min_in_degree: DegreeBound = None,
        max_in_degree: DegreeBound = None,
        min_out_degree: DegreeBound = None,
        max_out_degree: DegreeBound = None,
        min_arc_count: int = 0,
        max_arc_count: Union[int, float] = math.inf,
        cost_functions: Iterable[CostFunction] = (),
        relaxed: bool = False,
        selection_threshold: Optional[float] = None,
    ) -> None:
        """Validate and store the configuration.

        Args:
            graph: Graph whose arcs are the candidates.
            min_degree: Lower bound on the degree of each node.
            max_degree: Upper bound on the degree of each node.
            min_in_degree: Lower bound on directed arcs entering each node.
            max_in_degree: Upper bound on directed arcs entering each node.
            min_out_degree: Lower bound on directed arcs leaving each node.
            max_out_degree: Upper bound on directed arcs leaving each node.
            min_arc_count: Minimum number of selected arcs.
            max_arc_count: Maximum number of selected arcs (``math.inf`` for
                no limit). Finite counts are capped at `MAX_ARC_COUNT`.
            cost_functions: Weighted costs summed into the objective. With no
                cost functions any feasible subgraph is optimal.
            relaxed: Solve the LP relaxation (variables in ``[0, 1]``)
                instead of the integer program.
            selection_threshold: Variable value from which an arc is selected;
                defaults to ``SUBGRAPH_CONFIG.selection_threshold``.

        Raises:
            ValueError: On malformed bounds, counts, weights or threshold.
        """
        self._graph = graph
        self._min_degree = _as_bound_function(min_degree, "min_degree")
        self._max_degree = _as_bound_function(max_degree, "max_degree")
        self._min_in_degree = _as_bound_function(min_in_degree, "min_in_degree")
        self._max_in_degree = _as_bound_function(max_in_degree, "max_in_degree")
        self._min_out_degree = _as_bound_function(min_out_degree, "min_out_degree")
        self._max_out_degree = _as_bound_function(max_out_degree, "max_out_degree")

        if min_arc_count == math.inf:
            raise ValueError("min_arc_count must be finite")
        self._min_arc_count = _check_arc_count(min_arc_count, "min_arc_count")
        self._max_arc_count = _check_arc_count(max_arc_count, "max_arc_count")
        if self._min_arc_count > self._max_arc_count:
            raise ValueError(
                f"min_arc_count ({self._min_arc_count}) exceeds "
                f"max_arc_count ({self._max_arc_count})"
            )

        functions = tuple(cost_functions)
        for function in functions:
            if not isinstance(function, CostFunction):
                raise ValueError(f"Expected a CostFunction, got {function!r}")
            if not callable(function.cost):
                raise ValueError("CostFunction.cost must be callable")
            if not math.isfinite(function.objective_weight):
                raise ValueError(
                    f"Objective weight must be finite, got {function.objective_weight}"
                )
        self._cost_functions = functions

        self._relaxed = bool(relaxed)
        if selection_threshold is None:
            selection_threshold = SUBGRAPH_CONFIG.selection_threshold
        if (
            isinstance(selection_threshold, bool)
            or not isinstance(selection_threshold, numbers.Real)
            or not 0.0 < selection_threshold <= 1.0
        ):
            raise ValueError(
                f"selection_threshold must be in (0, 1], got {selection_threshold}"
            )
        self._selection_threshold = float(selection_threshold)

        self._solution: Optional[Solution] = None
        self._result_graph: Optional[Subgraph] = None

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def min_arc_count(self) -> int:
        return self._min_arc_count

    @property
    def max_arc_count(self) -> Union[int, float]:
        return self._max_arc_count

    @property
    def cost_functions(self) -> Tuple[CostFunction, ...]:
        return self._cost_functions

    @property
    def relaxed(self) -> bool:
        return self._relaxed

    @property
    def selection_threshold(self) -> float:
        return self._selection_threshold

    @property
    def solution_type(self) -> Optional[SolutionType]:
        """Outcome of the last `run`, or None before the first run."""
        return self._solution.type if self._solution is not None else None

    @property
    def objective_value(self) -> Optional[float]:
        """Objective of the last solution, when one exists."""
        return self._solution.objective_value if self._solution is not None else None

    @property
    def result_graph(self) -> Optional[Subgraph]:
        """The selected subgraph.

        Optimal if `solution_type` is ``OPTIMAL``, valid but possibly
        suboptimal if ``FEASIBLE``, None otherwise.
        """
        return self._result_graph

    def _new_variable(self, problem: Problem, arc: Arc) -> Variable:
        if self._relaxed:
            return problem.variable(arc, VariableType.REAL, 0.0, 1.0)
        return problem.binary_variable(arc)

    def _arc_cost(self, arc: Arc) -> float:
        total = 0.0
        for function in self._cost_functions:
            cost = _as_float(function.cost(arc), f"Cost of {arc!r}")
            if not math.isfinite(cost):
                raise ValueError(f"Cost of {arc!r} must be finite, got {cost}")
            total += function.objective_weight * cost
        return total

    @staticmethod
    def _add_bounds(
        problem: Problem,
        expression: Expression,
        node: Node,
        lower: Optional[Callable[[Node], float]],
        upper: Optional[Callable[[Node], float]],
    ) -> None:
        if lower is not None:
            bound = _as_float(lower(node), f"Lower degree bound of {node!r}")
            if math.isnan(bound):
                raise ValueError(f"Lower degree bound of {node!r} is NaN")
            # Variables are non-negative, so bounds <= 0 always hold
            if bound > 0:
                problem.add_constraint(expression.at_least(bound))
        if upper is not None:
            bound = _as_float(upper(node), f"Upper degree bound of {node!r}")
            if math.isnan(bound):
                raise ValueError(f"Upper degree bound of {node!r} is NaN")
            if bound < math.inf:
                problem.add_constraint(expression.at_most(bound))

    def build_problem(self) -> Problem:
        """Compile the current graph and configuration into a `Problem`.

        Variables are keyed by their `Arc`.

        Raises:
            ValueError: If a cost or degree bound evaluates to a non-finite
                or NaN value where a finite one is required.
        """
        graph = self._graph
        problem = Problem(OptimizationSense.MINIMIZE)
        degree: Dict[Node, Expression] = defaultdict(Expression)
        in_degree: Dict[Node, Expression] = defaultdict(Expression)
        out_degree: Dict[Node, Expression] = defaultdict(Expression)
        arc_total = Expression()
        objective = Expression()

        for arc in graph.arcs():
            x = self._new_variable(problem, arc)
            u, v = graph.u(arc), graph.v(arc)
            degree[u].add_term(x, 1.0)
            degree[v].add_term(x, 1.0)
            if not graph.is_edge(arc):
                out_degree[u].add_term(x, 1.0)
                in_degree[v].add_term(x, 1.0)
            arc_total.add_term(x, 1.0)
            cost = self._arc_cost(arc)
            if cost:
                objective.add_term(x, cost)

        bounded = (
            (degree, self._min_degree, self._max_degree),
            (in_degree, self._min_in_degree, self._max_in_degree),
            (out_degree, self._min_out_degree, self._max_out_degree),
        )
        for expressions, lower, upper in bounded:
            if lower is None and upper is None:
                continue
            for node in graph.nodes():
                self._add_bounds(problem, expressions[node], node, lower, upper)

        if self._min_arc_count > 0:
            problem.add_constraint(arc_total.at_least(self._min_arc_count))
        if self._max_arc_count < math.inf:
            problem.add_constraint(arc_total.at_most(self._max_arc_count))

        problem.objective = objective
        logger.debug(
            "Compiled optimal subgraph problem: %d variables, %d constraints",
            len(problem.variables),
            len(problem.constraints),
        )
        return problem

    def run(self, solver: Solver) -> SolutionType:
        """Compile, solve and decode.

        Args:
            solver: Backend used to solve the compiled problem.

        Returns:
            The classification of the outcome, also stored in `solution_type`.

        Raises:
            ValueError: If compilation fails (see `build_problem`).
            SolverError: If the backend fails; no result is stored.
        """
        self._solution = None
        self._result_graph = None

        problem = self.build_problem()
        solution = solver.solve(problem)
        self._solution = solution

        if solution.type.has_solution:
            result = Subgraph(self._graph)
            for arc in problem.variables:
                if solution.value(arc) >= self._selection_threshold:
                    result.enable(arc)
            self._result_graph = result
            logger.info(
                "Optimal subgraph: %s, %d of %d arcs selected, objective %s",
                solution.type.name,
                result.arc_count(),
                len(problem.variables),
                solution.objective_value,
            )
        elif solution.type == SolutionType.UNBOUNDED:
            logger.warning(
                "Optimal subgraph problem is unbounded; arc costs must be finite"
            )
        else:
            logger.info("Optimal subgraph problem is %s", solution.type.name)

        return solution.type
