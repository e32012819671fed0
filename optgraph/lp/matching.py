"""Matching problems expressed through `OptimalSubgraph`."""

from __future__ import annotations

import math
from typing import Callable, Optional, Union

from optgraph.graph.base import Graph
from optgraph.graph.subgraph import Matching, Subgraph
from optgraph.lp.optimal_subgraph import CostFunction, OptimalSubgraph
from optgraph.lp.solver import Solver
from optgraph.types.base import SolutionType
from optgraph.types.ids import Arc


def _to_matching(graph: Graph, result: Optional[Subgraph]) -> Optional[Matching]:
    if result is None:
        return None
    matching = Matching(graph)
    for arc in result.arcs():
        matching.enable(arc)
    return matching


class LpMinimumCostMatching:
    """Minimum-cost matching in an arbitrary graph via integer programming.

    Every node may touch at most one selected arc; the matching size is kept
    within ``[minimum_matching_size, maximum_matching_size]``. A size range
    that no matching can meet is reported as ``INFEASIBLE`` by `run`.
    """

    def __init__(
        self,
        graph: Graph,
        cost: Callable[[Arc], float],
        minimum_matching_size: int = 0,
        maximum_matching_size: Union[int, float] = math.inf,
    ) -> None:
        """Configure the matching problem.

        Args:
            graph: Input graph.
            cost: Finite cost of each arc.
            minimum_matching_size: Minimum number of arcs in the matching.
            maximum_matching_size: Maximum number of arcs in the matching.

        Raises:
            ValueError: On malformed size bounds.
        """
        self.graph = graph
        self.cost = cost
        self._task = OptimalSubgraph(
            graph,
            max_degree=1.0,
            min_arc_count=minimum_matching_size,
            max_arc_count=maximum_matching_size,
            cost_functions=[CostFunction(cost, objective_weight=1.0)],
        )
        self.solution_type: Optional[SolutionType] = None
        self.matching: Optional[Matching] = None

    @property
    def minimum_matching_size(self) -> int:
        return self._task.min_arc_count

    @property
    def maximum_matching_size(self) -> Union[int, float]:
        return self._task.max_arc_count

    def run(self, solver: Solver) -> SolutionType:
        """Solve the matching problem.

        Afterwards `matching` holds an optimal matching (``OPTIMAL``), a valid
        but possibly suboptimal one (``FEASIBLE``), or None.
        """
        self.solution_type = self._task.run(solver)
        self.matching = _to_matching(self.graph, self._task.result_graph)
        return self.solution_type


class LpMaximumMatching:
    """Maximum-cardinality matching via integer programming."""

    def __init__(
        self,
        graph: Graph,
        minimum_matching_size: int = 0,
        maximum_matching_size: Union[int, float] = math.inf,
    ) -> None:
        self.graph = graph
        # Unit reward per arc
        self._task = OptimalSubgraph(
            graph,
            max_degree=1.0,
            min_arc_count=minimum_matching_size,
            max_arc_count=maximum_matching_size,
            cost_functions=[CostFunction(lambda _arc: 1.0, objective_weight=-1.0)],
        )
        self.solution_type: Optional[SolutionType] = None
        self.matching: Optional[Matching] = None

    def run(self, solver: Solver) -> SolutionType:
        self.solution_type = self._task.run(solver)
        self.matching = _to_matching(self.graph, self._task.result_graph)
        return self.solution_type
