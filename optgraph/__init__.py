"""optgraph: graph optimization library.

optgraph models directed, undirected and mixed multigraphs behind one graph
contract and finds minimum-cost subgraphs under per-node degree bounds and
global size bounds by integer programming.

Primary API:
    CustomGraph, CompleteGraph - Graph realizations
    Supergraph, UndirectedGraph - Non-copying views over a graph
    Subgraph, Matching - Arc selections of a graph
    OptimalSubgraph - Degree-constrained minimum-cost subgraph
    LpMinimumCostMatching, LpMaximumMatching - Matchings via integer programming
    BellmanFord - Shortest paths with negative costs
    from_networkx(), to_networkx(), load_graphml(), save_graphml() - Format I/O

Example:
    from optgraph import CompleteGraph, CostFunction, OptimalSubgraph, ScipyMilpSolver

    graph = CompleteGraph(4)
    task = OptimalSubgraph(
        graph,
        max_degree=1,
        min_arc_count=2,
        cost_functions=[CostFunction(lambda arc: arc.id)],
    )
    task.run(ScipyMilpSolver())
    selected = list(task.result_graph.arcs())
"""

from __future__ import annotations

from optgraph import cli, logging
from optgraph._version import __version__
from optgraph.adapters import Supergraph, UndirectedGraph
from optgraph.algorithms import BellmanFord
from optgraph.config import (
    SOLVER_CONFIG,
    SUBGRAPH_CONFIG,
    SolverConfig,
    SubgraphConfig,
)
from optgraph.graph import CompleteGraph, CustomGraph, Graph, Matching, Subgraph
from optgraph.io import (
    NodeMap,
    NodeShape,
    from_networkx,
    load_graphml,
    save_graphml,
    to_networkx,
)
from optgraph.lp import (
    CostFunction,
    LpMaximumMatching,
    LpMinimumCostMatching,
    OptimalSubgraph,
    ScipyMilpSolver,
    Solver,
    SolverError,
)
from optgraph.problem import ProblemSpec, load_problem
from optgraph.types import Arc, ArcFilter, Directedness, Node, SolutionType

__all__ = [
    # Version
    "__version__",
    # Types
    "Arc",
    "ArcFilter",
    "Directedness",
    "Node",
    "SolutionType",
    # Graphs
    "Graph",
    "CustomGraph",
    "CompleteGraph",
    "Supergraph",
    "UndirectedGraph",
    "Subgraph",
    "Matching",
    # Optimization
    "CostFunction",
    "OptimalSubgraph",
    "LpMinimumCostMatching",
    "LpMaximumMatching",
    "Solver",
    "ScipyMilpSolver",
    "SolverError",
    "BellmanFord",
    # Configuration
    "SolverConfig",
    "SubgraphConfig",
    "SOLVER_CONFIG",
    "SUBGRAPH_CONFIG",
    "ProblemSpec",
    "load_problem",
    # Format I/O
    "NodeMap",
    "NodeShape",
    "from_networkx",
    "to_networkx",
    "load_graphml",
    "save_graphml",
    # Utilities
    "cli",
    "logging",
]
