"""Shared fixtures.

Graph fixtures are built on `CustomGraph`, whose sequential id allocation
makes the nodes ``Node(1)..`` and arcs ``Arc(1)..`` in creation order.
"""

from __future__ import annotations

import pytest

from optgraph.graph.custom import CustomGraph
from optgraph.lp.solver import ScipyMilpSolver
from optgraph.types.base import Directedness


@pytest.fixture
def mixed_graph() -> CustomGraph:
    # Arcs:
    #   1: 1 -> 2
    #   2: 2 -- 3   (edge)
    #   3: 3 -> 1
    #   4: 3 -> 3   (loop)
    #   5: 1 -> 2   (parallel to 1)
    # Node 4 is isolated.
    g = CustomGraph()
    n1, n2, n3, _n4 = (g.add_node() for _ in range(4))
    g.add_arc(n1, n2)
    g.add_arc(n2, n3, Directedness.UNDIRECTED)
    g.add_arc(n3, n1)
    g.add_arc(n3, n3)
    g.add_arc(n1, n2)
    return g


@pytest.fixture
def square_graph() -> CustomGraph:
    # Undirected 4-cycle with a diagonal; "cost" on every edge.
    #
    #   1 --[1]-- 2
    #   |       / |
    #  [4]  [2]  [3]
    #   |  /      |
    #   4 --[5]-- 3
    g = CustomGraph()
    nodes = [g.add_node(properties={"name": name}) for name in "ABCD"]
    for (i, j), cost in {
        (0, 1): 1.0,
        (1, 2): 3.0,
        (2, 3): 5.0,
        (3, 0): 4.0,
        (1, 3): 2.0,
    }.items():
        g.add_arc(nodes[i], nodes[j], Directedness.UNDIRECTED, {"cost": cost})
    return g


@pytest.fixture
def solver() -> ScipyMilpSolver:
    return ScipyMilpSolver()
