"""Bellman-Ford shortest paths with arbitrary (possibly negative) arc costs."""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional

from optgraph.graph.base import Graph
from optgraph.logging import get_logger
from optgraph.types.base import ArcFilter, Cost
from optgraph.types.ids import Arc, Node

logger = get_logger(__name__)


class BellmanFord:
    """Single- or multi-source shortest paths computed at construction.

    Arcs are traversed in their forward direction; edges in both directions.
    If a negative cycle is reachable from the sources, `negative_cycle` holds
    its arcs and the reported distances are meaningless.

    Attributes:
        graph: The input graph.
        cost: Cost of each arc.
        negative_cycle: Arcs of a reachable negative cycle in traversal
            order, or None.
    """

    def __init__(
        self,
        graph: Graph,
        cost: Callable[[Arc], Cost],
        sources: Iterable[Node],
    ) -> None:
        self.graph = graph
        self.cost = cost
        self.negative_cycle: Optional[List[Arc]] = None
        self._distance: Dict[Node, float] = {}
        # Sources map to None
        self._parent_arc: Dict[Node, Optional[Arc]] = {}
        self._run(sources)

    def _run(self, sources: Iterable[Node]) -> None:
        graph = self.graph
        for source in sources:
            if graph.has_node(source):
                self._distance[source] = 0.0
                self._parent_arc[source] = None

        node_count = graph.node_count()
        last_changed: Optional[Node] = None
        for _ in range(node_count):
            last_changed = None
            for node in list(self._distance):
                node_distance = self._distance[node]
                for arc in graph.incident_arcs(node, ArcFilter.FORWARD):
                    neighbor = graph.other(arc, node)
                    candidate = node_distance + self.cost(arc)
                    if candidate < self._distance.get(neighbor, math.inf):
                        self._distance[neighbor] = candidate
                        self._parent_arc[neighbor] = arc
                        last_changed = neighbor
            if last_changed is None:
                return
        if last_changed is None:
            return

        # Still relaxing after node_count passes
        self.negative_cycle = self._extract_cycle(last_changed, node_count)
        logger.debug("Negative cycle detected: %s", self.negative_cycle)

    def _extract_cycle(self, start: Node, node_count: int) -> Optional[List[Arc]]:
        # Walk back far enough to be certain we are on the cycle
        node = start
        for _ in range(node_count):
            arc = self._parent_arc.get(node)
            if arc is None:
                return None
            node = self.graph.other(arc, node)

        cycle: List[Arc] = []
        current = node
        while True:
            arc = self._parent_arc[current]
            cycle.append(arc)
            current = self.graph.other(arc, current)
            if current == node:
                break
        cycle.reverse()
        return cycle

    def reached(self, node: Node) -> bool:
        """Return True if ``node`` is reachable from a source."""
        return node in self._distance

    def distance(self, node: Node) -> float:
        """Return the shortest distance to ``node``, or infinity if unreached."""
        return self._distance.get(node, math.inf)

    def parent_arc(self, node: Node) -> Optional[Arc]:
        """Return the last arc of a shortest path to ``node``.

        None for sources and unreached nodes.
        """
        return self._parent_arc.get(node)

    def path(self, node: Node) -> Optional[List[Arc]]:
        """Return the arcs of a shortest path from a source to ``node``.

        Returns:
            The arcs in traversal order (empty for a source), or None if
            ``node`` is unreached.

        Raises:
            ValueError: If a negative cycle was found.
        """
        if self.negative_cycle is not None:
            raise ValueError("Shortest paths are undefined: negative cycle found.")
        if node not in self._distance:
            return None
        arcs: List[Arc] = []
        arc = self._parent_arc[node]
        while arc is not None:
            arcs.append(arc)
            node = self.graph.other(arc, node)
            arc = self._parent_arc[node]
        arcs.reverse()
        return arcs
