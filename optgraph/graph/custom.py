"""Materialized graph with explicit adjacency storage.

`CustomGraph` keeps its adjacency in a `networkx.MultiDiGraph` keyed by the
`Node`/`Arc` identifiers, and an arc index mapping each arc to its endpoints
and directedness. Nodes and arcs can be added and removed at any time;
adapters built on top of a `CustomGraph` observe such changes immediately.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

import networkx as nx

from optgraph.graph.base import Graph, PropertyMap
from optgraph.types.base import ArcFilter, Directedness
from optgraph.types.ids import Arc, Node

# (tail, head, is_edge)
ArcTuple = Tuple[Node, Node, bool]


def _check_id(value: int, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Invalid {kind} id: {value!r} (must be a positive integer).")
    return value


class CustomGraph(Graph):
    """A mutable multigraph mixing directed arcs and edges.

    This class enforces:
      - No automatic creation of missing nodes when adding an arc.
      - No duplicate node or arc ids (explicit ids are validated).
      - Identifiers are allocated from monotonically increasing counters;
        removed ids are not reused by automatic allocation.
    """

    def __init__(self) -> None:
        super().__init__()
        self._adj = nx.MultiDiGraph()
        self._arcs: Dict[Arc, ArcTuple] = {}
        # Ordered set of the arcs that behave as edges
        self._edges: Dict[Arc, None] = {}
        self._next_node_id: int = 1
        self._next_arc_id: int = 1

    #
    # Mutation
    #
    def add_node(
        self,
        node_id: Optional[int] = None,
        properties: Optional[PropertyMap] = None,
    ) -> Node:
        """Add a node.

        Args:
            node_id: Explicit positive id; allocated automatically if None.
            properties: Optional property map to attach.

        Returns:
            The new node.

        Raises:
            ValueError: If ``node_id`` is invalid or already in use.
        """
        if node_id is None:
            while Node(self._next_node_id) in self._adj:
                self._next_node_id += 1
            node = Node(self._next_node_id)
            self._next_node_id += 1
        else:
            node = Node(_check_id(node_id, "node"))
            if node in self._adj:
                raise ValueError(f"{node!r} already exists in this graph.")

        self._adj.add_node(node)
        if properties is not None:
            self._node_properties[node] = properties
        return node

    def add_arc(
        self,
        u: Node,
        v: Node,
        directedness: Directedness = Directedness.DIRECTED,
        properties: Optional[PropertyMap] = None,
        arc_id: Optional[int] = None,
    ) -> Arc:
        """Add an arc from ``u`` to ``v``.

        Args:
            u: Tail node. Must exist in the graph.
            v: Head node. Must exist in the graph.
            directedness: ``UNDIRECTED`` makes the arc behave as an edge.
            properties: Optional property map to attach.
            arc_id: Explicit positive id; allocated automatically if None.

        Returns:
            The new arc.

        Raises:
            ValueError: If either node does not exist, or the id is invalid
                or already in use.
        """
        if u not in self._adj:
            raise ValueError(f"Tail node {u!r} does not exist.")
        if v not in self._adj:
            raise ValueError(f"Head node {v!r} does not exist.")

        if arc_id is None:
            while Arc(self._next_arc_id) in self._arcs:
                self._next_arc_id += 1
            arc = Arc(self._next_arc_id)
            self._next_arc_id += 1
        else:
            arc = Arc(_check_id(arc_id, "arc"))
            if arc in self._arcs:
                raise ValueError(f"{arc!r} already exists in this graph.")

        is_edge = directedness == Directedness.UNDIRECTED
        self._adj.add_edge(u, v, key=arc)
        self._arcs[arc] = (u, v, is_edge)
        if is_edge:
            self._edges[arc] = None
        if properties is not None:
            self._arc_properties[arc] = properties
        return arc

    def delete_arc(self, arc: Arc) -> bool:
        """Remove an arc. Returns False if the arc does not exist."""
        entry = self._arcs.pop(arc, None)
        if entry is None:
            return False
        u, v, _ = entry
        self._adj.remove_edge(u, v, key=arc)
        self._edges.pop(arc, None)
        self._arc_properties.pop(arc, None)
        return True

    def delete_node(self, node: Node) -> bool:
        """Remove a node and every arc touching it.

        Returns False if the node does not exist.
        """
        if node not in self._adj:
            return False
        for arc in list(self.incident_arcs(node)):
            self.delete_arc(arc)
        self._adj.remove_node(node)
        self._node_properties.pop(node, None)
        return True

    def clear(self) -> None:
        """Remove every node and arc. Id counters are not reset."""
        self._adj.clear()
        self._arcs.clear()
        self._edges.clear()
        self._node_properties.clear()
        self._arc_properties.clear()

    #
    # Queries
    #
    def u(self, arc: Arc) -> Node:
        entry = self._arcs.get(arc)
        return entry[0] if entry is not None else Node.INVALID

    def v(self, arc: Arc) -> Node:
        entry = self._arcs.get(arc)
        return entry[1] if entry is not None else Node.INVALID

    def is_edge(self, arc: Arc) -> bool:
        return arc in self._edges

    def nodes(self) -> Iterator[Node]:
        return iter(list(self._adj.nodes))

    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        if filter == ArcFilter.EDGE:
            return iter(list(self._edges))
        return iter(list(self._arcs))

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if u not in self._adj:
            return
        for _, _, arc in list(self._adj.out_edges(u, keys=True)):
            if self.matches_filter(arc, u, filter):
                yield arc
        for tail, _, arc in list(self._adj.in_edges(u, keys=True)):
            # Loops were already reported as out-arcs
            if tail != u and self.matches_filter(arc, u, filter):
                yield arc

    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if u not in self._adj or v not in self._adj:
            return
        candidates = list(self._adj.succ[u].get(v, {}))
        if u != v:
            candidates.extend(self._adj.succ[v].get(u, {}))
        for arc in candidates:
            if self.matches_filter(arc, u, filter):
                yield arc

    def node_count(self) -> int:
        return self._adj.number_of_nodes()

    def arc_count(self, filter: ArcFilter = ArcFilter.ALL) -> int:
        if filter == ArcFilter.EDGE:
            return len(self._edges)
        return len(self._arcs)

    def has_node(self, node: Node) -> bool:
        return node in self._adj

    def has_arc(self, arc: Arc) -> bool:
        return arc in self._arcs
