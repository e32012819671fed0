"""Overlay that extends a base graph with extra nodes and arcs."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from optgraph.graph.base import Graph, PropertyMap
from optgraph.types.base import ArcFilter, Directedness
from optgraph.types.ids import Arc, Node
from optgraph.utils.ids import allocate_id

# (tail, head, is_edge)
ArcTuple = Tuple[Node, Node, bool]


class Supergraph(Graph):
    """A graph made of a base graph plus nodes and arcs added on top of it.

    The base graph is never copied or modified. Added nodes and arcs get
    random 62-bit ids that are checked against both the overlay and the base
    graph at allocation time. Queries return the union of overlay and base
    results; overlay arcs whose base endpoint has since disappeared from the
    base graph are hidden.

    Only overlay-owned nodes and arcs can be deleted through the overlay.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self._graph = graph
        self._nodes: Dict[Node, None] = {}
        self._arcs: Dict[Arc, ArcTuple] = {}
        self._edges: Dict[Arc, None] = {}
        # Overlay arcs by endpoint; keys may be base nodes as well
        self._node_arcs: Dict[Node, Dict[Arc, None]] = {}

    @property
    def graph(self) -> Graph:
        return self._graph

    #
    # Mutation
    #
    def add_node(
        self,
        node_id: Optional[int] = None,
        properties: Optional[PropertyMap] = None,
    ) -> Node:
        """Add a node to the overlay.

        Args:
            node_id: Explicit positive id; allocated randomly if None.
            properties: Optional property map to attach.

        Raises:
            ValueError: If ``node_id`` is invalid or used by the overlay or
                the base graph.
        """
        if node_id is None:
            node = Node(allocate_id(lambda i: self.has_node(Node(i))))
        else:
            if isinstance(node_id, bool) or not isinstance(node_id, int) or node_id <= 0:
                raise ValueError(f"Invalid node id: {node_id!r}")
            node = Node(node_id)
            if self.has_node(node):
                raise ValueError(f"{node!r} already exists in this graph.")

        self._nodes[node] = None
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
        """Add an arc between two nodes of the overlay or the base graph.

        Raises:
            ValueError: If an endpoint does not exist, or ``arc_id`` is
                invalid or already in use.
        """
        if not self.has_node(u):
            raise ValueError(f"Tail node {u!r} does not exist.")
        if not self.has_node(v):
            raise ValueError(f"Head node {v!r} does not exist.")

        if arc_id is None:
            arc = Arc(allocate_id(lambda i: self._is_arc_id_taken(Arc(i))))
        else:
            if isinstance(arc_id, bool) or not isinstance(arc_id, int) or arc_id <= 0:
                raise ValueError(f"Invalid arc id: {arc_id!r}")
            arc = Arc(arc_id)
            if self._is_arc_id_taken(arc):
                raise ValueError(f"{arc!r} already exists in this graph.")

        is_edge = directedness == Directedness.UNDIRECTED
        self._arcs[arc] = (u, v, is_edge)
        if is_edge:
            self._edges[arc] = None
        self._node_arcs.setdefault(u, {})[arc] = None
        self._node_arcs.setdefault(v, {})[arc] = None
        if properties is not None:
            self._arc_properties[arc] = properties
        return arc

    def delete_arc(self, arc: Arc) -> bool:
        """Remove an overlay arc. Returns False for base or unknown arcs."""
        entry = self._arcs.pop(arc, None)
        if entry is None:
            return False
        u, v, _ = entry
        for node in (u, v):
            incident = self._node_arcs.get(node)
            if incident is not None:
                incident.pop(arc, None)
                if not incident:
                    del self._node_arcs[node]
        self._edges.pop(arc, None)
        self._arc_properties.pop(arc, None)
        return True

    def delete_node(self, node: Node) -> bool:
        """Remove an overlay node with its overlay arcs.

        Returns False for base or unknown nodes.
        """
        if node not in self._nodes:
            return False
        for arc in list(self._node_arcs.get(node, {})):
            self.delete_arc(arc)
        del self._nodes[node]
        self._node_properties.pop(node, None)
        return True

    def clear(self) -> None:
        """Remove every overlay node and arc; the base graph is untouched."""
        self._nodes.clear()
        self._arcs.clear()
        self._edges.clear()
        self._node_arcs.clear()
        self._node_properties.clear()
        self._arc_properties.clear()

    #
    # Queries
    #
    def _is_arc_id_taken(self, arc: Arc) -> bool:
        return arc in self._arcs or self._graph.has_arc(arc)

    def _own_arc_alive(self, arc: Arc) -> bool:
        u, v, _ = self._arcs[arc]
        return self.has_node(u) and self.has_node(v)

    def node_properties(self, node: Node) -> Optional[PropertyMap]:
        own = self._node_properties.get(node)
        return own if own is not None else self._graph.node_properties(node)

    def arc_properties(self, arc: Arc) -> Optional[PropertyMap]:
        own = self._arc_properties.get(arc)
        return own if own is not None else self._graph.arc_properties(arc)

    def u(self, arc: Arc) -> Node:
        entry = self._arcs.get(arc)
        return entry[0] if entry is not None else self._graph.u(arc)

    def v(self, arc: Arc) -> Node:
        entry = self._arcs.get(arc)
        return entry[1] if entry is not None else self._graph.v(arc)

    def is_edge(self, arc: Arc) -> bool:
        if arc in self._arcs:
            return arc in self._edges
        return self._graph.is_edge(arc)

    def nodes(self) -> Iterator[Node]:
        yield from self._graph.nodes()
        yield from list(self._nodes)

    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        yield from self._graph.arcs(filter)
        own = self._edges if filter == ArcFilter.EDGE else self._arcs
        for arc in list(own):
            if self._own_arc_alive(arc):
                yield arc

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if not self.has_node(u):
            return
        if self._graph.has_node(u):
            yield from self._graph.incident_arcs(u, filter)
        for arc in list(self._node_arcs.get(u, {})):
            if self._own_arc_alive(arc) and self.matches_filter(arc, u, filter):
                yield arc

    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if not self.has_node(u) or not self.has_node(v):
            return
        if self._graph.has_node(u) and self._graph.has_node(v):
            yield from self._graph.arcs_between(u, v, filter)
        for arc in list(self._node_arcs.get(u, {})):
            tail, head, _ = self._arcs[arc]
            if {tail, head} == {u, v} and self.matches_filter(arc, u, filter):
                yield arc

    def node_count(self) -> int:
        return self._graph.node_count() + len(self._nodes)

    def arc_count(self, filter: ArcFilter = ArcFilter.ALL) -> int:
        own = self._edges if filter == ArcFilter.EDGE else self._arcs
        alive = sum(1 for arc in own if self._own_arc_alive(arc))
        return self._graph.arc_count(filter) + alive

    def has_node(self, node: Node) -> bool:
        return node in self._nodes or self._graph.has_node(node)

    def has_arc(self, arc: Arc) -> bool:
        if arc in self._arcs:
            return self._own_arc_alive(arc)
        return self._graph.has_arc(arc)
