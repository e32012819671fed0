"""Arc-subsets of a base graph: `Subgraph` and its `Matching` specialization."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from optgraph.graph.base import Graph, PropertyMap
from optgraph.types.base import ArcFilter
from optgraph.types.ids import Arc, Node


class Subgraph(Graph):
    """A base graph restricted to an explicitly enabled set of arcs.

    Nodes are always all nodes of the base graph. Arcs start out disabled and
    are switched on with `enable`. Structural and property queries about an
    arc delegate to the base graph; an arc is visible only if it is enabled
    and still present in the base graph.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self._graph = graph
        # Ordered set of enabled arcs
        self._enabled: Dict[Arc, None] = {}

    @property
    def graph(self) -> Graph:
        """The underlying base graph."""
        return self._graph

    def enable(self, arc: Arc, enabled: bool = True) -> None:
        """Set whether ``arc`` belongs to the subgraph."""
        if enabled:
            self._enabled[arc] = None
        else:
            self._enabled.pop(arc, None)

    def is_enabled(self, arc: Arc) -> bool:
        return arc in self._enabled

    def u(self, arc: Arc) -> Node:
        return self._graph.u(arc)

    def v(self, arc: Arc) -> Node:
        return self._graph.v(arc)

    def is_edge(self, arc: Arc) -> bool:
        return self._graph.is_edge(arc)

    def node_properties(self, node: Node) -> Optional[PropertyMap]:
        return self._graph.node_properties(node)

    def arc_properties(self, arc: Arc) -> Optional[PropertyMap]:
        return self._graph.arc_properties(arc)

    def set_node_properties(
        self, node: Node, properties: Optional[PropertyMap]
    ) -> None:
        raise TypeError("Subgraph is read-only apart from enable().")

    def set_arc_properties(self, arc: Arc, properties: Optional[PropertyMap]) -> None:
        raise TypeError("Subgraph is read-only apart from enable().")

    def nodes(self) -> Iterator[Node]:
        return self._graph.nodes()

    def node_count(self) -> int:
        return self._graph.node_count()

    def has_node(self, node: Node) -> bool:
        return self._graph.has_node(node)

    def has_arc(self, arc: Arc) -> bool:
        return arc in self._enabled and self._graph.has_arc(arc)

    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        for arc in list(self._enabled):
            if not self._graph.has_arc(arc):
                continue
            if filter == ArcFilter.EDGE and not self._graph.is_edge(arc):
                continue
            yield arc

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        for arc in self.arcs():
            if (self.u(arc) == u or self.v(arc) == u) and self.matches_filter(
                arc, u, filter
            ):
                yield arc

    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        for arc in self.arcs():
            tail, head = self.u(arc), self.v(arc)
            if ((tail, head) == (u, v) or (tail, head) == (v, u)) and (
                self.matches_filter(arc, u, filter)
            ):
                yield arc


class Matching(Subgraph):
    """A subgraph in which every node touches at most one enabled arc."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._matched: Dict[Node, Arc] = {}

    def enable(self, arc: Arc, enabled: bool = True) -> None:
        """Add ``arc`` to, or remove it from, the matching.

        Raises:
            ValueError: If ``arc`` is foreign or a loop, or if one of its
                endpoints is already matched by a different arc.
        """
        if not enabled:
            if arc in self._enabled:
                del self._enabled[arc]
                for node in (self.u(arc), self.v(arc)):
                    if self._matched.get(node) == arc:
                        del self._matched[node]
            return

        if arc in self._enabled:
            return
        if not self._graph.has_arc(arc):
            raise ValueError(f"{arc!r} does not belong to the base graph.")
        u, v = self.u(arc), self.v(arc)
        if u == v:
            raise ValueError(f"Loop {arc!r} cannot be part of a matching.")
        for node in (u, v):
            other = self.matched_arc(node)
            if other is not None:
                raise ValueError(f"{node!r} is already matched by {other!r}.")

        self._enabled[arc] = None
        self._matched[u] = arc
        self._matched[v] = arc

    def matched_arc(self, node: Node) -> Optional[Arc]:
        """Return the enabled arc touching ``node``, or None if unmatched."""
        arc = self._matched.get(node)
        if arc is None or not self._graph.has_arc(arc):
            return None
        return arc

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        arc = self.matched_arc(u)
        if arc is not None and self.matches_filter(arc, u, filter):
            yield arc

    def is_perfect(self) -> bool:
        """Return True if every node of the base graph is matched."""
        return all(self.matched_arc(node) is not None for node in self.nodes())
