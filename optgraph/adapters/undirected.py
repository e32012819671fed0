"""Adapter presenting every arc of a base graph as an edge."""

from __future__ import annotations

from typing import Iterator, Optional

from optgraph.graph.base import Graph, PropertyMap
from optgraph.types.base import ArcFilter
from optgraph.types.ids import Arc, Node


class UndirectedGraph(Graph):
    """Read-through view of ``graph`` in which `is_edge` is always True.

    Since every arc behaves as an edge, no filter hides an arc. Property maps
    set on the adapter shadow the base graph's; otherwise lookups fall back to
    the base graph. Nothing about the base graph is cached.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    def node_properties(self, node: Node) -> Optional[PropertyMap]:
        own = self._node_properties.get(node)
        return own if own is not None else self._graph.node_properties(node)

    def arc_properties(self, arc: Arc) -> Optional[PropertyMap]:
        own = self._arc_properties.get(arc)
        return own if own is not None else self._graph.arc_properties(arc)

    def u(self, arc: Arc) -> Node:
        return self._graph.u(arc)

    def v(self, arc: Arc) -> Node:
        return self._graph.v(arc)

    def is_edge(self, arc: Arc) -> bool:
        return True

    def nodes(self) -> Iterator[Node]:
        return self._graph.nodes()

    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        return self._graph.arcs()

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        return self._graph.incident_arcs(u)

    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        return self._graph.arcs_between(u, v)

    def node_count(self) -> int:
        return self._graph.node_count()

    def arc_count(self, filter: ArcFilter = ArcFilter.ALL) -> int:
        return self._graph.arc_count()

    def incident_arc_count(self, u: Node, filter: ArcFilter = ArcFilter.ALL) -> int:
        return self._graph.incident_arc_count(u)

    def arc_count_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> int:
        return self._graph.arc_count_between(u, v)

    def has_node(self, node: Node) -> bool:
        return self._graph.has_node(node)

    def has_arc(self, arc: Arc) -> bool:
        return self._graph.has_arc(arc)
