"""Read-only graph contract shared by storage graphs, adapters and subgraphs.

Every arc has a tail (`u`) and a head (`v`). A graph decides per arc whether
the arc behaves as a directed arc or as an edge; queries take an `ArcFilter`
describing which incident arcs they want to see. Queries about nodes or arcs
that do not belong to the graph return `Node.INVALID`, ``False``, ``None`` or
an empty result instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional

from optgraph.types.base import ArcFilter
from optgraph.types.ids import Arc, Node

PropertyMap = Dict[str, Any]


class Graph(ABC):
    """Abstract graph.

    Subclasses implement the structural queries. Property maps are stored per
    graph instance; adapters may fall back to their base graph.
    """

    def __init__(self) -> None:
        self._node_properties: Dict[Node, PropertyMap] = {}
        self._arc_properties: Dict[Arc, PropertyMap] = {}

    #
    # Structure
    #
    @abstractmethod
    def u(self, arc: Arc) -> Node:
        """Return the tail of ``arc``, or `Node.INVALID` for a foreign arc."""

    @abstractmethod
    def v(self, arc: Arc) -> Node:
        """Return the head of ``arc``, or `Node.INVALID` for a foreign arc."""

    @abstractmethod
    def is_edge(self, arc: Arc) -> bool:
        """Return True if ``arc`` behaves as an undirected edge."""

    @abstractmethod
    def nodes(self) -> Iterator[Node]:
        """Iterate over all nodes."""

    @abstractmethod
    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        """Iterate over all arcs; ``EDGE`` keeps only edges."""

    @abstractmethod
    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        """Iterate over the arcs touching ``u`` that pass ``filter``.

        A loop arc is reported once.
        """

    @abstractmethod
    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        """Iterate over the arcs connecting ``u`` and ``v``.

        The filter is relative to ``u``: ``FORWARD`` yields arcs from ``u`` to
        ``v`` (and edges), ``BACKWARD`` arcs from ``v`` to ``u`` (and edges).
        """

    @abstractmethod
    def has_node(self, node: Node) -> bool: ...

    @abstractmethod
    def has_arc(self, arc: Arc) -> bool: ...

    def tail(self, arc: Arc) -> Node:
        return self.u(arc)

    def head(self, arc: Arc) -> Node:
        return self.v(arc)

    def other(self, arc: Arc, node: Node) -> Node:
        """Return the endpoint of ``arc`` opposite to ``node``."""
        u = self.u(arc)
        return self.v(arc) if u == node else u

    def node_count(self) -> int:
        return sum(1 for _ in self.nodes())

    def arc_count(self, filter: ArcFilter = ArcFilter.ALL) -> int:
        return sum(1 for _ in self.arcs(filter))

    def incident_arc_count(self, u: Node, filter: ArcFilter = ArcFilter.ALL) -> int:
        return sum(1 for _ in self.incident_arcs(u, filter))

    def arc_count_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> int:
        return sum(1 for _ in self.arcs_between(u, v, filter))

    def matches_filter(self, arc: Arc, node: Node, filter: ArcFilter) -> bool:
        """Check whether ``arc``, seen from ``node``, passes ``filter``."""
        if filter == ArcFilter.ALL or self.is_edge(arc):
            return True
        if filter == ArcFilter.EDGE:
            return False
        if filter == ArcFilter.FORWARD:
            return self.u(arc) == node
        return self.v(arc) == node

    #
    # Properties
    #
    def node_properties(self, node: Node) -> Optional[PropertyMap]:
        """Return the property map attached to ``node``, or None if never set."""
        return self._node_properties.get(node)

    def arc_properties(self, arc: Arc) -> Optional[PropertyMap]:
        """Return the property map attached to ``arc``, or None if never set."""
        return self._arc_properties.get(arc)

    def set_node_properties(
        self, node: Node, properties: Optional[PropertyMap]
    ) -> None:
        """Attach ``properties`` to ``node``; None detaches the map.

        Raises:
            ValueError: If the node does not belong to this graph.
        """
        if not self.has_node(node):
            raise ValueError(f"{node!r} does not belong to this graph.")
        if properties is None:
            self._node_properties.pop(node, None)
        else:
            self._node_properties[node] = properties

    def set_arc_properties(self, arc: Arc, properties: Optional[PropertyMap]) -> None:
        """Attach ``properties`` to ``arc``; None detaches the map.

        Raises:
            ValueError: If the arc does not belong to this graph.
        """
        if not self.has_arc(arc):
            raise ValueError(f"{arc!r} does not belong to this graph.")
        if properties is None:
            self._arc_properties.pop(arc, None)
        else:
            self._arc_properties[arc] = properties
