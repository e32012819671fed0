"""Synthetic complete graph computed from closed-form index arithmetic.

Nodes are ``Node(1) .. Node(n)``. The arc from the node with index ``x`` to
the node with index ``y`` has id ``1 + y * n + x``; in the undirected case the
pair is first canonicalized so that ``x < y``. Nothing is stored per node or
per arc, so memory use does not depend on ``n``.
"""

from __future__ import annotations

from typing import Iterator

from optgraph.graph.base import Graph
from optgraph.types.base import ArcFilter, Directedness
from optgraph.types.ids import Arc, Node

#: Largest identifier value; keeps ids within a signed 64-bit range.
MAX_ID = 2**63 - 1


class CompleteGraph(Graph):
    """A complete directed or undirected graph on ``node_count`` nodes.

    The directed variant has an arc in both directions between every pair of
    distinct nodes, the undirected variant a single edge. There are no loops.
    """

    def __init__(
        self,
        node_count: int,
        directedness: Directedness = Directedness.UNDIRECTED,
    ) -> None:
        """Create the graph.

        Args:
            node_count: Number of nodes, at least 1.
            directedness: Whether arcs are directed or behave as edges.

        Raises:
            ValueError: If ``node_count`` is not a positive integer or the arc
                ids would exceed `MAX_ID`.
        """
        super().__init__()
        if isinstance(node_count, bool) or not isinstance(node_count, int):
            raise ValueError(f"Invalid node count: {node_count!r}")
        if node_count <= 0:
            raise ValueError(f"Invalid node count: {node_count}")
        # The largest arc id is n * n
        if node_count * node_count > MAX_ID:
            raise ValueError(f"Too many nodes: {node_count}")

        self._node_count = node_count
        self.directed = directedness == Directedness.DIRECTED

    @staticmethod
    def get_node(index: int) -> Node:
        """Return the node with the given 0-based index."""
        return Node(1 + index)

    @staticmethod
    def get_node_index(node: Node) -> int:
        """Return the 0-based index of ``node``."""
        return node.id - 1

    def get_arc(self, u: Node, v: Node) -> Arc:
        """Return the arc from ``u`` to ``v``.

        For undirected graphs ``get_arc(u, v) == get_arc(v, u)``.
        Returns `Arc.INVALID` if ``u == v`` or either node is foreign.
        """
        if u == v or not self.has_node(u) or not self.has_node(v):
            return Arc.INVALID
        x = self.get_node_index(u)
        y = self.get_node_index(v)
        if not self.directed and x > y:
            x, y = y, x
        return self._arc_for(x, y)

    def _arc_for(self, x: int, y: int) -> Arc:
        return Arc(1 + y * self._node_count + x)

    def u(self, arc: Arc) -> Node:
        if not self.has_arc(arc):
            return Node.INVALID
        return Node(1 + (arc.id - 1) % self._node_count)

    def v(self, arc: Arc) -> Node:
        if not self.has_arc(arc):
            return Node.INVALID
        return Node(1 + (arc.id - 1) // self._node_count)

    def is_edge(self, arc: Arc) -> bool:
        return not self.directed

    def nodes(self) -> Iterator[Node]:
        for i in range(self._node_count):
            yield self.get_node(i)

    def arcs(self, filter: ArcFilter = ArcFilter.ALL) -> Iterator[Arc]:
        n = self._node_count
        if self.directed:
            if filter == ArcFilter.EDGE:
                return
            for i in range(n):
                for j in range(n):
                    if i != j:
                        yield self._arc_for(i, j)
        else:
            for i in range(n):
                for j in range(i + 1, n):
                    yield self._arc_for(i, j)

    def incident_arcs(
        self, u: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if not self.has_node(u):
            return
        if self.directed:
            if filter == ArcFilter.EDGE:
                return
            if filter != ArcFilter.FORWARD:
                for w in self.nodes():
                    if w != u:
                        yield self.get_arc(w, u)
        if not self.directed or filter != ArcFilter.BACKWARD:
            for w in self.nodes():
                if w != u:
                    yield self.get_arc(u, w)

    def arcs_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> Iterator[Arc]:
        if u == v or not self.has_node(u) or not self.has_node(v):
            return
        if self.directed:
            if filter == ArcFilter.EDGE:
                return
            if filter != ArcFilter.FORWARD:
                yield self.get_arc(v, u)
        if not self.directed or filter != ArcFilter.BACKWARD:
            yield self.get_arc(u, v)

    def node_count(self) -> int:
        return self._node_count

    def arc_count(self, filter: ArcFilter = ArcFilter.ALL) -> int:
        n = self._node_count
        if self.directed:
            return 0 if filter == ArcFilter.EDGE else n * (n - 1)
        return n * (n - 1) // 2

    def incident_arc_count(self, u: Node, filter: ArcFilter = ArcFilter.ALL) -> int:
        if not self.has_node(u):
            return 0
        n = self._node_count
        if not self.directed:
            return n - 1
        if filter == ArcFilter.ALL:
            return 2 * (n - 1)
        if filter == ArcFilter.EDGE:
            return 0
        return n - 1

    def arc_count_between(
        self, u: Node, v: Node, filter: ArcFilter = ArcFilter.ALL
    ) -> int:
        if u == v or not self.has_node(u) or not self.has_node(v):
            return 0
        if not self.directed:
            return 1
        if filter == ArcFilter.ALL:
            return 2
        if filter == ArcFilter.EDGE:
            return 0
        return 1

    def has_node(self, node: Node) -> bool:
        return 1 <= node.id <= self._node_count

    def has_arc(self, arc: Arc) -> bool:
        n = self._node_count
        if not 1 <= arc.id <= n * n:
            return False
        x = (arc.id - 1) % n
        y = (arc.id - 1) // n
        if self.directed:
            return x != y
        return x < y
