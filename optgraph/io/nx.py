"""NetworkX graph conversion utilities.

Convert between NetworkX graphs and `optgraph` graphs. Node names of the
NetworkX graph (any hashable) are mapped to `Node` identifiers; edges map to
`Arc` identifiers. Node and edge attribute dicts become property maps.

Example:
    >>> import networkx as nx
    >>> from optgraph.io.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.Graph()
    >>> G.add_edge("A", "B", cost=3)
    >>> graph, node_map, arc_map = from_networkx(G)
    >>> graph.is_edge(next(graph.arcs()))
    True
    >>> G_out = to_networkx(graph, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Optional, Tuple, Union

import networkx as nx

from optgraph.graph.base import Graph
from optgraph.graph.custom import CustomGraph
from optgraph.types.base import Directedness
from optgraph.types.ids import Arc, Node

NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]

#: Edge attribute carrying per-arc directedness in exported graphs.
DIRECTED_ATTR = "directed"

# Type alias for edge references: (source_node, target_node, edge_key)
EdgeRef = Tuple[Hashable, Hashable, Any]


@dataclass
class NodeMap:
    """Bidirectional mapping between external node names and `Node` ids.

    Attributes:
        to_node: Maps original node names to nodes.
        to_name: Maps nodes back to original node names.
    """

    to_node: Dict[Hashable, Node] = field(default_factory=dict)
    to_name: Dict[Node, Hashable] = field(default_factory=dict)

    def add(self, name: Hashable, node: Node) -> None:
        self.to_node[name] = node
        self.to_name[node] = name

    def name(self, node: Node) -> Hashable:
        """Return the external name of ``node``, defaulting to its id."""
        return self.to_name.get(node, node.id)

    def __len__(self) -> int:
        return len(self.to_node)


@dataclass
class ArcMap:
    """Mapping between arcs and the NetworkX edges they were created from."""

    to_ref: Dict[Arc, EdgeRef] = field(default_factory=dict)
    from_ref: Dict[EdgeRef, Arc] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)


def from_networkx(G: NxGraph) -> Tuple[CustomGraph, NodeMap, ArcMap]:
    """Convert a NetworkX graph into a `CustomGraph`.

    Edges of undirected NetworkX graphs become edges. Edges of directed graphs
    become directed arcs unless they carry ``directed=False``.
    Nodes are created in ``sorted(G.nodes(), key=str)`` order.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).

    Returns:
        Tuple of (graph, node_map, arc_map).

    Raises:
        TypeError: If G is not a NetworkX graph.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    graph = CustomGraph()
    node_map = NodeMap()
    arc_map = ArcMap()

    for name in sorted(G.nodes(), key=str):
        attrs = dict(G.nodes[name])
        node_map.add(name, graph.add_node(properties=attrs or None))

    if G.is_multigraph():
        edges_iter = G.edges(keys=True, data=True)
    else:
        edges_iter = ((u, v, 0, d) for u, v, d in G.edges(data=True))

    for u, v, key, data in edges_iter:
        attrs = dict(data)
        directed = G.is_directed() and bool(attrs.pop(DIRECTED_ATTR, True))
        arc = graph.add_arc(
            node_map.to_node[u],
            node_map.to_node[v],
            Directedness.DIRECTED if directed else Directedness.UNDIRECTED,
            properties=attrs or None,
        )
        ref: EdgeRef = (u, v, key)
        arc_map.to_ref[arc] = ref
        arc_map.from_ref[ref] = arc

    return graph, node_map, arc_map


def to_networkx(graph: Graph, node_map: Optional[NodeMap] = None) -> nx.MultiDiGraph:
    """Convert any `Graph` into a NetworkX MultiDiGraph.

    Nodes are named through ``node_map`` when given, otherwise by their id.
    Edge keys are arc ids; every edge gets a boolean ``directed`` attribute
    next to the arc's properties.

    Args:
        graph: Graph to convert (storage graph, adapter or subgraph).
        node_map: Optional mapping restoring original node names.

    Returns:
        nx.MultiDiGraph mirroring the structure and properties of ``graph``.
    """
    G = nx.MultiDiGraph()

    def name(node: Node) -> Hashable:
        return node_map.name(node) if node_map is not None else node.id

    for node in graph.nodes():
        G.add_node(name(node), **(graph.node_properties(node) or {}))

    for arc in graph.arcs():
        attrs = dict(graph.arc_properties(arc) or {})
        attrs[DIRECTED_ATTR] = not graph.is_edge(arc)
        u, v = name(graph.u(arc)), name(graph.v(arc))
        G.add_edge(u, v, key=arc.id)
        G.edges[u, v, arc.id].update(attrs)

    return G

