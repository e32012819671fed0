"""GraphML import and export.

Graphs are written through NetworkX's GraphML writer as a directed multigraph
(see `to_networkx`). Each arc carries a boolean ``directed`` attribute so that
edges survive the round trip. Node shapes for diagram editors are stored in a
reserved ``shape`` node attribute.

GraphML only supports scalar attribute values: None values are dropped and
non-scalar values (lists, dicts, ...) are written as their string form.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from xml.etree import ElementTree

import networkx as nx

from optgraph.graph.base import Graph
from optgraph.graph.custom import CustomGraph
from optgraph.io.nx import NodeMap, from_networkx, to_networkx
from optgraph.logging import get_logger
from optgraph.types.ids import Node

logger = get_logger(__name__)

#: Reserved node attribute holding the `NodeShape` value.
SHAPE_ATTR = "shape"

PathLike = Union[str, Path]


class NodeShape(str, Enum):
    """Node shapes understood by common GraphML diagram editors (yEd)."""

    RECTANGLE = "rectangle"
    ROUND_RECTANGLE = "roundrectangle"
    ELLIPSE = "ellipse"
    PARALLELOGRAM = "parallelogram"
    HEXAGON = "hexagon"
    TRIANGLE = "triangle"
    RECTANGLE_3D = "rectangle3d"
    OCTAGON = "octagon"
    DIAMOND = "diamond"
    TRAPEZOID = "trapezoid"
    TRAPEZOID_2 = "trapezoid2"

    @classmethod
    def from_string(cls, value: str) -> "NodeShape":
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(shape.value for shape in cls)
            raise ValueError(
                f"Unknown node shape '{value}'. Valid shapes are: {valid}"
            ) from None


def _graphml_value(value: Any) -> Any:
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def _sanitize(attrs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        str(key): _graphml_value(value)
        for key, value in attrs.items()
        if value is not None
    }


def save_graphml(
    graph: Graph,
    path: PathLike,
    node_map: Optional[NodeMap] = None,
    shapes: Optional[Mapping[Node, NodeShape]] = None,
) -> None:
    """Write ``graph`` to a GraphML file.

    Args:
        graph: Graph to export.
        path: Destination file.
        node_map: Optional mapping restoring original node names; nodes are
            named by their id otherwise.
        shapes: Optional node shapes, written as the ``shape`` node attribute.

    Raises:
        ValueError: If ``shapes`` names a node that is not in ``graph``.
        OSError: If the file cannot be written.
    """
    G = to_networkx(graph, node_map)

    for _name, attrs in G.nodes(data=True):
        clean = _sanitize(attrs)
        attrs.clear()
        attrs.update(clean)
    for _u, _v, attrs in G.edges(data=True):
        clean = _sanitize(attrs)
        attrs.clear()
        attrs.update(clean)

    for node, shape in (shapes or {}).items():
        if not graph.has_node(node):
            raise ValueError(f"Cannot assign a shape to unknown node {node!r}")
        name = node_map.name(node) if node_map is not None else node.id
        G.nodes[name][SHAPE_ATTR] = NodeShape(shape).value

    nx.write_graphml(G, str(path))
    logger.debug(
        "Wrote GraphML to %s: %d nodes, %d arcs",
        path,
        G.number_of_nodes(),
        G.number_of_edges(),
    )


def load_graphml(
    path: PathLike,
) -> Tuple[CustomGraph, NodeMap, Dict[Node, NodeShape]]:
    """Read a GraphML file into a `CustomGraph`.

    Node names in the file are preserved in the returned `NodeMap`. Edges of
    files declared undirected, and edges with ``directed=false``, become
    edges. The ``shape`` attribute is moved out of the node properties into
    the returned shape mapping.

    Args:
        path: Source file.

    Returns:
        Tuple of (graph, node_map, shapes).

    Raises:
        ValueError: If the file is not valid GraphML or holds an unknown shape.
        OSError: If the file cannot be read.
    """
    try:
        G = nx.read_graphml(str(path), force_multigraph=True)
    except (nx.NetworkXError, ElementTree.ParseError) as exc:
        raise ValueError(f"Invalid GraphML file {path}: {exc}") from exc

    shape_names: Dict[Any, NodeShape] = {}
    for name, attrs in G.nodes(data=True):
        if SHAPE_ATTR in attrs:
            shape_names[name] = NodeShape.from_string(str(attrs.pop(SHAPE_ATTR)))

    graph, node_map, _arc_map = from_networkx(G)
    shapes = {node_map.to_node[name]: shape for name, shape in shape_names.items()}
    logger.debug(
        "Loaded GraphML from %s: %d nodes, %d arcs",
        path,
        graph.node_count(),
        graph.arc_count(),
    )
    return graph, node_map, shapes
