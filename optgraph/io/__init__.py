"""Conversion to and from NetworkX graphs and GraphML files."""

from optgraph.io.graphml import NodeShape, load_graphml, save_graphml
from optgraph.io.nx import ArcMap, NodeMap, from_networkx, to_networkx

__all__ = [
    "ArcMap",
    "NodeMap",
    "NodeShape",
    "from_networkx",
    "load_graphml",
    "save_graphml",
    "to_networkx",
]
