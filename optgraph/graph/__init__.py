"""Graph contract and concrete graph realizations."""

from optgraph.graph.base import Graph, PropertyMap
from optgraph.graph.complete import CompleteGraph
from optgraph.graph.custom import CustomGraph
from optgraph.graph.subgraph import Matching, Subgraph

__all__ = [
    "CompleteGraph",
    "CustomGraph",
    "Graph",
    "Matching",
    "PropertyMap",
    "Subgraph",
]
