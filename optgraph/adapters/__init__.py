"""Non-copying views over a base graph."""

from optgraph.adapters.supergraph import Supergraph
from optgraph.adapters.undirected import UndirectedGraph

__all__ = ["Supergraph", "UndirectedGraph"]
