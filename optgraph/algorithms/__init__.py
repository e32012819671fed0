"""Graph algorithms that operate on the `Graph` contract."""

from optgraph.algorithms.bellman_ford import BellmanFord

__all__ = ["BellmanFord"]
