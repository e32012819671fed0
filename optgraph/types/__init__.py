"""Identifier types and enums."""

from optgraph.types.base import ArcFilter, Cost, Directedness, SolutionType
from optgraph.types.ids import Arc, Node

__all__ = [
    "Arc",
    "ArcFilter",
    "Cost",
    "Directedness",
    "Node",
    "SolutionType",
]
