"""Opaque node and arc identifiers.

Identifiers wrap a plain integer but are deliberately distinct types: a `Node`
never compares equal to an `Arc` or to a bare ``int``, and no arithmetic is
defined on them. Id ``0`` is reserved as the "absent" value of each type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, order=True)
class Node:
    """A graph node, identified by an integer id.

    Ordering follows the id only and carries no meaning beyond giving
    collections of nodes a stable order.
    """

    id: int

    INVALID: ClassVar["Node"]

    @property
    def is_valid(self) -> bool:
        return self.id != 0

    def __repr__(self) -> str:
        return "Node(invalid)" if self.id == 0 else f"Node({self.id})"


@dataclass(frozen=True, order=True)
class Arc:
    """A graph arc, identified by an integer id.

    Whether an arc behaves as a directed arc or as an edge is a property of
    the graph it belongs to, not of the identifier.
    """

    id: int

    INVALID: ClassVar["Arc"]

    @property
    def is_valid(self) -> bool:
        return self.id != 0

    def __repr__(self) -> str:
        return "Arc(invalid)" if self.id == 0 else f"Arc({self.id})"


Node.INVALID = Node(0)
Arc.INVALID = Arc(0)
