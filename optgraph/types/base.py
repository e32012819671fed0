"""Enums shared by graphs, adapters and the optimization layer."""

from __future__ import annotations

from enum import IntEnum
from typing import Type, TypeVar, Union

#: Numeric cost attached to arcs (e.g. distance, weight, price).
Cost = Union[int, float]

_E = TypeVar("_E", bound="_ParsableEnum")


class _ParsableEnum(IntEnum):
    @classmethod
    def from_string(cls: Type[_E], value: str) -> _E:
        """Parse a case-insensitive member name.

        Args:
            value: Member name, e.g. ``"directed"`` or ``"FORWARD"``.

        Returns:
            The matching enum member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid {cls.__name__} '{value}'. Valid values are: {valid}"
            ) from None


class Directedness(_ParsableEnum):
    """Whether a new arc behaves as a directed arc or as an edge."""

    DIRECTED = 1
    UNDIRECTED = 2


class ArcFilter(_ParsableEnum):
    """Which arcs touching a node are visible to a query.

    The filter belongs to the query, not to the arc. Edges satisfy every
    filter, including ``FORWARD`` and ``BACKWARD`` at either endpoint.
    """

    #: Every arc.
    ALL = 1
    #: Only arcs that behave as edges.
    EDGE = 2
    #: Arcs leaving the queried node, plus edges.
    FORWARD = 3
    #: Arcs entering the queried node, plus edges.
    BACKWARD = 4


class SolutionType(_ParsableEnum):
    """Classification of a solver outcome.

    Only ``FEASIBLE`` and ``OPTIMAL`` come with variable values.
    """

    INFEASIBLE = 1
    UNBOUNDED = 2
    #: A valid solution that is not proven optimal (e.g. a time limit was hit).
    FEASIBLE = 3
    OPTIMAL = 4

    @property
    def has_solution(self) -> bool:
        return self in (SolutionType.FEASIBLE, SolutionType.OPTIMAL)
