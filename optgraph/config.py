"""Configuration classes for optgraph components."""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Optional


# HiGHS stores integer options as 32-bit ints
_MAX_NODE_LIMIT = 2**31 - 1


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass
class SolverConfig:
    """Options forwarded to the HiGHS backend of `ScipyMilpSolver`."""

    # Wall-clock limit in seconds; None means no limit
    time_limit: Optional[float] = None

    # Relative MIP optimality gap at which branch-and-bound stops
    mip_rel_gap: Optional[float] = None

    # Maximum number of branch-and-bound nodes
    node_limit: Optional[int] = None

    presolve: bool = True

    # Print solver progress
    disp: bool = False

    def __post_init__(self) -> None:
        for name in ("time_limit", "mip_rel_gap"):
            value = getattr(self, name)
            if value is None:
                continue
            if _is_number(value):
                try:
                    value = float(value)
                except OverflowError:
                    value = math.nan
            if not isinstance(value, float) or math.isnan(value) or value < 0:
                raise ValueError(
                    f"{name} must be a non-negative number, got {getattr(self, name)!r}"
                )
        if self.node_limit is not None and (
            isinstance(self.node_limit, bool)
            or not isinstance(self.node_limit, numbers.Integral)
            or not 0 <= self.node_limit <= _MAX_NODE_LIMIT
        ):
            raise ValueError(
                f"node_limit must be an integer in [0, {_MAX_NODE_LIMIT}], "
                f"got {self.node_limit!r}"
            )
        for name in ("presolve", "disp"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean, got {getattr(self, name)!r}")

    def to_options(self) -> Dict[str, Any]:
        """Build the ``options`` mapping accepted by ``scipy.optimize.milp``."""
        options: Dict[str, Any] = {"presolve": self.presolve, "disp": self.disp}
        if self.time_limit is not None:
            options["time_limit"] = float(self.time_limit)
        if self.mip_rel_gap is not None:
            options["mip_rel_gap"] = float(self.mip_rel_gap)
        if self.node_limit is not None:
            options["node_limit"] = int(self.node_limit)
        return options

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverConfig":
        """Create a config from a mapping.

        Raises:
            ValueError: On unknown keys or values of the wrong type.
        """
        allowed = set(cls.__dataclass_fields__)
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(
                f"Unrecognized solver option(s): {', '.join(sorted(map(str, unknown)))}"
            )
        return cls(**data)


@dataclass
class SubgraphConfig:
    """Defaults for decoding solver values into result subgraphs."""

    # An arc is selected when its variable value reaches this threshold
    selection_threshold: float = 0.5


# Global configuration instances
SOLVER_CONFIG = SolverConfig()
SUBGRAPH_CONFIG = SubgraphConfig()
