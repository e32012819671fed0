"""YAML problem files for the optimal-subgraph solver.

A problem file describes a graph, degree and size constraints and solver
options. Example::

    nodes: [A, B, C, D]
    arcs:
      - {source: A, target: B, cost: 1}
      - {source: B, target: C, cost: 2, directed: false}
      - {source: C, target: D, cost: 1, label: backbone}
    constraints:
      max_degree: 1
      min_degree: {default: 0, A: 1}
      min_arc_count: 1
    relaxed: false
    solver:
      time_limit: 10

Node names are compared as strings. Endpoints not listed under ``nodes`` are
added in order of first appearance. Arc keys other than ``source``,
``target``, ``directed`` and ``cost`` are kept as arc properties.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from optgraph.config import SolverConfig
from optgraph.graph.custom import CustomGraph
from optgraph.io.nx import NodeMap
from optgraph.logging import get_logger
from optgraph.lp.optimal_subgraph import (
    MAX_ARC_COUNT,
    CostFunction,
    DegreeBound,
    OptimalSubgraph,
)
from optgraph.types.base import Directedness
from optgraph.types.ids import Arc, Node
from optgraph.utils.yaml_utils import normalize_yaml_dict_keys, yaml_name

logger = get_logger(__name__)

#: Arc property holding the arc cost.
COST_ATTR = "cost"

_TOP_LEVEL_KEYS = {
    "nodes",
    "arcs",
    "constraints",
    "relaxed",
    "selection_threshold",
    "solver",
}
_ARC_KEYS = {"source", "target", "directed", COST_ATTR}
_DEGREE_KEYS = (
    "min_degree",
    "max_degree",
    "min_in_degree",
    "max_in_degree",
    "min_out_degree",
    "max_out_degree",
)
_CONSTRAINT_KEYS = set(_DEGREE_KEYS) | {"min_arc_count", "max_arc_count"}


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _to_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"'{what}' is too large: {value}") from None


def _require_mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"'{what}' must be a mapping")
    return value


def _check_keys(data: Dict[str, Any], allowed: set, where: str) -> None:
    extra = set(data) - allowed
    if extra:
        raise ValueError(
            f"Unrecognized key(s) in {where}: {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(allowed)}"
        )


def _parse_degree_bound(
    key: str, value: Any, node_map: NodeMap
) -> DegreeBound:
    if value is None:
        return None
    if _is_number(value):
        return _to_float(value, key)
    if not isinstance(value, dict):
        raise ValueError(
            f"'{key}' must be a number or a mapping of node names to numbers"
        )

    per_node = normalize_yaml_dict_keys(value)
    # A missing entry leaves the node unconstrained
    default = per_node.pop("default", None)
    if default is None:
        default = -math.inf if key.startswith("min") else math.inf
    elif not _is_number(default):
        raise ValueError(f"'{key}.default' must be a number, got {default!r}")

    bounds: Dict[Node, float] = {}
    for name, bound in per_node.items():
        if name not in node_map.to_node:
            raise ValueError(f"'{key}' refers to unknown node '{name}'")
        if not _is_number(bound):
            raise ValueError(f"'{key}.{name}' must be a number, got {bound!r}")
        bounds[node_map.to_node[name]] = _to_float(bound, f"{key}.{name}")

    fallback = _to_float(default, f"{key}.default")
    return lambda node: bounds.get(node, fallback)


def _parse_arc_count(key: str, value: Any, default: Union[int, float]) -> Union[int, float]:
    if value is None:
        return default
    if _is_number(value) and value == math.inf:
        return math.inf
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if not 0 <= value <= MAX_ARC_COUNT:
        raise ValueError(
            f"'{key}' must be between 0 and {MAX_ARC_COUNT}, got {value}"
        )
    return value


@dataclass
class ProblemSpec:
    """A parsed problem file.

    Attributes:
        graph: Graph built from ``nodes`` and ``arcs``.
        node_map: Node names from the file.
        degree_bounds: Degree bound keyword arguments for `OptimalSubgraph`.
        min_arc_count: Minimum number of selected arcs.
        max_arc_count: Maximum number of selected arcs.
        relaxed: Solve the LP relaxation.
        selection_threshold: Optional override of the selection threshold.
        solver_config: Options for the solver backend.
    """

    graph: CustomGraph
    node_map: NodeMap
    degree_bounds: Dict[str, DegreeBound] = field(default_factory=dict)
    min_arc_count: int = 0
    max_arc_count: Union[int, float] = math.inf
    relaxed: bool = False
    selection_threshold: Optional[float] = None
    solver_config: SolverConfig = field(default_factory=SolverConfig)

    def cost(self, arc: Arc) -> float:
        """Return the ``cost`` property of ``arc``."""
        properties = self.graph.arc_properties(arc) or {}
        return float(properties.get(COST_ATTR, 0.0))

    def build(self) -> OptimalSubgraph:
        """Create the `OptimalSubgraph` task described by the file."""
        return OptimalSubgraph(
            self.graph,
            min_arc_count=self.min_arc_count,
            max_arc_count=self.max_arc_count,
            cost_functions=[CostFunction(self.cost)],
            relaxed=self.relaxed,
            selection_threshold=self.selection_threshold,
            **self.degree_bounds,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> ProblemSpec:
        """Parse and validate a problem from a YAML string.

        Raises:
            ValueError: If the YAML is malformed, has unrecognized keys, or
                holds values of the wrong type.
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("The provided YAML must map to a dictionary at top-level.")
        _check_keys(data, _TOP_LEVEL_KEYS, "problem")

        graph = CustomGraph()
        node_map = NodeMap()

        def node_for(name: Any) -> Node:
            key = yaml_name(name)
            if key not in node_map.to_node:
                node_map.add(key, graph.add_node())
            return node_map.to_node[key]

        nodes = data.get("nodes") or []
        if isinstance(nodes, dict):
            for name, attrs in normalize_yaml_dict_keys(nodes).items():
                if attrs is not None and not isinstance(attrs, dict):
                    raise ValueError(f"Attributes of node '{name}' must be a mapping")
                node = node_for(name)
                if attrs:
                    graph.set_node_properties(node, dict(attrs))
        elif isinstance(nodes, list):
            for name in nodes:
                if isinstance(name, (dict, list)):
                    raise ValueError(f"Invalid node name {name!r}")
                if yaml_name(name) in node_map.to_node:
                    raise ValueError(f"Duplicate node '{name}'")
                node_for(name)
        else:
            raise ValueError("'nodes' must be a list or a mapping")

        arcs = data.get("arcs") or []
        if not isinstance(arcs, list):
            raise ValueError("'arcs' must be a list")
        for entry in arcs:
            if not isinstance(entry, dict):
                raise ValueError(
                    "Each arc definition must be a mapping with 'source' and 'target'"
                )
            if "source" not in entry or "target" not in entry:
                raise ValueError("Each arc definition must include 'source' and 'target'")
            directed = entry.get("directed", True)
            if not isinstance(directed, bool):
                raise ValueError(f"'directed' must be a boolean, got {directed!r}")
            cost = entry.get(COST_ATTR, 0.0)
            if not _is_number(cost) or not math.isfinite(_to_float(cost, COST_ATTR)):
                raise ValueError(f"Arc cost must be a finite number, got {cost!r}")

            properties = {k: v for k, v in entry.items() if k not in _ARC_KEYS}
            properties[COST_ATTR] = float(cost)
            graph.add_arc(
                node_for(entry["source"]),
                node_for(entry["target"]),
                Directedness.DIRECTED if directed else Directedness.UNDIRECTED,
                properties=properties,
            )

        constraints = _require_mapping(data.get("constraints") or {}, "constraints")
        _check_keys(constraints, _CONSTRAINT_KEYS, "constraints")
        degree_bounds = {
            key: _parse_degree_bound(key, constraints[key], node_map)
            for key in _DEGREE_KEYS
            if constraints.get(key) is not None
        }

        relaxed = data.get("relaxed", False)
        if not isinstance(relaxed, bool):
            raise ValueError(f"'relaxed' must be a boolean, got {relaxed!r}")

        threshold = data.get("selection_threshold")
        if threshold is not None and not _is_number(threshold):
            raise ValueError(
                f"'selection_threshold' must be a number, got {threshold!r}"
            )

        solver_data = _require_mapping(data.get("solver") or {}, "solver")
        spec = cls(
            graph=graph,
            node_map=node_map,
            degree_bounds=degree_bounds,
            min_arc_count=_parse_arc_count(
                "min_arc_count", constraints.get("min_arc_count"), 0
            ),
            max_arc_count=_parse_arc_count(
                "max_arc_count", constraints.get("max_arc_count"), math.inf
            ),
            relaxed=relaxed,
            selection_threshold=threshold,
            solver_config=SolverConfig.from_dict(solver_data),
        )
        logger.debug(
            "Loaded problem: nodes=%d, arcs=%d, constraints=%s",
            graph.node_count(),
            graph.arc_count(),
            ", ".join(sorted(constraints)) or "none",
        )
        return spec


def load_problem(path: Union[str, Path]) -> ProblemSpec:
    """Read and parse a problem file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the contents are invalid (see `ProblemSpec.from_yaml`).
    """
    return ProblemSpec.from_yaml(Path(path).read_text(encoding="utf-8"))
