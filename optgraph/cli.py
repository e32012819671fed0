"""Command-line interface for optgraph."""

from __future__ import annotations

import argparse
import json
import math
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from optgraph.graph.base import Graph
from optgraph.io.graphml import load_graphml
from optgraph.io.nx import NodeMap
from optgraph.logging import configure_cli_logging, get_logger
from optgraph.lp.matching import LpMaximumMatching, LpMinimumCostMatching
from optgraph.lp.solver import ScipyMilpSolver, SolverError
from optgraph.problem import load_problem
from optgraph.types.base import SolutionType
from optgraph.types.ids import Arc

logger = get_logger(__name__)

#: Exit status when the problem has no solution (infeasible or unbounded).
EXIT_NO_SOLUTION = 2


def _format_cost(value: Any) -> str:
    """Return a number with up to three decimals and no trailing zeros.

    Examples:
        0.1 -> "0.1"; 10.0 -> "10"; 1234.567 -> "1,234.567".
    """
    s = f"{float(value):,.3f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _arc_record(graph: Graph, node_map: NodeMap, arc: Arc, cost: float) -> Dict[str, Any]:
    return {
        "source": node_map.name(graph.u(arc)),
        "target": node_map.name(graph.v(arc)),
        "directed": not graph.is_edge(arc),
        "cost": cost,
    }


def _report(
    status: SolutionType,
    objective: Optional[float],
    records: List[Dict[str, Any]],
    as_json: bool,
) -> None:
    if as_json:
        payload = {
            "status": status.name,
            "objective": objective,
            "arcs": records,
        }
        print(json.dumps(payload, indent=2, default=str))
        return

    print(f"Status: {status.name}")
    if not status.has_solution:
        return
    if objective is not None:
        print(f"Objective: {_format_cost(objective)}")
    print(f"Selected arcs: {len(records)}")
    for record in records:
        link = "->" if record["directed"] else "--"
        print(
            f"   {record['source']} {link} {record['target']}"
            f"   (cost {_format_cost(record['cost'])})"
        )


def _solve_problem(path: Path, as_json: bool) -> int:
    spec = load_problem(path)
    task = spec.build()
    logger.info(
        "Solving %s: %d nodes, %d arcs",
        path,
        spec.graph.node_count(),
        spec.graph.arc_count(),
    )
    status = task.run(ScipyMilpSolver(spec.solver_config))

    records = []
    if task.result_graph is not None:
        records = [
            _arc_record(spec.graph, spec.node_map, arc, spec.cost(arc))
            for arc in task.result_graph.arcs()
        ]
    _report(status, task.objective_value, records, as_json)
    return 0 if status.has_solution else EXIT_NO_SOLUTION


def _unit_cost(_arc: Arc) -> float:
    return 1.0


def _arc_cost(graph: Graph, attr: str) -> Callable[[Arc], float]:
    def cost(arc: Arc) -> float:
        properties = graph.arc_properties(arc) or {}
        if attr not in properties:
            raise ValueError(f"{arc!r} has no '{attr}' attribute")
        try:
            return float(properties[attr])
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"'{attr}' of {arc!r} is not a number: {properties[attr]!r}"
            ) from exc

    return cost


def _solve_matching(
    path: Path,
    cost_attr: str,
    min_size: int,
    max_size: Optional[int],
    maximum: bool,
    as_json: bool,
) -> int:
    graph, node_map, _shapes = load_graphml(path)
    max_matching = math.inf if max_size is None else max_size
    logger.info(
        "Matching on %s: %d nodes, %d arcs",
        path,
        graph.node_count(),
        graph.arc_count(),
    )

    if maximum:
        task = LpMaximumMatching(graph, min_size, max_matching)
        cost = _unit_cost
    else:
        cost = _arc_cost(graph, cost_attr)
        task = LpMinimumCostMatching(graph, cost, min_size, max_matching)

    status = task.run(ScipyMilpSolver())
    records = []
    objective = None
    if task.matching is not None:
        records = [
            _arc_record(graph, node_map, arc, cost(arc)) for arc in task.matching.arcs()
        ]
        objective = sum(record["cost"] for record in records)
    _report(status, objective, records, as_json)
    return 0 if status.has_solution else EXIT_NO_SOLUTION


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``optgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="optgraph",
        description="Solve degree-constrained optimal subgraph and matching problems.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,match}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser(
        "solve", help="Solve an optimal subgraph problem file"
    )
    solve_parser.add_argument("problem", type=Path, help="Path to problem YAML")

    match_parser = subparsers.add_parser(
        "match", help="Find a matching in a GraphML graph"
    )
    match_parser.add_argument("graph", type=Path, help="Path to GraphML file")
    match_parser.add_argument(
        "--cost-attr",
        default="cost",
        help="Edge attribute holding the arc cost (default: cost)",
    )
    match_parser.add_argument(
        "--min-size", type=int, default=0, help="Minimum number of matched arcs"
    )
    match_parser.add_argument(
        "--max-size", type=int, default=None, help="Maximum number of matched arcs"
    )
    match_parser.add_argument(
        "--maximum",
        action="store_true",
        help="Maximize the number of matched arcs instead of minimizing cost",
    )

    for p in (solve_parser, match_parser):
        p.add_argument(
            "--json", action="store_true", help="Print the result as JSON"
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    configure_cli_logging(verbose=args.verbose, quiet=args.quiet)
    logger.debug("Debug logging enabled")

    try:
        if args.command == "solve":
            code = _solve_problem(args.problem, args.json)
        else:
            code = _solve_matching(
                args.graph,
                cost_attr=args.cost_attr,
                min_size=args.min_size,
                max_size=args.max_size,
                maximum=args.maximum,
                as_json=args.json,
            )
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        sys.exit(1)
    except (ValueError, SolverError, OSError) as e:
        logger.error(f"Failed to solve: {type(e).__name__}: {e}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
