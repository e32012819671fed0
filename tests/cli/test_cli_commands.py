import json
from pathlib import Path
from textwrap import dedent

import pytest

from optgraph import cli
from optgraph.io.graphml import save_graphml
from optgraph.logging import reset_logging

PROBLEM = dedent(
    """
    nodes: [A, B, C, D]
    arcs:
      - {source: A, target: B, cost: 1}
      - {source: B, target: C, cost: 3, directed: false}
      - {source: C, target: D, cost: 5}
      - {source: D, target: A, cost: 4}
    constraints:
      max_degree: 1
      min_arc_count: 2
    """
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    # Handlers bind sys.stderr at setup; rebuild them under each test's capture
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def problem_file(tmp_path: Path) -> Path:
    path = tmp_path / "problem.yaml"
    path.write_text(PROBLEM, encoding="utf-8")
    return path


def test_solve_json(problem_file: Path, capsys) -> None:
    assert cli.main(["solve", str(problem_file), "--json"]) is None

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "OPTIMAL"
    assert payload["objective"] == pytest.approx(6.0)
    pairs = {(arc["source"], arc["target"]) for arc in payload["arcs"]}
    assert pairs == {("A", "B"), ("C", "D")}
    assert all(arc["directed"] for arc in payload["arcs"])


def test_solve_text(problem_file: Path, capsys) -> None:
    cli.main(["--quiet", "solve", str(problem_file)])

    out = capsys.readouterr().out
    assert "Status: OPTIMAL" in out
    assert "Objective: 6" in out
    assert "Selected arcs: 2" in out
    assert "A -> B" in out
    assert "(cost 5)" in out


def test_solve_infeasible_exits_with_no_solution_code(tmp_path: Path, capsys) -> None:
    path = tmp_path / "infeasible.yaml"
    path.write_text(
        PROBLEM.replace("max_degree: 1", "max_degree: 0"), encoding="utf-8"
    )

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(path)])
    assert exc_info.value.code == cli.EXIT_NO_SOLUTION
    out = capsys.readouterr().out
    assert "Status: INFEASIBLE" in out
    assert "Selected arcs" not in out


def test_solve_missing_file(tmp_path: Path, caplog) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1
    assert "File not found" in caplog.text


def test_solve_invalid_problem(tmp_path: Path, caplog) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("arcs: [{source: A}]\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(path)])
    assert exc_info.value.code == 1
    assert "ValueError" in caplog.text


def test_match_min_cost(square_graph, tmp_path: Path, capsys) -> None:
    path = tmp_path / "square.graphml"
    save_graphml(square_graph, path)

    cli.main(["match", str(path), "--min-size", "2", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "OPTIMAL"
    assert payload["objective"] == pytest.approx(6.0)
    assert len(payload["arcs"]) == 2
    assert not any(arc["directed"] for arc in payload["arcs"])


def test_match_maximum(square_graph, tmp_path: Path, capsys) -> None:
    path = tmp_path / "square.graphml"
    save_graphml(square_graph, path)

    cli.main(["match", str(path), "--maximum"])

    out = capsys.readouterr().out
    assert "Status: OPTIMAL" in out
    assert "Selected arcs: 2" in out
    assert " -- " in out


def test_match_missing_cost_attribute(square_graph, tmp_path: Path, caplog) -> None:
    path = tmp_path / "square.graphml"
    save_graphml(square_graph, path)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["match", str(path), "--cost-attr", "weight", "--min-size", "1"])
    assert exc_info.value.code == 1
    assert "weight" in caplog.text


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: optgraph" in capsys.readouterr().out


def test_unknown_command_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["frobnicate"])
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "extra",
    [
        "solver: {time_limit: [1]}\n",
        "solver: {node_limit: yes}\n",
    ],
)
def test_solve_bad_solver_options_exit_one(tmp_path: Path, caplog, extra) -> None:
    path = tmp_path / "problem.yaml"
    path.write_text(PROBLEM + extra, encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(path)])
    assert exc_info.value.code == 1
    assert "ValueError" in caplog.text


def test_solve_oversized_arc_count_exits_one(tmp_path: Path, caplog) -> None:
    path = tmp_path / "problem.yaml"
    path.write_text(
        PROBLEM.replace("min_arc_count: 2", f"max_arc_count: {'9' * 400}"),
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(path)])
    assert exc_info.value.code == 1
    assert "max_arc_count" in caplog.text
