"""
tests/test_planner_cli.py
─────────────────────────
Surface around the engine: loader, routing service, command line.

Group 1 — Loader: parsing, load bias, input faults.
Group 2 — Planner: plan_route / plan_route_from_file, logging contract.
Group 3 — CLI: output format and exit codes.
Group 4 — Packaging metadata.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from pydantic import ValidationError

from gridant.cli import main
from gridant.loader import LOAD_BIAS, MatrixLoadError, load_weight_matrix, parse_weight_matrix
from gridant.planner import format_path, plan_route, plan_route_from_file
from gridant.shared.models import ColonyParams, RouteRequest

TWO_BY_TWO = """\
0 1 4 0
1 0 0 2
4 0 0 3
0 2 3 0
"""


@pytest.fixture
def matrix_file(tmp_path: Path) -> Path:
    path = tmp_path / "grid.txt"
    path.write_text(TWO_BY_TWO)
    return path


def _request(**overrides) -> RouteRequest:
    params = dict(grid_width=2, iterations=40, seed=3)
    params.update(overrides)
    return RouteRequest(start_node=0, goal_node=3, params=ColonyParams(**params))


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 1 — Loader
# ─────────────────────────────────────────────────────────────────────────────

class TestLoader:

    def test_parse_applies_load_bias(self):
        m = parse_weight_matrix(TWO_BY_TWO)
        assert m.shape == (4, 4)
        assert m[0, 0] == LOAD_BIAS
        assert m[0, 2] == 4.0 + LOAD_BIAS

    def test_parse_tolerates_extra_whitespace_and_blank_lines(self):
        m = parse_weight_matrix("  0   2.5\n\n\t1 0  \n\n")
        assert np.array_equal(m, np.array([[1.0, 3.5], [2.0, 1.0]]))

    def test_load_from_file(self, matrix_file: Path):
        assert np.array_equal(load_weight_matrix(matrix_file), parse_weight_matrix(TWO_BY_TWO))

    @pytest.mark.parametrize(
        "text, fragment",
        [
            ("", "no rows"),
            ("0 1\n1\n", "row 2"),
            ("0 1 2\n1 0 2\n", "row 1"),
            ("0 x\n1 0\n", "line 1"),
            ("0 -1\n1 0\n", "negative"),
            ("0 nan\n1 0\n", "non-finite"),
        ],
    )
    def test_malformed_input_raises(self, text, fragment):
        with pytest.raises(MatrixLoadError) as info:
            parse_weight_matrix(text, source="bad.txt")
        assert fragment in info.value.reason
        assert info.value.source == "bad.txt"

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(MatrixLoadError) as info:
            load_weight_matrix(tmp_path / "nope.txt")
        assert "nope.txt" in str(info.value)


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 2 — Planner
# ─────────────────────────────────────────────────────────────────────────────

class TestPlanner:

    def test_plan_route_from_file(self, matrix_file: Path):
        result = plan_route_from_file(matrix_file, _request())
        assert result.path == [0, 1, 3]
        assert result.path_cost == pytest.approx(3.0)
        assert result.length == pytest.approx(2.0)

    def test_plan_route_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="gridant.planner"):
            plan_route(parse_weight_matrix(TWO_BY_TWO), _request())
        assert "plan_route: 0 → 3" in caplog.text

    def test_unreached_goal_is_a_warning_not_an_error(self, caplog):
        weights = np.array([[0.0, 1e300], [1e300, 0.0]]) + LOAD_BIAS
        request = RouteRequest(
            start_node=0, goal_node=1,
            params=ColonyParams(grid_width=2, pr=0.0, exact_pow=True, iterations=3),
        )
        with caplog.at_level(logging.WARNING, logger="gridant.planner"):
            result = plan_route(weights, request)
        assert not result.reached_goal
        assert "no ant reached goal 1" in caplog.text

    def test_out_of_range_goal_raises(self):
        with pytest.raises(ValueError):
            plan_route(parse_weight_matrix(TWO_BY_TWO), RouteRequest(start_node=0, goal_node=9))

    def test_load_error_propagates(self, tmp_path: Path):
        with pytest.raises(MatrixLoadError):
            plan_route_from_file(tmp_path / "missing.txt", _request())

    def test_params_are_validated(self):
        with pytest.raises(ValidationError):
            ColonyParams(evaporation=1.5)
        with pytest.raises(ValidationError):
            ColonyParams(pr=-0.1)
        with pytest.raises(ValidationError):
            RouteRequest(start_node=-1)

    def test_params_are_frozen(self):
        params = ColonyParams()
        with pytest.raises(ValidationError):
            params.alpha = 3.0

    def test_format_path(self):
        assert format_path([0, 1, 3]) == " 0 1 3"
        assert format_path([]) == ""


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 3 — CLI
# ─────────────────────────────────────────────────────────────────────────────

class TestCli:

    def test_success_prints_best_path(self, matrix_file: Path, capsys):
        code = main([
            str(matrix_file), "--start", "0", "--goal", "3",
            "--width", "2", "--iterations", "40", "--seed", "3",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Best path length: 2.0" in out
        assert "Best path cost: 3.0" in out
        assert "Best path: 0 1 3" in out

    def test_unreadable_matrix_exits_one(self, tmp_path: Path):
        assert main([str(tmp_path / "missing.txt")]) == 1

    def test_malformed_matrix_exits_one(self, tmp_path: Path):
        path = tmp_path / "ragged.txt"
        path.write_text("0 1\n1\n")
        assert main([str(path)]) == 1

    def test_out_of_range_goal_exits_two(self, matrix_file: Path):
        assert main([str(matrix_file), "--goal", "7", "--width", "2"]) == 2

    def test_invalid_parameter_exits_two(self, matrix_file: Path):
        assert main([str(matrix_file), "--pr", "2.0"]) == 2

    def test_argparse_error_exits_two(self):
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 2


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 4 — Packaging metadata
# ─────────────────────────────────────────────────────────────────────────────

class TestPackaging:

    def test_long_description_is_not_an_internal_design_document(self):
        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        text = pyproject.read_text()
        assert "SPEC_FULL.md" not in text
        assert "DESIGN.md" not in text
