"""
End-to-end tests for the knapsack-bnb command line interface.
"""

import json
import logging
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from knapsack_bnb import __version__
from knapsack_bnb.cli import main, parse_item_option
from knapsack_bnb.data import Item
from knapsack_bnb.utils import InvalidItemError, ValidationError

DEFAULT_CONFIG = str(Path(__file__).resolve().parents[2] / "configs" / "solve_default.yaml")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The solve command reconfigures the package logger; undo it between tests."""
    yield
    logger = logging.getLogger("knapsack_bnb")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


class TestSolveCommand:
    """Test suite for `knapsack-bnb solve`."""

    def test_solve_default_config(self, runner):
        result = runner.invoke(main, ["solve", "--config", DEFAULT_CONFIG])

        assert result.exit_code == 0, result.output
        assert "Global Maxima Updates: 0, 51, 55, 63" in result.output
        assert "Optimal value: 63" in result.output
        assert "Selected items: C, A, D" in result.output

    def test_solve_inline_items_zeroes_first(self, runner):
        args = [
            "solve",
            "--capacity", "20",
            "--item", "A:10:25",
            "--item", "B:7:21",
            "--item", "C:5:30",
            "--item", "D:4:8",
            "--strategy", "zeroes-first",
        ]
        result = runner.invoke(main, args)

        assert result.exit_code == 0, result.output
        assert "Global Maxima Updates: 0, 51, 59, 63" in result.output

    def test_solve_writes_outputs(self, runner, tmp_path):
        tree_path = tmp_path / "tree.json"
        csv_path = tmp_path / "items.csv"
        summary_path = tmp_path / "summary.json"

        result = runner.invoke(
            main,
            [
                "solve",
                "--config", DEFAULT_CONFIG,
                "--tree-json", str(tree_path),
                "--items-csv", str(csv_path),
                "--summary-json", str(summary_path),
            ],
        )

        assert result.exit_code == 0, result.output
        tree = json.loads(tree_path.read_text())
        assert tree["attributes"]["x upper"] == "(1, 1, 8/10, 0) with value: 71"
        assert csv_path.read_text().splitlines()[1].startswith("1,C,30,5")
        assert json.loads(summary_path.read_text())["best_value"] == 63

    def test_solve_with_verify(self, runner):
        result = runner.invoke(main, ["solve", "--config", DEFAULT_CONFIG, "--verify"])

        assert result.exit_code == 0, result.output
        assert "Verified against OR-Tools: optimum 63" in result.output

    def test_solve_writes_log_file(self, runner, tmp_path):
        log_path = tmp_path / "logs" / "solve.log"
        result = runner.invoke(
            main,
            ["solve", "--config", DEFAULT_CONFIG, "--log-level", "debug", "--log-file", str(log_path)],
        )

        assert result.exit_code == 0, result.output
        log_text = log_path.read_text()
        assert "Incumbent raised to 63" in log_text
        assert "Search finished" in log_text

    def test_solve_without_instance_fails(self, runner):
        result = runner.invoke(main, ["solve"])

        assert result.exit_code == 1
        assert "No instance given" in result.output

    def test_invalid_item_reported(self, runner):
        result = runner.invoke(main, ["solve", "--capacity", "5", "--item", "A:0:3"])

        assert result.exit_code == 1
        assert "weight must be > 0" in result.output

    def test_duplicate_inline_ids_rejected(self, runner):
        result = runner.invoke(main, ["solve", "--capacity", "5", "--item", "A:1:3", "--item", "A:2:4"])

        assert result.exit_code == 1
        assert "Duplicate item ids: A" in result.output

    def test_unlabelled_item_clashing_with_explicit_id(self, runner):
        """The second item defaults to label B, which the first item already uses."""
        result = runner.invoke(main, ["solve", "--capacity", "5", "--item", "B:1:3", "--item", "2:4"])

        assert result.exit_code == 1
        assert "Duplicate item ids: B" in result.output

    def test_nan_capacity_rejected(self, runner):
        result = runner.invoke(main, ["solve", "--capacity", "nan", "--item", "A:1:3"])

        assert result.exit_code == 1
        assert "Capacity must be a finite number" in result.output

    def test_invalid_config_reported(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"problem": {"capacity": 5, "strategy": "random"}}))

        result = runner.invoke(main, ["solve", "--config", str(path)])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestOtherCommands:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_validate_config(self, runner):
        result = runner.invoke(main, ["validate-config", DEFAULT_CONFIG])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_validate_config_missing(self, runner, tmp_path):
        result = runner.invoke(main, ["validate-config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1

    def test_generate_then_solve(self, runner, tmp_path):
        path = tmp_path / "random.yaml"
        result = runner.invoke(main, ["generate", "--n-items", "6", "--seed", "5", "--output", str(path)])

        assert result.exit_code == 0, result.output
        assert len(yaml.safe_load(path.read_text())["problem"]["items"]) == 6

        solved = runner.invoke(main, ["solve", "--config", str(path), "--verify"])
        assert solved.exit_code == 0, solved.output
        assert "Verified against OR-Tools" in solved.output

    def test_generate_rejects_bad_ratio(self, runner, tmp_path):
        result = runner.invoke(
            main, ["generate", "--capacity-ratio", "1.5", "--output", str(tmp_path / "x.yaml")]
        )

        assert result.exit_code == 1
        assert "capacity_ratio" in result.output


class TestParseItemOption:
    def test_with_id(self):
        assert parse_item_option("X:4:9", 0) == Item("X", 4, 9)

    def test_without_id(self):
        assert parse_item_option("4:9", 2) == Item("C", 4, 9)

    def test_malformed(self):
        with pytest.raises(ValidationError):
            parse_item_option("4", 0)

    def test_non_numeric(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            parse_item_option("A:x:9", 0)

    def test_invalid_weight(self):
        with pytest.raises(InvalidItemError):
            parse_item_option("A:-1:9", 0)
