"""
Tests for solve result reporting.
"""

import csv
import json

import pytest

from knapsack_bnb.eval import (
    export_items_to_csv,
    export_tree_to_json,
    format_incumbent_history,
    format_items_table,
    print_solve_summary,
    save_summary_to_json,
    summarize_tree,
)
from knapsack_bnb.solvers import branch_and_bound_knapsack
from knapsack_bnb.tree import build_search_tree


@pytest.fixture
def result(classroom_catalog):
    return branch_and_bound_knapsack(classroom_catalog, 20)


class TestSummaries:
    """Test suite for search statistics."""

    def test_summarize_tree(self, result):
        summary = summarize_tree(result)

        assert summary["strategy"] == "ones-first"
        assert summary["nodes"] == 7
        assert summary["depth"] == 3
        assert summary["incumbent_updates"] == 3
        assert summary["best_value"] == 63
        assert summary["globalUpdate_nodes"] == 2
        assert summary["none_nodes"] == 1
        assert summary["dominated_nodes"] == 2
        assert summary["optimal_nodes"] == 1
        assert summary["infeasible_nodes"] == 1

    def test_items_table(self, result):
        table = format_items_table(result.ordered_items).splitlines()

        assert table[0].split() == ["C", "B", "A", "D"]
        assert table[1].split() == ["Value", "30", "21", "25", "8"]
        assert table[2].split() == ["Weight", "5", "7", "10", "4"]
        assert table[3].split() == ["Ratio", "6", "3", "2.5", "2"]

    def test_ratio_rounded_to_three_decimals(self, classroom_catalog):
        catalog = classroom_catalog.with_item(weight=3, value=1)
        table = format_items_table(catalog.ordered())

        assert "0.333" in table

    def test_incumbent_history(self, result):
        assert format_incumbent_history(result.incumbent_history) == "0, 51, 55, 63"

    def test_print_solve_summary(self, result, capsys):
        print_solve_summary(result)
        out = capsys.readouterr().out

        assert "Global Maxima Updates: 0, 51, 55, 63" in out
        assert "Optimal value: 63" in out
        assert "Selected items: C, A, D" in out


class TestExports:
    """Test suite for file exports."""

    def test_tree_json(self, result, tmp_path):
        path = tmp_path / "nested" / "tree.json"
        export_tree_to_json(build_search_tree(result.root, result.strategy), path)

        data = json.loads(path.read_text())
        assert data["name"] == "Step: 1"
        assert data["attributes"]["node action"] == "globalUpdate"
        assert len(data["children"]) == 2

    def test_items_csv(self, result, tmp_path):
        path = tmp_path / "items.csv"
        export_items_to_csv(result.ordered_items, path)

        with open(path, newline="") as f:
            rows = list(csv.DictReader(f))

        assert [row["id"] for row in rows] == ["C", "B", "A", "D"]
        assert rows[2] == {"position": "3", "id": "A", "value": "25", "weight": "10", "ratio": "2.5"}

    def test_summary_json(self, result, tmp_path):
        path = tmp_path / "summary.json"
        save_summary_to_json(summarize_tree(result), path)

        data = json.loads(path.read_text())
        assert data["nodes"] == 7
        assert "timestamp" in data
