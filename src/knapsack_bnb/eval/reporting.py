"""
Solve result reporting and I/O utilities.

Handles export of search trees to JSON, ordered items to CSV, and console output.
"""

import csv
import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict

import numpy as np

from knapsack_bnb.data.catalog import ItemCatalog
from knapsack_bnb.solvers.branch_and_bound import NodeReason, SearchNode, SearchResult, iter_nodes
from knapsack_bnb.solvers.relaxation import format_number
from knapsack_bnb.tree.builder import TreeProjection
from knapsack_bnb.types import PathLike


def tree_depth(node: SearchNode) -> int:
    """Number of levels below `node` (0 for a leaf)."""
    if not node.children:
        return 0
    return 1 + max(tree_depth(child) for child in node.children)


def summarize_tree(result: SearchResult) -> Dict:
    """
    Aggregate statistics of a finished search.

    Args:
        result: SearchResult of a solve

    Returns:
        Dictionary with node counts per reason, depth and the optimum

    Example:
        >>> summary = summarize_tree(result)
        >>> summary["nodes"], summary["best_value"]
        (7, 63.0)
    """
    reasons = Counter(node.reason for node in iter_nodes(result.root, result.strategy))

    summary = {
        "strategy": result.strategy.value,
        "nodes": sum(reasons.values()),
        "depth": tree_depth(result.root),
        "incumbent_updates": len(result.incumbent_history) - 1,
        "best_value": result.best_value,
        "solve_time_ms": result.solve_time * 1000,
    }
    for reason in NodeReason:
        summary[f"{reason.value}_nodes"] = reasons.get(reason, 0)

    return summary


def format_items_table(ordered_items: ItemCatalog) -> str:
    """
    Render items as an aligned table with id, value, weight and ratio rows.

    Ratios are rounded to three decimals.
    """
    header = [""] + [item.id for item in ordered_items]
    rows = [
        header,
        ["Value"] + [format_number(item.value) for item in ordered_items],
        ["Weight"] + [format_number(item.weight) for item in ordered_items],
        ["Ratio"] + [format_number(round(item.ratio, 3)) for item in ordered_items],
    ]
    widths = [max(len(row[col]) for row in rows) for col in range(len(header))]
    return "\n".join(
        "  ".join(cell.rjust(width) for cell, width in zip(row, widths)).rstrip() for row in rows
    )


def format_incumbent_history(history: tuple[float, ...]) -> str:
    return ", ".join(format_number(value) for value in history)


def export_tree_to_json(projection: TreeProjection, filepath: PathLike) -> None:
    """
    Write a tree projection as nested ``{name, attributes, children}`` JSON.

    Args:
        projection: Labelled display tree
        filepath: Path to save JSON file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(projection.to_dict(), f, indent=2)

    print(f"Search tree saved to {filepath}")


def export_items_to_csv(ordered_items: ItemCatalog, filepath: PathLike) -> None:
    """
    Export the ratio-ordered items to CSV format.

    Args:
        ordered_items: Items sorted by ratio
        filepath: Path to save CSV file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["position", "id", "value", "weight", "ratio"])
        for position, item in enumerate(ordered_items, start=1):
            writer.writerow(
                [
                    position,
                    item.id,
                    format_number(item.value),
                    format_number(item.weight),
                    round(item.ratio, 3),
                ]
            )

    print(f"Ordered items exported to CSV: {filepath}")


def save_summary_to_json(summary: Dict, filepath: PathLike) -> None:
    """
    Save a summary dictionary to JSON with numpy types converted.

    Args:
        summary: Summary dictionary (see `summarize_tree`)
        filepath: Output filepath
    """

    def convert(obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        return obj

    serializable = {k: convert(v) for k, v in summary.items()}
    serializable["timestamp"] = datetime.now().isoformat()

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(serializable, f, indent=2)

    print(f"Summary saved to {filepath}")


def print_solve_summary(result: SearchResult, title: str = "Branch and Bound Result") -> None:
    """
    Print ordered items, incumbent updates and the optimum to the console.

    Args:
        result: SearchResult of a solve
        title: Title for the summary
    """
    print("\n" + "=" * 60)
    print(f"{title:^60}")
    print("=" * 60 + "\n")

    print("Ordered Items:")
    print(format_items_table(result.ordered_items))

    print(f"\nGlobal Maxima Updates: {format_incumbent_history(result.incumbent_history)}")

    chosen = ", ".join(item.id for item in result.best_items) or "-"
    print(f"\nOptimal value: {format_number(result.best_value)}")
    print(f"Selected items: {chosen}")
    print(f"Nodes explored: {result.node_count}")

    print("=" * 60 + "\n")
