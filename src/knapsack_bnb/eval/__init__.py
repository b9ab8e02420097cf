"""Reporting of solve results."""

from knapsack_bnb.eval.reporting import (
    export_items_to_csv,
    export_tree_to_json,
    format_incumbent_history,
    format_items_table,
    print_solve_summary,
    save_summary_to_json,
    summarize_tree,
    tree_depth,
)

__all__ = [
    "export_items_to_csv",
    "export_tree_to_json",
    "format_incumbent_history",
    "format_items_table",
    "print_solve_summary",
    "save_summary_to_json",
    "summarize_tree",
    "tree_depth",
]
