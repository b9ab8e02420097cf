"""Display projection of search trees."""

from knapsack_bnb.tree.builder import (
    SearchTreeBuilder,
    TreeProjection,
    build_search_tree,
    format_positions,
    node_attributes,
)

__all__ = [
    "SearchTreeBuilder",
    "TreeProjection",
    "build_search_tree",
    "format_positions",
    "node_attributes",
]
