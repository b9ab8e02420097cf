"""
knapsack-bnb - Branch and Bound Knapsack Solver
===============================================

An exact branch-and-bound solver for the 0-1 Knapsack Problem that records
its entire search as an explorable tree.

Main modules:
- data: Item catalog and random instance generation
- solvers: Relaxation bounds, the search engine and an exact reference solver
- tree: Labelled display projection of search trees
- eval: Reporting and export of solve results
- config: YAML configuration schemas and loading
"""

__version__ = "1.0.0"

# Public API exports
from knapsack_bnb import config, data, solvers, tree
from knapsack_bnb.data import Item, ItemCatalog
from knapsack_bnb.solvers import (
    BranchAndBoundSolver,
    NodeReason,
    SearchResult,
    TraversalStrategy,
    branch_and_bound_knapsack,
)
from knapsack_bnb.tree import build_search_tree

__all__ = [
    "config",
    "data",
    "solvers",
    "tree",
    "__version__",
    "Item",
    "ItemCatalog",
    "BranchAndBoundSolver",
    "branch_and_bound_knapsack",
    "NodeReason",
    "SearchResult",
    "TraversalStrategy",
    "build_search_tree",
]
