"""Bound computation, the branch-and-bound engine and the exact reference solver."""

from knapsack_bnb.solvers.branch_and_bound import (
    BranchAndBoundSolver,
    BranchNode,
    Incumbent,
    NodeReason,
    SearchNode,
    SearchResult,
    TerminalNode,
    TraversalStrategy,
    branch_and_bound_knapsack,
    iter_nodes,
)
from knapsack_bnb.solvers.reference import ReferenceSolution, ReferenceSolver, verify_optimum
from knapsack_bnb.solvers.relaxation import (
    BoundShare,
    RelaxationBound,
    compute_relaxation,
    format_number,
)

__all__ = [
    "BranchAndBoundSolver",
    "branch_and_bound_knapsack",
    "BranchNode",
    "TerminalNode",
    "SearchNode",
    "SearchResult",
    "Incumbent",
    "NodeReason",
    "TraversalStrategy",
    "iter_nodes",
    "BoundShare",
    "RelaxationBound",
    "compute_relaxation",
    "format_number",
    "ReferenceSolver",
    "ReferenceSolution",
    "verify_optimum",
]
