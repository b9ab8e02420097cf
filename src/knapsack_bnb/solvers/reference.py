"""
Exact reference solver backed by OR-Tools.

Used to cross-check the optimum found by the branch-and-bound search. OR-Tools'
knapsack solver works on integers, so only integral instances are accepted.
"""

import time
from dataclasses import dataclass

try:
    # OR-Tools <= 9.13
    from ortools.algorithms import pywrapknapsack_solver as knapsack_solver
except ImportError:
    # OR-Tools >= 9.14 reorganized algorithms into python submodule
    from ortools.algorithms.python import knapsack_solver

from knapsack_bnb.data.catalog import Item, ItemCatalog
from knapsack_bnb.types import Number
from knapsack_bnb.utils.error_handler import ReferenceSolverError


@dataclass(frozen=True)
class ReferenceSolution:
    """Optimal value and chosen items reported by the reference solver."""

    optimal_value: float
    items: tuple[Item, ...]
    solve_time: float


def _as_int(number: Number, what: str) -> int:
    if float(number) != int(number):
        raise ReferenceSolverError(
            f"The reference solver needs integral data, got {what}={number}",
            suggestion="Scale weights, values and capacity to integers before verifying.",
        )
    return int(number)


def _solver_type():
    solver_type = getattr(
        knapsack_solver,
        "KNAPSACK_DYNAMIC_PROGRAMMING_SOLVER",
        getattr(knapsack_solver.KnapsackSolver, "KNAPSACK_DYNAMIC_PROGRAMMING_SOLVER", None),
    )
    if solver_type is None and hasattr(knapsack_solver, "SolverType"):
        solver_type = knapsack_solver.SolverType.KNAPSACK_DYNAMIC_PROGRAMMING_SOLVER
    if solver_type is None:
        raise ReferenceSolverError("Could not locate OR-Tools knapsack solver type constant.")
    return solver_type


class ReferenceSolver:
    """Exact solver for the knapsack problem using OR-Tools"""

    @staticmethod
    def solve(catalog: ItemCatalog, capacity: Number, time_limit: float = 60.0) -> ReferenceSolution:
        """
        Solve a knapsack instance exactly

        Args:
            catalog: Items with integral weights and values
            capacity: Non-negative integral capacity
            time_limit: Time limit in seconds (default: 60.0)

        Returns:
            ReferenceSolution with the optimal value and selected items

        Raises:
            ReferenceSolverError: If the instance is not integral or capacity is negative
        """
        capacity = _as_int(capacity, "capacity")
        if capacity < 0:
            raise ReferenceSolverError(
                f"The reference solver needs a non-negative capacity, got {capacity}",
            )
        if len(catalog) == 0:
            return ReferenceSolution(optimal_value=0.0, items=(), solve_time=0.0)

        solver = knapsack_solver.KnapsackSolver(_solver_type(), "ReferenceSolver")

        # Convert to lists (OR-Tools requirement)
        values = [_as_int(item.value, f"value of {item.id}") for item in catalog]
        weights = [[_as_int(item.weight, f"weight of {item.id}") for item in catalog]]
        capacities = [capacity]

        init_fn = getattr(solver, "Init", None) or solver.init
        init_fn(values, weights, capacities)

        set_time_limit_fn = getattr(solver, "SetTimeLimit", getattr(solver, "set_time_limit", None))
        if set_time_limit_fn:
            set_time_limit_fn(time_limit)

        solve_fn = getattr(solver, "Solve", None) or solver.solve
        start_time = time.perf_counter()
        optimal_value = solve_fn()
        solve_time = time.perf_counter() - start_time

        best_contains_fn = (
            getattr(solver, "BestSolutionContains", None) or solver.best_solution_contains
        )
        chosen = tuple(item for i, item in enumerate(catalog) if best_contains_fn(i))

        return ReferenceSolution(
            optimal_value=float(optimal_value), items=chosen, solve_time=solve_time
        )


def verify_optimum(catalog: ItemCatalog, capacity: Number, best_value: float) -> ReferenceSolution:
    """
    Check a branch-and-bound optimum against the reference solver.

    Raises:
        ReferenceSolverError: If the two optima differ
    """
    reference = ReferenceSolver.solve(catalog, capacity)
    if reference.optimal_value != best_value:
        raise ReferenceSolverError(
            f"Branch-and-bound optimum {best_value} differs from "
            f"reference optimum {reference.optimal_value}",
            suggestion="Run with --debug and --log-level DEBUG to inspect the search.",
        )
    return reference
