"""
Tests for the OR-Tools reference solver.
"""

import pytest

from knapsack_bnb.data import Item, ItemCatalog
from knapsack_bnb.solvers import ReferenceSolver, branch_and_bound_knapsack, verify_optimum
from knapsack_bnb.utils import ReferenceSolverError


class TestReferenceSolver:
    """Test suite for the exact reference solver."""

    def test_classroom_optimum(self, classroom_catalog):
        solution = ReferenceSolver.solve(classroom_catalog, 20)

        assert solution.optimal_value == 63
        assert {item.id for item in solution.items} == {"A", "C", "D"}

    def test_matches_branch_and_bound(self, random_instances):
        """Branch-and-bound and OR-Tools agree on every random instance."""
        for instance in random_instances:
            reference = ReferenceSolver.solve(instance.catalog, instance.capacity)
            result = branch_and_bound_knapsack(instance.catalog, instance.capacity)

            assert result.best_value == reference.optimal_value

    def test_empty_catalog(self):
        assert ReferenceSolver.solve(ItemCatalog(), 10).optimal_value == 0

    def test_fractional_data_rejected(self):
        catalog = ItemCatalog([Item("A", 1.5, 3)])

        with pytest.raises(ReferenceSolverError, match="integral"):
            ReferenceSolver.solve(catalog, 4)

    def test_negative_capacity_rejected(self, classroom_catalog):
        with pytest.raises(ReferenceSolverError, match="non-negative"):
            ReferenceSolver.solve(classroom_catalog, -1)


class TestVerifyOptimum:
    def test_agreeing_optimum(self, classroom_catalog):
        assert verify_optimum(classroom_catalog, 20, 63.0).optimal_value == 63

    def test_disagreeing_optimum(self, classroom_catalog):
        with pytest.raises(ReferenceSolverError, match="differs"):
            verify_optimum(classroom_catalog, 20, 59.0)
