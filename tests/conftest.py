"""
Pytest configuration and shared fixtures for testing.
"""

import itertools

import pytest

from knapsack_bnb.data import Item, ItemCatalog, KnapsackGenerator


@pytest.fixture
def classroom_catalog():
    """
    Four-item instance in input order A, B, C, D.

    With capacity 20 the ratio order is C (6.0), B (3.0), A (2.5), D (2.0)
    and the optimum is 63 (items C, A, D).
    """
    return ItemCatalog(
        [
            Item("A", 10, 25),
            Item("B", 7, 21),
            Item("C", 5, 30),
            Item("D", 4, 8),
        ]
    )


@pytest.fixture
def small_knapsack_instance():
    """
    Small instance with a known optimum.

    Returns:
        dict with keys: catalog, capacity, optimal_value, optimal_ids
    """
    catalog = ItemCatalog.from_pairs([(2, 10), (5, 20), (3, 15), (7, 25), (4, 18)])
    return {
        "catalog": catalog,
        "capacity": 10,
        # Items A, B, C fill the capacity exactly and are worth 45
        "optimal_value": 45.0,
        "optimal_ids": {"A", "B", "C"},
    }


@pytest.fixture
def random_instances():
    """Twenty small integral instances with 1 to 9 items."""
    generator = KnapsackGenerator(seed=7)
    return generator.generate_dataset(20, n_items_range=(1, 9))


def brute_force_optimum(catalog: ItemCatalog, capacity: float) -> float:
    """Exhaustive 0-1 knapsack optimum, for cross-checking on tiny instances."""
    best = 0.0
    for choice in itertools.product((0, 1), repeat=len(catalog)):
        weight = sum(item.weight for item, chosen in zip(catalog, choice) if chosen)
        value = sum(item.value for item, chosen in zip(catalog, choice) if chosen)
        if weight <= capacity and value > best:
            best = float(value)
    return best


@pytest.fixture
def brute_force():
    return brute_force_optimum
