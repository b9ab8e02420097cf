"""
Random knapsack instance generator.

Produces integer-valued instances used by the `generate` command and by the
property tests that compare the search engine with the exact reference solver.
"""

from typing import Any

import numpy as np

from knapsack_bnb.data.catalog import ItemCatalog


class KnapsackInstance:
    """A catalog together with the capacity it is solved against"""

    def __init__(self, catalog: ItemCatalog, capacity: float):
        self.catalog: ItemCatalog = catalog
        self.capacity: float = capacity
        self.n_items: int = len(catalog)

    def __repr__(self) -> str:
        return f"KnapsackInstance(n_items={self.n_items}, capacity={self.capacity})"


class KnapsackGenerator:
    """Generates random knapsack instances"""

    def __init__(self, seed: int = 42):
        self.rng = np.random.RandomState(seed)

    def generate_instance(
        self,
        n_items: int,
        weight_range: tuple[int, int] = (1, 100),
        value_range: tuple[int, int] = (1, 100),
        capacity_ratio: float = 0.5,
    ) -> KnapsackInstance:
        """
        Generate a random knapsack instance

        Args:
            n_items: Number of items
            weight_range: (min_weight, max_weight) for items, inclusive
            value_range: (min_value, max_value) for items, inclusive
            capacity_ratio: Capacity as a fraction of total weight (default: 0.5)

        Returns:
            KnapsackInstance object with items labelled A, B, C, ...
        """
        weights = self.rng.randint(weight_range[0], weight_range[1] + 1, size=n_items)
        values = self.rng.randint(value_range[0], value_range[1] + 1, size=n_items)

        # Set capacity as a fraction of total weight
        total_weight = np.sum(weights)
        capacity = int(total_weight * capacity_ratio)

        catalog = ItemCatalog.from_pairs(
            (int(weight), int(value)) for weight, value in zip(weights, values)
        )
        return KnapsackInstance(catalog, capacity)

    def generate_dataset(
        self, n_instances: int, n_items_range: tuple[int, int], **kwargs: Any
    ) -> list[KnapsackInstance]:
        """
        Generate multiple instances with varying sizes

        Args:
            n_instances: Number of instances to generate
            n_items_range: (min_items, max_items) range
            **kwargs: Additional arguments passed to generate_instance

        Returns:
            List of KnapsackInstance objects
        """
        instances = []
        for _ in range(n_instances):
            n_items = self.rng.randint(n_items_range[0], n_items_range[1] + 1)
            instance = self.generate_instance(n_items, **kwargs)
            instances.append(instance)
        return instances
