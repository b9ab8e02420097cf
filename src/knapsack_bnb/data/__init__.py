"""Problem instances: the item catalog and a random instance generator."""

from knapsack_bnb.data.catalog import Item, ItemCatalog, item_label
from knapsack_bnb.data.generator import KnapsackGenerator, KnapsackInstance

__all__ = [
    "Item",
    "ItemCatalog",
    "item_label",
    "KnapsackGenerator",
    "KnapsackInstance",
]
