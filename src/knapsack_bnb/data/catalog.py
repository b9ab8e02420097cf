"""
Item catalog for the 0-1 knapsack problem.

Items and catalogs are immutable: editing an item produces a new catalog, so
a catalog handed to a running search can never change underneath it.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from knapsack_bnb.utils.error_handler import InvalidItemError


def item_label(position: int) -> str:
    """
    Default identifier for the item at a 0-based position: A, B, ..., Z, AA, AB, ...
    """
    label = ""
    position += 1
    while position > 0:
        position, remainder = divmod(position - 1, 26)
        label = chr(65 + remainder) + label
    return label


@dataclass(frozen=True)
class Item:
    """
    A knapsack item.

    Attributes:
        id: Display identifier
        weight: Capacity consumed when selected (> 0)
        value: Objective contribution when selected (> 0)
    """

    id: str
    weight: float
    value: float

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidItemError(
                "Item id must be non-empty.",
                suggestion="Give every item a label such as 'A' or 'B'.",
            )
        if not (math.isfinite(self.weight) and math.isfinite(self.value)):
            raise InvalidItemError(
                f"Item[{self.id}] weight and value must be finite, "
                f"got weight={self.weight}, value={self.value}.",
            )
        if self.weight <= 0:
            raise InvalidItemError(
                f"Item[{self.id}] weight must be > 0, got {self.weight}.",
                suggestion="Zero or negative weights make the value/weight ratio undefined.",
            )
        if self.value <= 0:
            raise InvalidItemError(
                f"Item[{self.id}] value must be > 0, got {self.value}.",
                suggestion="Drop items that contribute nothing to the objective.",
            )

    @property
    def ratio(self) -> float:
        return self.value / self.weight


class ItemCatalog:
    """
    Ordered, immutable collection of items forming one problem instance.

    Example:
        >>> catalog = ItemCatalog([Item("A", 10, 25), Item("B", 7, 21)])
        >>> [item.id for item in catalog.ordered()]
        ['B', 'A']
    """

    def __init__(self, items: Iterable[Item] = ()):
        self._items: tuple[Item, ...] = tuple(items)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, float]]) -> "ItemCatalog":
        """
        Build a catalog from (weight, value) pairs, labelling items A, B, C, ...
        """
        return cls(
            Item(item_label(i), weight, value) for i, (weight, value) in enumerate(pairs)
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __getitem__(self, position: int) -> Item:
        return self._items[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemCatalog):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ItemCatalog(n_items={len(self)})"

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def weights(self) -> np.ndarray:
        return np.array([item.weight for item in self._items], dtype=np.float64)

    @property
    def values(self) -> np.ndarray:
        return np.array([item.value for item in self._items], dtype=np.float64)

    @property
    def ratios(self) -> np.ndarray:
        return np.array([item.ratio for item in self._items], dtype=np.float64)

    def ordered(self) -> "ItemCatalog":
        """
        Return a new catalog sorted by value/weight ratio, best first.

        Ties keep their input order.
        """
        if not self._items:
            return ItemCatalog()
        order = np.argsort(-self.ratios, kind="stable")
        return ItemCatalog(self._items[i] for i in order)

    def with_item(self, weight: float = 1, value: float = 1, item_id: str | None = None) -> "ItemCatalog":
        """Return a new catalog with one more item appended."""
        if item_id is None:
            item_id = item_label(len(self._items))
        return ItemCatalog(self._items + (Item(item_id, weight, value),))

    def replace_item(
        self, position: int, weight: float | None = None, value: float | None = None
    ) -> "ItemCatalog":
        """Return a new catalog where the item at `position` has a new weight and/or value."""
        current = self._items[position]
        updated = Item(
            current.id,
            current.weight if weight is None else weight,
            current.value if value is None else value,
        )
        items = list(self._items)
        items[position] = updated
        return ItemCatalog(items)

    def without_last(self) -> "ItemCatalog":
        """Return a new catalog with the last item removed."""
        return ItemCatalog(self._items[:-1])

    def total_weight(self, positions: Iterable[int]) -> float:
        return float(sum(self._items[i].weight for i in positions))
