"""
Fractional relaxation bounds for a partially fixed knapsack assignment.

Given the ratio-ordered items and the positions fixed to 1 or 0, the greedy
fill below yields an upper bound (the continuous knapsack over the free
positions) and a lower bound (the same fill without the split item).
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from knapsack_bnb.data.catalog import ItemCatalog
from knapsack_bnb.types import Number


def format_number(value: Number) -> str:
    """Render a number without a trailing '.0' when it is integral."""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class BoundShare:
    """
    One entry of the upper bound vector, kept as an unreduced ratio.

    `BoundShare(8, 10)` renders as ``8/10`` and evaluates to 0.8. A share
    marked as `split` always renders as a ratio, so a split on a weight-1
    item shows as ``1/1`` rather than looking like a whole item.
    """

    numerator: Number = 0
    denominator: Number = 1
    split: bool = False

    @classmethod
    def whole(cls) -> "BoundShare":
        return cls(1, 1)

    @classmethod
    def empty(cls) -> "BoundShare":
        return cls(0, 1)

    def __float__(self) -> float:
        return float(self.numerator) / float(self.denominator)

    def __str__(self) -> str:
        if self.denominator == 1 and not self.split:
            return format_number(self.numerator)
        return f"{format_number(self.numerator)}/{format_number(self.denominator)}"


@dataclass(frozen=True)
class RelaxationBound:
    """
    Result of one bound computation.

    Attributes:
        upper_bound: Per-position shares of the fractional solution
        lower_bound: Per-position 0/1 choices of the integral solution
        upper_value: Objective value of `upper_bound`
        lower_value: Objective value of `lower_bound`
        branching_index: First free position that did not fit entirely, if any
        infeasible: True when the fixed ones alone exceed the capacity
    """

    upper_bound: tuple[BoundShare, ...]
    lower_bound: tuple[int, ...]
    upper_value: float
    lower_value: float
    branching_index: int | None = None
    infeasible: bool = False


def compute_relaxation(
    items: ItemCatalog,
    capacity: Number,
    fixed_ones: Iterable[int] = (),
    fixed_zeroes: Iterable[int] = (),
) -> RelaxationBound:
    """
    Compute upper and lower bounds for the node defined by the fixed positions.

    Free positions are filled in ratio order while ``used + weight < capacity``
    (strict). The first free item that does not fit receives the fractional
    share ``(capacity - used) / weight`` in the upper bound only, becomes the
    branching index, and ends the scan; later free items stay at 0.

    Args:
        items: Items sorted by ratio, best first
        capacity: Knapsack capacity (any sign)
        fixed_ones: Positions forced into the knapsack
        fixed_zeroes: Positions forced out of the knapsack

    Returns:
        RelaxationBound for the node

    Example:
        >>> catalog = ItemCatalog.from_pairs([(5, 30), (7, 21), (10, 25), (4, 8)])
        >>> bound = compute_relaxation(catalog, 20)
        >>> bound.upper_value, bound.lower_value, bound.branching_index
        (71.0, 51.0, 2)
    """
    fixed_ones = frozenset(fixed_ones)
    fixed_zeroes = frozenset(fixed_zeroes)
    n_items = len(items)

    upper = [BoundShare.empty()] * n_items
    lower = np.zeros(n_items, dtype=np.int64)
    used_capacity: Number = 0

    for position in sorted(fixed_ones):
        upper[position] = BoundShare.whole()
        lower[position] = 1
        used_capacity += items[position].weight

    if used_capacity > capacity:
        return RelaxationBound(
            upper_bound=tuple(upper),
            lower_bound=tuple(int(x) for x in lower),
            upper_value=0.0,
            lower_value=0.0,
            infeasible=True,
        )

    branching_index = None
    for position, item in enumerate(items):
        if position in fixed_ones or position in fixed_zeroes:
            continue

        if used_capacity + item.weight < capacity:
            used_capacity += item.weight
            upper[position] = BoundShare.whole()
            lower[position] = 1
        else:
            upper[position] = BoundShare(capacity - used_capacity, item.weight, split=True)
            branching_index = position
            break

    values = items.values
    upper_value = float(np.dot(np.array([float(share) for share in upper], dtype=np.float64), values))
    lower_value = float(np.dot(lower, values))

    return RelaxationBound(
        upper_bound=tuple(upper),
        lower_bound=tuple(int(x) for x in lower),
        upper_value=upper_value,
        lower_value=lower_value,
        branching_index=branching_index,
    )
