"""
Tests for items and the item catalog.
"""

import math

import numpy as np
import pytest

from knapsack_bnb.data import Item, ItemCatalog, item_label
from knapsack_bnb.utils import InvalidItemError, KnapsackBnBError


class TestItem:
    """Test suite for item validation."""

    def test_ratio(self):
        """Ratio is value over weight."""
        assert Item("A", 10, 25).ratio == 2.5

    @pytest.mark.parametrize("weight", [0, -3, math.inf, math.nan])
    def test_invalid_weight_fails_fast(self, weight):
        """Weights that make the ratio undefined are rejected on construction."""
        with pytest.raises(InvalidItemError):
            Item("A", weight, 10)

    @pytest.mark.parametrize("value", [0, -1, math.nan])
    def test_invalid_value_fails_fast(self, value):
        """Non-positive or non-finite values are rejected."""
        with pytest.raises(InvalidItemError):
            Item("A", 5, value)

    def test_empty_id_rejected(self):
        """Items need a label."""
        with pytest.raises(InvalidItemError):
            Item("", 5, 10)

    def test_invalid_item_error_carries_suggestion(self):
        """InvalidItemError is part of the library error hierarchy."""
        with pytest.raises(KnapsackBnBError) as exc_info:
            Item("A", 0, 10)

        assert "weight must be > 0" in exc_info.value.format_error()
        assert "Suggestion:" in exc_info.value.format_error()

    def test_items_are_immutable(self):
        """Items are frozen records."""
        item = Item("A", 10, 25)
        with pytest.raises(AttributeError):
            item.weight = 3


class TestItemLabel:
    """Test suite for default item identifiers."""

    def test_single_letters(self):
        assert [item_label(i) for i in range(4)] == ["A", "B", "C", "D"]

    def test_wraps_after_z(self):
        assert item_label(25) == "Z"
        assert item_label(26) == "AA"
        assert item_label(27) == "AB"


class TestItemCatalog:
    """Test suite for catalog ordering and edits."""

    def test_ordered_by_ratio_descending(self, classroom_catalog):
        """Ordering follows value/weight, best first."""
        ordered = classroom_catalog.ordered()

        assert [item.id for item in ordered] == ["C", "B", "A", "D"]
        assert np.all(np.diff(ordered.ratios) <= 0)

    def test_ordering_keeps_ties_in_input_order(self):
        """Equal ratios keep their input order."""
        catalog = ItemCatalog([Item("X", 2, 4), Item("Y", 1, 5), Item("Z", 3, 6), Item("W", 5, 10)])

        assert [item.id for item in catalog.ordered()] == ["Y", "X", "Z", "W"]

    def test_ordering_leaves_catalog_unchanged(self, classroom_catalog):
        """ordered() returns a new catalog."""
        classroom_catalog.ordered()

        assert [item.id for item in classroom_catalog] == ["A", "B", "C", "D"]

    def test_empty_catalog_orders_to_empty(self):
        assert len(ItemCatalog().ordered()) == 0

    def test_from_pairs_labels_items(self):
        catalog = ItemCatalog.from_pairs([(3, 4), (5, 6)])

        assert [item.id for item in catalog] == ["A", "B"]
        assert catalog[1] == Item("B", 5, 6)

    def test_with_item_returns_new_catalog(self, classroom_catalog):
        """Adding an item leaves the source catalog untouched."""
        extended = classroom_catalog.with_item(weight=2, value=3)

        assert len(classroom_catalog) == 4
        assert len(extended) == 5
        assert extended[4] == Item("E", 2, 3)

    def test_replace_item(self, classroom_catalog):
        """Editing an item produces a new catalog."""
        edited = classroom_catalog.replace_item(0, weight=12)

        assert edited[0] == Item("A", 12, 25)
        assert classroom_catalog[0] == Item("A", 10, 25)

    def test_replace_item_validates(self, classroom_catalog):
        with pytest.raises(InvalidItemError):
            classroom_catalog.replace_item(1, weight=0)

    def test_without_last(self, classroom_catalog):
        shorter = classroom_catalog.without_last()

        assert [item.id for item in shorter] == ["A", "B", "C"]

    def test_equality_and_arrays(self, classroom_catalog):
        same = ItemCatalog(list(classroom_catalog))

        assert same == classroom_catalog
        assert classroom_catalog.weights.tolist() == [10, 7, 5, 4]
        assert classroom_catalog.values.tolist() == [25, 21, 30, 8]
        assert classroom_catalog.total_weight([0, 2]) == 15
