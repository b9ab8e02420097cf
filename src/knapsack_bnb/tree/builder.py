"""
Projection of a finished search into a labelled display tree.

The projection is what a tree renderer consumes: every node gets a
``Step: N`` label, a mapping of named string attributes, and its children.
Building is read-only; the search result is never modified.
"""

import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from knapsack_bnb.solvers.branch_and_bound import (
    BranchNode,
    SearchNode,
    TraversalStrategy,
)
from knapsack_bnb.solvers.relaxation import format_number
from knapsack_bnb.types import AttributeDict

FIXED_ZEROES = "fixed zeroes"
FIXED_ONES = "fixed ones"
X_UPPER = "x upper"
X_LOWER = "x lower"
NODE_ACTION = "node action"


@dataclass(frozen=True)
class TreeProjection:
    """A display node: label, string attributes and child projections."""

    name: str
    attributes: AttributeDict = field(default_factory=dict)
    children: tuple["TreeProjection", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Nested ``{name, attributes, children}`` mapping, ready for JSON."""
        return {
            "name": self.name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }

    def walk(self) -> Iterator["TreeProjection"]:
        """Yield this projection and its descendants in step order."""
        # children list the later-evaluated child first
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.children)


def format_positions(positions: Iterable[int]) -> str:
    """`{1, 3}`: 1-indexed positions in ascending order."""
    return "{" + ", ".join(str(p + 1) for p in sorted(positions)) + "}"


def format_vector(entries: Iterable[Any], value: float) -> str:
    return f"({', '.join(str(entry) for entry in entries)}) with value: {format_number(value)}"


def node_attributes(node: SearchNode) -> AttributeDict:
    """Display attributes of a single search node."""
    return {
        FIXED_ZEROES: format_positions(node.fixed_zeroes),
        FIXED_ONES: format_positions(node.fixed_ones),
        X_UPPER: format_vector(node.upper_bound, node.upper_value),
        X_LOWER: format_vector(node.lower_bound, node.lower_value),
        NODE_ACTION: node.reason.value,
    }


class SearchTreeBuilder:
    """
    Labels a search tree in the order the search evaluated it.

    Step numbers come from a counter created per `build` call, so projecting
    the same tree twice yields identical labels. Children are listed with the
    later-evaluated child first.
    """

    def __init__(self, strategy: TraversalStrategy | str = TraversalStrategy.ONES_FIRST):
        self.strategy = TraversalStrategy(strategy)

    def build(self, root: SearchNode) -> TreeProjection:
        steps = itertools.count(1)
        return self._project(root, steps)

    def _project(self, node: SearchNode, steps: Iterator[int]) -> TreeProjection:
        label = f"Step: {next(steps)}"

        children: list[TreeProjection] = []
        if isinstance(node, BranchNode):
            for child in node.children_in_order(self.strategy):
                children.insert(0, self._project(child, steps))

        return TreeProjection(
            name=label,
            attributes=node_attributes(node),
            children=tuple(children),
        )


def build_search_tree(
    root: SearchNode, strategy: TraversalStrategy | str = TraversalStrategy.ONES_FIRST
) -> TreeProjection:
    """Project `root` into a labelled display tree."""
    return SearchTreeBuilder(strategy).build(root)
