"""
Branch-and-Bound Solver for the 0-1 Knapsack Problem
Explores fix-to-1 / fix-to-0 branches and records every visited node
"""

import logging
import math
import time
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from knapsack_bnb.data.catalog import Item, ItemCatalog
from knapsack_bnb.solvers.relaxation import BoundShare, compute_relaxation
from knapsack_bnb.types import Number, Positions
from knapsack_bnb.utils.error_handler import SearchInvariantError, ValidationError

logger = logging.getLogger(__name__)


class TraversalStrategy(str, Enum):
    """Which child of a branch is evaluated first."""

    ONES_FIRST = "ones-first"
    ZEROES_FIRST = "zeroes-first"


class NodeReason(str, Enum):
    """Why the search stopped at, or branched from, a node."""

    NONE = "none"
    GLOBAL_UPDATE = "globalUpdate"
    OPTIMAL = "optimal"
    DOMINATED = "dominated"
    INFEASIBLE = "infeasible"


TERMINAL_REASONS = frozenset({NodeReason.OPTIMAL, NodeReason.DOMINATED, NodeReason.INFEASIBLE})
BRANCH_REASONS = frozenset({NodeReason.NONE, NodeReason.GLOBAL_UPDATE})


@dataclass(frozen=True)
class SearchNode:
    """
    One visited node of the search.

    Attributes:
        upper_bound: Fractional relaxation, one share per ratio-ordered item
        lower_bound: Integral fill, one 0/1 entry per ratio-ordered item
        upper_value: Objective value of the upper bound
        lower_value: Objective value of the lower bound
        fixed_zeroes: Positions forced out on the path from the root
        fixed_ones: Positions forced in on the path from the root
        reason: Outcome tag of the node
    """

    upper_bound: tuple[BoundShare, ...]
    lower_bound: tuple[int, ...]
    upper_value: float
    lower_value: float
    fixed_zeroes: Positions
    fixed_ones: Positions
    reason: NodeReason

    def __post_init__(self) -> None:
        if type(self) is SearchNode:
            raise TypeError("SearchNode is abstract; build a TerminalNode or a BranchNode")

    @property
    def children(self) -> tuple["SearchNode", ...]:
        return ()

    @property
    def is_terminal(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class TerminalNode(SearchNode):
    """A node the search did not expand: optimal, dominated or infeasible."""

    def __post_init__(self) -> None:
        if self.reason not in TERMINAL_REASONS:
            raise ValueError(f"Terminal node cannot carry reason '{self.reason.value}'")


@dataclass(frozen=True)
class BranchNode(SearchNode):
    """A node expanded into its fix-to-1 and fix-to-0 children."""

    one_child: SearchNode
    zero_child: SearchNode

    def __post_init__(self) -> None:
        if self.reason not in BRANCH_REASONS:
            raise ValueError(f"Branch node cannot carry reason '{self.reason.value}'")

    @property
    def children(self) -> tuple[SearchNode, ...]:
        return (self.one_child, self.zero_child)

    def children_in_order(self, strategy: TraversalStrategy) -> tuple[SearchNode, SearchNode]:
        """Children in the order the given strategy evaluates them."""
        if strategy == TraversalStrategy.ONES_FIRST:
            return (self.one_child, self.zero_child)
        return (self.zero_child, self.one_child)


class Incumbent:
    """
    Best integral objective value found so far in one solve.

    Only ever increases. Every improvement is appended to `history`, which
    starts at the initial value.
    """

    def __init__(self, initial: float = 0.0):
        self._history: list[float] = [initial]
        self._selection: Positions = frozenset()

    @property
    def value(self) -> float:
        return self._history[-1]

    @property
    def history(self) -> tuple[float, ...]:
        return tuple(self._history)

    @property
    def selection(self) -> Positions:
        """Positions of the integral solution that achieved `value`."""
        return self._selection

    def offer(self, candidate: float, lower_bound: tuple[int, ...]) -> bool:
        """Raise the incumbent to `candidate` if it is strictly better."""
        if candidate > self.value:
            self._history.append(candidate)
            self._selection = frozenset(i for i, chosen in enumerate(lower_bound) if chosen)
            return True
        return False


def iter_nodes(
    node: SearchNode, strategy: TraversalStrategy = TraversalStrategy.ONES_FIRST
) -> Iterator[SearchNode]:
    """Yield `node` and its descendants depth-first in evaluation order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, BranchNode):
            first, second = current.children_in_order(strategy)
            stack.append(second)
            stack.append(first)


@dataclass(frozen=True)
class SearchResult:
    """
    Everything a finished solve produces.

    Attributes:
        root: Root of the recorded search tree
        incumbent_history: Incumbent values in discovery order, starting at 0
        ordered_items: Items sorted by ratio; node vectors index into this order
        capacity: Capacity the instance was solved against
        strategy: Traversal strategy used by the search
        best_positions: Positions (in `ordered_items`) of the best solution found
        solve_time: Wall time of the search in seconds
    """

    root: SearchNode
    incumbent_history: tuple[float, ...]
    ordered_items: ItemCatalog
    capacity: Number
    strategy: TraversalStrategy
    best_positions: Positions = frozenset()
    solve_time: float = 0.0

    @property
    def best_value(self) -> float:
        return self.incumbent_history[-1]

    @property
    def best_items(self) -> tuple[Item, ...]:
        return tuple(self.ordered_items[i] for i in sorted(self.best_positions))

    @property
    def node_count(self) -> int:
        return sum(1 for _ in iter_nodes(self.root, self.strategy))


class BranchAndBoundSolver:
    """
    Depth-first branch-and-bound for the 0-1 knapsack problem.

    Algorithm:
    1. Sort items by value/weight ratio (descending)
    2. At each node, bound the fixed assignment with the fractional relaxation
    3. Raise the incumbent with the node's integral fill when it is better
    4. Stop at infeasible, dominated or already-integral nodes
    5. Otherwise branch on the split item, fixing it to 1 and to 0

    Both children of every branch are explored; the strategy only decides
    which one runs first and therefore which subtrees see an improved
    incumbent earlier.
    """

    def __init__(self, strategy: TraversalStrategy | str = TraversalStrategy.ONES_FIRST):
        self.strategy = TraversalStrategy(strategy)

    def solve(self, catalog: ItemCatalog, capacity: Number) -> SearchResult:
        """
        Solve one knapsack instance and record the full search tree

        Args:
            catalog: Items in input order
            capacity: Knapsack capacity (any finite value, negative included)

        Returns:
            SearchResult with the root node and the incumbent history

        Raises:
            ValidationError: If capacity is NaN or infinite
        """
        if not math.isfinite(capacity):
            raise ValidationError(
                f"Capacity must be a finite number, got {capacity}",
                suggestion="Pass a finite capacity such as 20.",
            )

        start_time = time.perf_counter()

        ordered_items = catalog.ordered()
        incumbent = Incumbent()
        logger.debug(
            "Solving %d items, capacity=%s, strategy=%s",
            len(ordered_items),
            capacity,
            self.strategy.value,
        )

        root = self._explore(ordered_items, capacity, incumbent, frozenset(), frozenset())

        result = SearchResult(
            root=root,
            incumbent_history=incumbent.history,
            ordered_items=ordered_items,
            capacity=capacity,
            strategy=self.strategy,
            best_positions=incumbent.selection,
            solve_time=time.perf_counter() - start_time,
        )
        logger.info(
            "Search finished: best value %s after %d nodes (%d incumbent updates)",
            result.best_value,
            result.node_count,
            len(result.incumbent_history) - 1,
        )
        return result

    def _explore(
        self,
        items: ItemCatalog,
        capacity: Number,
        incumbent: Incumbent,
        fixed_zeroes: Positions,
        fixed_ones: Positions,
    ) -> SearchNode:
        bound = compute_relaxation(items, capacity, fixed_ones, fixed_zeroes)
        fields = dict(
            upper_bound=bound.upper_bound,
            lower_bound=bound.lower_bound,
            upper_value=bound.upper_value,
            lower_value=bound.lower_value,
            fixed_zeroes=fixed_zeroes,
            fixed_ones=fixed_ones,
        )

        if bound.infeasible:
            logger.debug("Infeasible: fixed ones %s exceed capacity", sorted(fixed_ones))
            return TerminalNode(reason=NodeReason.INFEASIBLE, **fields)

        global_update = incumbent.offer(bound.lower_value, bound.lower_bound)
        if global_update:
            logger.debug("Incumbent raised to %s", bound.lower_value)

        if bound.upper_value < incumbent.value:
            logger.debug(
                "Dominated: upper value %s < incumbent %s", bound.upper_value, incumbent.value
            )
            return TerminalNode(reason=NodeReason.DOMINATED, **fields)

        if bound.upper_value == bound.lower_value:
            logger.debug("Optimal: relaxation is integral at %s", bound.lower_value)
            return TerminalNode(reason=NodeReason.OPTIMAL, **fields)

        split = bound.branching_index
        if split is None:
            raise SearchInvariantError(
                f"No branching position while bounds differ "
                f"(upper={bound.upper_value}, lower={bound.lower_value}, "
                f"fixed ones={sorted(fixed_ones)}, fixed zeroes={sorted(fixed_zeroes)})",
                suggestion="This is an engine fault; please report the instance that triggered it.",
            )

        logger.debug("Branching on position %d", split)
        if self.strategy == TraversalStrategy.ONES_FIRST:
            one_child = self._explore(items, capacity, incumbent, fixed_zeroes, fixed_ones | {split})
            zero_child = self._explore(items, capacity, incumbent, fixed_zeroes | {split}, fixed_ones)
        else:
            zero_child = self._explore(items, capacity, incumbent, fixed_zeroes | {split}, fixed_ones)
            one_child = self._explore(items, capacity, incumbent, fixed_zeroes, fixed_ones | {split})

        return BranchNode(
            reason=NodeReason.GLOBAL_UPDATE if global_update else NodeReason.NONE,
            one_child=one_child,
            zero_child=zero_child,
            **fields,
        )


def branch_and_bound_knapsack(
    catalog: ItemCatalog,
    capacity: Number,
    strategy: TraversalStrategy | str = TraversalStrategy.ONES_FIRST,
) -> SearchResult:
    """
    Solve a knapsack instance with branch-and-bound.

    Args:
        catalog: Items in input order
        capacity: Knapsack capacity
        strategy: "ones-first" or "zeroes-first"

    Returns:
        SearchResult of the solve
    """
    solver = BranchAndBoundSolver(strategy=strategy)
    return solver.solve(catalog, capacity)
