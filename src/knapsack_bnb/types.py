"""
Common type definitions for knapsack-bnb.
"""

from pathlib import Path
from typing import TypeAlias

# Weights, values and capacities may be integral or real
Number: TypeAlias = int | float

# Positions in the ratio-ordered item list
Positions: TypeAlias = frozenset[int]

# Renderer-facing attribute mapping of a projected tree node
AttributeDict: TypeAlias = dict[str, str]

PathLike: TypeAlias = str | Path
