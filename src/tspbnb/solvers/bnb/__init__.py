"""
Branch-and-Bound TSP Search

This package implements a best-first branch-and-bound search over partial
tours, bounded by reduced cost matrices.

Modules:
- search: BranchAndBoundSearch engine (expansion, pruning, time budget)
- node: State search node and BBStats statistics
- queue: PriorityOrder and the array/heap frontier backends
- reduction: Cost matrix construction, reduction and edge commitment
"""

from .node import BBStats, State
from .queue import (
    ArrayPriorityQueue,
    FrontierQueue,
    HeapPriorityQueue,
    PriorityOrder,
    make_queue,
)
from .reduction import build_cost_matrix, reduce_matrix, travel
from .search import BranchAndBoundSearch

__all__ = [
    "BranchAndBoundSearch",
    "BBStats",
    "State",
    "ArrayPriorityQueue",
    "FrontierQueue",
    "HeapPriorityQueue",
    "PriorityOrder",
    "make_queue",
    "build_cost_matrix",
    "reduce_matrix",
    "travel",
]
