"""
Branch-and-Bound Search Nodes and Statistics

A search node is a partial tour starting at city 0 together with the reduced
cost matrix that remains once its edges are committed. Nodes are built once,
by copying a parent and taking one step, and are not changed afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ...constants import DEFAULT_REDUCTION_EPS
from .reduction import reduce_matrix, travel


@dataclass(eq=False)
class State:
    """
    A node in the branch-and-bound tree.

    Bound semantics:
    - `bound` is a lower bound on the cost of every closed tour that extends
      `route`. It never decreases from parent to child.
    - `matrix` is private to the node. Children get their own copy.
    - `node_id` is the handle the heap queue tracks the node by.
    """

    matrix: np.ndarray
    route: List[int]
    bound: float
    last_city: int = 0
    node_id: int = 0

    @classmethod
    def root(
        cls,
        matrix: np.ndarray,
        eps: float = DEFAULT_REDUCTION_EPS,
    ) -> State:
        """Reduce a full cost matrix (in place) and start the route at city 0."""
        bound = reduce_matrix(matrix, eps)
        return cls(matrix=matrix, route=[0], bound=bound, last_city=0, node_id=0)

    @property
    def depth(self) -> int:
        return len(self.route)

    def is_complete(self) -> bool:
        """Every city is on the route; only the edge back to 0 is missing."""
        return len(self.route) >= self.matrix.shape[0]

    def branch(
        self,
        city: int,
        node_id: int,
        eps: float = DEFAULT_REDUCTION_EPS,
    ) -> Optional[State]:
        """Child that extends this route to `city`, or None if it is unreachable.

        The reverse edge stays open when the child completes the route, since
        for two cities it is the edge back to the start.
        """
        matrix = self.matrix.copy()
        route = self.route + [city]
        completes = len(route) >= matrix.shape[0]
        step = travel(matrix, self.last_city, city, block_reverse=not completes)
        if np.isinf(step):
            return None
        bound = self.bound + step + reduce_matrix(matrix, eps)
        return State(
            matrix=matrix,
            route=route,
            bound=bound,
            last_city=city,
            node_id=node_id,
        )

    def closing_bound(self) -> float:
        """Bound of the closed tour, `inf` if the last city cannot return to 0."""
        return self.bound + float(self.matrix[self.last_city, self.route[0]])


@dataclass
class BBStats:
    """Statistics from the branch-and-bound search."""

    nodes_created: int = 0
    nodes_expanded: int = 0
    nodes_pruned: int = 0
    max_queue_size: int = 0
    improvements: int = 0
    root_bound: float = float("inf")
    average_edge_cost: float = 0.0
    terminated_by: str = ""
    # BSSF cost after every replacement, in order
    incumbent_history: List[float] = field(default_factory=list)
