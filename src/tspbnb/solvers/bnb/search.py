"""
Branch-and-Bound Search Engine

Best-first search over partial tours. The root is the fully reduced cost
matrix with route [0]; expanding a node creates one child per unvisited city
reachable from its last city. Children whose bound cannot beat the best
solution so far (BSSF) are pruned, the rest go on the frontier. The search
stops when the frontier is empty or the time budget is spent.

The time budget is checked once per iteration, before the next node is popped.
An expansion that has started always runs to completion.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

import numpy as np

from ...constants import DEFAULT_REDUCTION_EPS, DEFAULT_TIME_LIMIT_MS
from ..base import Tour
from .node import BBStats, State
from .queue import FrontierQueue, HeapPriorityQueue, PriorityOrder
from .reduction import build_cost_matrix

logger = logging.getLogger(__name__)


class BranchAndBoundSearch:
    """
    One branch-and-bound run over a fixed city set.

    Args:
        cost: cost oracle, cost(i, j) -> float (`inf` when unreachable)
        n_cities: number of cities, at least 1
        time_limit_ms: wall-clock budget in milliseconds
        queue_factory: builds the frontier from the search's PriorityOrder
        initial_tour: optional BSSF seed
        eps: reduction epsilon
        verbose: print a progress table
    """

    def __init__(
        self,
        cost: Callable[[int, int], float],
        n_cities: int,
        time_limit_ms: float = DEFAULT_TIME_LIMIT_MS,
        queue_factory: Callable[[PriorityOrder], FrontierQueue] = HeapPriorityQueue,
        initial_tour: Optional[Tour] = None,
        eps: float = DEFAULT_REDUCTION_EPS,
        verbose: bool = False,
    ):
        if n_cities < 1:
            raise ValueError(f"Need at least one city, got {n_cities}")
        if time_limit_ms <= 0:
            raise ValueError(f"time_limit_ms must be positive, got {time_limit_ms}")

        self.cost = cost
        self.n_cities = n_cities
        self.time_limit_ms = float(time_limit_ms)
        self.queue_factory = queue_factory
        self.eps = eps
        self.verbose = verbose

        self.bssf: Optional[Tour] = initial_tour
        self.stats = BBStats()
        self.elapsed = 0.0

        self._costs: np.ndarray | None = None
        self._node_counter = 1
        self._start_time = 0.0

    @property
    def bssf_cost(self) -> float:
        return self.bssf.cost if self.bssf is not None else float("inf")

    def run(self) -> Optional[Tour]:
        """Search until the frontier is empty or time runs out; return the BSSF."""
        self._start_time = time.time()
        self.stats = BBStats()
        if self.bssf is not None:
            self.stats.incumbent_history.append(self.bssf.cost)

        if self.n_cities == 1:
            self._offer([0], 0.0)
            self.stats.terminated_by = "trivial"
            self.elapsed = time.time() - self._start_time
            return self.bssf

        # Initializing
        matrix, average = build_cost_matrix(self.cost, self.n_cities)
        self._costs = matrix.copy()
        self.stats.average_edge_cost = average

        queue = self.queue_factory(PriorityOrder(average))
        root = State.root(matrix, self.eps)
        self.stats.root_bound = root.bound
        logger.debug(
            "Root bound %.4f, average edge cost %.4f, %d cities",
            root.bound, average, self.n_cities,
        )

        if self.verbose:
            print(f"Branch-and-Bound: {self.n_cities} cities, "
                  f"budget {self.time_limit_ms / 1000:.1f}s, {type(queue).__name__}")
            print(f"{'Expanded':>10} {'Incumbent':>12} {'Queue':>8} "
                  f"{'Pruned':>8} {'Time':>8}")
            print("-" * 50)

        self._expand(root, queue)

        self.stats.terminated_by = "exhausted"
        iteration = 0
        while not queue.is_empty():
            elapsed_ms = (time.time() - self._start_time) * 1000.0
            if elapsed_ms >= self.time_limit_ms:
                self.stats.terminated_by = "time_limit"
                break
            self._expand(queue.delete_min(), queue)
            iteration += 1

            if self.verbose and iteration % 1000 == 0:
                self._print_progress(queue)

        self.stats.max_queue_size = queue.largest_size()
        self.elapsed = time.time() - self._start_time

        logger.info(
            "Search %s after %.3fs: cost %.4f, %d improvements, %d created, "
            "%d pruned, peak queue %d",
            self.stats.terminated_by, self.elapsed, self.bssf_cost,
            self.stats.improvements, self.stats.nodes_created,
            self.stats.nodes_pruned, self.stats.max_queue_size,
        )
        return self.bssf

    def _expand(self, state: State, queue: FrontierQueue) -> None:
        if state.bound > self.bssf_cost:
            self.stats.nodes_pruned += 1
            return

        self.stats.nodes_expanded += 1

        if state.is_complete():
            if np.isinf(state.closing_bound()):
                return
            route = list(state.route)
            self._offer(route, self._route_cost(route))
            return

        visited = set(state.route)
        for city in range(self.n_cities):
            if city in visited or np.isinf(self._costs[state.last_city, city]):
                continue

            child = state.branch(city, self._node_counter, self.eps)
            self._node_counter += 1
            self.stats.nodes_created += 1
            if child is None:
                continue

            if child.bound < self.bssf_cost:
                queue.insert(child)
            else:
                self.stats.nodes_pruned += 1

    def _offer(self, route: List[int], cost: float) -> bool:
        """Replace the BSSF if `cost` is strictly better."""
        if not cost < self.bssf_cost:
            return False
        self.bssf = Tour(route=route, cost=cost)
        self.stats.improvements += 1
        self.stats.incumbent_history.append(cost)
        logger.debug("New BSSF %.4f (improvement %d)", cost, self.stats.improvements)
        if self.verbose:
            elapsed = time.time() - self._start_time
            print(f"{self.stats.nodes_expanded:>10} {cost:>12.4f} {'':>8} "
                  f"{self.stats.nodes_pruned:>8} {elapsed:>7.2f}s *")
        return True

    def _route_cost(self, route: List[int]) -> float:
        total = 0.0
        for a, b in zip(route, route[1:] + route[:1]):
            total += self._costs[a, b]
        return float(total)

    def _print_progress(self, queue: FrontierQueue) -> None:
        elapsed = time.time() - self._start_time
        inc_str = f"{self.bssf_cost:>12.4f}" if self.bssf is not None else "         inf"
        print(f"{self.stats.nodes_expanded:>10} {inc_str} {len(queue):>8} "
              f"{self.stats.nodes_pruned:>8} {elapsed:>7.2f}s")
