"""
Branch-and-Bound TSP Backend

Wraps the reduced-matrix branch-and-bound search for use through
`Problem.solve`:

- Option parsing and validation
- Frontier backend selection (linear-scan array or binary heap)
- BSSF seeding (none, greedy, or a caller-supplied tour)
- Status and result packaging
"""

from __future__ import annotations

import logging
import time
from functools import partial
from typing import Dict, Optional, Sequence

from ..constants import (
    DEFAULT_REDUCTION_EPS,
    DEFAULT_TIME_LIMIT_MS,
    MIN_SEARCH_TIME_MS,
    QueueKind,
)
from ..scenario import Scenario
from .base import SolverResult, SolverStats, SolverStatus, Tour
from .bnb.queue import make_queue
from .bnb.search import BranchAndBoundSearch
from .greedy_backend import nearest_neighbor_tour

logger = logging.getLogger(__name__)


class BranchAndBoundBackend:
    """
    Time-budgeted branch-and-bound solver for asymmetric, incomplete TSPs.

    The search returns the best tour found when the budget expires; it is
    only proven optimal when the frontier is exhausted.
    """

    def solve(
        self,
        scenario: Scenario,
        solver: str,  # noqa: ARG002 - only one B&B variant
        solver_options: Dict[str, object],
    ) -> SolverResult:
        """
        Solve a TSP instance using branch-and-bound.

        Args:
            scenario: The city set and cost oracle
            solver: Ignored
            solver_options: Options:

                - bb_time_limit_ms: Budget in milliseconds for seeding plus
                  search (default: 60000)
                - bb_queue: "auto", "heap" or "array" (default: "auto")
                - bb_initial_tour: BSSF seed; None, "greedy", a Tour or a
                  sequence of city indices (default: None)
                - bb_reduction_eps: Matrix reduction epsilon (default: 0.01)
                - bb_verbose: Print progress (default: False)

        Returns:
            SolverResult with the best tour found
        """
        options = dict(solver_options)
        time_limit_ms = float(options.pop("bb_time_limit_ms", DEFAULT_TIME_LIMIT_MS))
        queue_str = str(options.pop("bb_queue", QueueKind.AUTO.value))
        seed = options.pop("bb_initial_tour", None)
        eps = float(options.pop("bb_reduction_eps", DEFAULT_REDUCTION_EPS))
        verbose = bool(options.pop("bb_verbose", options.pop("verbose", False)))

        if options:
            raise ValueError(f"Unknown branch-and-bound options: {sorted(options)}")
        if time_limit_ms <= 0:
            raise ValueError(f"bb_time_limit_ms must be positive, got {time_limit_ms}")
        if eps < 0:
            raise ValueError(f"bb_reduction_eps must be non-negative, got {eps}")
        try:
            queue_kind = QueueKind(queue_str)
        except ValueError:
            raise ValueError(
                f"bb_queue must be one of {[k.value for k in QueueKind]}, got '{queue_str}'"
            ) from None

        seed_start = time.time()
        initial_tour = self._resolve_seed(scenario, seed, time_limit_ms)
        seed_time = time.time() - seed_start
        # Greedy seeding spends part of the same budget
        search_limit_ms = max(time_limit_ms - seed_time * 1000.0, MIN_SEARCH_TIME_MS)

        search = BranchAndBoundSearch(
            cost=scenario.cost,
            n_cities=scenario.n_cities,
            time_limit_ms=search_limit_ms,
            queue_factory=partial(make_queue, queue_kind, scenario.n_cities),
            initial_tour=initial_tour,
            eps=eps,
            verbose=verbose,
        )
        tour = search.run()
        stats = search.stats

        if stats.terminated_by == "time_limit":
            status = SolverStatus.SUBOPTIMAL if tour is not None else SolverStatus.TIME_LIMIT
        else:
            status = SolverStatus.OPTIMAL if tour is not None else SolverStatus.INFEASIBLE

        if verbose:
            print("-" * 50)
            print(f"Status: {status}")
            print(f"States created: {stats.nodes_created}")
            print(f"States pruned: {stats.nodes_pruned}")
            print(f"Max stored states: {stats.max_queue_size}")
            print(f"Improvements: {stats.improvements}")
            if tour is not None:
                print(f"Best cost: {tour.cost:.6g}")

        return SolverResult(
            tour=tour,
            status=status,
            stats=SolverStats(
                solver_name="B&B(reduced matrix)",
                solve_time=search.elapsed,
                num_iters=stats.nodes_expanded,
            ),
            improvements=stats.improvements,
            raw_result={
                "bb_stats": stats,
                "seed_cost": initial_tour.cost if initial_tour is not None else None,
                "seed_time": seed_time,
                "search_time_limit_ms": search_limit_ms,
            },
        )

    def _resolve_seed(
        self,
        scenario: Scenario,
        seed: object,
        time_limit_ms: float,
    ) -> Optional[Tour]:
        """Turn the bb_initial_tour option into a costed tour starting at city 0."""
        if seed is None:
            return None

        if isinstance(seed, str):
            if seed != "greedy":
                raise ValueError(f"bb_initial_tour must be 'greedy', a tour or None, got '{seed}'")
            tour, _, _ = nearest_neighbor_tour(scenario, time_limit_ms)
            if tour is None:
                logger.debug("Greedy seeding found no tour")
            return tour

        if isinstance(seed, Tour):
            route: Sequence[int] = seed.route
        else:
            route = list(seed)  # type: ignore[call-overload]

        if not scenario.is_valid_tour(route):
            raise ValueError(
                f"bb_initial_tour must visit each of the {scenario.n_cities} cities once"
            )
        tour = Tour.from_route(scenario, route)
        if tour.cost == float("inf"):
            logger.warning("Ignoring bb_initial_tour: it uses an unreachable edge")
            return None
        logger.debug("Seeding BSSF with cost %.4f", tour.cost)
        return tour.rotated(0)
