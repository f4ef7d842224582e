"""
Greedy Nearest-Neighbor Backend

Builds one tour per start city by always moving to the cheapest reachable
city not yet visited, and keeps the cheapest closed tour. It is fast and
rarely optimal, which makes it a good source of an initial BSSF for the
branch-and-bound search.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Dict, List, Optional, Tuple

from ..constants import DEFAULT_TIME_LIMIT_MS
from ..scenario import Scenario
from .base import SolverResult, SolverStats, SolverStatus, Tour

logger = logging.getLogger(__name__)


def nearest_neighbor_tour(
    scenario: Scenario,
    time_limit_ms: float = DEFAULT_TIME_LIMIT_MS,
) -> Tuple[Optional[Tour], int, bool]:
    """Run nearest-neighbor from every start city.

    The budget is checked before each start city.

    Returns:
        Tuple of (best tour rotated to start at city 0 or None,
        number of times the best tour improved, whether every start was tried)
    """
    n = scenario.n_cities
    start_time = time.time()
    best: Optional[Tour] = None
    improvements = 0

    for start_city in range(n):
        if (time.time() - start_time) * 1000.0 >= time_limit_ms:
            return best, improvements, False

        route = _greedy_route(scenario, start_city)
        if route is None:
            continue
        cost = scenario.tour_cost(route)
        if math.isinf(cost):
            continue
        if best is None or cost < best.cost:
            best = Tour(route=route, cost=cost).rotated(0)
            improvements += 1
            logger.debug("Greedy tour from city %d: %.4f", start_city, cost)

    return best, improvements, True


def _greedy_route(scenario: Scenario, start_city: int) -> Optional[List[int]]:
    n = scenario.n_cities
    route = [start_city]
    visited = {start_city}
    current = start_city
    while len(route) < n:
        nearest = -1
        shortest = math.inf
        for city in range(n):
            if city in visited:
                continue
            c = scenario.cost(current, city)
            if c < shortest:
                shortest = c
                nearest = city
        if nearest == -1:
            # Dead end: no reachable unvisited city
            return None
        route.append(nearest)
        visited.add(nearest)
        current = nearest
    return route


class GreedyBackend:
    """Nearest-neighbor construction heuristic."""

    def solve(
        self,
        scenario: Scenario,
        solver: str,  # noqa: ARG002 - only one greedy variant
        solver_options: Dict[str, object],
    ) -> SolverResult:
        """
        Build a tour greedily.

        Args:
            scenario: The city set and cost oracle
            solver: Ignored
            solver_options:
                - greedy_time_limit_ms: Budget in milliseconds (default: 60000)
                - verbose: Print the result (default: False)

        Returns:
            SolverResult with the best greedy tour. The status is never OPTIMAL.
        """
        options = dict(solver_options)
        time_limit_ms = float(options.pop("greedy_time_limit_ms", DEFAULT_TIME_LIMIT_MS))
        verbose = bool(options.pop("verbose", False))
        if options:
            raise ValueError(f"Unknown greedy options: {sorted(options)}")
        if time_limit_ms <= 0:
            raise ValueError(f"greedy_time_limit_ms must be positive, got {time_limit_ms}")

        start_time = time.time()
        tour, improvements, finished = nearest_neighbor_tour(scenario, time_limit_ms)
        solve_time = time.time() - start_time

        if tour is not None:
            status = SolverStatus.SUBOPTIMAL
        elif finished:
            status = SolverStatus.INFEASIBLE
        else:
            status = SolverStatus.TIME_LIMIT

        if verbose:
            cost_str = f"{tour.cost:.4f}" if tour is not None else "inf"
            print(f"Greedy: {status}, cost {cost_str}, {solve_time:.3f}s")

        return SolverResult(
            tour=tour,
            status=status,
            stats=SolverStats(
                solver_name="Greedy",
                solve_time=solve_time,
                num_iters=scenario.n_cities,
            ),
            improvements=improvements,
            raw_result={"finished": finished},
        )
