from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Dict, List, Optional, Protocol, Sequence

from ..scenario import Scenario


class SolverStatus(StrEnum):
    OPTIMAL = "optimal"
    SUBOPTIMAL = "suboptimal"
    INFEASIBLE = "infeasible"
    TIME_LIMIT = "time_limit"


@dataclass
class Tour:
    """A closed tour: `route` visits every city once and returns to route[0]."""

    route: List[int]
    cost: float = float("inf")

    @classmethod
    def from_route(cls, scenario: Scenario, route: Sequence[int]) -> Tour:
        route = [int(city) for city in route]
        return cls(route=route, cost=scenario.tour_cost(route))

    def rotated(self, start: int = 0) -> Tour:
        """Same cycle, listed from `start`."""
        if start not in self.route:
            raise ValueError(f"City {start} is not on the tour")
        idx = self.route.index(start)
        return Tour(route=self.route[idx:] + self.route[:idx], cost=self.cost)

    def __len__(self) -> int:
        return len(self.route)


@dataclass
class SolverStats:
    solver_name: str
    solve_time: Optional[float] = None
    num_iters: Optional[int] = None


@dataclass
class SolverResult:
    tour: Optional[Tour]
    status: SolverStatus
    stats: SolverStats
    improvements: int = 0
    raw_result: Dict[str, object] = field(default_factory=dict)

    @property
    def cost(self) -> float:
        return self.tour.cost if self.tour is not None else float("inf")

    @property
    def elapsed(self) -> float:
        return self.stats.solve_time or 0.0


class SolverBackend(Protocol):
    def solve(
        self,
        scenario: Scenario,
        solver: str,
        solver_options: Dict[str, object],
    ) -> SolverResult:
        ...
