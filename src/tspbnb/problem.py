from __future__ import annotations

import time
from typing import Optional

from .constants import Solver
from .scenario import Scenario
from .solvers import SolverResult, SolverStats, SolverStatus, Tour, get_solver_backend


class Problem:
    """A traveling salesman instance bound to a scenario."""

    def __init__(self, scenario: Scenario):
        if not isinstance(scenario, Scenario):
            raise TypeError(
                f"Problem expects a Scenario, got {type(scenario).__name__}"
            )
        self.scenario = scenario

        self.status: Optional[SolverStatus] = None
        self.solver_stats: Optional[SolverStats] = None
        self.tour: Optional[Tour] = None

    @property
    def cost(self) -> float:
        return self.tour.cost if self.tour is not None else float("inf")

    def solve(self, solver=None, solver_options=None, verbose=False) -> SolverResult:
        """
        Search for a low-cost tour.

        Args:
            solver: The solver to use (default: BNB)
            solver_options: Options to pass to the solver backend
            verbose: Whether to print solver progress. Sets the appropriate
                     verbosity option for the selected backend.

        Returns:
            SolverResult with the tour, its cost and solver statistics
        """
        solver = solver if solver is not None else Solver.BNB
        options = dict(solver_options or {})

        if verbose and "verbose" not in options and "bb_verbose" not in options:
            options["verbose"] = True

        backend = get_solver_backend(solver)
        start_time = time.time()
        result = backend.solve(self.scenario, str(solver), options)
        if result.stats.solve_time is None:
            result.stats.solve_time = time.time() - start_time

        self.status = result.status
        self.solver_stats = result.stats
        self.tour = result.tour
        return result
