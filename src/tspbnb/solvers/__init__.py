from __future__ import annotations

from typing import Dict

from ..constants import Solver
from .base import (
    SolverBackend,
    SolverResult,
    SolverStats,
    SolverStatus,
    Tour,
)
from .bnb_backend import BranchAndBoundBackend
from .greedy_backend import GreedyBackend


_BNB_BACKEND = BranchAndBoundBackend()
_GREEDY_BACKEND = GreedyBackend()


_SOLVER_BACKENDS: Dict[str, SolverBackend] = {
    Solver.BNB.value: _BNB_BACKEND,
    Solver.GREEDY.value: _GREEDY_BACKEND,
}


def register_solver_backend(solver_name: str, backend: SolverBackend) -> None:
    _SOLVER_BACKENDS[solver_name] = backend


def get_solver_backend(solver: Solver | str) -> SolverBackend:
    solver_name = solver.value if isinstance(solver, Solver) else str(solver)
    if solver_name not in _SOLVER_BACKENDS:
        raise ValueError(f"No solver backend registered for solver '{solver_name}'")
    return _SOLVER_BACKENDS[solver_name]


__all__ = [
    "BranchAndBoundBackend",
    "GreedyBackend",
    "SolverBackend",
    "SolverResult",
    "SolverStats",
    "SolverStatus",
    "Tour",
    "get_solver_backend",
    "register_solver_backend",
]
