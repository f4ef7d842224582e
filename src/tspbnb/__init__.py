__all__ = [
    "Scenario",
    "Problem",
    "Tour",
    "SolverResult",
    "SolverStatus",
    "BNB",
    "GREEDY",
    "EASY",
    "NORMAL",
    "HARD",
    "QueueKind",
    "register_solver_backend",
]

from .scenario import Scenario
from .problem import Problem
from .constants import Solver, Difficulty, QueueKind
from .solvers import SolverResult, SolverStatus, Tour, register_solver_backend

BNB = Solver.BNB
GREEDY = Solver.GREEDY

EASY = Difficulty.EASY
NORMAL = Difficulty.NORMAL
HARD = Difficulty.HARD
