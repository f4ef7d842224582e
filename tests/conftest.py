import itertools

import numpy as np
import pytest

from tspbnb import Scenario

INF = np.inf


def brute_force_cost(scenario):
    """Cheapest closed tour by enumeration, `inf` if none exists."""
    n = scenario.n_cities
    if n == 1:
        return 0.0
    best = INF
    for perm in itertools.permutations(range(1, n)):
        best = min(best, scenario.tour_cost([0, *perm]))
    return best


@pytest.fixture
def line_scenario():
    """Four cities A-B-C-D on a ring: adjacent pairs cost 1, diagonals 2."""
    costs = np.array(
        [
            [INF, 1, 2, 1],
            [1, INF, 1, 2],
            [2, 1, INF, 1],
            [1, 2, 1, INF],
        ],
        dtype=float,
    )
    return Scenario(costs, labels=["A", "B", "C", "D"])


@pytest.fixture
def two_city_scenario():
    return Scenario(np.array([[INF, 3.0], [5.0, INF]]))


@pytest.fixture
def asymmetric_scenario():
    """Five cities, asymmetric, with a few missing edges."""
    costs = np.array(
        [
            [INF, 7, 3, INF, 12],
            [4, INF, 6, 9, INF],
            [INF, 2, INF, 8, 5],
            [10, INF, 4, INF, 3],
            [6, 11, INF, 1, INF],
        ],
        dtype=float,
    )
    return Scenario(costs)
