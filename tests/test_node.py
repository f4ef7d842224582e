"""Tests for search node construction and branching."""

import numpy as np
import pytest

from tspbnb import Scenario
from tspbnb.constants import Difficulty
from tspbnb.solvers.bnb.node import State
from tspbnb.solvers.bnb.reduction import build_cost_matrix


def root_for(scenario):
    matrix, _ = build_cost_matrix(scenario.cost, scenario.n_cities)
    return State.root(matrix)


def test_root_starts_at_city_zero(line_scenario):
    root = root_for(line_scenario)
    assert root.route == [0]
    assert root.last_city == 0
    assert root.bound == pytest.approx(4.0)


def test_branch_does_not_touch_parent(asymmetric_scenario):
    root = root_for(asymmetric_scenario)
    matrix_before = root.matrix.copy()
    child = root.branch(2, node_id=1)

    assert child is not None
    assert child.matrix is not root.matrix
    assert np.array_equal(root.matrix, matrix_before)
    assert root.route == [0]
    assert child.route == [0, 2]
    assert child.last_city == 2
    assert child.node_id == 1


def test_branch_to_unreachable_city(asymmetric_scenario):
    root = root_for(asymmetric_scenario)
    assert root.branch(3, node_id=1) is None


@pytest.mark.parametrize("seed", range(4))
def test_bound_monotonic_down_the_tree(seed):
    scenario = Scenario.random(6, seed=seed)
    frontier = [root_for(scenario)]
    next_id = 1
    while frontier:
        parent = frontier.pop()
        if parent.is_complete():
            continue
        for city in range(scenario.n_cities):
            if city in parent.route:
                continue
            child = parent.branch(city, next_id)
            next_id += 1
            if child is None:
                continue
            assert child.bound >= parent.bound
            frontier.append(child)


@pytest.mark.parametrize("seed", range(3))
def test_complete_route_bound_matches_tour_cost(seed):
    scenario = Scenario.random(5, seed=seed, difficulty=Difficulty.EASY)
    state = root_for(scenario)
    for node_id, city in enumerate([1, 2, 3, 4], start=1):
        state = state.branch(city, node_id, eps=0.0)
    assert state.is_complete()
    assert state.closing_bound() == pytest.approx(scenario.tour_cost([0, 1, 2, 3, 4]))


def test_two_city_child_keeps_return_edge(two_city_scenario):
    root = root_for(two_city_scenario)
    child = root.branch(1, node_id=1)
    assert child.is_complete()
    assert child.closing_bound() == pytest.approx(8.0)


def test_closing_bound_unreachable():
    scenario = Scenario(np.array([[np.inf, 1.0], [np.inf, np.inf]]))
    child = root_for(scenario).branch(1, node_id=1)
    assert np.isinf(child.closing_bound())


def test_closing_bound_reads_return_edge(asymmetric_scenario):
    state = root_for(asymmetric_scenario)
    for node_id, city in enumerate([2, 1, 3, 4], start=1):
        state = state.branch(city, node_id)
    matrix_before = state.matrix.copy()

    assert state.closing_bound() == pytest.approx(state.bound + state.matrix[4, 0])
    assert np.array_equal(state.matrix, matrix_before)
