"""Tests for Scenario construction and the cost oracle."""

import networkx as nx
import numpy as np
import pytest

import tspbnb as tsp
from tspbnb import Scenario
from tspbnb.constants import Difficulty


class TestScenarioBasics:
    def test_diagonal_is_unreachable(self):
        s = Scenario(np.zeros((3, 3)))
        assert all(np.isinf(s.cost(i, i)) for i in range(3))
        assert s.cost(0, 1) == 0.0
        assert len(s) == 3

    def test_input_is_copied(self):
        costs = np.ones((3, 3))
        s = Scenario(costs)
        costs[0, 1] = 99.0
        assert s.cost(0, 1) == 1.0

    def test_cost_matrix_is_writable_copy(self):
        s = Scenario(np.ones((3, 3)))
        m = s.cost_matrix()
        m[0, 1] = 5.0
        assert s.cost(0, 1) == 1.0

    @pytest.mark.parametrize(
        "costs",
        [
            np.zeros((0, 0)),
            np.zeros((2, 3)),
            np.zeros(4),
            np.array([[np.inf, -1.0], [1.0, np.inf]]),
            np.array([[np.inf, np.nan], [1.0, np.inf]]),
        ],
    )
    def test_rejects_malformed_matrix(self, costs):
        with pytest.raises(ValueError):
            Scenario(costs)

    def test_label_count_must_match(self):
        with pytest.raises(ValueError):
            Scenario(np.ones((2, 2)), labels=["a"])

    def test_tour_cost(self, line_scenario):
        assert line_scenario.tour_cost([0, 1, 2, 3]) == 4.0
        assert line_scenario.tour_cost([0, 2, 1, 3]) == 6.0
        assert line_scenario.tour_cost([0, 1, 2]) == np.inf
        assert line_scenario.tour_cost([0, 1, 1, 3]) == np.inf

    def test_tour_cost_with_missing_edge(self, asymmetric_scenario):
        assert asymmetric_scenario.tour_cost([0, 3, 1, 2, 4]) == np.inf

    def test_single_city_tour(self):
        assert Scenario(np.zeros((1, 1))).tour_cost([0]) == 0.0

    def test_is_valid_tour(self, line_scenario):
        assert line_scenario.is_valid_tour([3, 1, 0, 2])
        assert not line_scenario.is_valid_tour([0, 1, 2, 4])
        assert not line_scenario.is_valid_tour([])


class TestFromPoints:
    def test_euclidean(self):
        s = Scenario.from_points([[0, 0], [3, 4], [6, 8]])
        assert s.cost(0, 1) == pytest.approx(5.0)
        assert s.cost(2, 0) == pytest.approx(10.0)

    def test_metric_and_mask(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[0, 2] = False
        s = Scenario.from_points([[0, 0], [1, 1], [2, 2]], edge_mask=mask, metric="cityblock")
        assert s.cost(0, 1) == pytest.approx(2.0)
        assert np.isinf(s.cost(0, 2))
        assert s.cost(2, 0) == pytest.approx(4.0)

    def test_rejects_empty_point_list(self):
        with pytest.raises(ValueError):
            Scenario.from_points([])

    def test_rejects_flat_coordinate_list(self):
        with pytest.raises(ValueError):
            Scenario.from_points([0.0, 5.0, 10.0])

    def test_single_point(self):
        s = Scenario.from_points([[2.0, 3.0]])
        assert s.n_cities == 1
        assert s.tour_cost([0]) == 0.0

    def test_mask_shape_checked(self):
        with pytest.raises(ValueError):
            Scenario.from_points([[0, 0], [1, 1]], edge_mask=np.ones((3, 3), dtype=bool))


class TestFromGraph:
    def test_digraph_costs_and_labels(self):
        G = nx.DiGraph()
        G.add_edge("a", "b", weight=2.0)
        G.add_edge("b", "c", weight=3.0)
        G.add_edge("c", "a", weight=4.0)
        s = Scenario.from_graph(G)
        assert s.labels == ["a", "b", "c"]
        assert s.cost(0, 1) == 2.0
        assert np.isinf(s.cost(1, 0))
        assert s.tour_cost([0, 1, 2]) == 9.0

    def test_undirected_graph_is_symmetric(self):
        G = nx.cycle_graph(4)
        s = Scenario.from_graph(G)
        assert s.cost(0, 1) == s.cost(1, 0) == 1.0
        assert np.isinf(s.cost(0, 2))

    def test_custom_weight_attribute(self):
        G = nx.DiGraph()
        G.add_edge(0, 1, dist=7.0)
        G.add_edge(1, 0, dist=8.0)
        s = Scenario.from_graph(G, weight="dist")
        assert s.tour_cost([0, 1]) == 15.0

    def test_rejects_non_graph(self):
        with pytest.raises(TypeError):
            Scenario.from_graph(np.ones((2, 2)))


class TestRandom:
    def test_reproducible(self):
        a = Scenario.random(6, seed=3)
        b = Scenario.random(6, seed=3)
        assert np.array_equal(a.cost_matrix(), b.cost_matrix())

    def test_easy_is_symmetric_and_complete(self):
        m = Scenario.random(6, difficulty=tsp.EASY, seed=0).cost_matrix()
        np.fill_diagonal(m, 0.0)
        assert np.allclose(m, m.T)
        assert np.all(np.isfinite(m))

    def test_normal_is_asymmetric(self):
        m = Scenario.random(6, difficulty=Difficulty.NORMAL, seed=0).cost_matrix()
        np.fill_diagonal(m, 0.0)
        assert np.all(np.isfinite(m))
        assert not np.allclose(m, m.T)

    @pytest.mark.parametrize("seed", range(5))
    def test_hard_drops_edges_but_keeps_a_tour(self, seed):
        s = Scenario.random(12, difficulty=tsp.HARD, seed=seed)
        m = s.cost_matrix()
        np.fill_diagonal(m, 0.0)
        assert np.isinf(m).any()
        # Every city keeps at least one way in and one way out
        finite = np.isfinite(s.cost_matrix())
        assert finite.any(axis=0).all() and finite.any(axis=1).all()

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            Scenario.random(0)
