"""
City sets and their cost oracle.

A Scenario fixes an ordered set of N cities (identified by index 0..N-1) and
the directed cost of travelling between every pair of them. Costs may be
asymmetric, and an edge that does not exist is represented by an infinite
cost rather than by a missing entry. The solvers only ever see a Scenario
through `cost(i, j)` and `n_cities`.
"""

from __future__ import annotations

from typing import Hashable, List, Sequence

import networkx as nx
import numpy as np
from scipy.spatial.distance import cdist

from .constants import Difficulty, HARD_EDGE_DROP_FRACTION

# Random scenarios live on a SCALE x SCALE square
SCALE = 1000.0


class Scenario:
    """An ordered city set with a directed, possibly incomplete cost matrix."""

    def __init__(self, costs, labels: Sequence[Hashable] | None = None):
        matrix = np.array(costs, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Cost matrix must be square, got shape {matrix.shape}")
        if matrix.shape[0] == 0:
            raise ValueError("A scenario needs at least one city")
        if np.isnan(matrix).any():
            raise ValueError("Cost matrix contains NaN entries")
        if (matrix < 0).any():
            raise ValueError("Travel costs must be non-negative")

        np.fill_diagonal(matrix, np.inf)
        matrix.setflags(write=False)
        self._costs = matrix

        if labels is None:
            labels = range(matrix.shape[0])
        self.labels: List[Hashable] = list(labels)
        if len(self.labels) != matrix.shape[0]:
            raise ValueError(
                f"Got {len(self.labels)} labels for {matrix.shape[0]} cities"
            )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_points(
        cls,
        points,
        edge_mask=None,
        metric: str = "euclidean",
    ) -> Scenario:
        """Build a symmetric scenario from coordinates.

        Args:
            points: (N, d) array of city coordinates
            edge_mask: optional (N, N) boolean array, False marks a missing edge
            metric: any metric accepted by scipy.spatial.distance.cdist
        """
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2:
            raise ValueError(f"points must be an (N, d) array, got shape {pts.shape}")
        if pts.shape[0] == 0:
            raise ValueError("A scenario needs at least one city")
        costs = cdist(pts, pts, metric=metric)
        if edge_mask is not None:
            mask = np.asarray(edge_mask, dtype=bool)
            if mask.shape != costs.shape:
                raise ValueError(
                    f"edge_mask shape {mask.shape} does not match {costs.shape}"
                )
            costs[~mask] = np.inf
        return cls(costs)

    @classmethod
    def from_graph(cls, graph: nx.Graph, weight: str = "weight") -> Scenario:
        """Build a scenario from a networkx graph.

        Undirected graphs give symmetric costs. Edges without the weight
        attribute cost 1; absent edges are unreachable. City i is the i-th
        node in `graph.nodes`.
        """
        if not isinstance(graph, nx.Graph):
            raise TypeError(
                f"Expected a networkx Graph or DiGraph, got {type(graph).__name__}"
            )
        nodelist = list(graph.nodes)
        costs = nx.to_numpy_array(
            graph, nodelist=nodelist, weight=weight, nonedge=np.inf
        )
        return cls(costs, labels=nodelist)

    @classmethod
    def random(
        cls,
        n_cities: int,
        difficulty: Difficulty = Difficulty.HARD,
        seed: int | None = None,
    ) -> Scenario:
        """Generate a random scenario.

        - EASY: symmetric Euclidean distances, complete graph
        - NORMAL: asymmetric, moving uphill costs extra, complete graph
        - HARD: NORMAL with a fraction of edges removed; one random
          Hamiltonian cycle is always kept so that a tour exists
        """
        if n_cities < 1:
            raise ValueError(f"n_cities must be positive, got {n_cities}")

        rng = np.random.default_rng(seed)
        xy = rng.uniform(0.0, SCALE, size=(n_cities, 2))
        costs = cdist(xy, xy)

        if difficulty is Difficulty.EASY:
            return cls(costs)

        elevation = rng.uniform(0.0, 1.0, size=n_cities)
        climb = np.maximum(0.0, elevation[None, :] - elevation[:, None])
        costs = costs + climb * SCALE

        if difficulty is Difficulty.HARD and n_cities > 2:
            keep = rng.permutation(n_cities)
            protected = np.zeros((n_cities, n_cities), dtype=bool)
            protected[keep, np.roll(keep, -1)] = True
            dropped = rng.uniform(size=(n_cities, n_cities)) < HARD_EDGE_DROP_FRACTION
            costs[dropped & ~protected] = np.inf

        return cls(costs)

    # ------------------------------------------------------------------
    # Cost oracle
    # ------------------------------------------------------------------

    @property
    def n_cities(self) -> int:
        return self._costs.shape[0]

    def __len__(self) -> int:
        return self.n_cities

    def cost(self, from_city: int, to_city: int) -> float:
        """Cost of the directed edge, `inf` when it does not exist."""
        return float(self._costs[from_city, to_city])

    def cost_matrix(self) -> np.ndarray:
        """A writable copy of the full cost matrix."""
        return self._costs.copy()

    def is_valid_tour(self, route: Sequence[int]) -> bool:
        """True if `route` visits every city exactly once."""
        return sorted(int(c) for c in route) == list(range(self.n_cities))

    def tour_cost(self, route: Sequence[int]) -> float:
        """Cost of the closed tour `route` (implicitly returning to route[0])."""
        if not self.is_valid_tour(route):
            return float("inf")
        if len(route) == 1:
            return 0.0
        total = 0.0
        for a, b in zip(route, list(route[1:]) + [route[0]]):
            total += self._costs[a, b]
        return float(total)

    def __repr__(self) -> str:
        n_edges = int(np.isfinite(self._costs).sum())
        return f"Scenario(n_cities={self.n_cities}, edges={n_edges})"
