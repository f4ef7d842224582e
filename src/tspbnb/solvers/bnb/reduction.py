"""
Reduced Cost Matrix Operations

The lower bound used by the branch-and-bound search comes from the classic
row/column reduction of the cost matrix: every row and column minimum is a cost
any tour must pay, so subtracting them tightens the bound without excluding a
tour. Committing to an edge blocks the entries that a tour using it can no
longer use.

All functions here mutate the matrix they are given. Callers that need to keep
the unreduced matrix must pass a copy.
"""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

from ...constants import DEFAULT_REDUCTION_EPS


def build_cost_matrix(
    cost: Callable[[int, int], float],
    n_cities: int,
) -> Tuple[np.ndarray, float]:
    """Query the cost oracle for every ordered pair of cities.

    Returns:
        Tuple of (N x N matrix with an infinite diagonal, mean finite edge cost).
        The mean is 0.0 when no edge is finite.
    """
    matrix = np.full((n_cities, n_cities), np.inf)
    total = 0.0
    count = 0
    for row in range(n_cities):
        for col in range(n_cities):
            if row == col:
                continue
            c = float(cost(row, col))
            matrix[row, col] = c
            if np.isfinite(c):
                total += c
                count += 1
    average = total / count if count else 0.0
    return matrix, average


def reduce_matrix(matrix: np.ndarray, eps: float = DEFAULT_REDUCTION_EPS) -> float:
    """Reduce rows, then columns, so each finite line has a zero minimum.

    Lines whose minimum is infinite (fully blocked) or already at most `eps`
    are left alone.

    Returns:
        The sum of all subtracted minima, i.e. the bound increment.
    """
    cost = 0.0

    row_min = matrix.min(axis=1)
    rows = np.isfinite(row_min) & (row_min > eps)
    if rows.any():
        matrix[rows] -= row_min[rows, None]
        cost += float(row_min[rows].sum())

    col_min = matrix.min(axis=0)
    cols = np.isfinite(col_min) & (col_min > eps)
    if cols.any():
        matrix[:, cols] -= col_min[None, cols]
        cost += float(col_min[cols].sum())

    return cost


def travel(
    matrix: np.ndarray,
    from_city: int,
    to_city: int,
    block_reverse: bool = True,
) -> float:
    """Commit to the edge from_city -> to_city.

    On success the from_city row and the to_city column become infinite, and
    so does the reverse edge unless `block_reverse` is False. An unreachable
    edge leaves the matrix untouched.

    Returns:
        The reduced cost of the edge, `inf` if it is unreachable.
    """
    cost = matrix[from_city, to_city]
    if np.isinf(cost):
        return float("inf")
    if block_reverse:
        matrix[to_city, from_city] = np.inf
    matrix[from_city, :] = np.inf
    matrix[:, to_city] = np.inf
    return float(cost)
