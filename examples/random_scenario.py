"""
Random TSP - greedy vs. branch-and-bound

Generate a HARD scenario (asymmetric costs, some edges missing), find a
greedy tour, then let branch-and-bound improve on it under a time budget.
"""

import logging

import tspbnb as tsp
from tspbnb import Problem, Scenario

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

NUM_CITIES = 15
TIME_LIMIT_MS = 10_000

scenario = Scenario.random(NUM_CITIES, difficulty=tsp.HARD, seed=42)
print(scenario)

greedy = Problem(scenario).solve(solver=tsp.GREEDY)
print(f"Greedy: {greedy.status}, cost {greedy.cost:.2f}")

prob = Problem(scenario)
result = prob.solve(
    solver=tsp.BNB,
    solver_options={
        "bb_time_limit_ms": TIME_LIMIT_MS,
        "bb_initial_tour": "greedy",
        "bb_queue": "auto",
    },
    verbose=True,
)

print(f"\nResult status: {result.status}")
if result.tour is not None:
    print(f"Tour: {' -> '.join(map(str, result.tour.route + [result.tour.route[0]]))}")
    print(f"Total cost: {result.cost:.2f}")
print(f"Improvements over the seed: {result.improvements}")
print(f"Elapsed: {result.elapsed:.3f}s")
