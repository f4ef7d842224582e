"""
Graph TSP - tours over a networkx digraph

Edges that are not in the graph are unreachable, so the search only builds
tours out of existing roads.
"""

import networkx as nx
import numpy as np

import tspbnb as tsp
from tspbnb import Problem, Scenario

np.random.seed(42)

NUM_NODES = 8

# Directed graph with a guaranteed ring plus random shortcuts
G = nx.DiGraph()
for i in range(NUM_NODES):
    G.add_edge(i, (i + 1) % NUM_NODES, weight=np.random.uniform(5.0, 10.0))
for _ in range(NUM_NODES * 2):
    i, j = np.random.choice(NUM_NODES, size=2, replace=False)
    G.add_edge(int(i), int(j), weight=np.random.uniform(1.0, 12.0))

print("Edge weights:")
for i, j, d in G.edges(data=True):
    print(f"  {i} -> {j}: {d['weight']:.2f}")

scenario = Scenario.from_graph(G)
result = Problem(scenario).solve(solver=tsp.BNB, solver_options={"bb_time_limit_ms": 5000})

print(f"\nResult status: {result.status}")
if result.tour is not None:
    labels = [scenario.labels[c] for c in result.tour.route]
    print(f"Tour: {' -> '.join(map(str, labels + labels[:1]))}")
    print(f"Total cost: {result.cost:.2f}")
