"""
Frontier Priority Queues

The frontier is ordered best-first, but not by bound alone: a deeper partial
route has already paid for more of its edges, so before comparing bounds the
shallower node is credited with the average edge cost for every edge it has
yet to commit. Both queue backends use exactly this ordering.

- ArrayPriorityQueue: O(1) insert, O(k) delete_min. Fast for small frontiers.
- HeapPriorityQueue: O(log k) insert and delete_min. Each node's slot is
  tracked through a node_id -> index map that is kept current on every swap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from ...constants import HEAP_QUEUE_THRESHOLD, QueueKind
from .node import State

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriorityOrder:
    """Depth-aware ordering, scoped to one search."""

    average_edge_cost: float

    def prioritizes(self, a: State, b: State) -> bool:
        """True if `a` should be expanded no later than `b`."""
        size_diff = b.depth - a.depth
        return b.bound - size_diff * self.average_edge_cost >= a.bound


class FrontierQueue(Protocol):
    def insert(self, node: State) -> None:
        ...

    def delete_min(self) -> State:
        ...

    def is_empty(self) -> bool:
        ...

    def largest_size(self) -> int:
        ...

    def __len__(self) -> int:
        ...


class ArrayPriorityQueue:
    """Unordered list, scanned on every delete_min."""

    def __init__(self, order: PriorityOrder):
        self.order = order
        self._nodes: List[State] = []
        self._max_size = 0

    def insert(self, node: State) -> None:
        self._nodes.append(node)
        if len(self._nodes) > self._max_size:
            self._max_size = len(self._nodes)

    def delete_min(self) -> State:
        if not self._nodes:
            raise IndexError("delete_min from an empty queue")
        best_idx = 0
        best = self._nodes[0]
        for i in range(1, len(self._nodes)):
            node = self._nodes[i]
            if self.order.prioritizes(node, best):
                best = node
                best_idx = i
        self._nodes.pop(best_idx)
        return best

    def is_empty(self) -> bool:
        return not self._nodes

    def largest_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._nodes)


class HeapPriorityQueue:
    """Array-backed binary min-heap under a PriorityOrder."""

    def __init__(self, order: PriorityOrder):
        self.order = order
        self._heap: List[State] = []
        # node_id -> current index in _heap
        self._slots: Dict[int, int] = {}
        self._max_size = 0

    def insert(self, node: State) -> None:
        if node.node_id in self._slots:
            raise ValueError(f"Node {node.node_id} is already queued")
        self._heap.append(node)
        self._slots[node.node_id] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)
        if len(self._heap) > self._max_size:
            self._max_size = len(self._heap)

    def delete_min(self) -> State:
        if not self._heap:
            raise IndexError("delete_min from an empty queue")
        root = self._heap[0]
        last = self._heap.pop()
        del self._slots[root.node_id]
        if self._heap:
            self._heap[0] = last
            self._slots[last.node_id] = 0
            self._sift_down(0)
        return root

    def is_empty(self) -> bool:
        return not self._heap

    def largest_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._heap)

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._slots[heap[i].node_id] = i
        self._slots[heap[j].node_id] = j

    def _sift_up(self, idx: int) -> None:
        while idx > 0:
            parent = (idx - 1) // 2
            if not self.order.prioritizes(self._heap[idx], self._heap[parent]):
                break
            self._swap(idx, parent)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        while True:
            child = self._min_child(idx)
            if child is None:
                break
            if not self.order.prioritizes(self._heap[child], self._heap[idx]):
                break
            self._swap(idx, child)
            idx = child

    def _min_child(self, idx: int) -> Optional[int]:
        left = 2 * idx + 1
        if left >= len(self._heap):
            return None
        right = left + 1
        if right >= len(self._heap):
            return left
        if self.order.prioritizes(self._heap[right], self._heap[left]):
            return right
        return left


def make_queue(
    kind: QueueKind | str,
    n_cities: int,
    order: PriorityOrder,
) -> FrontierQueue:
    """Build the frontier backend for a problem of `n_cities` cities."""
    kind = QueueKind(kind)
    if kind == QueueKind.AUTO:
        kind = QueueKind.HEAP if n_cities >= HEAP_QUEUE_THRESHOLD else QueueKind.ARRAY
        logger.debug("Selected %s queue for %d cities", kind.value, n_cities)

    if kind == QueueKind.HEAP:
        return HeapPriorityQueue(order)
    return ArrayPriorityQueue(order)
