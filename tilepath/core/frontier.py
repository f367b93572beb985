# tilepath/core/frontier.py
#!/usr/bin/env python3
"""
Min-priority queue of search nodes.

Entries are never updated in place: a coordinate may sit in the queue several
times with different priorities. Equal priorities pop in insertion order.
"""

import heapq
from typing import List, NamedTuple, Tuple

from tilepath.core.types import Coordinate


class SearchNode(NamedTuple):
    priority: int          # cost so far + heuristic
    position: Coordinate
    cost: int              # cost so far when pushed; used to spot stale entries


class Frontier:
    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, SearchNode]] = []  # (priority, seq, node)
        self._seq = 0  # monotonic counter for PQ stability

    def _bump(self) -> int:
        self._seq += 1
        return self._seq

    def push(self, priority: int, position: Coordinate, cost: int) -> None:
        node = SearchNode(priority, position, cost)
        heapq.heappush(self._heap, (priority, self._bump(), node))

    def pop(self) -> SearchNode:
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        _, _, node = heapq.heappop(self._heap)
        return node

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
