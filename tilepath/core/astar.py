# tilepath/core/astar.py
#!/usr/bin/env python3
"""
A* over a weighted terrain grid.

- 4-connected moves only; stepping onto a cell costs that cell's terrain cost.
- Heuristic: Manhattan distance. Admissible because the cheapest terrain costs 1,
  so the route returned is cost-optimal (same answer as Dijkstra, fewer pops).
- Duplicate frontier entries are allowed; a popped node whose cost no longer
  matches the cost-so-far table is stale and skipped.

Route contract:
- find_path() returns the coordinates from goal back toward start, start excluded.
  Callers animate by popping from the end (or use travel_order()).
- None means no path. start == goal yields an empty route.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from math import inf

from tilepath.core.frontier import Frontier
from tilepath.core.types import Coordinate, TerrainGrid, manhattan_distance
from tilepath.logging_config import get_logger

logger = get_logger(__name__)


class RouteReconstructionError(RuntimeError):
    """Predecessor links did not lead back to start within the grid's cell count."""


@dataclass
class SearchOutcome:
    route: Optional[List[Coordinate]] = None  # goal-first, start excluded
    total_cost: Optional[int] = None
    expanded: int = 0  # nodes popped and expanded
    pushed: int = 0    # frontier insertions

    @property
    def found(self) -> bool:
        return self.route is not None


def _h(goal: Coordinate, c: Coordinate) -> int:
    return manhattan_distance(goal, c)


def reconstruct_path(
    goal: Coordinate,
    start: Coordinate,
    parent: Dict[Coordinate, Coordinate],
    max_steps: Optional[int] = None,
) -> List[Coordinate]:
    """Walk predecessor links from goal toward start; start itself is not included."""
    path: List[Coordinate] = []
    cur = goal
    steps = 0
    while cur != start:
        if max_steps is not None and steps >= max_steps:
            raise RouteReconstructionError(
                f"no way back from {goal} to {start} within {max_steps} steps"
            )
        path.append(cur)
        steps += 1
        nxt = parent.get(cur)
        if nxt is None:
            break
        cur = nxt
    return path


def travel_order(route: List[Coordinate]) -> List[Coordinate]:
    """Route in walking order: first step after start first, goal last."""
    return list(reversed(route))


def search(start: Coordinate, goal: Coordinate, grid: TerrainGrid) -> SearchOutcome:
    """Run one full A* query and report the route together with search counters."""
    if not grid.in_bounds(start) or not grid.in_bounds(goal):
        logger.warning("query %s -> %s leaves the %dx%d grid", start, goal, grid.width, grid.height)
        return SearchOutcome()

    if grid.is_blocked(start) or grid.is_blocked(goal):
        logger.debug("no path found: endpoint blocked (%s -> %s)", start, goal)
        return SearchOutcome()

    if start == goal:
        return SearchOutcome(route=[], total_cost=0)

    frontier = Frontier()
    g: Dict[Coordinate, int] = {start: 0}
    parent: Dict[Coordinate, Coordinate] = {}
    expanded = 0
    pushed = 1

    frontier.push(0, start, 0)

    while frontier:
        node = frontier.pop()
        u = node.position

        # Ignore stale pops
        if node.cost != g.get(u, inf):
            continue

        if u == goal:
            route = reconstruct_path(goal, start, parent, max_steps=grid.cell_count())
            logger.debug(
                "found a path %s -> %s: %d steps, cost %d, expanded %d, pushed %d",
                start, goal, len(route), g[goal], expanded, pushed,
            )
            return SearchOutcome(route=route, total_cost=g[goal], expanded=expanded, pushed=pushed)

        expanded += 1
        for v in grid.neighbors(u):
            alt = g[u] + grid.traversal_cost(v)
            if alt < g.get(v, inf):
                g[v] = alt
                parent[v] = u
                frontier.push(alt + _h(goal, v), v, alt)
                pushed += 1

    logger.debug("no path found %s -> %s after expanding %d nodes", start, goal, expanded)
    return SearchOutcome(expanded=expanded, pushed=pushed)


def find_path(start: Coordinate, goal: Coordinate, grid: TerrainGrid) -> Optional[List[Coordinate]]:
    """Cheapest route from start to goal, goal-first and start excluded; None if unreachable."""
    return search(start, goal, grid).route


def route_cost(route: List[Coordinate], grid: TerrainGrid) -> int:
    """Sum of the traversal costs of every cell in a route (start excluded by contract)."""
    return sum(grid.traversal_cost(c) for c in route)
