import random

import pytest

from tilepath.core.astar import (
    RouteReconstructionError,
    find_path,
    reconstruct_path,
    route_cost,
    search,
    travel_order,
)
from tilepath.core.map_loader import parse_map_text
from tilepath.core.types import TerrainGrid, TerrainKind, manhattan_distance


def _brute_force_cost(grid, start, goal):
    """Cheapest cost over every simple 4-connected path, or None."""
    best = None

    def walk(c, cost, seen):
        nonlocal best
        if best is not None and cost >= best:
            return
        if c == goal:
            best = cost
            return
        x, y = c
        for n in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if not grid.in_bounds(n) or grid.is_blocked(n) or n in seen:
                continue
            seen.add(n)
            walk(n, cost + grid.traversal_cost(n), seen)
            seen.remove(n)

    walk(start, 0, {start})
    return best


def _assert_valid_route(grid, start, goal, route):
    walk = [start] + travel_order(route)
    assert walk[-1] == goal
    for a, b in zip(walk, walk[1:]):
        assert manhattan_distance(a, b) == 1
        assert not grid.is_blocked(b)


def test_three_by_one_open_row():
    grid = TerrainGrid.filled(3, 1)
    route = find_path((0, 0), (2, 0), grid)
    assert route == [(2, 0), (1, 0)]
    assert travel_order(route) == [(1, 0), (2, 0)]


def test_detour_through_open_row():
    grid = parse_map_text("000\n010\n010\n")
    outcome = search((0, 1), (2, 1), grid)
    assert outcome.route == [(2, 1), (2, 0), (1, 0), (0, 0)]
    # two moves down the right column plus the two row-0 cells
    assert outcome.total_cost == 2 + grid.traversal_cost((0, 0)) + grid.traversal_cost((1, 0))


def test_goes_around_heavy_terrain():
    grid = parse_map_text("040\n000\n")
    outcome = search((0, 0), (2, 0), grid)
    assert outcome.route == [(2, 0), (2, 1), (1, 1), (0, 1)]
    assert outcome.total_cost == 4


def test_light_detour_beats_heavy_cell():
    grid = parse_map_text("040\n222\n")
    outcome = search((0, 0), (2, 0), grid)
    # through the heavy cell: 8 + 1 = 9; around: 2 + 2 + 2 + 1 = 7
    assert outcome.total_cost == 7


def test_crosses_heavy_terrain_when_cheaper():
    grid = parse_map_text("040\n444\n")
    outcome = search((0, 0), (2, 0), grid)
    assert outcome.route == [(2, 0), (1, 0)]
    assert outcome.total_cost == 9


def test_open_grid_route_length_is_manhattan():
    grid = TerrainGrid.filled(6, 5)
    rng = random.Random(7)
    for _ in range(25):
        start = (rng.randrange(6), rng.randrange(5))
        goal = (rng.randrange(6), rng.randrange(5))
        route = find_path(start, goal, grid)
        assert len(route) == manhattan_distance(start, goal)


@pytest.mark.parametrize("start,goal", [((1, 0), (2, 2)), ((0, 0), (1, 1))])
def test_blocked_endpoint_is_no_path(start, goal):
    grid = parse_map_text("010\n010\n000\n")
    outcome = search(start, goal, grid)
    assert outcome.route is None
    assert outcome.pushed == 0


def test_wall_between_start_and_goal():
    grid = parse_map_text("00100\n00100\n00100\n00100\n")
    outcome = search((0, 0), (4, 3), grid)
    assert outcome.route is None
    assert not outcome.found
    assert outcome.expanded == 8


def test_start_enclosed_by_walls():
    grid = parse_map_text("111\n101\n111\n")
    grid.set_terrain((0, 0), TerrainKind.OPEN)
    assert find_path((1, 1), (0, 0), grid) is None


def test_same_cell_is_empty_route():
    grid = TerrainGrid.filled(3, 3)
    outcome = search((1, 1), (1, 1), grid)
    assert outcome.route == []
    assert outcome.total_cost == 0
    assert outcome.found


def test_same_cell_blocked_is_no_path():
    grid = TerrainGrid.filled(3, 3)
    grid.set_terrain((1, 1), TerrainKind.BLOCKED)
    assert find_path((1, 1), (1, 1), grid) is None


def test_out_of_range_endpoints_are_no_path():
    grid = TerrainGrid.filled(3, 3)
    assert find_path((0, 0), (3, 0), grid) is None
    assert find_path((-1, 0), (2, 2), grid) is None


def test_repeat_queries_return_the_same_route():
    grid = parse_map_text("0000\n0230\n0320\n0000\n")
    first = find_path((0, 0), (3, 3), grid)
    assert find_path((0, 0), (3, 3), grid) == first


def test_matches_brute_force_on_small_grids():
    rng = random.Random(1234)
    kinds = [TerrainKind.OPEN] * 4 + [
        TerrainKind.LIGHT,
        TerrainKind.MEDIUM,
        TerrainKind.HEAVY,
        TerrainKind.BLOCKED,
        TerrainKind.BLOCKED,
    ]
    checked = 0
    for _ in range(40):
        grid = TerrainGrid.filled(4, 4)
        for cell in grid.cells:
            cell.kind = rng.choice(kinds)
        start = (rng.randrange(4), rng.randrange(4))
        goal = (rng.randrange(4), rng.randrange(4))
        if start == goal or grid.is_blocked(start) or grid.is_blocked(goal):
            continue

        expected = _brute_force_cost(grid, start, goal)
        outcome = search(start, goal, grid)
        if expected is None:
            assert outcome.route is None
            continue
        assert outcome.total_cost == expected
        assert route_cost(outcome.route, grid) == expected
        _assert_valid_route(grid, start, goal, outcome.route)
        checked += 1
    assert checked > 0


def test_raising_a_route_cell_cost_never_lowers_the_optimum():
    grid = parse_map_text("00000\n02320\n00000\n04040\n00000\n")
    start, goal = (0, 0), (4, 4)
    before = search(start, goal, grid)
    for c in before.route:
        probe = parse_map_text("00000\n02320\n00000\n04040\n00000\n")
        probe.set_terrain(c, TerrainKind.HEAVY)
        after = search(start, goal, probe)
        assert after.total_cost >= before.total_cost


def test_reconstruct_stops_at_missing_predecessor():
    parent = {(3, 0): (2, 0)}
    assert reconstruct_path((3, 0), (0, 0), parent) == [(3, 0), (2, 0)]


def test_reconstruct_detects_cycles():
    parent = {(1, 0): (2, 0), (2, 0): (1, 0)}
    with pytest.raises(RouteReconstructionError):
        reconstruct_path((1, 0), (0, 0), parent, max_steps=4)


def test_search_counters_on_open_row():
    grid = TerrainGrid.filled(3, 1)
    outcome = search((0, 0), (2, 0), grid)
    assert outcome.expanded == 2
    assert outcome.pushed == 3
