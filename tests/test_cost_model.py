from tilepath.core.cost_model import MIN_STEP_COST, terrain_cost
from tilepath.core.types import TerrainKind


def test_terrain_costs():
    assert terrain_cost(TerrainKind.HEAVY) == 8
    assert terrain_cost(TerrainKind.MEDIUM) == 4
    assert terrain_cost(TerrainKind.LIGHT) == 2
    assert terrain_cost(TerrainKind.OPEN) == 1


def test_blocked_falls_back_to_default():
    assert terrain_cost(TerrainKind.BLOCKED) == 1


def test_cheapest_step_keeps_manhattan_admissible():
    assert MIN_STEP_COST == 1
