# tilepath/core/cost_model.py
#!/usr/bin/env python3
"""
Step costs per terrain kind.

The cheapest enterable terrain costs 1, which is what keeps the Manhattan
heuristic in the search admissible.
"""

from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from tilepath.core.types import TerrainKind

DEFAULT_COST = 1

# keyed by TerrainKind.value to avoid an import cycle with types.py
TERRAIN_COSTS: Dict[str, int] = {
    "heavy": 8,
    "medium": 4,
    "light": 2,
    "open": 1,
}


def terrain_cost(kind: "TerrainKind") -> int:
    """Cost of entering a cell of this kind. Blocked falls back to the default."""
    return TERRAIN_COSTS.get(kind.value, DEFAULT_COST)


MIN_STEP_COST = min(TERRAIN_COSTS.values())
