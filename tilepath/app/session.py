# tilepath/app/session.py
#!/usr/bin/env python3
"""
Editing and routing state behind the viewer, kept free of pygame so it can be
driven from tests.

- cursor: tile under the mouse
- toggle(kind): flip the cursor tile between OPEN and kind
- request_route(): path the mover to the cursor tile
- advance(elapsed_ms): move one tile per step interval along the stored route
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tilepath.core.astar import SearchOutcome, search
from tilepath.core.types import Coordinate, TerrainGrid, TerrainKind
from tilepath.logging_config import get_logger

logger = get_logger(__name__)


def screen_to_tile(screen_x: int, screen_y: int, grid: TerrainGrid, block_size: int) -> Coordinate:
    """Pixel position -> tile coordinate, clamped into the grid."""
    tx = int(screen_x) // block_size
    ty = int(screen_y) // block_size
    tx = max(0, min(tx, grid.width - 1))
    ty = max(0, min(ty, grid.height - 1))
    return (tx, ty)


def check_mover_start(grid: TerrainGrid, start: Coordinate) -> Coordinate:
    """Reject a mover start that is not on the grid."""
    if not grid.in_bounds(start):
        raise ValueError(f"mover start {start} is outside the {grid.width}x{grid.height} map")
    return start


@dataclass
class EditorSession:
    grid: TerrainGrid
    mover: Coordinate = (0, 0)
    step_ms: int = 100

    cursor: Coordinate = (0, 0)
    paused: bool = False
    moving: bool = False
    route: List[Coordinate] = field(default_factory=list)  # goal-first; pop() gives the next step
    last_outcome: Optional[SearchOutcome] = None
    _elapsed_ms: int = 0

    def __post_init__(self) -> None:
        check_mover_start(self.grid, self.mover)

    # -------------------- input --------------------

    def set_cursor_from_screen(self, screen_x: int, screen_y: int, block_size: int) -> Coordinate:
        self.cursor = screen_to_tile(screen_x, screen_y, self.grid, block_size)
        return self.cursor

    def toggle(self, kind: TerrainKind) -> bool:
        return self.grid.toggle_terrain(self.cursor, kind)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def request_route(self) -> bool:
        """Start moving toward the cursor. Ignored while paused, already moving, or on a blocked target."""
        if self.paused or self.moving or self.grid.is_blocked(self.cursor):
            return False

        outcome = search(self.mover, self.cursor, self.grid)
        self.last_outcome = outcome
        if outcome.route is None:
            logger.info("no route from %s to %s", self.mover, self.cursor)
            return False

        self.route = list(outcome.route)
        self.moving = True
        self._elapsed_ms = 0
        return True

    # -------------------- animation --------------------

    def advance(self, elapsed_ms: int) -> bool:
        """Accumulate frame time; returns True when the mover stepped this call."""
        if self.paused or not self.moving:
            return False

        self._elapsed_ms += elapsed_ms
        if self._elapsed_ms < self.step_ms:
            return False
        self._elapsed_ms = 0

        if not self.route:
            self.moving = False
            return False
        self.mover = self.route.pop()
        return True

    def metrics_text(self) -> str:
        o = self.last_outcome
        if o is None:
            return "no query yet"
        if not o.found:
            return f"no path | expanded {o.expanded} | pushed {o.pushed}"
        return (f"steps {len(o.route)} | cost {o.total_cost} | "
                f"expanded {o.expanded} | pushed {o.pushed}")
