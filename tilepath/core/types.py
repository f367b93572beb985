# tilepath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Optional

from tilepath.core.cost_model import terrain_cost

Coordinate = Tuple[int, int]  # (x, y) == (col, row)


class TerrainKind(Enum):
    OPEN = "open"
    BLOCKED = "blocked"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class OutOfBoundsError(IndexError):
    """Raised when a coordinate outside the grid is asked for a cost."""

    def __init__(self, coord: Coordinate, width: int, height: int):
        super().__init__(f"{coord} is outside the {width}x{height} grid")
        self.coord = coord


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    ax, ay = a
    bx, by = b
    return abs(ax - bx) + abs(ay - by)


@dataclass
class Cell:
    kind: TerrainKind = TerrainKind.OPEN
    screen_pos: Tuple[float, float] = (0.0, 0.0)  # owned by the viewer


@dataclass
class TerrainGrid:
    width: int
    height: int
    cells: List[Cell]  # flat, index = x + width * y

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} cells for a {self.width}x{self.height} grid, "
                f"got {len(self.cells)}"
            )

    @classmethod
    def filled(cls, width: int, height: int, kind: TerrainKind = TerrainKind.OPEN) -> "TerrainGrid":
        return cls(width, height, [Cell(kind) for _ in range(width * height)])

    # -------------------- addressing --------------------

    def in_bounds(self, c: Coordinate) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, c: Coordinate) -> int:
        x, y = c
        return x + self.width * y

    def _cell(self, c: Coordinate) -> Optional[Cell]:
        # Row-major index alone would wrap x overflow onto the next row.
        if not self.in_bounds(c):
            return None
        return self.cells[self.index_of(c)]

    # -------------------- read accessors --------------------

    def terrain_at(self, c: Coordinate) -> Optional[TerrainKind]:
        """Terrain kind at c, or None when c has no tile."""
        cell = self._cell(c)
        return cell.kind if cell is not None else None

    def is_blocked(self, c: Coordinate) -> bool:
        return self.terrain_at(c) is TerrainKind.BLOCKED

    def traversal_cost(self, c: Coordinate) -> int:
        """Cost of stepping onto c. Out-of-range coordinates are a caller error."""
        kind = self.terrain_at(c)
        if kind is None:
            raise OutOfBoundsError(c, self.width, self.height)
        return terrain_cost(kind)

    def neighbors(self, c: Coordinate) -> List[Coordinate]:
        """
        Orthogonal neighbours of c that exist and are not blocked.

        Always in north, south, west, east order; the search relies on it for
        deterministic tie-breaks.
        """
        x, y = c
        candidates: List[Coordinate] = [
            (x, y - 1),
            (x, y + 1),
            (x - 1, y),
            (x + 1, y),
        ]
        out: List[Coordinate] = []
        for n in candidates:
            kind = self.terrain_at(n)
            if kind is not None and kind is not TerrainKind.BLOCKED:
                out.append(n)
        return out

    def manhattan_distance(self, a: Coordinate, b: Coordinate) -> int:
        return manhattan_distance(a, b)

    # -------------------- editing --------------------

    def set_terrain(self, c: Coordinate, kind: TerrainKind) -> bool:
        """Set the terrain at c. Returns False (and does nothing) when c is off the grid."""
        cell = self._cell(c)
        if cell is None:
            return False
        cell.kind = kind
        return True

    def toggle_terrain(self, c: Coordinate, kind: TerrainKind) -> bool:
        """Flip c between `kind` and OPEN."""
        current = self.terrain_at(c)
        if current is None:
            return False
        return self.set_terrain(c, TerrainKind.OPEN if current is kind else kind)

    def layout(self, cell_size: float) -> None:
        """Store each cell's top-left screen position for a given tile size."""
        for y in range(self.height):
            for x in range(self.width):
                self.cells[self.index_of((x, y))].screen_pos = (x * cell_size, y * cell_size)

    def cell_count(self) -> int:
        return self.width * self.height
