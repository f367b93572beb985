# tilepath/core/map_loader.py
#!/usr/bin/env python3
"""
Text map loader.

One line per grid row, one character per cell:
    '0' open, '1' blocked, '2' light, '3' medium, '4' heavy
Anything else is read as blocked. A map that cannot be read or is not
rectangular raises MapSourceError; no partial grid is ever returned.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from tilepath.core.types import Cell, TerrainGrid, TerrainKind
from tilepath.logging_config import get_logger

logger = get_logger(__name__)

TERRAIN_CODES: Dict[str, TerrainKind] = {
    "0": TerrainKind.OPEN,
    "1": TerrainKind.BLOCKED,
    "2": TerrainKind.LIGHT,
    "3": TerrainKind.MEDIUM,
    "4": TerrainKind.HEAVY,
}


class MapSourceError(Exception):
    """The map source is missing, unreadable or malformed."""


def _kind_for(ch: str) -> TerrainKind:
    return TERRAIN_CODES.get(ch, TerrainKind.BLOCKED)


def parse_map_text(text: str, width: Optional[int] = None, height: Optional[int] = None) -> TerrainGrid:
    rows: List[str] = text.splitlines()
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise MapSourceError("map source is empty")

    row_width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != row_width:
            raise MapSourceError(f"row {y} has {len(row)} cells, expected {row_width}")
    if row_width == 0:
        raise MapSourceError("map rows are empty")

    if width is not None and row_width != width:
        raise MapSourceError(f"map is {row_width} cells wide, expected {width}")
    if height is not None and len(rows) != height:
        raise MapSourceError(f"map has {len(rows)} rows, expected {height}")

    cells = [Cell(_kind_for(ch)) for row in rows for ch in row]
    return TerrainGrid(row_width, len(rows), cells)


def load_map(path: Union[str, Path], width: Optional[int] = None, height: Optional[int] = None) -> TerrainGrid:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as ex:
        raise MapSourceError(f"cannot read map {path}: {ex}") from ex

    grid = parse_map_text(text, width, height)
    logger.info("loaded map %s (%dx%d)", path.name, grid.width, grid.height)
    return grid
