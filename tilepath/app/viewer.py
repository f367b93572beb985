# tilepath/app/viewer.py
#!/usr/bin/env python3
"""
Terrain Route Viewer - live map editing + click-to-route

- Keyboard:
    [1]/[2]/[3]/[4]  -> toggle tile under cursor: Light / Medium / Heavy / Blocked
    [P]              -> pause / resume
    [ESC]            -> quit
- Mouse:
    move             -> select tile
    left click       -> route the mover to the selected tile

Config:
- ENV: TILEPATH_MAP, TILEPATH_FPS, TILEPATH_STEP_MS, TILEPATH_LOG_LEVEL
- CLI: --map=PATH --fps=N --step-ms=N --block-size=N
"""

import os
import sys
from typing import Dict, Tuple

import pygame

from tilepath.app.config import ViewerConfig, resolve_config
from tilepath.app.session import EditorSession, check_mover_start
from tilepath.core.map_loader import MapSourceError, load_map
from tilepath.core.types import TerrainGrid, TerrainKind
from tilepath.logging_config import get_logger

logger = get_logger(__name__)

# Colors
WHITE  = (255, 255, 255)
YELLOW = (255, 255,   0)
RED    = (255,   0,   0)

TERRAIN_COLORS: Dict[TerrainKind, Tuple[int, int, int]] = {
    TerrainKind.OPEN:    (198, 200, 185),
    TerrainKind.BLOCKED: ( 30,  33,  50),
    TerrainKind.LIGHT:   (255, 226, 169),
    TerrainKind.MEDIUM:  (153, 173, 106),
    TerrainKind.HEAVY:   (207, 106,  76),
}

HOTKEYS: Dict[int, TerrainKind] = {
    pygame.K_1: TerrainKind.LIGHT,
    pygame.K_2: TerrainKind.MEDIUM,
    pygame.K_3: TerrainKind.HEAVY,
    pygame.K_4: TerrainKind.BLOCKED,
}

CAPTION = "A* map"


class Viewer:
    def __init__(self, grid: TerrainGrid, config: ViewerConfig):
        pygame.init()

        self.config = config
        self.grid = grid
        self.cs = config.block_size
        self.grid.layout(self.cs)

        self.screen = pygame.display.set_mode((grid.width * self.cs, grid.height * self.cs))
        pygame.display.set_caption(CAPTION)
        pygame.mouse.set_visible(True)

        self.session = EditorSession(grid, mover=config.mover_start, step_ms=config.step_ms)
        self.clock = pygame.time.Clock()
        self.is_running = True

    def run(self):
        while self.is_running:
            self._handle_events()
            elapsed = self.clock.tick(self.config.fps)
            if not self.session.paused:
                self.session.advance(elapsed)
                self._draw()
        pygame.quit()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.is_running = False
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif e.key == pygame.K_p:
                    self.session.toggle_pause()
                elif e.key in HOTKEYS:
                    self.session.toggle(HOTKEYS[e.key])
            elif e.type == pygame.MOUSEMOTION:
                self.session.set_cursor_from_screen(e.pos[0], e.pos[1], self.cs)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                self.session.set_cursor_from_screen(e.pos[0], e.pos[1], self.cs)
                previous = self.session.last_outcome
                self.session.request_route()
                if self.session.last_outcome is not previous:
                    pygame.display.set_caption(f"{CAPTION} - {self.session.metrics_text()}")

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(WHITE)
        self._draw_grid()
        self._draw_tile(self.session.mover, YELLOW)
        self._draw_cursor()
        pygame.display.flip()

    def _draw_grid(self):
        for cell in self.grid.cells:
            x, y = cell.screen_pos
            pygame.draw.rect(self.screen, TERRAIN_COLORS[cell.kind], pygame.Rect(x, y, self.cs, self.cs))

    def _draw_tile(self, tile, color):
        col, row = tile
        pygame.draw.rect(self.screen, color, pygame.Rect(col * self.cs, row * self.cs, self.cs, self.cs))

    def _draw_cursor(self):
        col, row = self.session.cursor
        pygame.draw.rect(self.screen, RED, pygame.Rect(col * self.cs, row * self.cs, self.cs, self.cs), 2)


# ---------- main ----------
def main():
    try:
        config = resolve_config(sys.argv[1:], os.environ)
        width, height = config.map_dimensions
        grid = load_map(config.map_path, width, height)
        check_mover_start(grid, config.mover_start)
    except (MapSourceError, ValueError) as ex:
        logger.error("Failed to start viewer: %s", ex)
        sys.exit(1)
    Viewer(grid, config).run()


if __name__ == "__main__":
    main()
