# mazerun/pygame_viewer.py
"""
Interactive pygame viewer that animates a search as it runs.

Keys:
    1 / 2 / 3 / 4       run DFS / BFS / A* / Greedy
    R                   clear the last search
    G                   new random maze
    [ / ]               previous / next maze in --mazedir
    PageUp / PageDown   faster / slower animation
    H                   toggle grid lines
    Esc                 cancel the running search, or quit when idle
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import os
from typing import List, Optional

import pygame

from .cell import Cell
from .effects import EffectResolver
from .engine import SearchEngine, SearchResult
from .grid import Grid
from .observer import SearchObserver

logger = logging.getLogger(__name__)


@dataclass
class Colors:
    BG = (18, 18, 22)
    WALL = (35, 35, 44)
    FLOOR = (230, 230, 240)
    VISITED = (160, 200, 160)
    PATH = (70, 170, 110)
    TELEPORT = (150, 90, 200)
    START = (220, 90, 90)
    GOAL = (90, 160, 220)
    GRID = (60, 60, 70)


STRATEGY_KEYS = {
    pygame.K_1: "dfs",
    pygame.K_2: "bfs",
    pygame.K_3: "astar",
    pygame.K_4: "greedy",
}


class Viewer(SearchObserver):
    """Draws the grid and receives per-step notifications from the engine."""

    def __init__(self, grid: Grid, cell_size: int = 28, fps: int = 60, delay_ms: int = 30,
                 fullscreen: bool = False, env_dir: Optional[str] = None, env_index: int = -1,
                 resolver: Optional[EffectResolver] = None):
        self.cell = cell_size
        self.fps = fps
        self.delay_ms = delay_ms
        self.fullscreen = fullscreen
        self.env_dir = env_dir
        self.env_files: List[str] = []
        self.env_index = env_index
        self.resolver = resolver

        self.count = 0
        self.status = "idle"
        self.route: List[Cell] = []
        self.show_grid = False
        self.searching = False
        self._cancel = False
        self._quit = False

        self._set_grid(grid)
        self.clock = pygame.time.Clock()
        if self.env_dir:
            self._find_env_files()

    # ----------------- observer hooks -----------------
    def on_counter_changed(self, count: int) -> None:
        self.count = count

    def on_state_changed(self) -> None:
        if self.searching:
            self._pump_search_events()
        self.draw()
        if self.searching and self.delay_ms > 0 and not self._cancel:
            pygame.time.delay(self.delay_ms)

    # ----------------- search control -----------------
    def _should_stop(self) -> bool:
        return self._cancel

    def _set_grid(self, grid: Grid) -> None:
        self.grid = grid
        self.engine = SearchEngine(grid, observer=self, resolver=self.resolver,
                                   should_stop=self._should_stop)
        self.route = []
        self.count = 0
        self._recreate_display()

    def run_search(self, strategy: str) -> SearchResult:
        self.route = []
        self._cancel = False
        self.status = strategy
        self.searching = True
        try:
            result = self.engine.run(strategy)
        finally:
            self.searching = False

        if result.found:
            self.route = self.engine.reconstruct_path()
            self.status = f"{strategy}: found, route {len(self.route)}"
        elif result.cancelled:
            self.status = f"{strategy}: cancelled"
        else:
            self.status = f"{strategy}: no path"
        self.draw()
        return result

    def reset(self) -> None:
        self.engine.reset()
        self.route = []
        self.count = 0
        self.status = "idle"

    def _find_env_files(self) -> None:
        if self.env_dir and os.path.isdir(self.env_dir):
            self.env_files = sorted(f for f in os.listdir(self.env_dir) if f.endswith(".txt"))

    def _load_env_by_index(self, index: int) -> None:
        if not self.env_files or not (0 <= index < len(self.env_files)):
            return
        self.env_index = index
        filepath = os.path.join(self.env_dir, self.env_files[self.env_index])
        logger.info("Loading: %s", filepath)
        self._set_grid(Grid.load(filepath))

    def _step_env(self, delta: int) -> None:
        if self.env_files:
            self._load_env_by_index((self.env_index + delta) % len(self.env_files))

    def _change_speed(self, factor: float) -> None:
        self.delay_ms = max(0, min(1000, int(self.delay_ms * factor) or (1 if factor > 1 else 0)))

    def _pump_search_events(self) -> None:
        # only flags are set here; the engine is never re-entered from a hook
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._cancel = self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._cancel = True
                elif event.key == pygame.K_PAGEUP:
                    self._change_speed(0.5)
                elif event.key == pygame.K_PAGEDOWN:
                    self._change_speed(2.0)

    # ----------------- draw -----------------
    def _recreate_display(self) -> None:
        W, H = self.grid.cols * self.cell, self.grid.rows * self.cell
        flags = (pygame.SCALED | pygame.FULLSCREEN) if self.fullscreen else 0
        self.screen = pygame.display.set_mode((W, H), flags)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self._recreate_display()

    def draw(self) -> None:
        cell = self.cell
        scr = self.screen
        scr.fill(Colors.BG)

        for tile in self.grid:
            rect = pygame.Rect(tile.col * cell, tile.row * cell, cell, cell)
            if tile.is_wall:
                color = Colors.WALL
            elif tile.is_teleport:
                color = Colors.TELEPORT
            elif tile.visited:
                color = Colors.VISITED
            else:
                color = Colors.FLOOR
            scr.fill(color, rect)

        for tile in self.route:
            rect = pygame.Rect(tile.col * cell + cell // 4, tile.row * cell + cell // 4, cell // 2, cell // 2)
            pygame.draw.rect(scr, Colors.PATH, rect, border_radius=4)

        for tile, color in ((self.engine.start, Colors.START), (self.engine.end, Colors.GOAL)):
            rect = pygame.Rect(tile.col * cell + 4, tile.row * cell + 4, cell - 8, cell - 8)
            pygame.draw.rect(scr, color, rect, border_radius=6)

        if self.show_grid:
            for c in range(self.grid.cols + 1):
                pygame.draw.line(scr, Colors.GRID, (c * cell, 0), (c * cell, self.grid.rows * cell))
            for r in range(self.grid.rows + 1):
                pygame.draw.line(scr, Colors.GRID, (0, r * cell), (self.grid.cols * cell, r * cell))

        pygame.display.set_caption(f"Maze search | {self.status} | steps={self.count}")
        pygame.display.flip()

    # ----------------- loop -----------------
    def run(self) -> None:
        self.draw()
        while not self._quit:
            self.clock.tick(self.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._quit = True
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self._quit = True
                    elif event.key in STRATEGY_KEYS:
                        self.run_search(STRATEGY_KEYS[event.key])
                    elif event.key == pygame.K_r:
                        self.reset()
                    elif event.key == pygame.K_g:
                        self._set_grid(Grid.random(rows=self.grid.rows, cols=self.grid.cols,
                                                   teleport_pairs=len(self.grid.teleports()) // 2))
                    elif event.key == pygame.K_LEFTBRACKET:
                        self._step_env(-1)
                    elif event.key == pygame.K_RIGHTBRACKET:
                        self._step_env(1)
                    elif event.key == pygame.K_PAGEUP:
                        self._change_speed(0.5)
                    elif event.key == pygame.K_PAGEDOWN:
                        self._change_speed(2.0)
                    elif event.key == pygame.K_h:
                        self.show_grid = not self.show_grid
                    elif event.key == pygame.K_F11:
                        self.toggle_fullscreen()
            self.draw()


def launch(grid: Grid, **kwargs) -> None:
    pygame.init()
    try:
        Viewer(grid, **kwargs).run()
    finally:
        pygame.quit()
