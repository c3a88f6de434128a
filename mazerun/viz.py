# mazerun/viz.py
from __future__ import annotations
import os
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from .grid import Grid
from .types import Coord

WALL = (0, 0, 0)
FLOOR = (240, 240, 240)
VISITED = (255, 200, 200)
PATH = (160, 190, 255)
TELEPORT = (190, 120, 230)
START = (100, 220, 120)
GOAL = (255, 170, 80)


def draw_grid_png(grid: Grid,
                  path: Optional[Iterable[Coord]],
                  visited: Optional[Iterable[Coord]],
                  out_png: str,
                  cell: int = 10) -> None:
    img = Image.new("RGB", (grid.cols * cell, grid.rows * cell), (255, 255, 255))
    drw = ImageDraw.Draw(img)

    def paint(r: int, c: int, color) -> None:
        x0, y0 = c * cell, r * cell
        drw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1), fill=color)

    # base grid
    for tile in grid:
        if tile.is_wall:
            paint(tile.row, tile.col, WALL)
        elif tile.is_teleport:
            paint(tile.row, tile.col, TELEPORT)
        else:
            paint(tile.row, tile.col, FLOOR)

    for (r, c) in visited or ():
        if not grid.cell_at((r, c)).is_teleport:
            paint(r, c, VISITED)

    path = list(path or ())
    if len(path) > 1:
        for (r, c) in path:
            paint(r, c, PATH)

    start, end = grid.locate_endpoints()
    paint(start.row, start.col, START)
    paint(end.row, end.col, GOAL)

    dirname = os.path.dirname(out_png)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    img.save(out_png)
