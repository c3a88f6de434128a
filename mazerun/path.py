# mazerun/path.py
from __future__ import annotations
from typing import List

from .cell import Cell
from .grid import Grid
from .heuristics import manhattan
from .types import Coord


def reconstruct_path(end: Cell) -> List[Cell]:
    """
    Walk parent links back from `end` and return the route Start -> End.

    Only meaningful right after a successful search; on any other grid state
    the result is whatever chain happens to hang off `end`.
    """
    path = [end]
    cur = end
    while cur.parent is not None:
        cur = cur.parent
        path.append(cur)
    path.reverse()
    return path


def route_positions(route: List[Cell]) -> List[Coord]:
    return [cell.pos for cell in route]


def is_valid_route(route: List[Cell], grid: Grid) -> bool:
    """Start to End, no repeated cell, each hop grid-adjacent or leaving a teleport."""
    if not route:
        return False
    start, end = grid.locate_endpoints()
    if route[0] is not start or route[-1] is not end:
        return False
    if len({id(cell) for cell in route}) != len(route):
        return False
    for a, b in zip(route, route[1:]):
        if b.is_wall:
            return False
        if manhattan(a.pos, b.pos) != 1 and not a.is_teleport:
            return False
    return True
