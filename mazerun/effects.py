# mazerun/effects.py
from __future__ import annotations
from typing import Dict, Optional

from .cell import Cell
from .grid import Grid
from .heuristics import nearest
from .types import Coord


class EffectResolver:
    """
    Maps a cell to the cell traversal should continue from.

    Returning the same cell means "no redirection". Resolvers only read cell
    state; marking cells and counting steps is left to the caller.
    """

    def apply_effect(self, cell: Cell, grid: Grid) -> Cell:
        return cell


class TeleportResolver(EffectResolver):
    """
    Teleport cells jump to another unvisited cell.

    Target selection, in order:
      1. an explicit `targets[pos]` override, if that cell is traversable and unvisited;
      2. the nearest unvisited teleport sharing the source's channel
         (Manhattan distance, ties broken row-major);
      3. no redirection.
    """

    def __init__(self, targets: Optional[Dict[Coord, Coord]] = None):
        self.targets: Dict[Coord, Coord] = dict(targets or {})

    def apply_effect(self, cell: Cell, grid: Grid) -> Cell:
        if not cell.is_teleport:
            return cell

        override = self.targets.get(cell.pos)
        if override is not None:
            dest = grid.cell_at(override)
            if dest is not cell and dest.is_traversable and not dest.visited:
                return dest

        partners = (t for t in grid.teleports(cell.channel)
                    if t is not cell and not t.visited)
        dest = nearest(cell.pos, partners)
        return dest if dest is not None else cell
