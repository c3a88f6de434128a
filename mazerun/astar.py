# mazerun/astar.py
"""Priority frontiers for A* and greedy best-first search."""
from __future__ import annotations
from dataclasses import dataclass, field
import heapq
from typing import Dict, List, Optional, Set, Tuple

from .cell import Cell
from .frontier import Frontier
from .heuristics import manhattan
from .types import Coord

TIE_BREAKS = ("larger_g", "smaller_g")


@dataclass(order=True)
class SearchNode:
    """Heap entry. Several nodes may exist for one cell; only the first pop counts."""
    priority: Tuple[int, ...]
    seq: int
    cell: Cell = field(compare=False)
    g: int = field(default=0, compare=False)


class _PriorityFrontier(Frontier):

    def __init__(self, goal: Coord):
        self.goal = goal
        self.openh: List[SearchNode] = []
        self.closed: Set[Cell] = set()
        self.counter = 0

    def h(self, cell: Cell) -> int:
        return manhattan(cell.pos, self.goal)

    def _push(self, priority: Tuple[int, ...], cell: Cell, g: int = 0) -> None:
        heapq.heappush(self.openh, SearchNode(priority, self.counter, cell, g))
        self.counter += 1

    def pop(self) -> Optional[Cell]:
        node = heapq.heappop(self.openh)
        if node.cell in self.closed:
            return None
        self.closed.add(node.cell)
        return node.cell

    def __len__(self) -> int:
        return len(self.openh)


class GreedyFrontier(_PriorityFrontier):
    """Ordered by h alone; neighbours are admitted once and never relaxed."""

    def seed(self, start: Cell) -> None:
        start.visited = True
        self._push((self.h(start),), start)

    def admit(self, cell: Cell, parent: Cell) -> bool:
        if cell.visited:
            return False
        cell.visited = True
        cell.parent = parent
        self._push((self.h(cell),), cell)
        return True


class AStarFrontier(_PriorityFrontier):
    """
    Ordered by f = g + h with unit step cost.

    Equal f values prefer the larger g ("larger_g", default) or the smaller
    one ("smaller_g"); remaining ties pop in insertion order. A cell is
    re-queued whenever a strictly better g is found until it is closed.
    """

    def __init__(self, goal: Coord, tie_break: str = "larger_g"):
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"Unknown tie_break: {tie_break}. Available: {', '.join(TIE_BREAKS)}")
        super().__init__(goal)
        self.tie_break = tie_break
        self.g: Dict[Cell, int] = {}

    def _key(self, g: int, cell: Cell) -> Tuple[int, int]:
        g_term = -g if self.tie_break == "larger_g" else g
        return (g + self.h(cell), g_term)

    def seed(self, start: Cell) -> None:
        start.visited = True
        self.g[start] = 0
        self._push(self._key(0, start), start, 0)

    def admit(self, cell: Cell, parent: Cell) -> bool:
        if cell in self.closed:
            return False
        tentative = self.g[parent] + 1
        if cell in self.g and tentative >= self.g[cell]:
            return False
        self.g[cell] = tentative
        cell.visited = True
        cell.parent = parent
        self._push(self._key(tentative, cell), cell, tentative)
        return True
