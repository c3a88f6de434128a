# mazerun/frontier.py
from __future__ import annotations
from collections import deque
from typing import Deque, Optional

from .cell import Cell


class Frontier:
    """
    Pending cells for one search run, together with the admission rule.

    `pop` returns None for entries that turned stale while queued; the engine
    skips those without counting a step.
    """

    def seed(self, start: Cell) -> None:
        raise NotImplementedError

    def pop(self) -> Optional[Cell]:
        raise NotImplementedError

    def admit(self, cell: Cell, parent: Cell) -> bool:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError


class FifoFrontier(Frontier):
    """Breadth-first: insertion order, each cell admitted once."""

    def __init__(self) -> None:
        self.queue: Deque[Cell] = deque()

    def seed(self, start: Cell) -> None:
        start.visited = True
        self.queue.append(start)

    def pop(self) -> Optional[Cell]:
        return self.queue.popleft()

    def admit(self, cell: Cell, parent: Cell) -> bool:
        if cell.visited:
            return False
        cell.visited = True
        cell.parent = parent
        self.queue.append(cell)
        return True

    def __len__(self) -> int:
        return len(self.queue)
