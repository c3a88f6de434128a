# mazerun/cell.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .types import Coord


class CellKind(Enum):
    EMPTY = "."
    WALL = "#"
    START = "S"
    END = "E"
    TELEPORT = "t"


@dataclass(eq=False)
class Cell:
    """
    One grid position.

    `visited` and `parent` are traversal state owned by the running search;
    the engine clears them at the start of every run. Cells compare by
    identity so they can live in sets and dicts while their flags change.
    """
    row: int
    col: int
    kind: CellKind = CellKind.EMPTY
    channel: Optional[str] = None  # teleport link label
    visited: bool = False
    parent: Optional["Cell"] = field(default=None, repr=False)

    @property
    def pos(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_wall(self) -> bool:
        return self.kind is CellKind.WALL

    @property
    def is_start(self) -> bool:
        return self.kind is CellKind.START

    @property
    def is_end(self) -> bool:
        return self.kind is CellKind.END

    @property
    def is_teleport(self) -> bool:
        return self.kind is CellKind.TELEPORT

    @property
    def is_traversable(self) -> bool:
        return not self.is_wall

    def reset(self) -> None:
        self.visited = False
        self.parent = None

    def symbol(self) -> str:
        if self.is_teleport:
            return self.channel or CellKind.TELEPORT.value
        return self.kind.value
