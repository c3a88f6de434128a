# mazerun/grid.py
from __future__ import annotations
import os
import random
from typing import Iterable, Iterator, List, Optional, Tuple

from .cell import Cell, CellKind
from .errors import ConfigurationError, MazeFormatError
from .types import Coord

_SYMBOLS = {
    ".": CellKind.EMPTY,
    " ": CellKind.EMPTY,
    "#": CellKind.WALL,
    "S": CellKind.START,
    "E": CellKind.END,
}

# up, down, left, right
_DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _cell_from_symbol(r: int, c: int, ch: str) -> Cell:
    kind = _SYMBOLS.get(ch)
    if kind is not None:
        return Cell(r, c, kind)
    if "a" <= ch <= "z":
        return Cell(r, c, CellKind.TELEPORT, channel=ch)
    raise MazeFormatError(f"unknown maze symbol {ch!r} at ({r}, {c})")


class Grid:
    """
    Fixed-shape, row-major 2-D array of cells.

    The shape never changes after construction. Traversal flags on the cells
    belong to whichever search is running; the grid itself never touches them.
    """

    def __init__(self, cells: List[List[Cell]]):
        if not cells or not cells[0]:
            raise MazeFormatError("grid must have at least one row and one column")
        width = len(cells[0])
        for r, row in enumerate(cells):
            if len(row) != width:
                raise MazeFormatError(f"row {r} has {len(row)} cells, expected {width}")
        self.cells = cells

    # ----------------- construction / io -----------------
    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "Grid":
        # "   " is a row of empty cells, not a blank line
        rows = [line for line in lines if line]
        grid = cls([[_cell_from_symbol(r, c, ch) for c, ch in enumerate(row)]
                    for r, row in enumerate(rows)])
        grid.locate_endpoints()
        return grid

    @classmethod
    def load(cls, path: str) -> "Grid":
        with open(path, "r") as f:
            lines = [line.rstrip("\r\n") for line in f]
        lines = [line for line in lines if line]
        if not lines:
            raise MazeFormatError(f"{path}: empty maze file")

        header = lines[0].split()
        if header and header[0] == "GRID" and len(header) == 6:
            return cls._from_legacy(header, lines[1:])
        return cls.from_strings(lines)

    @classmethod
    def _from_legacy(cls, header: List[str], rows: List[str]) -> "Grid":
        # GRID n sr sc gr gc, then n rows of 0/1 (1 = blocked)
        n = int(header[1])
        sr, sc, gr, gc = map(int, header[2:])
        if len(rows) < n:
            raise MazeFormatError(f"legacy grid declares {n} rows, found {len(rows)}")
        cells = [[Cell(r, c, CellKind.WALL if ch == "1" else CellKind.EMPTY)
                  for c, ch in enumerate(rows[r].strip())] for r in range(n)]
        grid = cls(cells)
        for (r, c), kind in (((sr, sc), CellKind.START), ((gr, gc), CellKind.END)):
            if not grid.in_bounds((r, c)):
                raise MazeFormatError(f"legacy endpoint ({r}, {c}) is outside the grid")
            grid.cells[r][c].kind = kind
        grid.locate_endpoints()
        return grid

    def to_strings(self) -> List[str]:
        return ["".join(cell.symbol() for cell in row) for row in self.cells]

    def save(self, path: str) -> None:
        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        with open(path, "w") as f:
            for line in self.to_strings():
                f.write(line + "\n")

    @staticmethod
    def random(rows: int = 31, cols: Optional[int] = None, p_blocked: float = 0.30,
               teleport_pairs: int = 0, seed: Optional[int] = None) -> "Grid":
        cols = rows if cols is None else cols
        if rows * cols < 2 + 2 * teleport_pairs:
            raise ConfigurationError(f"{rows}x{cols} grid is too small for the requested cells")
        rng = random.Random(seed)
        cells = [[Cell(r, c, CellKind.WALL if rng.random() < p_blocked else CellKind.EMPTY)
                  for c in range(cols)] for r in range(rows)]
        start, goal = cells[0][0], cells[rows - 1][cols - 1]
        start.kind = CellKind.START
        goal.kind = CellKind.END

        free = [cell for row in cells for cell in row if cell.kind in (CellKind.EMPTY, CellKind.WALL)]
        rng.shuffle(free)
        for i in range(min(teleport_pairs, len(free) // 2, 26)):
            channel = chr(ord("a") + i)
            for cell in (free[2 * i], free[2 * i + 1]):
                cell.kind = CellKind.TELEPORT
                cell.channel = channel
        return Grid(cells)

    # ----------------- queries -----------------
    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def in_bounds(self, s: Coord) -> bool:
        r, c = s
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell_at(self, s: Coord) -> Cell:
        if not self.in_bounds(s):
            raise IndexError(f"{s} is outside the {self.rows}x{self.cols} grid")
        r, c = s
        return self.cells[r][c]

    def neighbors(self, cell: Cell) -> List[Cell]:
        out = []
        for dr, dc in _DIRECTIONS:
            p = (cell.row + dr, cell.col + dc)
            if self.in_bounds(p):
                nb = self.cells[p[0]][p[1]]
                if nb.is_traversable:
                    out.append(nb)
        return out

    def teleports(self, channel: Optional[str] = None) -> List[Cell]:
        return [cell for cell in self
                if cell.is_teleport and (channel is None or cell.channel == channel)]

    def locate_endpoints(self) -> Tuple[Cell, Cell]:
        """
        Scan every cell once and return (start, end).

        Raises ConfigurationError when either endpoint is missing or appears
        more than once.
        """
        starts: List[Cell] = []
        ends: List[Cell] = []
        for cell in self:
            if cell.is_start:
                starts.append(cell)
            elif cell.is_end:
                ends.append(cell)
        for label, found in (("Start", starts), ("End", ends)):
            if not found:
                raise ConfigurationError(f"{label} cell not found")
            if len(found) > 1:
                where = ", ".join(str(cell.pos) for cell in found)
                raise ConfigurationError(f"multiple {label} cells at {where}")
        return starts[0], ends[0]
