# mazerun/heuristics.py
from typing import Iterable, Optional, TypeVar

from .types import Coord

T = TypeVar("T")


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def nearest(origin: Coord, candidates: Iterable[T], key=lambda c: c.pos) -> Optional[T]:
    """Closest candidate by Manhattan distance; ties go to the first in row-major order."""
    best = None
    best_rank = None
    for cand in candidates:
        p = key(cand)
        rank = (manhattan(origin, p), p)
        if best_rank is None or rank < best_rank:
            best, best_rank = cand, rank
    return best
