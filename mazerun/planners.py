# mazerun/planners.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple
import time

from .effects import EffectResolver
from .engine import STRATEGIES, SearchEngine
from .grid import Grid
from .observer import SearchObserver
from .path import route_positions
from .types import Coord


@dataclass
class RunStats:
    strategy: str
    found: bool
    steps: int
    path_length: int
    elapsed_sec: float
    path: List[Coord]
    visited: Set[Coord]


def solve(grid: Grid, strategy: str,
          observer: Optional[SearchObserver] = None,
          resolver: Optional[EffectResolver] = None,
          tie_break: str = "larger_g") -> RunStats:
    engine = SearchEngine(grid, observer=observer, resolver=resolver, tie_break=tie_break)
    t0 = time.perf_counter()
    result = engine.run(strategy)
    elapsed = time.perf_counter() - t0

    path = route_positions(engine.reconstruct_path()) if result.found else []
    visited = {cell.pos for cell in grid if cell.visited}
    return RunStats(strategy, result.found, result.steps, len(path), elapsed, path, visited)


def run_all(grid: Grid,
            resolver: Optional[EffectResolver] = None,
            tie_break: str = "larger_g") -> List[Tuple[str, RunStats]]:
    """Run every strategy in turn on the same grid."""
    return [(name, solve(grid, name, resolver=resolver, tie_break=tie_break)) for name in STRATEGIES]
