# mazerun/engine.py
"""
Search engine: four traversal strategies over one grid.

Every run resets the cells and the step counter, then drives the traversal
while reporting each processed cell to the observer. A step is counted once
per cell taken off the frontier (DFS: once per cell entered). Teleport
redirection, when it happens, replaces neighbour expansion for that step.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Callable, Dict, List, Optional, Tuple

from .astar import TIE_BREAKS, AStarFrontier, GreedyFrontier
from .cell import Cell
from .counter import StepCounter
from .effects import EffectResolver, TeleportResolver
from .errors import PathUnavailableError, SearchInProgressError
from .frontier import FifoFrontier, Frontier
from .grid import Grid
from .observer import NullObserver, SearchObserver
from .path import reconstruct_path

logger = logging.getLogger(__name__)

STRATEGIES = ("dfs", "bfs", "astar", "greedy")


@dataclass
class SearchResult:
    strategy: str
    found: bool
    steps: int
    cancelled: bool = False


class _Frame:
    """DFS stack entry: a cell and a cursor into its successors."""
    __slots__ = ("cell", "successors", "index")

    def __init__(self, cell: Cell):
        self.cell = cell
        self.successors: Optional[List[Cell]] = None
        self.index = 0

    def next_unvisited(self) -> Optional[Cell]:
        while self.index < len(self.successors):
            cand = self.successors[self.index]
            self.index += 1
            if not cand.visited:
                return cand
        return None


class SearchEngine:
    """
    Runs DFS, BFS, A* or greedy best-first search from Start to End.

    Only one run may be active on a grid at a time; calling a strategy from
    inside an observer hook raises SearchInProgressError.
    """

    def __init__(self, grid: Grid,
                 observer: Optional[SearchObserver] = None,
                 resolver: Optional[EffectResolver] = None,
                 tie_break: str = "larger_g",
                 should_stop: Optional[Callable[[], bool]] = None):
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"Unknown tie_break: {tie_break}. Available: {', '.join(TIE_BREAKS)}")
        self.grid = grid
        self.counter = StepCounter(0)
        self.observer: SearchObserver = observer if observer is not None else NullObserver()
        self.resolver: EffectResolver = resolver if resolver is not None else TeleportResolver()
        self.tie_break = tie_break
        self.should_stop = should_stop
        self.last_result: Optional[SearchResult] = None
        self._running = False
        self._start, self._end = grid.locate_endpoints()

    @property
    def start(self) -> Cell:
        return self._start

    @property
    def end(self) -> Cell:
        return self._end

    def set_observer(self, observer: Optional[SearchObserver]) -> None:
        self.observer = observer if observer is not None else NullObserver()

    def reset(self) -> None:
        for cell in self.grid:
            cell.reset()
        self.counter.reset()

    # ----------------- public strategies -----------------
    def run_dfs(self) -> bool:
        return self.run("dfs").found

    def run_bfs(self) -> bool:
        return self.run("bfs").found

    def run_astar(self) -> bool:
        return self.run("astar").found

    def run_greedy(self) -> bool:
        return self.run("greedy").found

    def run(self, strategy: str) -> SearchResult:
        runners: Dict[str, Callable[[], Tuple[bool, bool]]] = {
            "dfs": self._dfs,
            "bfs": lambda: self._search_frontier(FifoFrontier()),
            "astar": lambda: self._search_frontier(AStarFrontier(self._end.pos, self.tie_break)),
            "greedy": lambda: self._search_frontier(GreedyFrontier(self._end.pos)),
        }
        if strategy not in runners:
            raise ValueError(f"Unknown strategy: {strategy}. Available: {', '.join(STRATEGIES)}")
        if self._running:
            raise SearchInProgressError(f"cannot start {strategy}: a search is already running")

        self._running = True
        try:
            self.last_result = None
            self.reset()
            logger.debug("%s: searching %dx%d grid from %s to %s",
                         strategy, self.grid.rows, self.grid.cols, self._start.pos, self._end.pos)
            found, cancelled = runners[strategy]()
            if not found:
                # a failed run must not leave a partial chain behind
                for cell in self.grid:
                    cell.parent = None
            self.last_result = SearchResult(strategy, found, self.counter.value, cancelled)
            self._notify()
        finally:
            self._running = False

        if found:
            logger.info("%s: reached the end, final counter %d", strategy, self.counter.value)
        elif cancelled:
            logger.info("%s: cancelled after %d steps", strategy, self.counter.value)
        else:
            logger.info("%s: no path found after %d steps", strategy, self.counter.value)
        return self.last_result

    def reconstruct_path(self, end: Optional[Cell] = None) -> List[Cell]:
        if self.last_result is None or not self.last_result.found:
            raise PathUnavailableError("no successful search to reconstruct a route from")
        return reconstruct_path(end if end is not None else self._end)

    # ----------------- traversal -----------------
    def _notify(self) -> None:
        self.observer.on_counter_changed(self.counter.value)
        self.observer.on_state_changed()

    def _account(self) -> None:
        self.counter.increment()
        self._notify()

    def _cancelled(self) -> bool:
        return self.should_stop is not None and self.should_stop()

    def _successors(self, cell: Cell) -> List[Cell]:
        target = self.resolver.apply_effect(cell, self.grid)
        if target is not cell and not target.visited:
            return [target]
        return self.grid.neighbors(cell)

    def _dfs(self) -> Tuple[bool, bool]:
        self._start.visited = True
        self._account()
        stack = [_Frame(self._start)]

        while stack:
            frame = stack[-1]
            if frame.successors is None and frame.cell is self._end:
                return True, False
            if self._cancelled():
                return False, True
            if frame.successors is None:
                frame.successors = self._successors(frame.cell)

            nxt = frame.next_unvisited()
            if nxt is None:
                stack.pop()
                continue
            # fully explore this successor before trying the next one
            nxt.visited = True
            nxt.parent = frame.cell
            self._account()
            stack.append(_Frame(nxt))

        return False, False

    def _search_frontier(self, frontier: Frontier) -> Tuple[bool, bool]:
        frontier.seed(self._start)

        while len(frontier):
            if self._cancelled():
                return False, True
            cell = frontier.pop()
            if cell is None:
                continue  # stale
            self._account()
            if cell is self._end:
                return True, False

            successors = self._successors(cell)
            for nb in successors:
                frontier.admit(nb, cell)

        return False, False
