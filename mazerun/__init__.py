# mazerun/__init__.py
from .types import Coord
from .errors import (MazeError, ConfigurationError, MazeFormatError,
                     SearchInProgressError, PathUnavailableError)
from .cell import Cell, CellKind
from .grid import Grid
from .counter import StepCounter
from .observer import SearchObserver, NullObserver, CompositeObserver
from .effects import EffectResolver, TeleportResolver
from .heuristics import manhattan
from .astar import SearchNode
from .engine import SearchEngine, SearchResult, STRATEGIES
from .path import reconstruct_path, route_positions, is_valid_route
from .planners import solve, run_all, RunStats

__all__ = [
    "Coord",
    "MazeError", "ConfigurationError", "MazeFormatError",
    "SearchInProgressError", "PathUnavailableError",
    "Cell", "CellKind", "Grid", "StepCounter",
    "SearchObserver", "NullObserver", "CompositeObserver",
    "EffectResolver", "TeleportResolver", "manhattan", "SearchNode",
    "SearchEngine", "SearchResult", "STRATEGIES",
    "reconstruct_path", "route_positions", "is_valid_route",
    "solve", "run_all", "RunStats",
]
