"""Shared grids and helpers for the mazerun tests."""
from collections import deque

import pytest

from mazerun import Grid, SearchObserver

OPEN_3X3 = ["S..", "...", "..E"]
ENCLOSED = ["S#.", "#..", "..E"]
# left and right halves joined only by the 'a' teleport pair
SPLIT = ["Sa#a.E", "..#..."]


class RecordingObserver(SearchObserver):
    def __init__(self):
        self.events = []

    def on_counter_changed(self, count):
        self.events.append(("count", count))

    def on_state_changed(self):
        self.events.append(("state",))

    @property
    def counts(self):
        return [e[1] for e in self.events if e[0] == "count"]


def shortest_route_length(grid):
    """Plain BFS over positions, ignoring teleports: number of cells on a shortest route."""
    start, end = grid.locate_endpoints()
    dist = {start.pos: 1}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        if cur is end:
            return dist[cur.pos]
        for nb in grid.neighbors(cur):
            if nb.pos not in dist:
                dist[nb.pos] = dist[cur.pos] + 1
                queue.append(nb)
    return None


@pytest.fixture
def open_grid():
    return Grid.from_strings(OPEN_3X3)


@pytest.fixture
def enclosed_grid():
    return Grid.from_strings(ENCLOSED)


@pytest.fixture
def split_grid():
    return Grid.from_strings(SPLIT)


@pytest.fixture
def recorder():
    return RecordingObserver()
