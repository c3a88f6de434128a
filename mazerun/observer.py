# mazerun/observer.py
"""
Observer port for search progress.

The engine calls both hooks synchronously on its own thread after every
processed cell and once more when the run ends. Implementations must return
promptly and must not start another search from inside a hook.
"""
from __future__ import annotations
from typing import Iterable, List


class SearchObserver:
    """No-op base; override the hooks you care about."""

    def on_counter_changed(self, count: int) -> None:
        pass

    def on_state_changed(self) -> None:
        pass


class NullObserver(SearchObserver):
    pass


class CompositeObserver(SearchObserver):
    """Forwards every notification to each child, in order."""

    def __init__(self, observers: Iterable[SearchObserver]):
        self.observers: List[SearchObserver] = list(observers)

    def on_counter_changed(self, count: int) -> None:
        for obs in self.observers:
            obs.on_counter_changed(count)

    def on_state_changed(self) -> None:
        for obs in self.observers:
            obs.on_state_changed()
