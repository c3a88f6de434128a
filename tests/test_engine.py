"""Search engine behaviour shared by all four strategies, plus per-strategy specifics."""
import pytest

from mazerun import (STRATEGIES, CompositeObserver, Grid, PathUnavailableError, SearchEngine,
                     SearchInProgressError, SearchNode, TeleportResolver, is_valid_route,
                     manhattan)

from conftest import RecordingObserver, shortest_route_length


def positions(route):
    return [c.pos for c in route]


class TestOpenGrid:
    """3x3 grid, Start (0,0), End (2,2), no walls."""

    def test_bfs(self, open_grid):
        engine = SearchEngine(open_grid)
        assert engine.run_bfs()
        route = engine.reconstruct_path()
        assert positions(route) == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        # level order pops every closer cell first
        assert engine.counter.value == 9

    def test_astar_matches_bfs_length(self, open_grid):
        engine = SearchEngine(open_grid)
        assert engine.run_astar()
        assert len(engine.reconstruct_path()) == 5
        assert engine.counter.value == 5

    def test_astar_smaller_g_tie_break(self, open_grid):
        engine = SearchEngine(open_grid, tie_break="smaller_g")
        assert engine.run_astar()
        assert len(engine.reconstruct_path()) == 5
        assert engine.counter.value >= 5

    def test_greedy(self, open_grid):
        engine = SearchEngine(open_grid)
        assert engine.run_greedy()
        assert len(engine.reconstruct_path()) == 5
        assert engine.counter.value == 5

    def test_dfs_explores_one_branch_fully(self, open_grid):
        engine = SearchEngine(open_grid)
        assert engine.run_dfs()
        route = engine.reconstruct_path()
        assert positions(route) == [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1),
                                    (0, 1), (0, 2), (1, 2), (2, 2)]
        assert engine.counter.value == 9
        assert is_valid_route(route, open_grid)


class TestShape:

    @pytest.mark.parametrize("length", [2, 5, 12])
    def test_straight_line_matches_manhattan(self, length):
        grid = Grid.from_strings(["S" + "." * length + "E"])
        engine = SearchEngine(grid)
        assert engine.run_bfs()
        route = engine.reconstruct_path()
        assert len(route) - 1 == manhattan(engine.start.pos, engine.end.pos)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_adjacent_endpoints_take_two_steps(self, strategy):
        grid = Grid.from_strings(["S..", "E.."])
        engine = SearchEngine(grid)
        result = engine.run(strategy)
        assert result.found
        assert result.steps == 2
        assert positions(engine.reconstruct_path()) == [(0, 0), (1, 0)]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_enclosed_start(self, enclosed_grid, strategy):
        engine = SearchEngine(enclosed_grid)
        result = engine.run(strategy)
        assert not result.found
        assert not result.cancelled
        assert result.steps == 1
        assert engine.start.parent is None
        with pytest.raises(PathUnavailableError):
            engine.reconstruct_path()

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_failed_run_leaves_no_parent_chain(self, strategy):
        grid = Grid.from_strings(["S..#", "...#", "####", "...E"])
        engine = SearchEngine(grid)
        assert not engine.run(strategy).found
        assert all(c.parent is None for c in grid)
        # explored cells stay marked for display
        assert sum(c.visited for c in grid) == 6

    def test_walls_are_never_visited(self):
        grid = Grid.from_strings(["S.#..", ".##.#", "...#E", "#...."])
        for strategy in STRATEGIES:
            SearchEngine(grid).run(strategy)
            assert not any(c.visited for c in grid if c.is_wall)


class TestTeleports:

    @pytest.mark.parametrize("strategy", STRATEGIES)
    @pytest.mark.parametrize("gap", [1, 6, 40])
    def test_shortcut_to_end(self, strategy, gap):
        grid = Grid.from_strings(["Sa" + "." * gap + "E"])
        end = (0, gap + 2)
        engine = SearchEngine(grid, resolver=TeleportResolver(targets={(0, 1): end}))
        result = engine.run(strategy)
        assert result.found
        assert result.steps == 3
        assert positions(engine.reconstruct_path()) == [(0, 0), (0, 1), end]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_pair_crosses_wall(self, split_grid, strategy):
        engine = SearchEngine(split_grid)
        assert engine.run(strategy).found
        route = engine.reconstruct_path()
        path = positions(route)
        assert path[path.index((0, 1)) + 1] == (0, 3)
        assert is_valid_route(route, split_grid)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_redirect_replaces_neighbor_expansion(self, strategy):
        log = []

        class SpyGrid(Grid):
            def neighbors(self, cell):
                log.append(("neighbors", cell))
                return super().neighbors(cell)

        class SpyResolver(TeleportResolver):
            def apply_effect(self, cell, grid):
                dest = super().apply_effect(cell, grid)
                log.append(("effect", cell, dest))
                return dest

        grid = SpyGrid(Grid.from_strings(["Sa#a.E", "..#..."]).cells)
        assert SearchEngine(grid, resolver=SpyResolver()).run(strategy).found

        redirects = [i for i, e in enumerate(log) if e[0] == "effect" and e[2] is not e[1]]
        assert redirects
        for i in redirects:
            src = log[i][1]
            assert ("neighbors", src) not in log[i + 1:i + 2]
        tele = grid.cell_at((0, 1))
        assert ("neighbors", tele) not in log


class TestAccounting:

    def test_observer_sees_every_step(self, open_grid, recorder):
        engine = SearchEngine(open_grid, observer=recorder)
        engine.run_bfs()
        assert recorder.counts == list(range(1, 10)) + [9]
        # each count is followed by a repaint
        for i, event in enumerate(recorder.events):
            if event[0] == "count":
                assert recorder.events[i + 1] == ("state",)

    def test_composite_observer_fans_out(self, open_grid):
        a, b = RecordingObserver(), RecordingObserver()
        SearchEngine(open_grid, observer=CompositeObserver([a, b])).run_astar()
        assert a.events == b.events
        assert a.counts == [1, 2, 3, 4, 5, 5]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_observer_on_failure(self, enclosed_grid, recorder, strategy):
        SearchEngine(enclosed_grid, observer=recorder).run(strategy)
        assert recorder.counts == [1, 1]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_observer_does_not_change_outcome(self, strategy):
        grid = Grid.random(rows=14, p_blocked=0.25, teleport_pairs=2, seed=3)
        quiet_engine = SearchEngine(grid)
        quiet = quiet_engine.run(strategy)
        quiet_route = positions(quiet_engine.reconstruct_path()) if quiet.found else None
        observed_engine = SearchEngine(grid, observer=RecordingObserver())
        observed = observed_engine.run(strategy)
        observed_route = positions(observed_engine.reconstruct_path()) if observed.found else None
        assert (quiet.found, quiet.steps) == (observed.found, observed.steps)
        assert quiet_route == observed_route

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_rerun_is_idempotent(self, strategy):
        grid = Grid.random(rows=16, p_blocked=0.3, teleport_pairs=3, seed=11)
        engine = SearchEngine(grid)
        first = engine.run(strategy)
        first_route = positions(engine.reconstruct_path()) if first.found else None
        engine.run("bfs" if strategy != "bfs" else "dfs")
        second = engine.run(strategy)
        second_route = positions(engine.reconstruct_path()) if second.found else None
        assert (first.found, first.steps) == (second.found, second.steps)
        assert first_route == second_route

    def test_counter_reset_between_runs(self, open_grid):
        engine = SearchEngine(open_grid)
        engine.run_dfs()
        engine.run_greedy()
        assert engine.counter.value == 5


class TestProperties:

    SEEDS = range(25)

    def test_all_strategies_agree_without_teleports(self):
        for seed in self.SEEDS:
            grid = Grid.random(rows=12, p_blocked=0.3, seed=seed)
            expected = shortest_route_length(grid)
            engine = SearchEngine(grid)
            for strategy in STRATEGIES:
                result = engine.run(strategy)
                assert result.found == (expected is not None), (seed, strategy)
                if not result.found:
                    continue
                route = engine.reconstruct_path()
                assert is_valid_route(route, grid), (seed, strategy)
                if strategy in ("bfs", "astar"):
                    assert len(route) == expected, (seed, strategy)
                else:
                    assert len(route) >= expected

    def test_routes_with_teleports_are_valid(self):
        for seed in self.SEEDS:
            grid = Grid.random(rows=12, p_blocked=0.3, teleport_pairs=3, seed=seed)
            engine = SearchEngine(grid)
            for strategy in STRATEGIES:
                if engine.run(strategy).found:
                    assert is_valid_route(engine.reconstruct_path(), grid), (seed, strategy)


class TestErrors:

    def test_unknown_strategy(self, open_grid):
        with pytest.raises(ValueError, match="Unknown strategy"):
            SearchEngine(open_grid).run("dijkstra")

    def test_unknown_tie_break(self, open_grid):
        with pytest.raises(ValueError):
            SearchEngine(open_grid, tie_break="random")

    def test_reconstruct_before_any_run(self, open_grid):
        with pytest.raises(PathUnavailableError):
            SearchEngine(open_grid).reconstruct_path()

    def test_reentrant_run_from_observer(self, open_grid):
        class Reentrant(RecordingObserver):
            def on_state_changed(self):
                engine.run_bfs()

        engine = SearchEngine(open_grid)
        engine.set_observer(Reentrant())
        with pytest.raises(SearchInProgressError):
            engine.run_dfs()
        # the guard is released afterwards
        engine.set_observer(None)
        assert engine.run_bfs()


class TestCancellation:

    def test_bfs_stops_at_pop(self, open_grid):
        calls = []

        def should_stop():
            calls.append(1)
            return len(calls) > 3

        engine = SearchEngine(open_grid, should_stop=should_stop)
        result = engine.run("bfs")
        assert result.cancelled and not result.found
        assert result.steps == 3
        assert all(c.parent is None for c in open_grid)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_stop_after_reaching_end_still_finds(self, strategy):
        grid = Grid.from_strings(["SE"])
        engine = SearchEngine(grid, should_stop=lambda: engine.counter.value >= 2)
        result = engine.run(strategy)
        assert result.found and not result.cancelled
        assert result.steps == 2

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_every_strategy_honours_the_flag(self, open_grid, strategy):
        engine = SearchEngine(open_grid, should_stop=lambda: True)
        result = engine.run(strategy)
        assert result.cancelled
        assert not result.found
        with pytest.raises(PathUnavailableError):
            engine.reconstruct_path()


def test_search_node_ordering(open_grid):
    cell = open_grid.cell_at((1, 1))
    other = open_grid.cell_at((0, 1))
    assert SearchNode((4, -2), 5, cell) < SearchNode((4, -1), 1, other)
    assert SearchNode((4, -2), 1, cell) < SearchNode((4, -2), 2, other)


def test_dfs_on_corridor_longer_than_recursion_limit():
    grid = Grid.from_strings(["S" + "." * 20000 + "E"])
    engine = SearchEngine(grid)
    assert engine.run_dfs()
    assert engine.counter.value == 20002
    assert len(engine.reconstruct_path()) == 20002
