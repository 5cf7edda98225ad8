"""Tests for BFS and DFS on the wall grid."""

import pytest

from algorithms.bfs import bfs
from algorithms.dfs import dfs
from graph import Grid
from steps import record


def adjacent(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def test_bfs_finds_the_straight_line(open_grid):
    trace = record(bfs(open_grid))

    assert trace.result == [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]
    assert [s.cell for s in trace.of_kind("mark-path")] == trace.result


def test_bfs_enqueues_each_cell_once(open_grid):
    trace = record(bfs(open_grid))
    enqueued = [s.cell for s in trace.of_kind("enqueue")]

    assert len(enqueued) == len(set(enqueued))
    assert trace.steps[1].kind == "enqueue"
    assert trace.steps[1].cell == open_grid.start


def test_bfs_routes_around_walls():
    grid = Grid(rows=3, cols=3, start=(0, 0), end=(0, 2), walls=frozenset({(0, 1), (1, 1)}))
    path = record(bfs(grid)).result

    assert path[0] == (0, 0) and path[-1] == (0, 2)
    assert len(path) == 7
    assert not set(path) & grid.walls


@pytest.mark.parametrize("search", [bfs, dfs])
def test_path_is_connected_and_open(search, open_grid):
    path = record(search(open_grid)).result

    assert path[0] == open_grid.start
    assert path[-1] == open_grid.end
    assert all(adjacent(a, b) for a, b in zip(path, path[1:]))
    assert all(open_grid.is_open(c) for c in path)


@pytest.mark.parametrize("search", [bfs, dfs])
def test_blocked_grid_has_no_path(search):
    wall = frozenset((r, 2) for r in range(5))
    grid = Grid(rows=5, cols=5, start=(2, 0), end=(2, 4), walls=wall)
    trace = record(search(grid))

    assert trace.result is None
    assert "No path found" in trace.last().message
    assert not trace.of_kind("mark-path")


@pytest.mark.parametrize("search", [bfs, dfs])
def test_start_outside_grid_is_rejected(search, open_grid):
    trace = record(search(open_grid, start=(9, 9)))

    assert len(trace.steps) == 1
    assert trace.result is None


def test_dfs_reports_stale_pops():
    walls = frozenset({(1, 2), (2, 1)})
    grid = Grid(rows=3, cols=3, start=(0, 0), end=(2, 2), walls=walls)
    trace = record(dfs(grid))

    popped = [s.cell for s in trace.of_kind("pop")]
    assert trace.result is None
    assert popped.count((1, 0)) == 2
    assert any("already visited" in s.message for s in trace.of_kind("message"))
