"""Tests for the immutable wall grid."""

import pytest

from graph import Grid
from graph.grid import DOWN, LEFT, RIGHT, UP


def test_empty_grid_places_endpoints_on_middle_row():
    g = Grid.empty(5, 5)

    assert g.start == (2, 4)
    assert g.end == (2, 0)
    assert not g.walls


def test_toggle_wall_returns_a_new_grid():
    g = Grid.empty(5, 5)
    walled = g.toggle_wall((0, 0))

    assert walled.is_wall((0, 0))
    assert not g.is_wall((0, 0))
    assert walled.toggle_wall((0, 0)) == g


def test_endpoints_cannot_become_walls():
    g = Grid.empty(5, 5)
    assert g.toggle_wall(g.start) is g


def test_toggle_outside_raises():
    with pytest.raises(ValueError):
        Grid.empty(3, 3).toggle_wall((3, 0))


def test_invalid_construction():
    with pytest.raises(ValueError):
        Grid(rows=0, cols=3, start=(0, 0), end=(0, 1))
    with pytest.raises(ValueError):
        Grid(rows=3, cols=3, start=(0, 0), end=(5, 5))
    with pytest.raises(ValueError):
        Grid(rows=3, cols=3, start=(0, 0), end=(2, 2), walls=frozenset({(0, 0)}))


def test_neighbours_follow_order_and_skip_walls():
    g = Grid(rows=3, cols=3, start=(0, 0), end=(2, 2), walls=frozenset({(1, 2)}))

    assert g.neighbours((1, 1), [UP, RIGHT, DOWN, LEFT]) == [(0, 1), (2, 1), (1, 0)]
    assert g.neighbours((0, 0), [UP, LEFT]) == []


def test_randomized_is_seeded_and_keeps_endpoints_open():
    a = Grid.randomized(6, 8, wall_probability=0.5, seed=11)
    b = Grid.randomized(6, 8, wall_probability=0.5, seed=11)

    assert a == b
    assert a.start not in a.walls
    assert a.end not in a.walls


def test_snapshot_is_plain_lists():
    g = Grid.empty(3, 3).toggle_wall((0, 1))
    snap = g.snapshot()

    assert snap["walls"] == [[0, 1]]
    assert snap["start"] == list(g.start)
