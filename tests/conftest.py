"""Shared test fixtures."""

import pytest

from engine.workspace import Workspace
from graph import Graph, Grid
from main import create_app
from settings import VisualizerSettings


@pytest.fixture
def settings():
    """Small, environment-independent settings."""
    return VisualizerSettings(_env_file=None, grid_rows=5, grid_cols=5, sorting_sample_size=6)


@pytest.fixture
def workspace(settings):
    return Workspace(settings)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def sssp_graph():
    return Graph.sssp_sample()


@pytest.fixture
def dag_graph():
    return Graph.dag_sample()


@pytest.fixture
def mst_graph():
    return Graph.mst_sample()


@pytest.fixture
def open_grid():
    """5×5, no walls, start on the left edge, end on the right edge."""
    return Grid(rows=5, cols=5, start=(2, 0), end=(2, 4))
