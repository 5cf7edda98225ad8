"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from settings import VisualizerSettings


def test_defaults():
    settings = VisualizerSettings(_env_file=None)

    assert settings.port == 5000
    assert settings.hash_table_buckets == 10
    assert settings.fibonacci_limit == 12
    assert settings.fibonacci_memo_limit == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VISUALIZER_GRID_ROWS", "7")
    monkeypatch.setenv("VISUALIZER_DEBUG", "true")
    settings = VisualizerSettings(_env_file=None)

    assert settings.grid_rows == 7
    assert settings.debug is True


@pytest.mark.parametrize("field, value", [("port", 0), ("grid_cols", 0), ("playback_speed", 0)])
def test_bounds_are_enforced(field, value):
    with pytest.raises(ValidationError):
        VisualizerSettings(_env_file=None, **{field: value})
