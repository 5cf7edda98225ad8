"""
settings.py — Runtime Configuration
====================================
Typed settings loaded from the environment (``VISUALIZER_*``) or a local
``.env`` file.

    settings = VisualizerSettings()                  # env / .env / defaults
    settings = VisualizerSettings(grid_rows=5)       # explicit override

Environment Variables:
    VISUALIZER_HOST, VISUALIZER_PORT, VISUALIZER_DEBUG, VISUALIZER_LOG_LEVEL
    VISUALIZER_PLAYBACK_SPEED
    VISUALIZER_HASH_TABLE_BUCKETS
    VISUALIZER_GRID_ROWS, VISUALIZER_GRID_COLS
    VISUALIZER_FIBONACCI_LIMIT, VISUALIZER_FIBONACCI_MEMO_LIMIT
    VISUALIZER_SORTING_SAMPLE_SIZE
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from algorithms.recursion import FIB_LIMIT, FIB_MEMO_LIMIT
from engine.stepper import SPEED_PRESETS
from graph.grid import DEFAULT_COLS, DEFAULT_ROWS
from structures import DEFAULT_BUCKETS


class VisualizerSettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="VISUALIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host:      str  = "127.0.0.1"
    port:      int  = Field(default=5000, ge=1, le=65535)
    debug:     bool = False
    log_level: str  = "INFO"

    playback_speed:       float = Field(default=SPEED_PRESETS["medium"], gt=0)
    hash_table_buckets:   int   = Field(default=DEFAULT_BUCKETS, ge=1)
    grid_rows:            int   = Field(default=DEFAULT_ROWS, ge=1)
    grid_cols:            int   = Field(default=DEFAULT_COLS, ge=1)
    fibonacci_limit:      int   = Field(default=FIB_LIMIT, ge=0)
    fibonacci_memo_limit: int   = Field(default=FIB_MEMO_LIMIT, ge=0)
    sorting_sample_size:  int   = Field(default=15, ge=1)
