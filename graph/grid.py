"""
grid.py — Wall-aware Grid
=========================
A rows × cols board of cells addressed (row, col).  Walls are a frozen set
of cells; start and end are ordinary cells that can never be walls.

Grid is immutable: toggle_wall returns a new Grid.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from steps import Cell


UP    = (-1, 0)
DOWN  = (1, 0)
LEFT  = (0, -1)
RIGHT = (0, 1)

DEFAULT_ROWS = 20
DEFAULT_COLS = 35
DEFAULT_WALL_PROBABILITY = 0.25


@dataclass(frozen=True)
class Grid:
    rows:  int
    cols:  int
    start: Cell
    end:   Cell
    walls: FrozenSet[Cell] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid must be at least 1×1, got {self.rows}×{self.cols}")
        for name, cell in (("start", self.start), ("end", self.end)):
            if not self.in_bounds(cell):
                raise ValueError(f"{name} cell {cell} is outside the {self.rows}×{self.cols} grid")
        if self.start in self.walls or self.end in self.walls:
            raise ValueError("start and end cells cannot be walls")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def empty(cls, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
              start: Optional[Cell] = None, end: Optional[Cell] = None) -> "Grid":
        """Wall-free grid.  Default endpoints sit on the middle row, five columns in from each side."""
        mid = rows // 2
        if start is None:
            start = (mid, min(5, cols - 1))
        if end is None:
            end = (mid, max(cols - 6, 0))
        return cls(rows=rows, cols=cols, start=tuple(start), end=tuple(end))

    @classmethod
    def randomized(cls, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                   wall_probability: float = DEFAULT_WALL_PROBABILITY,
                   seed: Optional[int] = None) -> "Grid":
        rng = random.Random(seed)
        base = cls.empty(rows, cols)
        walls = frozenset(
            (r, c)
            for r in range(rows)
            for c in range(cols)
            if (r, c) not in (base.start, base.end) and rng.random() < wall_probability
        )
        return replace(base, walls=walls)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_wall(self, cell: Cell) -> bool:
        return cell in self.walls

    def is_open(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and not self.is_wall(cell)

    def neighbours(self, cell: Cell, order: Sequence[Tuple[int, int]]) -> List[Cell]:
        """Open four-directional neighbours in the given direction order."""
        r, c = cell
        out = []
        for dr, dc in order:
            nxt = (r + dr, c + dc)
            if self.is_open(nxt):
                out.append(nxt)
        return out

    # ------------------------------------------------------------------
    # Edits (each returns a new Grid)
    # ------------------------------------------------------------------
    def toggle_wall(self, cell: Cell) -> "Grid":
        cell = tuple(cell)
        if not self.in_bounds(cell):
            raise ValueError(f"Cell {cell} is outside the grid")
        if cell in (self.start, self.end):
            return self
        walls = self.walls - {cell} if self.is_wall(cell) else self.walls | {cell}
        return replace(self, walls=frozenset(walls))

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "start": list(self.start),
            "end":   list(self.end),
            "walls": [list(c) for c in sorted(self.walls)],
        }
