"""
bfs.py — Breadth-First Search on a Grid
========================================
Generator-based BFS over the open cells of a Grid.  Yields a Step at every
meaningful event:
  1. Start cell enqueued
  2. Dequeue a cell              →  dequeue
  3. Enqueue each unseen open neighbour (up, down, left, right)  →  enqueue
  4. End cell dequeued           →  one mark-path per cell, start → end

Cells are marked visited when enqueued, so each is enqueued at most once
and the path found is shortest by hop count.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant.
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from graph.grid import DOWN, LEFT, RIGHT, UP, Grid
from steps import Cell, CellDequeue, CellEnqueue, MarkPath, Message, StepGenerator


PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",                  # 0
    "    queue ← [start]; visited ← {start}",      # 1
    "    while queue is not empty:",               # 2
    "        cell ← queue.popleft()",              # 3
    "        if cell == end: return path(end)",    # 4
    "        for nbr in neighbours(cell):",        # 5
    "            if nbr not in visited:",          # 6
    "                visited.add(nbr)",            # 7
    "                parent[nbr] ← cell",          # 8
    "                queue.append(nbr)",           # 9
    "    return NOT FOUND",                        # 10
]

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


def bfs(grid: Grid, start: Optional[Cell] = None, end: Optional[Cell] = None) -> StepGenerator:
    """Returns the start → end list of cells, or None when no path exists."""
    start = tuple(start) if start is not None else grid.start
    end   = tuple(end) if end is not None else grid.end
    if not grid.is_open(start) or not grid.is_open(end):
        yield Message(message="Start and end must be open cells inside the grid.", code_line=0)
        return None

    yield Message(message="Starting breadth-first search (BFS).", code_line=0)
    queue: Deque[Cell] = deque([start])
    visited = {start}
    parent: Dict[Cell, Cell] = {}
    yield CellEnqueue(cell=start, message=f"Adding start cell {start} to the queue.", code_line=1)

    found = False
    while queue:
        cell = queue.popleft()
        yield CellDequeue(cell=cell, message=f"Dequeued cell {cell}. Exploring its neighbours.", code_line=3)
        if cell == end:
            found = True
            yield Message(message=f"End cell {cell} found! Reconstructing path.", code_line=4)
            break
        for nbr in grid.neighbours(cell, DIRECTIONS):
            if nbr in visited:
                continue
            visited.add(nbr)
            parent[nbr] = cell
            queue.append(nbr)
            yield CellEnqueue(cell=nbr, message=f"Visiting and enqueuing neighbour {nbr}.", code_line=9)

    if not found:
        yield Message(message="No path found to the end cell. BFS complete.", code_line=10)
        return None

    path = trace_back(parent, start, end)
    for cell in path:
        yield MarkPath(cell=cell, message=f"Marking {cell} as part of the shortest path.", code_line=4)
    yield Message(message=f"BFS complete. Path length {len(path)}.", code_line=4)
    return path


def trace_back(parent: Dict[Cell, Cell], start: Cell, end: Cell) -> List[Cell]:
    """Walk the parent map backwards from `end`; returns start → end."""
    path = [end]
    while path[-1] != start:
        path.append(parent[path[-1]])
    path.reverse()
    return path
