"""
dfs.py — Depth-First Search on a Grid
======================================
Iterative DFS with an explicit stack over the open cells of a Grid.

A cell can be pushed several times before it is popped once, so the
visited check happens on pop: a stale pop is reported and skipped.  The
parent of a cell is overwritten by every push, which means the path
follows the most recent discovery.  DFS finds *a* path, not the shortest.

Neighbours are pushed in the order down, right, up, left.
"""

from typing import Dict, List, Optional, Set

from algorithms.bfs import trace_back
from graph.grid import DOWN, LEFT, RIGHT, UP, Grid
from steps import Cell, CellPop, CellPush, MarkPath, Message, StepGenerator


PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",                  # 0
    "    stack ← [start]; visited ← {}",           # 1
    "    while stack is not empty:",               # 2
    "        cell ← stack.pop()",                  # 3
    "        if cell in visited: continue",        # 4
    "        visited.add(cell)",                   # 5
    "        if cell == end: return path(end)",    # 6
    "        for nbr in neighbours(cell):",        # 7
    "            if nbr not in visited:",          # 8
    "                parent[nbr] ← cell",          # 9
    "                stack.push(nbr)",             # 10
    "    return NOT FOUND",                        # 11
]

DIRECTIONS = (DOWN, RIGHT, UP, LEFT)


def dfs(grid: Grid, start: Optional[Cell] = None, end: Optional[Cell] = None) -> StepGenerator:
    """Returns the start → end list of cells, or None when no path exists."""
    start = tuple(start) if start is not None else grid.start
    end   = tuple(end) if end is not None else grid.end
    if not grid.is_open(start) or not grid.is_open(end):
        yield Message(message="Start and end must be open cells inside the grid.", code_line=0)
        return None

    yield Message(message="Starting depth-first search (DFS).", code_line=0)
    stack: List[Cell] = [start]
    visited: Set[Cell] = set()
    parent: Dict[Cell, Cell] = {}
    yield CellPush(cell=start, message=f"Pushing start cell {start} onto the stack.", code_line=1)

    found = False
    while stack:
        cell = stack.pop()
        yield CellPop(cell=cell, message=f"Popped cell {cell}.", code_line=3)
        if cell in visited:
            yield Message(message=f"Cell {cell} already visited. Skipping.", code_line=4)
            continue
        visited.add(cell)
        if cell == end:
            found = True
            yield Message(message=f"End cell {cell} found!", code_line=6)
            break
        for nbr in grid.neighbours(cell, DIRECTIONS):
            if nbr in visited:
                continue
            parent[nbr] = cell
            stack.append(nbr)
            yield CellPush(cell=nbr, message=f"Pushing neighbour {nbr} onto the stack.", code_line=10)

    if not found:
        yield Message(message="No path found to the end cell. DFS complete.", code_line=11)
        return None

    path = trace_back(parent, start, end)
    for cell in path:
        yield MarkPath(cell=cell, message=f"Marking {cell} as part of the path.", code_line=6)
    yield Message(message=f"DFS complete. Path length {len(path)}.", code_line=6)
    return path
