"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, concept, fn, pseudocode, tags, …),
        …
    }

Each `fn` is a step generator; drive it with ``steps.record`` to get a
Trace.  Adding an algorithm means writing the generator and adding one
entry here.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs               import bfs               as _bfs,     PSEUDOCODE as _bfs_pc
from algorithms.dfs               import dfs               as _dfs,     PSEUDOCODE as _dfs_pc
from algorithms.dijkstra          import dijkstra          as _dij,     PSEUDOCODE as _dij_pc
from algorithms.bellman_ford      import bellman_ford      as _bf,      PSEUDOCODE as _bf_pc
from algorithms.dag_shortest_path import dag_shortest_path as _dag,     PSEUDOCODE as _dag_pc
from algorithms.prim              import prim              as _prim,    PSEUDOCODE as _prim_pc
from algorithms.kruskal           import kruskal           as _kruskal, PSEUDOCODE as _kruskal_pc
from algorithms.recursion         import fibonacci, PSEUDOCODE as _fib_pc, MEMO_PSEUDOCODE as _fib_memo_pc
from algorithms.sorting import (
    bubble_sort, selection_sort, insertion_sort, quick_sort,
    BUBBLE_PSEUDOCODE, SELECTION_PSEUDOCODE, INSERTION_PSEUDOCODE, QUICK_PSEUDOCODE,
)
from algorithms.results import MinimumSpanningTree, ShortestPaths


# concepts (which piece of application state an algorithm reads)
SSSP      = "sssp"
DAG       = "dag"
MST       = "mst"
RECURSION = "recursion"
SORTING   = "sorting"
GRID      = "grid"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    concept:           str                    # SSSP / DAG / MST / …
    fn:                Callable               # the step generator
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)   # e.g. ["weighted", "shortest-path"]
    needs_start:       bool     = False       # takes a start node id?
    supports_negative: bool     = False       # can handle negative edges?
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    description:       str      = ""          # one-liner for the UI card

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "concept":           self.concept,
            "pseudocode":        list(self.pseudocode),
            "tags":              list(self.tags),
            "needs_start":       self.needs_start,
            "supports_negative": self.supports_negative,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", concept=SSSP, fn=_dij, pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"], needs_start=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Correct only for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", concept=SSSP, fn=_bf, pseudocode=_bf_pc,
        tags=["weighted", "shortest-path", "negative-edges"], needs_start=True,
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Relaxes every edge |V|-1 times. Handles negative edges, detects negative cycles.",
    ),

    "dag_shortest_path": AlgoInfo(
        key="dag_shortest_path", label="DAG Shortest Path", concept=DAG, fn=_dag, pseudocode=_dag_pc,
        tags=["weighted", "shortest-path", "negative-edges", "topological"], needs_start=True,
        supports_negative=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Topological order, then one relaxation pass. Refuses cyclic graphs.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", concept=MST, fn=_prim, pseudocode=_prim_pc,
        tags=["weighted", "spanning-tree", "greedy"], needs_start=True,
        complexity_time="O(E log E)", complexity_space="O(E)",
        description="Grows one tree from a start node, always taking the cheapest boundary edge.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", concept=MST, fn=_kruskal, pseudocode=_kruskal_pc,
        tags=["weighted", "spanning-tree", "greedy", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Takes edges cheapest first, skipping any that would close a cycle.",
    ),

    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci (naive)", concept=RECURSION, fn=fibonacci, pseudocode=_fib_pc,
        tags=["recursion"],
        complexity_time="O(2^n)", complexity_space="O(n)",
        description="Plain recursion. Watch the same sub-problems get solved again and again.",
    ),

    "fibonacci_memo": AlgoInfo(
        key="fibonacci_memo", label="Fibonacci (memoised)", concept=RECURSION,
        fn=partial(fibonacci, memoized=True), pseudocode=_fib_memo_pc,
        tags=["recursion", "dynamic-programming"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="Recursion with a memo. Repeated sub-problems collapse into one node.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", concept=SORTING, fn=bubble_sort, pseudocode=BUBBLE_PSEUDOCODE,
        tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", concept=SORTING, fn=selection_sort,
        pseudocode=SELECTION_PSEUDOCODE,
        tags=["sorting", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly selects the minimum of the unsorted part.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", concept=SORTING, fn=insertion_sort,
        pseudocode=INSERTION_PSEUDOCODE,
        tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shifts each key left into the already-sorted prefix.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", concept=SORTING, fn=quick_sort, pseudocode=QUICK_PSEUDOCODE,
        tags=["sorting", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg", complexity_space="O(log n)",
        description="Partitions around the last element, then sorts each side.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", concept=GRID, fn=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds the shortest path by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", concept=GRID, fn=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "ShortestPaths",
    "MinimumSpanningTree",
    "SSSP", "DAG", "MST", "RECURSION", "SORTING", "GRID",
]
