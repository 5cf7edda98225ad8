"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows one visited set from the start node.  The frontier is a min-heap of
boundary edges keyed by weight (insertion order breaks ties).

Yields a Step for:
  1. Start, and the start node's edges entering the frontier
  2. Every edge pulled off the frontier  →  highlight-edge
  3. Edge whose target is already visited  →  form-cycle (rejected)
  4. Accepted edge  →  add-to-mst with the full MST edge list so far
  5. Completion message

Expects an undirected graph (both directions stored).  On a disconnected
graph the tree only spans the start node's component.
"""

import heapq
import itertools
from typing import List, Set, Tuple

from graph import Graph
from algorithms.results import MinimumSpanningTree, reject_missing_start
from steps import AddToMst, FormCycle, HighlightEdge, Message, NodeId, StepGenerator


PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                         # 0
    "    visited ← {start}; mst ← []",                 # 1
    "    pq ← edges(start)",                           # 2
    "    while pq and |visited| < |V|:",               # 3
    "        (u, v, w) ← pq.pop_min()",                # 4
    "        if v in visited: continue  # cycle",      # 5
    "        visited.add(v); mst.append((u, v))",      # 6
    "        for (x, wx) in adj(v):",                  # 7
    "            if x not in visited: pq.push((v, x, wx))",  # 8
    "    return mst",                                  # 9
]


def prim(graph: Graph, start: NodeId) -> StepGenerator:
    """Returns MinimumSpanningTree, or None when `start` is not in the graph."""
    if not graph.has_node(start):
        return (yield from reject_missing_start(graph, start))

    mst:     List[Tuple[NodeId, NodeId, float]] = []
    visited: Set[NodeId]                        = {start}
    seq = itertools.count()
    pq: List[Tuple[float, int, NodeId, NodeId]] = []

    yield Message(message=f"Starting Prim's algorithm from node {start}.", code_line=1)
    for v, w in graph.neighbours(start):
        heapq.heappush(pq, (w, next(seq), start, v))
    yield Message(message=f"Adding all edges from node {start} to the priority queue.", code_line=2)

    while pq and len(visited) < graph.node_count():
        w, _, u, v = heapq.heappop(pq)
        yield HighlightEdge(edge=(u, v), weight=w,
                            message=f"Extracting min edge ({u}, {v}) with weight {w} from the queue.",
                            code_line=4)
        if v in visited:
            yield FormCycle(edge=(u, v), weight=w, mst_edges=tuple((s, t) for s, t, _ in mst),
                            message=f"Node {v} is already in the MST. Skipping to avoid a cycle.",
                            code_line=5)
            continue

        visited.add(v)
        mst.append((u, v, w))
        yield AddToMst(edge=(u, v), weight=w, mst_edges=tuple((s, t) for s, t, _ in mst),
                       message=f"Adding edge ({u}, {v}) to the MST.", code_line=6)

        for x, wx in graph.neighbours(v):
            if x not in visited:
                heapq.heappush(pq, (wx, next(seq), v, x))
        yield Message(message=f"Adding outgoing edges from new node {v} to the queue.", code_line=8)

    total = sum(w for _, _, w in mst)
    yield Message(message=f"Prim's algorithm complete. Total weight {total}.", code_line=9)
    return MinimumSpanningTree(edges=mst, total_weight=total)
