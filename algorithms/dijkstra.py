"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Yields a Step at:
  1. Start, then the initial distance map (source 0, everything else ∞)
  2. Pop minimum-distance node  →  highlight-node
  3. Each outgoing edge examined  →  highlight-edge
  4. Successful relaxation  →  update-distances with the whole map
  5. Heap empty  →  completion message

Ties in the heap are broken by insertion order (a sequence number rides
along with each entry).  Stale entries, i.e. nodes already finalised, are
popped silently.

Correctness note: Dijkstra requires non-negative weights.  Negative weights
are NOT rejected here; the distances it then returns carry no guarantee.
Use Bellman-Ford for such graphs.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from graph import Graph
from algorithms.results import ShortestPaths, improves, reject_missing_start
from steps import (
    INFINITY, HighlightEdge, HighlightNode, Message, NodeId, StepGenerator, UpdateDistances,
    frozen_distances,
)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    pq ← [(0, source)]",                      # 3
    "    while pq is not empty:",                  # 4
    "        node ← pq.pop_min()",                 # 5
    "        if node in visited: continue",        # 6
    "        visited.add(node)",                   # 7
    "        for (neighbour, w) in adj(node):",    # 8
    "            if dist[node] + w < dist[nbr]:",  # 9
    "                dist[nbr] ← dist[node] + w",  # 10
    "                parent[nbr] ← node",          # 11
    "                pq.push((dist[nbr], nbr))",   # 12
    "    return dist, parent",                     # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: NodeId) -> StepGenerator:
    """Returns ShortestPaths, or None when `source` is not in the graph."""
    if not graph.has_node(source):
        return (yield from reject_missing_start(graph, source))

    yield Message(message=f"Starting Dijkstra's algorithm from node {source}.", code_line=0)

    dist:   Dict[NodeId, float]            = {nid: INFINITY for nid in graph.nodes}
    parent: Dict[NodeId, Optional[NodeId]] = {nid: None for nid in graph.nodes}
    dist[source] = 0
    yield UpdateDistances(distances=frozen_distances(dist),
                          message="Initialise all distances to ∞, and the source to 0.", code_line=2)

    seq = itertools.count()
    pq: List[Tuple[float, int, NodeId]] = [(0, next(seq), source)]
    visited: Set[NodeId] = set()
    order:   List[NodeId] = []

    while pq:
        _, _, node = heapq.heappop(pq)
        if node in visited:
            continue
        visited.add(node)
        order.append(node)
        yield HighlightNode(node_id=node, message=f"Visiting node {node}. Exploring neighbours.", code_line=7)

        for nbr, w in graph.neighbours(node):
            yield HighlightEdge(edge=(node, nbr), weight=w,
                                message=f"Checking edge from {node} to {nbr} with weight {w}.", code_line=9)
            if improves(dist[node], w, dist[nbr]):
                dist[nbr]   = dist[node] + w
                parent[nbr] = node
                heapq.heappush(pq, (dist[nbr], next(seq), nbr))
                yield UpdateDistances(distances=frozen_distances(dist),
                                      message=f"Distance to {nbr} updated to {dist[nbr]}.", code_line=10)

    yield Message(message="Dijkstra's algorithm complete. Final distances calculated.", code_line=13)
    return ShortestPaths(source=source, distances=dist, predecessors=parent, order=order)
