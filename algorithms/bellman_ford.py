"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
Single-source shortest paths that tolerates NEGATIVE edge weights (but not
negative cycles).

Structure:
  • exactly |V|-1 passes relaxing every edge in edge-list order
    (no early exit, so the trace length depends only on the graph)
  • one detector pass that flags a negative cycle

Yields a Step for:
  1. The initial distance map
  2. A message at the start of every pass
  3. highlight-edge for every edge examined
  4. update-distances after every successful relaxation
  5. highlight-edge + negative-cycle on detection

On a negative cycle the result is None: the distances at that point are not
shortest paths, and nothing claims they are.
"""

from typing import Dict, List, Optional

from graph import Graph
from algorithms.results import ShortestPaths, improves, reject_missing_start
from steps import (
    INFINITY, HighlightEdge, Message, NegativeCycle, NodeId, StepGenerator, UpdateDistances,
    frozen_distances,
)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",             # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    for i in 1 … |V|-1:",                     # 3
    "        for each edge (u, v, w):",            # 4
    "            if dist[u] + w < dist[v]:",       # 5
    "                dist[v] ← dist[u] + w",       # 6
    "                parent[v] ← u",               # 7
    "    // negative-cycle check:",                # 8
    "    for each edge (u, v, w):",                # 9
    "        if dist[u] + w < dist[v]:",           # 10
    "            return NEGATIVE CYCLE",           # 11
    "    return dist, parent",                     # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, source: NodeId) -> StepGenerator:
    """Returns ShortestPaths, or None for a missing source or a reachable negative cycle."""
    if not graph.has_node(source):
        return (yield from reject_missing_start(graph, source))

    V = graph.node_count()
    yield Message(message=f"Starting Bellman-Ford algorithm from node {source}.", code_line=0)

    dist:   Dict[NodeId, float]            = {nid: INFINITY for nid in graph.nodes}
    parent: Dict[NodeId, Optional[NodeId]] = {nid: None for nid in graph.nodes}
    dist[source] = 0
    yield UpdateDistances(distances=frozen_distances(dist),
                          message="Initialise all distances to ∞, and the source to 0.", code_line=2)

    # ==============================================================
    # MAIN ROUNDS
    # ==============================================================
    for round_idx in range(1, V):
        yield Message(message=f"--- Relaxation pass {round_idx} of {V - 1} ---", code_line=3)
        for edge in graph.edges:
            u, v, w = edge.source, edge.target, edge.weight
            yield HighlightEdge(edge=(u, v), weight=w,
                                message=f"Relaxing edge ({u}, {v}) with weight {w}.", code_line=5)
            if improves(dist[u], w, dist[v]):
                dist[v]   = dist[u] + w
                parent[v] = u
                yield UpdateDistances(distances=frozen_distances(dist),
                                      message=f"Distance to {v} updated to {dist[v]}.", code_line=6)

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    yield Message(message="Checking for negative weight cycles...", code_line=8)
    for edge in graph.edges:
        u, v, w = edge.source, edge.target, edge.weight
        if improves(dist[u], w, dist[v]):
            yield HighlightEdge(edge=(u, v), weight=w,
                                message=f"Edge ({u}, {v}) can still be relaxed.", code_line=10)
            yield NegativeCycle(edge=(u, v),
                                message=f"Negative weight cycle detected at edge ({u}, {v})! "
                                        f"Shortest paths are undefined.", code_line=11)
            return None

    yield Message(message="No negative weight cycles found. Bellman-Ford algorithm complete.", code_line=12)
    order = [nid for nid in graph.nodes if dist[nid] != INFINITY]
    return ShortestPaths(source=source, distances=dist, predecessors=parent, order=order)
