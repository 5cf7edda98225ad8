"""
dag_shortest_path.py — Shortest Paths in a DAG
===============================================
1. Topological order by Kahn's algorithm (FIFO queue of in-degree-0 nodes).
2. If the order misses any node the graph has a cycle: report it and stop
   with no distances.
3. Otherwise relax the outgoing edges of each node once, in topological
   order.  A single pass is enough because nothing can point backwards.

Negative weights are fine here.
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from graph import Graph
from algorithms.results import ShortestPaths, improves, reject_missing_start
from steps import (
    INFINITY, HighlightEdge, HighlightNode, Message, NodeId, StepGenerator, UpdateDistances,
    frozen_distances,
)


PSEUDOCODE: List[str] = [
    "def DagShortestPath(graph, source):",                 # 0
    "    order ← topological_sort(graph)  # Kahn",         # 1
    "    if len(order) < |V|: return NOT A DAG",           # 2
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",      # 3
    "    for u in order:",                                 # 4
    "        for (v, w) in adj(u):",                       # 5
    "            if dist[u] + w < dist[v]:",               # 6
    "                dist[v] ← dist[u] + w",               # 7
    "    return dist",                                     # 8
]


def topological_order(graph: Graph) -> List[NodeId]:
    """Kahn's algorithm.  Shorter than the node list when the graph has a cycle."""
    in_degree = graph.in_degrees()
    queue: Deque[NodeId] = deque(nid for nid in graph.nodes if in_degree[nid] == 0)
    order: List[NodeId] = []
    while queue:
        u = queue.popleft()
        order.append(u)
        for v, _ in graph.neighbours(u):
            in_degree[v] -= 1
            if in_degree[v] == 0:
                queue.append(v)
    return order


def dag_shortest_path(graph: Graph, source: NodeId) -> StepGenerator:
    """Returns ShortestPaths, or None for a missing source or a cyclic graph."""
    if not graph.has_node(source):
        return (yield from reject_missing_start(graph, source))

    order = topological_order(graph)
    if len(order) != graph.node_count():
        yield Message(message="Graph is not a DAG! Cannot run the algorithm.", code_line=2)
        return None
    yield Message(message="Topological sort complete. Order: " + ", ".join(str(n) for n in order),
                  code_line=1)

    dist:   Dict[NodeId, float]            = {nid: INFINITY for nid in graph.nodes}
    parent: Dict[NodeId, Optional[NodeId]] = {nid: None for nid in graph.nodes}
    dist[source] = 0
    yield UpdateDistances(distances=frozen_distances(dist), message="Initialise distances.", code_line=3)

    for u in order:
        yield HighlightNode(node_id=u, message=f"Processing node {u} from the topological order.", code_line=4)
        for v, w in graph.neighbours(u):
            yield HighlightEdge(edge=(u, v), weight=w, message=f"Relaxing edge ({u}, {v}).", code_line=6)
            if improves(dist[u], w, dist[v]):
                dist[v]   = dist[u] + w
                parent[v] = u
                yield UpdateDistances(distances=frozen_distances(dist),
                                      message=f"Distance to {v} updated to {dist[v]}.", code_line=7)

    yield Message(message="DAG shortest path complete.", code_line=8)
    return ShortestPaths(source=source, distances=dist, predecessors=parent, order=order)
