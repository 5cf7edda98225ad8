"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Sort every edge by weight (stable, so equal weights keep edge-list order),
then accept an edge iff its endpoints are in different components.

Components live in a union-find with path-compressing find; union simply
hangs the first root under the second.  Stops as soon as |V|-1 edges are in.

The reverse copy of an undirected edge always lands in the same component
and shows up as a rejected (form-cycle) step.
"""

from typing import Dict, List, Tuple

from graph import Graph
from algorithms.results import MinimumSpanningTree
from steps import AddToMst, FormCycle, HighlightEdge, Message, NodeId, StepGenerator


PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                                     # 0
    "    edges ← sort(graph.edges, by weight)",                # 1
    "    dsu ← DisjointSet(V); mst ← []",                      # 2
    "    for (u, v, w) in edges:",                             # 3
    "        if dsu.find(u) == dsu.find(v): continue  # cycle",  # 4
    "        dsu.union(u, v); mst.append((u, v))",             # 5
    "        if len(mst) == |V| - 1: break",                   # 6
    "    return mst",                                          # 7
]


class DisjointSet:
    """Union-find over arbitrary hashable ids."""

    def __init__(self, items):
        self.parent: Dict[NodeId, NodeId] = {i: i for i in items}

    def find(self, i: NodeId) -> NodeId:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: NodeId, j: NodeId) -> bool:
        """Merge the two components; False when already joined."""
        root_i, root_j = self.find(i), self.find(j)
        if root_i == root_j:
            return False
        self.parent[root_i] = root_j
        return True


def kruskal(graph: Graph) -> StepGenerator:
    """Returns MinimumSpanningTree (a spanning forest on a disconnected graph)."""
    mst: List[Tuple[NodeId, NodeId, float]] = []
    ordered = sorted(graph.edges, key=lambda e: e.weight)
    dsu = DisjointSet(graph.nodes)

    yield Message(message="Starting Kruskal's algorithm. Edges sorted by weight.", code_line=1)

    for edge in ordered:
        u, v, w = edge.source, edge.target, edge.weight
        if len(mst) == graph.node_count() - 1:
            break
        yield HighlightEdge(edge=(u, v), weight=w,
                            message=f"Considering edge ({u}, {v}) with weight {w}.", code_line=3)
        if dsu.union(u, v):
            mst.append((u, v, w))
            yield AddToMst(edge=(u, v), weight=w, mst_edges=tuple((s, t) for s, t, _ in mst),
                           message=f"Nodes {u} and {v} are not connected. Adding edge to the MST.",
                           code_line=5)
        else:
            yield FormCycle(edge=(u, v), weight=w, mst_edges=tuple((s, t) for s, t, _ in mst),
                            message=f"Edge ({u}, {v}) would form a cycle. Skipping.", code_line=4)

    total = sum(w for _, _, w in mst)
    yield Message(message=f"Kruskal's algorithm complete. Total weight {total}.", code_line=7)
    return MinimumSpanningTree(edges=mst, total_weight=total)
