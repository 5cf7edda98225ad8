"""
results.py — Algorithm Result Types
====================================
What the graph algorithms hand back alongside their trace, plus the small
helpers several of them share.
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

from graph import Graph
from steps import INFINITY, EdgeRef, Message, NodeId, StepGenerator


class ShortestPaths(NamedTuple):
    source:       NodeId
    distances:    Dict[NodeId, float]            # INFINITY for unreached nodes
    predecessors: Dict[NodeId, Optional[NodeId]]
    order:        List[NodeId]                   # finalisation / processing order

    def path_to(self, target: NodeId) -> Optional[List[NodeId]]:
        """Source → target node list, or None when target is unreachable."""
        if self.distances.get(target, INFINITY) == INFINITY:
            return None
        path, cur = [], target
        while cur is not None:
            path.append(cur)
            cur = self.predecessors.get(cur)
        path.reverse()
        return path


class MinimumSpanningTree(NamedTuple):
    edges:        List[Tuple[NodeId, NodeId, float]]
    total_weight: float

    def refs(self) -> List[EdgeRef]:
        return [(s, t) for s, t, _ in self.edges]


def reject_missing_start(graph: Graph, start: NodeId) -> StepGenerator:
    """Single diagnostic step for a start node the graph does not contain."""
    yield Message(message=f"Start node {start} not in graph.", code_line=0)
    return None


def improves(dist_u: float, weight: float, dist_v: float) -> bool:
    """Relaxation test that never does arithmetic on the INFINITY sentinel."""
    if dist_u == INFINITY:
        return False
    return dist_v == INFINITY or dist_u + weight < dist_v
