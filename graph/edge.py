"""
edge.py — Graph Edge
====================
One directed, weighted connection.  An undirected link is modelled as two
Edge objects, one per direction, with the same weight.

Design decisions:
  - `source` and `target` are node ids, NOT node objects.  Edges stay
    serialisable and cannot form reference cycles.
  - Edges are never modified after construction, so history snapshots share them.
  - Weight may be negative (Bellman-Ford and DAG demos rely on that).
"""

from typing import Any, Dict

from steps import NodeId


class Edge:
    """
    Attributes:
        source : id of the tail node.
        target : id of the head node.
        weight : numeric cost.
    """

    __slots__ = ("source", "target", "weight")

    def __init__(self, source: NodeId, target: NodeId, weight: float = 1.0):
        self.source: NodeId = source
        self.target: NodeId = target
        self.weight: float  = weight

    def connects(self, node_a: NodeId, node_b: NodeId) -> bool:
        return self.source == node_a and self.target == node_b

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "weight": self.weight}

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and (self.source, self.target, self.weight) == \
            (other.source, other.target, other.weight)

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.weight))
