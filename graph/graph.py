"""
graph.py — Graph Container & Generator
=======================================
The one graph representation every shortest-path and spanning-tree
algorithm reads.

Responsibilities:
  1. Node / edge insertion                  (add_node, add_edge, add_undirected_edge)
  2. Adjacency queries                      (neighbours, has_node, …)
  3. Sample graphs and random generation    (sssp_sample, dag_sample, mst_sample, generate_random)
  4. Import from adjacency-list / matrix    (text → graph)
  5. Serialisation                          (to_dict, structural equality)

Design decisions:
  - `nodes` keeps insertion order; ids are ints or strings.
  - `_adj[node_id] → [(target, weight), …]` is maintained incrementally so
    neighbour queries are O(degree).
  - `edges` mirrors the adjacency in insertion order for algorithms that
    walk every edge (Bellman-Ford, Kruskal).
  - Endpoints are added to the node set before the edge is recorded.
  - Undirected graphs store both directions; `directed` only describes how
    the graph was built.
"""

import random
from typing import Any, Dict, List, Optional, Set, Tuple

from graph.edge import Edge
from steps import NodeId


class Graph:
    """
    Attributes:
        nodes    : node ids in insertion order
        edges    : every directed Edge in insertion order
        directed : bool – False when edges were added in pairs
        _adj     : {node_id: [(target, weight), …]}
    """

    def __init__(self, directed: bool = True):
        self.nodes:    List[NodeId]                              = []
        self.edges:    List[Edge]                                = []
        self.directed: bool                                      = directed
        self._adj:     Dict[NodeId, List[Tuple[NodeId, float]]]  = {}

    # ==================================================================
    # NODES & EDGES
    # ==================================================================
    def add_node(self, node_id: NodeId) -> NodeId:
        if node_id not in self._adj:
            self.nodes.append(node_id)
            self._adj[node_id] = []
        return node_id

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._adj

    def add_edge(self, source: NodeId, target: NodeId, weight: float = 1.0) -> Edge:
        self.add_node(source)
        self.add_node(target)
        edge = Edge(source, target, weight)
        self._adj[source].append((target, weight))
        self.edges.append(edge)
        return edge

    def add_undirected_edge(self, a: NodeId, b: NodeId, weight: float = 1.0) -> Tuple[Edge, Edge]:
        return self.add_edge(a, b, weight), self.add_edge(b, a, weight)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: NodeId) -> List[Tuple[NodeId, float]]:
        """[(target, weight)] in insertion order."""
        return list(self._adj.get(node_id, []))

    def get_edge_between(self, a: NodeId, b: NodeId) -> Optional[Edge]:
        for e in self.edges:
            if e.connects(a, b):
                return e
        return None

    def in_degrees(self) -> Dict[NodeId, int]:
        degrees = {nid: 0 for nid in self.nodes}
        for e in self.edges:
            degrees[e.target] += 1
        return degrees

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "directed": self.directed,
            "nodes":    [{"id": nid} for nid in self.nodes],
            "edges":    [e.to_dict() for e in self.edges],
        }

    def __eq__(self, other) -> bool:
        return isinstance(other, Graph) and self.to_dict() == other.to_dict()

    __hash__ = None  # mutable; compared by value

    # ==================================================================
    # SAMPLE GRAPHS
    # ==================================================================
    @classmethod
    def sssp_sample(cls) -> "Graph":
        """Small directed graph with non-negative weights."""
        g = cls(directed=True)
        for nid in range(1, 6):
            g.add_node(nid)
        for s, t, w in [(1, 2, 10), (1, 3, 3), (2, 3, 1), (2, 4, 2),
                        (3, 2, 4), (3, 4, 8), (3, 5, 2), (4, 5, 5)]:
            g.add_edge(s, t, w)
        return g

    @classmethod
    def dag_sample(cls) -> "Graph":
        """Acyclic directed graph with a few negative weights."""
        g = cls(directed=True)
        for nid in range(1, 7):
            g.add_node(nid)
        for s, t, w in [(1, 2, 5), (1, 3, 3), (2, 4, 6), (2, 3, 2), (3, 4, 7),
                        (3, 5, 4), (3, 6, 2), (4, 5, -1), (4, 6, 1), (5, 6, -2)]:
            g.add_edge(s, t, w)
        return g

    @classmethod
    def mst_sample(cls) -> "Graph":
        """Connected undirected graph; its minimum spanning tree weighs 33."""
        g = cls(directed=False)
        for nid in range(1, 7):
            g.add_node(nid)
        for a, b, w in [(1, 2, 7), (1, 3, 9), (1, 6, 14), (2, 3, 10), (2, 4, 15),
                        (3, 4, 11), (3, 6, 2), (4, 5, 6), (5, 6, 9)]:
            g.add_undirected_edge(a, b, w)
        return g

    # ==================================================================
    # GENERATORS: Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 6,
        edge_probability: float = 0.3,
        directed: bool = True,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph with ids 1…num_nodes.
        Each possible edge is included with probability `edge_probability`;
        a random backbone path then guarantees every node is reachable
        from the first one in the backbone.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)
        ids = list(range(1, num_nodes + 1))
        for nid in ids:
            g.add_node(nid)

        def link(a: NodeId, b: NodeId) -> None:
            w = rng.randint(*weight_range)
            if directed:
                g.add_edge(a, b, w)
            else:
                g.add_undirected_edge(a, b, w)

        for i in ids:
            for j in ids:
                if i == j or (not directed and j < i):
                    continue
                if rng.random() < edge_probability:
                    link(i, j)

        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            if not g.get_edge_between(shuffled[k - 1], shuffled[k]):
                link(shuffled[k - 1], shuffled[k])
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = True) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 -> 1,2,3          → alternate arrow syntax
            # comment lines are skipped

        Numeric labels become int ids.  Undirected input adds each pair once
        (in both directions).
        """
        g = cls(directed=directed)
        seen: Set[Any] = set()

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            for sep in (":", "→", "->"):
                if sep in line:
                    src_raw, rest = line.split(sep, 1)
                    break
            else:
                raise ValueError(f"Cannot parse adjacency line: {line!r}")

            src = _parse_id(src_raw)
            g.add_node(src)
            for token in rest.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt_raw, w_raw = token[:-1].split("(", 1)
                    try:
                        w = float(w_raw)
                    except ValueError as exc:
                        raise ValueError(f"Bad weight in {token!r}") from exc
                else:
                    tgt_raw, w = token, 1.0
                tgt = _parse_id(tgt_raw)

                key = (src, tgt) if directed else frozenset((src, tgt))
                if key in seen:
                    continue
                seen.add(key)
                if directed:
                    g.add_edge(src, tgt, w)
                else:
                    g.add_undirected_edge(src, tgt, w)
        return g

    # ---------- Import from Adjacency Matrix (text) ----------
    @classmethod
    def from_adjacency_matrix(cls, text: str, directed: bool = True,
                              labels: Optional[List[NodeId]] = None) -> "Graph":
        """
        Parse a whitespace / comma-separated adjacency matrix.

            0 4 0
            4 0 8
            0 8 0

        0 / inf = no edge.  Nodes are numbered from 1 unless `labels` is given.
        """
        rows = [r.replace(",", " ").split() for r in text.strip().splitlines() if r.strip()]
        matrix = [[float(v) for v in row] for row in rows]
        n = len(matrix)
        if any(len(row) != n for row in matrix):
            raise ValueError("Adjacency matrix must be square")
        if labels is None:
            labels = list(range(1, n + 1))

        g = cls(directed=directed)
        for label in labels:
            g.add_node(label)
        for i in range(n):
            for j in range(n):
                val = matrix[i][j]
                if val == 0 or val == float("inf"):
                    continue
                if not directed and j < i:
                    continue
                if directed:
                    g.add_edge(labels[i], labels[j], val)
                else:
                    g.add_undirected_edge(labels[i], labels[j], val)
        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


def _parse_id(raw: str) -> NodeId:
    raw = raw.strip()
    if not raw:
        raise ValueError("Empty node label")
    try:
        return int(raw)
    except ValueError:
        return raw
