"""Tests for Prim and Kruskal."""

import pytest

from algorithms.kruskal import DisjointSet, kruskal
from algorithms.prim import prim
from graph import Graph
from steps import AddToMst, record


def test_kruskal_sample_weight(mst_graph):
    trace = record(kruskal(mst_graph))

    assert trace.result.total_weight == 33
    assert len(trace.result.edges) == mst_graph.node_count() - 1
    assert trace.of_kind("form-cycle")


def test_prim_sample_weight(mst_graph):
    trace = record(prim(mst_graph, 1))

    assert trace.result.total_weight == 33
    assert len(trace.result.edges) == 5
    assert trace.result.edges[0][0] == 1


def test_add_to_mst_carries_growing_edge_list(mst_graph):
    trace = record(kruskal(mst_graph))
    added = trace.of_type(AddToMst)

    assert [len(s.mst_edges) for s in added] == [1, 2, 3, 4, 5]
    assert list(added[-1].mst_edges) == trace.result.refs()
    assert added[0].edge == (3, 6)


def test_kruskal_builds_a_forest_on_disconnected_graphs():
    g = Graph(directed=False)
    g.add_undirected_edge(1, 2, 1)
    g.add_undirected_edge(3, 4, 2)
    trace = record(kruskal(g))

    assert trace.result.total_weight == 3
    assert len(trace.result.edges) == 2


def test_prim_only_spans_start_component():
    g = Graph(directed=False)
    g.add_undirected_edge(1, 2, 1)
    g.add_undirected_edge(3, 4, 2)
    trace = record(prim(g, 3))

    assert trace.result.refs() == [(3, 4)]


def test_prim_missing_start():
    trace = record(prim(Graph.mst_sample(), 99))

    assert len(trace.steps) == 1
    assert trace.result is None


def test_disjoint_set_union_and_find():
    dsu = DisjointSet([1, 2, 3])

    assert dsu.union(1, 2)
    assert not dsu.union(2, 1)
    assert dsu.find(1) == dsu.find(2)
    assert dsu.find(3) == 3


@pytest.mark.parametrize("seed", range(8))
def test_prim_matches_kruskal_from_every_start(seed):
    g = Graph.generate_random(num_nodes=7, edge_probability=0.4, directed=False, seed=seed)
    expected = record(kruskal(g)).result.total_weight

    for start in g.nodes:
        tree = record(prim(g, start)).result
        assert tree.total_weight == expected
        assert len(tree.edges) == g.node_count() - 1
