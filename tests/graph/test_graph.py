"""Tests for the Graph container, samples and text import."""

import pytest

from graph import Edge, Graph


def test_add_edge_registers_endpoints_in_order():
    g = Graph()
    g.add_edge("B", "A", 2)

    assert g.nodes == ["B", "A"]
    assert g.neighbours("B") == [("A", 2)]
    assert g.neighbours("A") == []
    assert g.edges == [Edge("B", "A", 2)]


def test_undirected_edge_stores_both_directions():
    g = Graph(directed=False)
    g.add_undirected_edge(1, 2, 5)

    assert g.neighbours(1) == [(2, 5)]
    assert g.neighbours(2) == [(1, 5)]
    assert g.edge_count() == 2


def test_in_degrees_and_negative_edges():
    g = Graph.dag_sample()

    assert g.in_degrees()[1] == 0
    assert g.in_degrees()[6] == 3
    assert any(e.weight < 0 for e in g.edges)
    assert all(e.weight >= 0 for e in Graph.sssp_sample().edges)


def test_mst_sample_is_undirected():
    g = Graph.mst_sample()

    assert not g.directed
    assert g.node_count() == 6
    assert g.edge_count() == 18
    assert sum(e.weight for e in g.edges) == 2 * 83


def test_equality_is_structural_and_unhashable():
    a, b = Graph.sssp_sample(), Graph.sssp_sample()
    assert a == b
    b.add_edge(5, 1, 1)
    assert a != b
    with pytest.raises(TypeError):
        hash(a)


def test_to_dict_is_plain():
    data = Graph.mst_sample().to_dict()

    assert data["directed"] is False
    assert data["nodes"][0] == {"id": 1}
    assert data["edges"][0] == {"source": 1, "target": 2, "weight": 7}


def test_random_graph_is_seeded_and_connected_by_backbone():
    a = Graph.generate_random(num_nodes=8, edge_probability=0.0, seed=3)
    b = Graph.generate_random(num_nodes=8, edge_probability=0.0, seed=3)

    assert a == b
    assert a.node_count() == 8
    assert a.edge_count() == 7


def test_adjacency_list_with_weights_and_comments():
    text = """
    # sample
    A: B(3) C(7)
    B -> C
    """
    g = Graph.from_adjacency_list(text)

    assert g.nodes == ["A", "B", "C"]
    assert g.neighbours("A") == [("B", 3.0), ("C", 7.0)]
    assert g.neighbours("B") == [("C", 1.0)]


def test_adjacency_list_numeric_ids_and_undirected_dedup():
    g = Graph.from_adjacency_list("1: 2(4)\n2: 1(4)", directed=False)

    assert g.nodes == [1, 2]
    assert g.edge_count() == 2


@pytest.mark.parametrize("text", ["A B C", "A: B(x)", ": B"])
def test_adjacency_list_rejects_bad_lines(text):
    with pytest.raises(ValueError):
        Graph.from_adjacency_list(text)


def test_adjacency_matrix():
    g = Graph.from_adjacency_matrix("0 4 0\n4 0 8\n0 8 0", directed=False)

    assert g.nodes == [1, 2, 3]
    assert sorted(g.neighbours(2)) == [(1, 4.0), (3, 8.0)]


def test_adjacency_matrix_must_be_square():
    with pytest.raises(ValueError):
        Graph.from_adjacency_matrix("0 1\n1 0 1")
