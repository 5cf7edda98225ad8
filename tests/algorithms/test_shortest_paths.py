"""Tests for Dijkstra, Bellman-Ford and DAG shortest paths.

Critical Invariants:
- every update-distances step carries the ENTIRE map, unreached nodes at INFINITY
- the last update-distances step equals the returned distances
- a missing start yields exactly one message and no result
"""

import pytest

from algorithms.bellman_ford import bellman_ford
from algorithms.dag_shortest_path import dag_shortest_path, topological_order
from algorithms.dijkstra import dijkstra
from graph import Graph
from steps import INFINITY, UpdateDistances, record

SSSP_FROM_1 = {1: 0, 2: 7, 3: 3, 4: 9, 5: 5}
DAG_FROM_1  = {1: 0, 2: 5, 3: 3, 4: 10, 5: 7, 6: 5}


def test_dijkstra_sample_distances(sssp_graph):
    trace = record(dijkstra(sssp_graph, 1))

    assert trace.result.distances == SSSP_FROM_1
    assert trace.result.path_to(4) == [1, 3, 2, 4]
    assert trace.result.order[0] == 1
    assert sorted(trace.result.order) == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("algorithm", [dijkstra, bellman_ford])
def test_distance_maps_are_complete(algorithm, sssp_graph):
    trace = record(algorithm(sssp_graph, 1))
    updates = trace.of_type(UpdateDistances)

    assert updates
    for step in updates:
        assert set(step.distances) == set(sssp_graph.nodes)
    first = updates[0].distances
    assert first[1] == 0
    assert all(first[n] == INFINITY for n in (2, 3, 4, 5))
    assert dict(updates[-1].distances) == trace.result.distances


def test_bellman_ford_agrees_with_dijkstra(sssp_graph):
    trace = record(bellman_ford(sssp_graph, 1))

    assert trace.result.distances == SSSP_FROM_1
    assert trace.last().kind == "message"


def test_bellman_ford_runs_every_pass(sssp_graph):
    trace = record(bellman_ford(sssp_graph, 1))
    relaxations = trace.of_kind("highlight-edge")

    assert len(relaxations) == (sssp_graph.node_count() - 1) * sssp_graph.edge_count()


def test_bellman_ford_handles_negative_edges(dag_graph):
    trace = record(bellman_ford(dag_graph, 1))
    assert trace.result.distances == DAG_FROM_1


def test_bellman_ford_detects_negative_cycle():
    g = Graph()
    g.add_edge(1, 2, 1)
    g.add_edge(2, 3, -2)
    g.add_edge(3, 2, 1)
    trace = record(bellman_ford(g, 1))

    assert trace.result is None
    assert trace.last().kind == "negative-cycle"
    assert trace.steps[-2].kind == "highlight-edge"


def test_dag_shortest_path_sample(dag_graph):
    trace = record(dag_shortest_path(dag_graph, 1))

    assert trace.result.distances == DAG_FROM_1
    assert trace.result.order == topological_order(dag_graph)
    assert trace.of_kind("highlight-node")[0].node_id == 1


def test_dag_refuses_cycles():
    g = Graph()
    g.add_edge(1, 2, 1)
    g.add_edge(2, 1, 1)
    trace = record(dag_shortest_path(g, 1))

    assert len(trace.steps) == 1
    assert trace.result is None
    assert "not a DAG" in trace.last().message


def test_topological_order_is_short_on_cycle():
    g = Graph()
    g.add_edge(1, 2)
    g.add_edge(2, 3)
    g.add_edge(3, 2)
    assert topological_order(g) == [1]


@pytest.mark.parametrize("algorithm", [dijkstra, bellman_ford, dag_shortest_path])
def test_missing_start_is_one_message(algorithm, sssp_graph):
    trace = record(algorithm(sssp_graph, 42))

    assert len(trace.steps) == 1
    assert trace.last().message == "Start node 42 not in graph."
    assert trace.result is None


def test_unreachable_nodes_stay_infinite():
    g = Graph()
    g.add_edge(1, 2, 3)
    g.add_node(9)
    trace = record(dijkstra(g, 1))

    assert trace.result.distances[9] == INFINITY
    assert trace.result.path_to(9) is None
    assert trace.result.path_to(2) == [1, 2]


@pytest.mark.parametrize("seed", range(8))
def test_dijkstra_agrees_with_bellman_ford_on_non_negative_graphs(seed):
    g = Graph.generate_random(num_nodes=7, edge_probability=0.35, seed=seed)

    for source in g.nodes:
        fast = record(dijkstra(g, source)).result
        slow = record(bellman_ford(g, source)).result
        assert fast.distances == slow.distances
