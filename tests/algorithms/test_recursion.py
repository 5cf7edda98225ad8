"""Tests for the Fibonacci recursion tree builder."""

import pytest

from algorithms.recursion import FIB_LIMIT, FibonacciTreeBuilder, fibonacci
from steps import record


def test_naive_tree_has_one_node_per_call():
    trace = record(fibonacci(5))
    graph = trace.result

    assert graph.value == 5
    assert len(trace.of_kind("recursive-call")) == 15
    assert len(graph.nodes) == 15
    assert len(graph.links) == 14
    assert graph.nodes[0] == {"id": "fib-5-0", "label": "fib(5)"}


def test_naive_calls_and_returns_pair_up():
    trace = record(fibonacci(4))
    calls = [s.node_id for s in trace.of_kind("recursive-call")]
    returns = [s.node_id for s in trace.of_kind("recursive-return")]

    assert sorted(calls) == sorted(returns)
    assert len(set(calls)) == len(calls)
    assert returns[-1] == calls[0]
    assert trace.of_kind("recursive-return")[-1].return_value == 3


def test_memoised_graph_merges_repeated_subproblems():
    trace = record(fibonacci(5, memoized=True))
    graph = trace.result

    assert graph.value == 5
    assert {n["id"] for n in graph.nodes} == {f"fib({i})" for i in range(6)}
    assert len(graph.links) == 8
    assert len(trace.of_kind("memo-hit")) == 3


def test_memoised_call_ids_match_graph_nodes():
    trace = record(fibonacci(6, memoized=True))
    node_ids = {n["id"] for n in trace.result.nodes}

    assert {s.node_id for s in trace.of_kind("recursive-call")} <= node_ids


@pytest.mark.parametrize("n", [-1, FIB_LIMIT + 1, 2.5, "5", True])
def test_out_of_range_input_is_one_message(n):
    trace = record(fibonacci(n))

    assert len(trace.steps) == 1
    assert trace.result is None


def test_limit_can_be_overridden():
    assert record(fibonacci(3, limit=2)).result is None
    assert record(fibonacci(0, limit=0)).result.value == 0


def test_builders_do_not_share_counters():
    first = FibonacciTreeBuilder()
    second = FibonacciTreeBuilder()
    record(first.call(3))

    root, _ = record(second.call(2)).result
    assert root.id == "fib-2-0"
