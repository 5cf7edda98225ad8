"""Tests for the plain binary search tree."""

import pytest

from structures import BinarySearchTree


def build(values):
    tree = BinarySearchTree()
    for v in values:
        tree.insert(v)
    return tree


def kinds(trace):
    return [s.kind for s in trace.steps]


def test_first_insert_sets_root():
    tree = BinarySearchTree()
    trace = tree.insert(50)

    assert kinds(trace) == ["set-root"]
    assert tree.root == trace.result
    assert tree.node(tree.root).value == 50


def test_insert_walks_down_and_attaches():
    tree = build([50, 30])
    trace = tree.insert(40)

    assert kinds(trace) == ["compare", "traverse", "compare", "traverse", "insert"]
    inserted = trace.last()
    assert inserted.parent_id == tree.find_id(30)
    assert tree.node(tree.find_id(30)).right == inserted.node_id
    assert tree.values() == [30, 40, 50]


def test_duplicate_insert_leaves_tree_alone():
    tree = build([50, 30, 70])
    before = tree.clone()
    trace = tree.insert(70)

    assert trace.result is None
    assert "already exists" in trace.last().message
    assert tree == before


@pytest.mark.parametrize("bad", ["x", None, float("nan"), True])
def test_non_numeric_values_are_rejected(bad):
    tree = build([1])
    trace = tree.insert(bad)

    assert kinds(trace) == ["message"]
    assert tree.values() == [1]


def test_delete_leaf():
    tree = build([50, 30, 70])
    leaf = tree.find_id(30)
    trace = tree.delete(30)

    assert trace.result is True
    assert trace.of_kind("delete")[0].node_id == leaf
    assert trace.last().message == "Deletion of 30 complete."
    assert tree.values() == [50, 70]


def test_delete_node_with_one_child_promotes_it():
    tree = build([50, 30, 20])
    child = tree.find_id(20)
    tree.delete(30)

    assert tree.node(tree.root).left == child
    assert tree.values() == [20, 50]


def test_delete_with_two_children_keeps_node_id():
    tree = build([50, 30, 70, 60, 80])
    root_id = tree.root
    trace = tree.delete(50)

    replace = trace.of_kind("replace")
    assert [s.replacement_value for s in replace] == [60]
    assert tree.root == root_id
    assert tree.node(root_id).value == 60
    assert tree.values() == [30, 60, 70, 80]
    assert len(tree) == 4


def test_delete_root_only_empties_tree():
    tree = build([5])
    tree.delete(5)

    assert tree.root is None
    assert tree.snapshot() is None
    assert len(tree) == 0


def test_delete_missing_value():
    tree = build([50])
    trace = tree.delete(99)

    assert trace.result is False
    assert "not found" in trace.last().message
    assert tree.values() == [50]


def test_search_found_and_missing():
    tree = build([50, 30, 70])

    hit = tree.search(70)
    assert hit.result == tree.find_id(70)
    assert hit.last().kind == "found"

    miss = tree.search(65)
    assert miss.result is None
    assert miss.last().kind == "message"


def test_inorder_visits_sorted():
    tree = build([50, 30, 70, 20, 40])
    trace = tree.inorder_traversal()

    assert trace.result == [20, 30, 40, 50, 70]
    visited = [tree.node(s.node_id).value for s in trace.of_kind("visit")]
    assert visited == [20, 30, 40, 50, 70]


def test_inorder_of_empty_tree():
    trace = BinarySearchTree().inorder_traversal()

    assert trace.result == []
    assert kinds(trace) == ["message", "message"]


def test_clone_shares_nothing_observable():
    tree = build([2, 1, 3])
    twin = tree.clone()
    twin.delete(2)
    twin.insert(9)

    assert tree.values() == [1, 2, 3]
    assert twin.values() == [1, 3, 9]
