"""Tests for the AVL tree.

Critical Invariants:
- after every insert/delete all balance factors are in {-1, 0, 1}
- stored heights always equal the structural heights
- a rotation emits rotate-*, then update-height for the demoted node, then for the new subtree root
- a clone is unaffected by operations on the original
"""

import random

import pytest

from steps import RotateLeft, RotateRight, UpdateHeight
from structures import AVLTree


def build(values):
    tree = AVLTree()
    for v in values:
        tree.insert(v)
    return tree


def kinds(trace):
    return [s.kind for s in trace.steps]


def test_balanced_insert_order_needs_no_rotation():
    tree = AVLTree()
    traces = [tree.insert(v) for v in [30, 20, 40, 10, 25, 35, 50]]

    for trace in traces:
        assert not trace.of_type(RotateLeft)
        assert not trace.of_type(RotateRight)
    assert tree.node(tree.root).value == 30
    assert tree.values() == [10, 20, 25, 30, 35, 40, 50]
    assert tree.is_balanced()


@pytest.mark.parametrize("values, rotations, root", [
    ([1, 2, 3], ["rotate-left"], 2),                     # RR
    ([3, 2, 1], ["rotate-right"], 2),                    # LL
    ([3, 1, 2], ["rotate-left", "rotate-right"], 2),     # LR
    ([1, 3, 2], ["rotate-right", "rotate-left"], 2),     # RL
])
def test_single_and_double_rotations(values, rotations, root):
    tree = build(values[:-1])
    trace = tree.insert(values[-1])

    assert [k for k in kinds(trace) if k.startswith("rotate")] == rotations
    assert tree.node(tree.root).value == root
    assert tree.is_balanced()


def test_rotation_step_order():
    tree = build([1, 2])
    old_root = tree.root
    trace = tree.insert(3)

    steps = list(trace.steps)
    at = next(i for i, s in enumerate(steps) if isinstance(s, RotateLeft))
    after = steps[at + 1:at + 3]

    assert steps[at].node_id == old_root
    assert all(isinstance(s, UpdateHeight) for s in after)
    assert after[0].node_id == old_root
    assert after[1].node_id == tree.root
    assert tree.node(old_root).height == 1
    assert tree.node(tree.root).height == 2


def test_insert_emits_compare_traverse_then_climb():
    tree = build([20])
    trace = tree.insert(10)

    assert kinds(trace) == ["compare", "traverse", "insert", "update-height", "balance-check"]
    assert trace.result == tree.find_id(10)


def test_duplicate_insert_is_a_no_op():
    tree = build([20, 10, 30])
    before = tree.clone()
    trace = tree.insert(10)

    assert trace.result is None
    assert trace.last().kind == "message"
    assert "already exists" in trace.last().message
    assert tree == before


def test_invalid_value_is_rejected_with_one_step():
    tree = build([1])
    trace = tree.insert("seven")

    assert len(trace.steps) == 1
    assert trace.last().kind == "message"
    assert tree.values() == [1]


def test_delete_rebalances_right_right():
    tree = build([20, 10, 30, 40])
    trace = tree.delete(10)

    assert trace.result is True
    assert "rotate-left" in kinds(trace)
    assert tree.node(tree.root).value == 30
    assert tree.values() == [20, 30, 40]
    assert tree.is_balanced()


def test_delete_rebalances_left_right():
    tree = build([30, 20, 40, 25])
    trace = tree.delete(40)

    assert [k for k in kinds(trace) if k.startswith("rotate")] == ["rotate-left", "rotate-right"]
    assert tree.node(tree.root).value == 25
    assert tree.is_balanced()


def test_delete_with_two_children_uses_successor():
    tree = build([50, 30, 70, 60, 80])
    root_id = tree.root
    trace = tree.delete(50)

    replace = trace.of_kind("replace")
    assert len(replace) == 1
    assert replace[0].node_id == root_id
    assert replace[0].replacement_value == 60
    assert tree.node(tree.root).value == 60
    assert tree.values() == [30, 60, 70, 80]
    assert tree.is_balanced()


def test_delete_missing_value_changes_nothing():
    tree = build([2, 1, 3])
    before = tree.clone()
    trace = tree.delete(99)

    assert trace.result is False
    assert trace.last().kind == "message"
    assert not trace.of_kind("update-height")
    assert tree == before


def test_random_operations_keep_invariants():
    rng = random.Random(7)
    tree = AVLTree()
    present = set()
    for _ in range(300):
        value = rng.randint(0, 60)
        if value in present and rng.random() < 0.5:
            tree.delete(value)
            present.discard(value)
        else:
            tree.insert(value)
            present.add(value)
        assert tree.is_balanced()
        assert tree.values() == sorted(present)


def test_clone_is_isolated():
    tree = build([10, 20, 30])
    twin = tree.clone()

    twin.insert(40)
    twin.delete(10)

    assert tree.values() == [10, 20, 30]
    assert twin.values() == [20, 30, 40]
    assert tree.is_balanced() and twin.is_balanced()


def test_snapshot_reports_height_and_balance():
    tree = build([2, 1])
    snap = tree.snapshot()

    assert snap["value"] == 2
    assert snap["height"] == 2
    assert snap["balance_factor"] == 1
    assert snap["children"][0]["value"] == 1


def test_search_and_inorder_shared_with_bst():
    tree = build([5, 3, 8])

    assert tree.search(8).result == tree.find_id(8)
    assert tree.search(4).result is None
    assert tree.inorder_traversal().result == [3, 5, 8]
