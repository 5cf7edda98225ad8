"""Tests for the FIFO queue and LIFO stack."""

import pytest

from structures import Queue, Stack


def kinds(trace):
    return [s.kind for s in trace.steps]


def test_queue_is_fifo():
    q = Queue()
    for v in (1, 2, 3):
        assert kinds(q.enqueue(v)) == ["message", "enqueue"]

    trace = q.dequeue()
    assert kinds(trace) == ["peek", "dequeue"]
    assert trace.result == 1
    assert trace.steps[0].element_id == trace.steps[1].element_id
    assert q.values() == [2, 3]
    assert q.peek().result == 2


def test_stack_is_lifo():
    s = Stack()
    for v in (1, 2, 3):
        assert kinds(s.push(v)) == ["message", "push"]

    trace = s.pop()
    assert kinds(trace) == ["peek", "pop"]
    assert trace.result == 3
    assert s.values() == [1, 2]
    assert s.peek().result == 2


@pytest.mark.parametrize("cls, method", [
    (Queue, "dequeue"), (Queue, "peek"), (Stack, "pop"), (Stack, "peek"),
])
def test_empty_operations_emit_a_single_message(cls, method):
    trace = getattr(cls(), method)()

    assert kinds(trace) == ["message"]
    assert trace.result is None


def test_element_ids_are_never_reused():
    q = Queue()
    first = q.enqueue(1).result
    q.dequeue()
    second = q.enqueue(1).result

    assert second != first


def test_invalid_value_is_rejected():
    s = Stack()
    trace = s.push("top")

    assert kinds(trace) == ["message"]
    assert s.is_empty()


def test_clone_is_isolated():
    s = Stack()
    s.push(1)
    twin = s.clone()
    twin.push(2)
    twin.pop()
    twin.pop()

    assert s.values() == [1]
    assert twin.is_empty()
    assert s != twin
