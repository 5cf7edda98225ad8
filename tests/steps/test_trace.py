"""Tests for the step-trace protocol.

Critical Invariants:
- steps come out in the order they were yielded
- a trace always holds at least one step
- records are immutable and serialise to plain JSON values
"""

from dataclasses import FrozenInstanceError

import pytest

from steps import (
    INFINITY, STEP_TYPES, Compare, Message, SortedBoundary, Trace, TraceProtocolError,
    UpdateDistances, frozen_distances, kinds, record,
)


def _three_steps():
    yield Message(message="first")
    yield Compare(node_id=1, message="second")
    yield Message(message="third")
    return "done"


def test_record_keeps_order_and_result():
    trace = record(_three_steps())

    assert isinstance(trace, Trace)
    assert [s.message for s in trace.steps] == ["first", "second", "third"]
    assert trace.result == "done"
    assert isinstance(trace.steps, tuple)


def test_trace_helpers():
    trace = record(_three_steps())

    assert trace.last().message == "third"
    assert len(trace.of_kind("message")) == 2
    assert trace.of_type(Compare)[0].node_id == 1


def test_generator_without_steps_is_a_protocol_error():
    def silent():
        return 42
        yield  # pragma: no cover

    with pytest.raises(TraceProtocolError):
        record(silent())


def test_non_step_yield_is_a_protocol_error():
    def rogue():
        yield "not a step"

    with pytest.raises(TraceProtocolError):
        record(rogue())


def test_steps_are_frozen():
    step = Message(message="hello")
    with pytest.raises(FrozenInstanceError):
        step.message = "changed"


def test_to_dict_renders_infinity_and_tuples():
    step = UpdateDistances(distances=frozen_distances({1: 0, 2: INFINITY}), message="init")

    data = step.to_dict()

    assert data["kind"] == "update-distances"
    assert data["distances"] == {"1": 0, "2": "∞"}
    assert SortedBoundary(boundary=2, array=(1, 2, 3)).to_dict()["array"] == [1, 2, 3]


def test_frozen_distances_is_a_read_only_copy():
    source = {1: 0}
    view = frozen_distances(source)
    source[1] = 5

    assert view[1] == 0
    with pytest.raises(TypeError):
        view[1] = 3


def test_every_step_type_has_a_kind_tag():
    tags = kinds()

    assert "message" in tags
    assert all(cls.kind in tags for cls in STEP_TYPES)
    assert len(tags) == len(set(tags))
