"""Tests for the four sorting generators.

Critical Invariants:
- the input sequence is never mutated
- the last array-carrying step shows the final sorted order
- every swap in bubble sort is preceded by a compare of the same indices
"""

import pytest

from algorithms.sorting import bubble_sort, insertion_sort, quick_sort, random_array, selection_sort
from steps import CompareIndices, SortedBoundary, Swap, record

SORTS = [bubble_sort, selection_sort, insertion_sort, quick_sort]
SAMPLE = [64, 34, 25, 12, 22, 11, 90, 34]


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_without_touching_input(sort):
    data = list(SAMPLE)
    trace = record(sort(data))

    assert trace.result == sorted(SAMPLE)
    assert data == SAMPLE


@pytest.mark.parametrize("sort", SORTS)
def test_last_array_snapshot_is_sorted(sort):
    trace = record(sort(SAMPLE))
    carrying = [s for s in trace.steps if isinstance(s, (Swap, SortedBoundary))]

    assert list(carrying[-1].array) == sorted(SAMPLE)


@pytest.mark.parametrize("sort", SORTS)
def test_random_arrays(sort):
    for seed in range(5):
        data = random_array(12, seed=seed)
        assert record(sort(data)).result == sorted(data)


@pytest.mark.parametrize("sort", SORTS)
def test_empty_array(sort):
    trace = record(sort([]))

    assert trace.result == []
    assert len(trace.steps) == 1


@pytest.mark.parametrize("sort", SORTS)
def test_non_numeric_array_is_rejected(sort):
    trace = record(sort([3, "x", 1]))

    assert trace.result is None
    assert len(trace.steps) == 1
    assert "not a number" in trace.last().message


@pytest.mark.parametrize("sort", SORTS)
def test_single_element(sort):
    assert record(sort([7])).result == [7]


def test_bubble_compare_precedes_swap():
    steps = record(bubble_sort(SAMPLE)).steps
    for i, step in enumerate(steps):
        if isinstance(step, Swap):
            before = steps[i - 1]
            assert isinstance(before, CompareIndices)
            assert before.indices == step.indices


def test_bubble_stops_early_on_sorted_input():
    trace = record(bubble_sort([1, 2, 3, 4]))

    assert not trace.of_type(Swap)
    assert len(trace.of_type(CompareIndices)) == 3


def test_quick_sort_marks_each_pivot():
    trace = record(quick_sort([3, 1, 2]))

    pivots = trace.of_kind("set-pivot")
    singles = [s for s in trace.of_type(SortedBoundary) if s.side == "single"]
    assert len(pivots) == len(singles)
    assert pivots[0].pivot_index == 2


def test_random_array_is_seeded_and_bounded():
    a = random_array(10, low=1, high=5, seed=4)

    assert a == random_array(10, low=1, high=5, seed=4)
    assert all(1 <= v <= 5 for v in a)
