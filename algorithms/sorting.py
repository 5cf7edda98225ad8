"""
sorting.py — In-place Sorting Generators
=========================================
Bubble, selection, insertion and quick sort on a copy of the input.

Every comparison emits ``compare`` (two indices) first; every write emits
``swap`` with a snapshot of the whole array afterwards.  ``sorted-boundary``
marks what is already final:

    bubble     suffix grows from the right
    selection  prefix grows from the left
    insertion  prefix grows from the left
    quick      one index per partition (the pivot), then the whole array

Each sorted-boundary also carries the array snapshot, and every run ends
its mutations with a boundary covering the whole array, so the last
swap/sorted-boundary always shows the final order.

Selection and insertion emit ``mark-index`` for the current minimum
candidate / key; quicksort emits ``set-pivot`` before each partition.
"""

import random
from typing import List, Optional, Sequence

from steps import (
    SORTED_PREFIX, SORTED_SINGLE, SORTED_SUFFIX, CompareIndices, MarkIndex, Message, SetPivot,
    SortedBoundary, StepGenerator, Swap,
)
from structures.validation import is_number


BUBBLE_PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                                 # 0
    "    for i in 0 … n-2:",                               # 1
    "        for j in 0 … n-i-2:",                         # 2
    "            if a[j] > a[j+1]:",                       # 3
    "                swap(a[j], a[j+1])",                  # 4
    "        a[n-1-i] is in place",                        # 5
    "        if no swaps: break",                          # 6
    "    return a",                                        # 7
]

SELECTION_PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                              # 0
    "    for i in 0 … n-2:",                               # 1
    "        min ← i",                                     # 2
    "        for j in i+1 … n-1:",                         # 3
    "            if a[j] < a[min]: min ← j",               # 4
    "        swap(a[i], a[min])",                          # 5
    "        a[i] is in place",                            # 6
    "    return a",                                        # 7
]

INSERTION_PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                              # 0
    "    for i in 1 … n-1:",                               # 1
    "        key ← a[i]; j ← i - 1",                       # 2
    "        while j >= 0 and a[j] > key:",                # 3
    "            a[j+1] ← a[j]; j ← j - 1",                # 4
    "        a[j+1] ← key",                                # 5
    "        a[0 … i] is sorted",                          # 6
    "    return a",                                        # 7
]

QUICK_PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",                       # 0
    "    if low < high:",                                  # 1
    "        p ← partition(a, low, high)",                 # 2
    "        quick_sort(a, low, p - 1)",                   # 3
    "        quick_sort(a, p + 1, high)",                  # 4
    "def partition(a, low, high):",                        # 5
    "    pivot ← a[high]; i ← low - 1",                    # 6
    "    for j in low … high-1:",                          # 7
    "        if a[j] < pivot: i ← i + 1; swap(a[i], a[j])",  # 8
    "    swap(a[i+1], a[high])",                           # 9
    "    return i + 1",                                    # 10
]


def random_array(size: int = 15, low: int = 10, high: int = 99, seed: Optional[int] = None) -> List[int]:
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


def _fmt(arr: Sequence[float]) -> str:
    return "[" + ", ".join(str(v) for v in arr) + "]"


def _guard(array: Sequence) -> StepGenerator:
    """False (after one diagnostic message) for an empty or non-numeric array."""
    bad = [v for v in array if not is_number(v)]
    if bad:
        yield Message(message=f"Invalid array: {bad[0]!r} is not a number.", code_line=0)
        return False
    if not array:
        yield Message(message="The array is empty. Nothing to sort.", code_line=0)
        return False
    return True


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(array: Sequence[float]) -> StepGenerator:
    if not (yield from _guard(array)):
        return None if array else []
    arr = list(array)
    n = len(arr)
    yield Message(message=f"Starting bubble sort on array: {_fmt(arr)}", code_line=0)

    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            yield CompareIndices(indices=(j, j + 1),
                                 message=f"Comparing elements at index {j} ({arr[j]}) and {j + 1} ({arr[j + 1]}).",
                                 code_line=3)
            if arr[j] > arr[j + 1]:
                a, b = arr[j], arr[j + 1]
                arr[j], arr[j + 1] = b, a
                swapped = True
                yield Swap(indices=(j, j + 1), array=tuple(arr),
                           message=f"{a} > {b}. Swapping them.", code_line=4)
            else:
                yield Message(message=f"{arr[j]} <= {arr[j + 1]}. No swap needed.", code_line=3)
        yield SortedBoundary(boundary=n - 1 - i, side=SORTED_SUFFIX, array=tuple(arr),
                             message=f"Element {arr[n - 1 - i]} is now in its correct sorted position.",
                             code_line=5)
        if not swapped:
            yield Message(message="No swaps in this pass. Array is sorted.", code_line=6)
            break

    yield SortedBoundary(boundary=0, side=SORTED_SUFFIX, array=tuple(arr),
                         message="The entire array is now sorted.", code_line=7)
    yield Message(message=f"Bubble sort complete. Final array: {_fmt(arr)}", code_line=7)
    return arr


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(array: Sequence[float]) -> StepGenerator:
    if not (yield from _guard(array)):
        return None if array else []
    arr = list(array)
    n = len(arr)
    yield Message(message=f"Starting selection sort on array: {_fmt(arr)}", code_line=0)

    for i in range(n - 1):
        min_index = i
        yield Message(message=f"Pass {i + 1}. Finding the minimum of the unsorted part from index {i}.",
                      code_line=1)
        yield MarkIndex(index=i, message=f"Current minimum assumed to be {arr[i]} at index {i}.", code_line=2)

        for j in range(i + 1, n):
            yield CompareIndices(indices=(j, min_index),
                                 message=f"Comparing element {arr[j]} with current minimum {arr[min_index]}.",
                                 code_line=4)
            if arr[j] < arr[min_index]:
                old = arr[min_index]
                min_index = j
                yield MarkIndex(index=j, message=f"{arr[j]} < {old}. New minimum is {arr[j]}.", code_line=4)

        if min_index != i:
            a, b = arr[i], arr[min_index]
            arr[i], arr[min_index] = b, a
            yield Swap(indices=(i, min_index), array=tuple(arr),
                       message=f"Swapping minimum element {b} with {a} at the start of the unsorted part.",
                       code_line=5)
        else:
            yield Message(message=f"Element {arr[i]} is already in its correct position.", code_line=5)
        yield SortedBoundary(boundary=i, side=SORTED_PREFIX, array=tuple(arr),
                             message=f"Element {arr[i]} is now sorted.", code_line=6)

    yield SortedBoundary(boundary=n - 1, side=SORTED_PREFIX, array=tuple(arr),
                         message="The entire array is now sorted.", code_line=7)
    yield Message(message=f"Selection sort complete. Final array: {_fmt(arr)}", code_line=7)
    return arr


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(array: Sequence[float]) -> StepGenerator:
    if not (yield from _guard(array)):
        return None if array else []
    arr = list(array)
    n = len(arr)
    yield Message(message=f"Starting insertion sort on array: {_fmt(arr)}", code_line=0)
    yield SortedBoundary(boundary=0, side=SORTED_PREFIX, array=tuple(arr),
                         message="First element is considered sorted.", code_line=1)

    for i in range(1, n):
        key = arr[i]
        j = i - 1
        yield MarkIndex(index=i, message=f"Selecting {key} as the key to insert into the sorted portion.",
                        code_line=2)
        yield CompareIndices(indices=(j, i), message=f"Comparing key {key} with {arr[j]}.", code_line=3)
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            yield Swap(indices=(j + 1, j), array=tuple(arr),
                       message=f"{arr[j + 1]} > {key}. Shifting {arr[j + 1]} to the right.", code_line=4)
            j -= 1
            if j >= 0:
                yield CompareIndices(indices=(j, i), message=f"Comparing key {key} with {arr[j]}.", code_line=3)
        arr[j + 1] = key
        yield Swap(indices=(j + 1,), array=tuple(arr),
                   message=f"Inserting key {key} at its correct position.", code_line=5)
        yield SortedBoundary(boundary=i, side=SORTED_PREFIX, array=tuple(arr),
                             message=f"Elements up to index {i} are now sorted.", code_line=6)

    yield Message(message=f"Insertion sort complete. Final array: {_fmt(arr)}", code_line=7)
    return arr


# ---------------------------------------------------------------------------
# Quick sort (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(array: Sequence[float]) -> StepGenerator:
    if not (yield from _guard(array)):
        return None if array else []
    arr = list(array)
    yield Message(message=f"Starting quick sort on array: {_fmt(arr)}", code_line=0)
    yield from _quick(arr, 0, len(arr) - 1)
    yield SortedBoundary(boundary=len(arr) - 1, side=SORTED_PREFIX, array=tuple(arr),
                         message="The entire array is now sorted.", code_line=0)
    yield Message(message=f"Quick sort complete. Final array: {_fmt(arr)}", code_line=0)
    return arr


def _quick(arr: List[float], low: int, high: int) -> StepGenerator:
    if low >= high:
        return
    yield Message(message=f"Calling partition on subarray from index {low} to {high}.", code_line=2)
    p = yield from _partition(arr, low, high)
    yield Message(message=f"Recursively sorting left part: [{low}, {p - 1}]", code_line=3)
    yield from _quick(arr, low, p - 1)
    yield Message(message=f"Recursively sorting right part: [{p + 1}, {high}]", code_line=4)
    yield from _quick(arr, p + 1, high)


def _partition(arr: List[float], low: int, high: int) -> StepGenerator:
    pivot = arr[high]
    yield SetPivot(pivot_index=high, message=f"Choosing {pivot} as the pivot for range [{low}, {high}].",
                   code_line=6)
    i = low - 1
    for j in range(low, high):
        yield CompareIndices(indices=(j, high), message=f"Comparing {arr[j]} with pivot {pivot}.", code_line=8)
        if arr[j] < pivot:
            i += 1
            a, b = arr[i], arr[j]
            arr[i], arr[j] = b, a
            yield Swap(indices=(i, j), array=tuple(arr),
                       message=f"{b} < {pivot}. Swapping {a} and {b}.", code_line=8)

    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    yield Swap(indices=(i + 1, high), array=tuple(arr),
               message=f"Placing pivot {pivot} at its final sorted position.", code_line=9)
    yield SortedBoundary(boundary=i + 1, side=SORTED_SINGLE, array=tuple(arr),
                         message=f"Pivot {pivot} is now sorted.", code_line=10)
    return i + 1
