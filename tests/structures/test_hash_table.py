"""Tests for the separate-chaining hash table.

Critical Invariants:
- every operation starts with hash-calculate then bucket-lookup
- keys are unique; inserting an existing key updates it in place
- a chain-traverse step carries the keys already passed in that chain
"""

import pytest

from structures import HashTable, bucket_index


def kinds(trace):
    return [s.kind for s in trace.steps]


def test_hash_is_position_weighted():
    assert bucket_index("apple", 10) == 4
    assert bucket_index("a", 10) == bucket_index("k", 10) == 7
    assert bucket_index("ab", 10) != bucket_index("ba", 10)


def test_insert_into_empty_bucket():
    table = HashTable()
    trace = table.insert("apple", 3)

    assert kinds(trace) == ["hash-calculate", "bucket-lookup", "ht-insert"]
    assert trace.result == 4
    assert table.get("apple") == 3
    assert len(table) == 1


def test_collision_walks_the_chain():
    table = HashTable()
    table.insert("a", 1)
    trace = table.insert("k", 2)

    assert kinds(trace) == ["hash-calculate", "bucket-lookup", "chain-traverse", "ht-insert"]
    assert table.snapshot()[7] == [
        {"id": "a", "key": "a", "value": 1},
        {"id": "k", "key": "k", "value": 2},
    ]


def test_chain_traverse_lists_keys_already_passed():
    table = HashTable()
    table.insert("a", 1)
    table.insert("k", 2)
    trace = table.search("k")

    walked = trace.of_kind("chain-traverse")
    assert [s.entry_key for s in walked] == ["a", "k"]
    assert [s.visited_keys for s in walked] == [(), ("a",)]
    assert trace.result == 2


def test_existing_key_is_updated():
    table = HashTable()
    table.insert("apple", 3)
    trace = table.insert("apple", 9)

    update = trace.last()
    assert update.kind == "ht-update"
    assert (update.old_value, update.value) == (3, 9)
    assert table.get("apple") == 9
    assert len(table) == 1


def test_search_missing_key():
    table = HashTable()
    trace = table.search("pear")

    assert kinds(trace) == ["hash-calculate", "bucket-lookup", "message"]
    assert trace.result is None


def test_delete_removes_only_that_entry():
    table = HashTable()
    table.insert("a", 1)
    table.insert("k", 2)
    trace = table.delete("a")

    assert trace.last().kind == "ht-delete"
    assert trace.result == 1
    assert table.get("a") is None
    assert table.get("k") == 2


def test_delete_missing_key_changes_nothing():
    table = HashTable()
    table.insert("a", 1)
    before = table.clone()
    trace = table.delete("zzz")

    assert trace.last().kind == "message"
    assert table == before


@pytest.mark.parametrize("key", ["", None, 5])
def test_bad_keys_are_rejected(key):
    table = HashTable()
    trace = table.insert(key, 1)

    assert kinds(trace) == ["message"]
    assert len(table) == 0


def test_non_numeric_value_is_rejected():
    table = HashTable()
    trace = table.insert("apple", "red")

    assert kinds(trace) == ["message"]
    assert len(table) == 0


def test_bucket_count_must_be_positive():
    with pytest.raises(ValueError):
        HashTable(0)


def test_clone_is_isolated():
    table = HashTable(5)
    table.insert("x", 1)
    twin = table.clone()
    twin.insert("x", 2)
    twin.insert("y", 3)

    assert table.get("x") == 1
    assert table.get("y") is None
    assert twin.bucket_count == 5
    assert len(twin) == 2
