"""
hash_table.py — Separate-Chaining Hash Table
=============================================
A fixed number of buckets, each a chain of (key, value) entries.

Hash function (order-sensitive; "ab" and "ba" land in different buckets):

    h = Σ ord(key[i]) · (i + 1)   (mod bucket_count)

Every operation emits hash-calculate, bucket-lookup, then chain-traverse for
each entry scanned.  A chain-traverse step carries the keys already passed in
this chain so they can be dimmed.  The last step is ht-insert, ht-update,
ht-found, ht-delete or a not-found message.

Buckets are tuples of frozen entries.  A clone shares them; an operation
rebuilds only the bucket it touches.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from steps import (
    BucketLookup, ChainTraverse, HashCalculate, HashDelete, HashFound, HashInsert, HashUpdate,
    Message, StepGenerator, Trace, record,
)
from structures.validation import is_number, reject_value


DEFAULT_BUCKETS = 10


@dataclass(frozen=True)
class Entry:
    key:   str
    value: float


INSERT_PSEUDOCODE: List[str] = [
    "def insert(key, value):",                         # 0
    "    index ← hash(key)",                           # 1
    "    bucket ← table[index]",                       # 2
    "    for entry in bucket:",                        # 3
    "        if entry.key == key:",                    # 4
    "            entry.value ← value; return",         # 5
    "    bucket.append(Entry(key, value))",            # 6
]

SEARCH_PSEUDOCODE: List[str] = [
    "def search(key):",                                # 0
    "    index ← hash(key)",                           # 1
    "    bucket ← table[index]",                       # 2
    "    for entry in bucket:",                        # 3
    "        if entry.key == key: return entry.value", # 4
    "    return NOT FOUND",                            # 5
]

DELETE_PSEUDOCODE: List[str] = [
    "def delete(key):",                                # 0
    "    index ← hash(key)",                           # 1
    "    bucket ← table[index]",                       # 2
    "    for entry in bucket:",                        # 3
    "        if entry.key == key:",                    # 4
    "            bucket.remove(entry); return",        # 5
    "    return NOT FOUND",                            # 6
]

PSEUDOCODE = {
    "insert": INSERT_PSEUDOCODE,
    "search": SEARCH_PSEUDOCODE,
    "delete": DELETE_PSEUDOCODE,
}


def bucket_index(key: str, bucket_count: int) -> int:
    h = 0
    for i, ch in enumerate(key):
        h = (h + ord(ch) * (i + 1)) % bucket_count
    return h


class HashTable:

    def __init__(self, bucket_count: int = DEFAULT_BUCKETS):
        if bucket_count < 1:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")
        self.bucket_count = bucket_count
        self._buckets: Tuple[Tuple[Entry, ...], ...] = tuple(() for _ in range(bucket_count))

    def clone(self) -> "HashTable":
        twin = HashTable(self.bucket_count)
        twin._buckets = self._buckets
        return twin

    def hash(self, key: str) -> int:
        return bucket_index(key, self.bucket_count)

    def _replace_bucket(self, index: int, bucket: Tuple[Entry, ...]) -> None:
        self._buckets = self._buckets[:index] + (bucket,) + self._buckets[index + 1:]

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets)

    def get(self, key: str) -> Optional[float]:
        for entry in self._buckets[self.hash(key)]:
            if entry.key == key:
                return entry.value
        return None

    def snapshot(self) -> List[List[Dict[str, Any]]]:
        """Buckets of entries; an entry's id is its key."""
        return [[{"id": e.key, "key": e.key, "value": e.value} for e in bucket]
                for bucket in self._buckets]

    def __eq__(self, other) -> bool:
        return isinstance(other, HashTable) and self.snapshot() == other.snapshot()

    __hash__ = None  # mutable; compared by value

    def __repr__(self) -> str:
        return f"HashTable(buckets={self.bucket_count}, size={len(self)})"

    # ------------------------------------------------------------------
    # Shared prologue: hash, look the bucket up, walk the chain
    # ------------------------------------------------------------------
    def _locate(self, key: str) -> StepGenerator:
        """Returns (bucket index, position of `key` in the chain or None)."""
        index = self.hash(key)
        yield HashCalculate(key=key, bucket_index=index,
                            message=f'Hashing key "{key}"... Result index: {index}.', code_line=1)
        yield BucketLookup(bucket_index=index, message=f"Accessing bucket at index {index}.", code_line=2)

        visited: List[str] = []
        for position, entry in enumerate(self._buckets[index]):
            yield ChainTraverse(bucket_index=index, entry_key=entry.key, visited_keys=tuple(visited),
                                message=f'Checking chain. Is key "{entry.key}" equal to "{key}"?',
                                code_line=3)
            if entry.key == key:
                return index, position
            visited.append(entry.key)
        return index, None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def insert(self, key: str, value: float) -> Trace:
        """Result: the bucket index written to."""
        if not isinstance(key, str) or not key:
            return record(_reject_key())
        if not is_number(value):
            return record(reject_value(value))
        return record(self._insert(key, value))

    def _insert(self, key: str, value: float) -> StepGenerator:
        index, position = yield from self._locate(key)
        bucket = self._buckets[index]
        if position is not None:
            old = bucket[position]
            self._replace_bucket(index, bucket[:position] + (Entry(key, value),) + bucket[position + 1:])
            yield HashUpdate(bucket_index=index, key=key, value=value, old_value=old.value,
                             message=f'Key "{key}" already exists. Updating value from {old.value} to {value}.',
                             code_line=5)
            return index

        self._replace_bucket(index, bucket + (Entry(key, value),))
        yield HashInsert(bucket_index=index, key=key, value=value,
                         message=f'Key "{key}" not found in chain. Inserting new entry.', code_line=6)
        return index

    def search(self, key: str) -> Trace:
        """Result: the stored value, or None."""
        if not isinstance(key, str) or not key:
            return record(_reject_key())
        return record(self._search(key))

    def _search(self, key: str) -> StepGenerator:
        index, position = yield from self._locate(key)
        if position is None:
            yield Message(message=f'Key "{key}" not found in the hash table.', code_line=5)
            return None
        entry = self._buckets[index][position]
        yield HashFound(bucket_index=index, key=key, value=entry.value,
                        message=f'Found key "{key}" with value {entry.value}.', code_line=4)
        return entry.value

    def delete(self, key: str) -> Trace:
        """Result: the removed value, or None."""
        if not isinstance(key, str) or not key:
            return record(_reject_key())
        return record(self._delete(key))

    def _delete(self, key: str) -> StepGenerator:
        index, position = yield from self._locate(key)
        if position is None:
            yield Message(message=f'Key "{key}" not found. Nothing to delete.', code_line=6)
            return None
        bucket = self._buckets[index]
        entry = bucket[position]
        yield HashDelete(bucket_index=index, key=key, message=f'Found key "{key}". Deleting entry.', code_line=5)
        self._replace_bucket(index, bucket[:position] + bucket[position + 1:])
        return entry.value


def _reject_key() -> StepGenerator:
    yield Message(message="Key cannot be empty.", code_line=0)
    return None
