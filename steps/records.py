"""
records.py — Step Records
==========================
The vocabulary every structure and algorithm speaks while it runs.

A step is one discrete decision: a comparison, a pointer move, a rotation,
a relaxation, an enqueue.  Each kind of decision gets its own frozen
dataclass carrying only the fields that decision needs, so a consumer can
dispatch on the class instead of probing a bag of optional attributes.

Every record carries:
    • message    – human-readable sentence describing the decision
    • code_line  – 0-based index into the operation's PSEUDOCODE listing

and a class-level ``kind`` tag (the name the UI / export layer uses).
Several classes share a tag where the UI treats them alike ("compare" on a
tree node vs. "compare" on two array indices) but they stay distinct types.

Records are immutable once built.  Mappings (distances) are wrapped in a
read-only proxy so nobody downstream can edit a step after the fact.
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, Union


NodeId  = Union[int, str]
EdgeRef = Tuple[NodeId, NodeId]
Cell    = Tuple[int, int]

# Sentinel for "no distance yet".  Distinct from every finite number; check
# for it before doing arithmetic.
INFINITY: float = float("inf")
INFINITY_LABEL  = "∞"

# sorted-boundary sides
SORTED_PREFIX = "prefix"    # indices 0 … boundary are final
SORTED_SUFFIX = "suffix"    # indices boundary … n-1 are final
SORTED_SINGLE = "single"    # only `boundary` itself is final (quicksort pivot)


def frozen_distances(distances: Mapping[NodeId, float]) -> Mapping[NodeId, float]:
    """Copy a distance map into a read-only view."""
    return MappingProxyType(dict(distances))


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    kind: ClassVar[str] = "step"

    message:   str = ""
    code_line: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly rendering (tuples → lists, ∞ → "∞")."""
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            data[f.name] = to_plain(getattr(self, f.name))
        return data


def to_plain(value: Any) -> Any:
    """Recursively convert to JSON-friendly values (∞ → "∞", mappings keyed by str)."""
    if isinstance(value, float) and value == INFINITY:
        return INFINITY_LABEL
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return [to_plain(v) for v in sorted(value, key=repr)]
    if isinstance(value, (tuple, list)):
        return [to_plain(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# General
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Message(Step):
    kind: ClassVar[str] = "message"


# ---------------------------------------------------------------------------
# Trees & lists (node-id based)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Compare(Step):
    kind: ClassVar[str] = "compare"

    node_id:   Optional[int] = None
    target_id: Optional[int] = None


@dataclass(frozen=True)
class Traverse(Step):
    """Move along a link.  `from_id` is None when a walk starts at the head."""
    kind: ClassVar[str] = "traverse"

    from_id: Optional[int] = None
    to_id:   Optional[int] = None


@dataclass(frozen=True)
class Found(Step):
    kind: ClassVar[str] = "found"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class Visit(Step):
    kind: ClassVar[str] = "visit"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class SetRoot(Step):
    kind: ClassVar[str] = "set-root"

    node_id: Optional[int] = None
    value:   float         = 0


@dataclass(frozen=True)
class Insert(Step):
    kind: ClassVar[str] = "insert"

    node_id:   Optional[int] = None
    parent_id: Optional[int] = None
    value:     float         = 0


@dataclass(frozen=True)
class Delete(Step):
    kind: ClassVar[str] = "delete"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class Replace(Step):
    kind: ClassVar[str] = "replace"

    node_id:           Optional[int] = None
    replacement_value: float         = 0


@dataclass(frozen=True)
class RotateLeft(Step):
    kind: ClassVar[str] = "rotate-left"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class RotateRight(Step):
    kind: ClassVar[str] = "rotate-right"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class BalanceCheck(Step):
    kind: ClassVar[str] = "balance-check"

    node_id: Optional[int] = None
    balance: int           = 0


@dataclass(frozen=True)
class UpdateHeight(Step):
    kind: ClassVar[str] = "update-height"

    node_id: Optional[int] = None
    height:  int           = 0


@dataclass(frozen=True)
class PointerMove(Step):
    """`to_id` None means the pointer now targets null."""
    kind: ClassVar[str] = "pointer-move"

    from_id: Optional[int] = None
    to_id:   Optional[int] = None


@dataclass(frozen=True)
class ListInsert(Step):
    kind: ClassVar[str] = "ll-insert"

    node_id: Optional[int] = None
    value:   float         = 0


@dataclass(frozen=True)
class ListDelete(Step):
    kind: ClassVar[str] = "ll-delete"

    node_id: Optional[int] = None


@dataclass(frozen=True)
class SetHead(Step):
    kind: ClassVar[str] = "ll-set-head"

    node_id: Optional[int] = None


# ---------------------------------------------------------------------------
# Queue / stack elements
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Enqueue(Step):
    kind: ClassVar[str] = "enqueue"

    element_id: Optional[int] = None
    value:      float         = 0


@dataclass(frozen=True)
class Dequeue(Step):
    kind: ClassVar[str] = "dequeue"

    element_id: Optional[int] = None


@dataclass(frozen=True)
class Push(Step):
    kind: ClassVar[str] = "push"

    element_id: Optional[int] = None
    value:      float         = 0


@dataclass(frozen=True)
class Pop(Step):
    kind: ClassVar[str] = "pop"

    element_id: Optional[int] = None


@dataclass(frozen=True)
class Peek(Step):
    kind: ClassVar[str] = "peek"

    element_id: Optional[int] = None


# ---------------------------------------------------------------------------
# Arrays (sorting)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CompareIndices(Step):
    kind: ClassVar[str] = "compare"

    indices: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Swap(Step):
    """`array` is the full array right after the mutation."""
    kind: ClassVar[str] = "swap"

    indices: Tuple[int, ...]   = ()
    array:   Tuple[float, ...] = ()


@dataclass(frozen=True)
class SortedBoundary(Step):
    kind: ClassVar[str] = "sorted-boundary"

    boundary: int               = 0
    side:     str               = SORTED_PREFIX
    array:    Tuple[float, ...] = ()


@dataclass(frozen=True)
class SetPivot(Step):
    kind: ClassVar[str] = "set-pivot"

    pivot_index: int = 0


@dataclass(frozen=True)
class MarkIndex(Step):
    """Current candidate (selection-sort minimum, insertion-sort key)."""
    kind: ClassVar[str] = "mark-index"

    index: int = 0


# ---------------------------------------------------------------------------
# Hash table
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class HashCalculate(Step):
    kind: ClassVar[str] = "hash-calculate"

    key:          str = ""
    bucket_index: int = 0


@dataclass(frozen=True)
class BucketLookup(Step):
    kind: ClassVar[str] = "bucket-lookup"

    bucket_index: int = 0


@dataclass(frozen=True)
class ChainTraverse(Step):
    kind: ClassVar[str] = "chain-traverse"

    bucket_index: int             = 0
    entry_key:    str             = ""
    visited_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class HashInsert(Step):
    kind: ClassVar[str] = "ht-insert"

    bucket_index: int   = 0
    key:          str   = ""
    value:        float = 0


@dataclass(frozen=True)
class HashUpdate(Step):
    kind: ClassVar[str] = "ht-update"

    bucket_index: int   = 0
    key:          str   = ""
    value:        float = 0
    old_value:    float = 0


@dataclass(frozen=True)
class HashDelete(Step):
    kind: ClassVar[str] = "ht-delete"

    bucket_index: int = 0
    key:          str = ""


@dataclass(frozen=True)
class HashFound(Step):
    kind: ClassVar[str] = "ht-found"

    bucket_index: int   = 0
    key:          str   = ""
    value:        float = 0


# ---------------------------------------------------------------------------
# Weighted graphs (SSSP / MST)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class HighlightNode(Step):
    kind: ClassVar[str] = "highlight-node"

    node_id: Optional[NodeId] = None


@dataclass(frozen=True)
class HighlightEdge(Step):
    kind: ClassVar[str] = "highlight-edge"

    edge:   Optional[EdgeRef] = None
    weight: float             = 0


@dataclass(frozen=True)
class UpdateDistances(Step):
    """Carries the ENTIRE distance map, unreached nodes at INFINITY."""
    kind: ClassVar[str] = "update-distances"

    distances: Mapping[NodeId, float] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class NegativeCycle(Step):
    kind: ClassVar[str] = "negative-cycle"

    edge: Optional[EdgeRef] = None


@dataclass(frozen=True)
class AddToMst(Step):
    kind: ClassVar[str] = "add-to-mst"

    edge:      Optional[EdgeRef]  = None
    weight:    float              = 0
    mst_edges: Tuple[EdgeRef, ...] = ()


@dataclass(frozen=True)
class FormCycle(Step):
    kind: ClassVar[str] = "form-cycle"

    edge:      Optional[EdgeRef]  = None
    weight:    float              = 0
    mst_edges: Tuple[EdgeRef, ...] = ()


# ---------------------------------------------------------------------------
# Recursion trees
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RecursiveCall(Step):
    kind: ClassVar[str] = "recursive-call"

    node_id: str = ""
    label:   str = ""


@dataclass(frozen=True)
class RecursiveReturn(Step):
    kind: ClassVar[str] = "recursive-return"

    node_id:      str = ""
    label:        str = ""
    return_value: int = 0


@dataclass(frozen=True)
class MemoHit(Step):
    kind: ClassVar[str] = "memo-hit"

    node_id:      str = ""
    label:        str = ""
    return_value: int = 0


# ---------------------------------------------------------------------------
# Grid search (cells)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CellEnqueue(Step):
    kind: ClassVar[str] = "enqueue"

    cell: Cell = (0, 0)


@dataclass(frozen=True)
class CellDequeue(Step):
    kind: ClassVar[str] = "dequeue"

    cell: Cell = (0, 0)


@dataclass(frozen=True)
class CellPush(Step):
    kind: ClassVar[str] = "push"

    cell: Cell = (0, 0)


@dataclass(frozen=True)
class CellPop(Step):
    kind: ClassVar[str] = "pop"

    cell: Cell = (0, 0)


@dataclass(frozen=True)
class MarkPath(Step):
    kind: ClassVar[str] = "mark-path"

    cell: Cell = (0, 0)


# ---------------------------------------------------------------------------
# Registry of every concrete record type (replay checks it is exhaustive)
# ---------------------------------------------------------------------------
STEP_TYPES: Tuple[Type[Step], ...] = (
    Message,
    Compare, Traverse, Found, Visit, SetRoot, Insert, Delete, Replace,
    RotateLeft, RotateRight, BalanceCheck, UpdateHeight,
    PointerMove, ListInsert, ListDelete, SetHead,
    Enqueue, Dequeue, Push, Pop, Peek,
    CompareIndices, Swap, SortedBoundary, SetPivot, MarkIndex,
    HashCalculate, BucketLookup, ChainTraverse, HashInsert, HashUpdate, HashDelete, HashFound,
    HighlightNode, HighlightEdge, UpdateDistances, NegativeCycle, AddToMst, FormCycle,
    RecursiveCall, RecursiveReturn, MemoHit,
    CellEnqueue, CellDequeue, CellPush, CellPop, MarkPath,
)


def kinds() -> List[str]:
    """Distinct kind tags in declaration order."""
    seen: List[str] = []
    for cls in STEP_TYPES:
        if cls.kind not in seen:
            seen.append(cls.kind)
    return seen
