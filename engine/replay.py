"""
replay.py — Prefix Replay
=========================
Derive the highlight overlay for any position in a trace by folding over
the steps up to and including that position.  Nothing here touches a data
structure; the steps alone carry everything needed.

Two kinds of overlay field:

  persistent   the latest value survives later steps
               (distances, MST edges, array snapshot, sorted indices,
               visited / path cells, grid frontier, recursion results,
               visited nodes, negative-cycle edge)

  transient    visible only when the target index IS that step
               (compare, traverse, swap, pivot, rotation, pointer move,
               current node / edge, rejected edge, focused element,
               hash bucket / chain entry, current call, current cell)

reconstruct() is a pure function: same (steps, index) in, equal Overlay out.
index == -1 is the empty overlay (playback before the first step).

Every Step class has exactly one handler; a missing or stray handler fails
at import time.
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Type

from steps import (
    STEP_TYPES, Cell, EdgeRef, NodeId, Step, to_plain,
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
    SORTED_PREFIX, SORTED_SUFFIX,
)


@dataclass(frozen=True)
class Overlay:
    index:     int           = -1
    kind:      Optional[str] = None
    message:   str           = ""
    code_line: Optional[int] = None

    # -- persistent ---------------------------------------------------------
    distances:         Optional[Mapping[NodeId, float]] = None
    mst_edges:         Optional[Tuple[EdgeRef, ...]]    = None
    array:             Optional[Tuple[float, ...]]      = None
    sorted_indices:    FrozenSet[int]                   = frozenset()
    last_boundary:     Optional[int]                    = None
    visited_nodes:     Tuple[Any, ...]                  = ()
    negative_cycle:    Optional[EdgeRef]                = None
    visited_cells:     FrozenSet[Cell]                  = frozenset()
    frontier:          Tuple[Cell, ...]                 = ()
    path_cells:        Tuple[Cell, ...]                 = ()
    call_stack:        Tuple[str, ...]                  = ()
    returned:          Mapping[str, int]                = field(default_factory=lambda: MappingProxyType({}))
    memo_hits:         FrozenSet[str]                   = frozenset()

    # -- transient ----------------------------------------------------------
    current_node:      Optional[Any]                    = None
    compare_target:    Optional[Any]                    = None
    traverse:          Optional[Tuple[Any, Any]]        = None
    rotation:          Optional[Tuple[str, int]]        = None
    removed_node:      Optional[Any]                    = None
    pointer_move:      Optional[Tuple[Any, Any]]        = None
    focus_element:     Optional[int]                    = None
    compare_indices:   Tuple[int, ...]                  = ()
    swap_indices:      Tuple[int, ...]                  = ()
    pivot_index:       Optional[int]                    = None
    marked_index:      Optional[int]                    = None
    bucket:            Optional[int]                    = None
    chain_entry:       Optional[str]                    = None
    dimmed_entries:    Tuple[str, ...]                  = ()
    current_edge:      Optional[EdgeRef]                = None
    rejected_edge:     Optional[EdgeRef]                = None
    current_call:      Optional[str]                    = None
    current_cell:      Optional[Cell]                   = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: to_plain(getattr(self, f.name)) for f in fields(self)}


EMPTY_OVERLAY = Overlay()


# ---------------------------------------------------------------------------
# Fold state.  Mutable while folding, frozen into an Overlay at the end.
# ---------------------------------------------------------------------------
class _Fold:

    def __init__(self):
        self.values: Dict[str, Any] = {}
        self.sorted: set            = set()
        self.visited_nodes: List    = []
        self.visited_cells: set     = set()
        self.frontier: List[Cell]   = []
        self.path: List[Cell]       = []
        self.calls: List[str]       = []
        self.returned: Dict[str, int] = {}
        self.memo_hits: set         = set()

    def freeze(self) -> Overlay:
        return Overlay(
            sorted_indices=frozenset(self.sorted),
            visited_nodes=tuple(self.visited_nodes),
            visited_cells=frozenset(self.visited_cells),
            frontier=tuple(self.frontier),
            path_cells=tuple(self.path),
            call_stack=tuple(self.calls),
            returned=MappingProxyType(dict(self.returned)),
            memo_hits=frozenset(self.memo_hits),
            **self.values,
        )


Handler = Callable[[Any, _Fold, bool], None]


def _remove_first(items: List, item) -> None:
    if item in items:
        items.remove(item)


def _remove_last(items: List, item) -> None:
    for i in range(len(items) - 1, -1, -1):
        if items[i] == item:
            del items[i]
            return


# ---------------------------------------------------------------------------
# Handlers: (step, fold, is_current)
# ---------------------------------------------------------------------------
def _noop(step: Step, acc: _Fold, current: bool) -> None:
    return None


def _node(attr: str = "node_id") -> Handler:
    def handle(step, acc: _Fold, current: bool) -> None:
        if current:
            acc.values["current_node"] = getattr(step, attr)
    return handle


def _compare(step: Compare, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["current_node"]   = step.node_id
        acc.values["compare_target"] = step.target_id


def _traverse(step: Traverse, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["traverse"] = (step.from_id, step.to_id)


def _visit(step: Visit, acc: _Fold, current: bool) -> None:
    acc.visited_nodes.append(step.node_id)
    if current:
        acc.values["current_node"] = step.node_id


def _delete(step, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["removed_node"] = step.node_id


def _rotate(direction: str) -> Handler:
    def handle(step, acc: _Fold, current: bool) -> None:
        if current:
            acc.values["rotation"]     = (direction, step.node_id)
            acc.values["current_node"] = step.node_id
    return handle


def _pointer_move(step: PointerMove, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["pointer_move"] = (step.from_id, step.to_id)


def _element(step, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["focus_element"] = step.element_id


def _compare_indices(step: CompareIndices, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["compare_indices"] = tuple(step.indices)


def _swap(step: Swap, acc: _Fold, current: bool) -> None:
    acc.values["array"] = tuple(step.array)
    if current:
        acc.values["swap_indices"] = tuple(step.indices)


def _sorted_boundary(step: SortedBoundary, acc: _Fold, current: bool) -> None:
    if step.array:
        acc.values["array"] = tuple(step.array)
    n = len(acc.values.get("array") or ())
    if step.side == SORTED_PREFIX:
        acc.sorted.update(range(0, step.boundary + 1))
    elif step.side == SORTED_SUFFIX:
        acc.sorted.update(range(step.boundary, n))
    else:
        acc.sorted.add(step.boundary)
    acc.values["last_boundary"] = step.boundary


def _set_pivot(step: SetPivot, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["pivot_index"] = step.pivot_index


def _mark_index(step: MarkIndex, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["marked_index"] = step.index


def _bucket(step, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["bucket"] = step.bucket_index


def _chain_traverse(step: ChainTraverse, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["bucket"]         = step.bucket_index
        acc.values["chain_entry"]    = step.entry_key
        acc.values["dimmed_entries"] = tuple(step.visited_keys)


def _hash_entry(step, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["bucket"]      = step.bucket_index
        acc.values["chain_entry"] = step.key


def _highlight_node(step: HighlightNode, acc: _Fold, current: bool) -> None:
    if step.node_id not in acc.visited_nodes:
        acc.visited_nodes.append(step.node_id)
    if current:
        acc.values["current_node"] = step.node_id


def _highlight_edge(step: HighlightEdge, acc: _Fold, current: bool) -> None:
    if current:
        acc.values["current_edge"] = step.edge


def _update_distances(step: UpdateDistances, acc: _Fold, current: bool) -> None:
    acc.values["distances"] = step.distances


def _negative_cycle(step: NegativeCycle, acc: _Fold, current: bool) -> None:
    acc.values["negative_cycle"] = step.edge
    if current:
        acc.values["current_edge"] = step.edge


def _add_to_mst(step: AddToMst, acc: _Fold, current: bool) -> None:
    acc.values["mst_edges"] = tuple(step.mst_edges)
    if current:
        acc.values["current_edge"] = step.edge


def _form_cycle(step: FormCycle, acc: _Fold, current: bool) -> None:
    acc.values["mst_edges"] = tuple(step.mst_edges)
    if current:
        acc.values["rejected_edge"] = step.edge


def _recursive_call(step: RecursiveCall, acc: _Fold, current: bool) -> None:
    acc.calls.append(step.node_id)
    if current:
        acc.values["current_call"] = step.node_id


def _recursive_return(step: RecursiveReturn, acc: _Fold, current: bool) -> None:
    _remove_last(acc.calls, step.node_id)
    acc.returned[step.node_id] = step.return_value
    if current:
        acc.values["current_call"] = step.node_id


def _memo_hit(step: MemoHit, acc: _Fold, current: bool) -> None:
    _remove_last(acc.calls, step.node_id)
    acc.returned[step.node_id] = step.return_value
    acc.memo_hits.add(step.node_id)
    if current:
        acc.values["current_call"] = step.node_id


def _cell_in(step, acc: _Fold, current: bool) -> None:
    acc.frontier.append(step.cell)
    if current:
        acc.values["current_cell"] = step.cell


def _cell_dequeue(step: CellDequeue, acc: _Fold, current: bool) -> None:
    _remove_first(acc.frontier, step.cell)
    acc.visited_cells.add(step.cell)
    if current:
        acc.values["current_cell"] = step.cell


def _cell_pop(step: CellPop, acc: _Fold, current: bool) -> None:
    _remove_last(acc.frontier, step.cell)
    acc.visited_cells.add(step.cell)
    if current:
        acc.values["current_cell"] = step.cell


def _mark_path(step: MarkPath, acc: _Fold, current: bool) -> None:
    acc.path.append(step.cell)
    if current:
        acc.values["current_cell"] = step.cell


HANDLERS: Dict[Type[Step], Handler] = {
    Message:         _noop,
    Compare:         _compare,
    Traverse:        _traverse,
    Found:           _node(),
    Visit:           _visit,
    SetRoot:         _node(),
    Insert:          _node(),
    Delete:          _delete,
    Replace:         _node(),
    RotateLeft:      _rotate("left"),
    RotateRight:     _rotate("right"),
    BalanceCheck:    _node(),
    UpdateHeight:    _node(),
    PointerMove:     _pointer_move,
    ListInsert:      _node(),
    ListDelete:      _delete,
    SetHead:         _node(),
    Enqueue:         _element,
    Dequeue:         _element,
    Push:            _element,
    Pop:             _element,
    Peek:            _element,
    CompareIndices:  _compare_indices,
    Swap:            _swap,
    SortedBoundary:  _sorted_boundary,
    SetPivot:        _set_pivot,
    MarkIndex:       _mark_index,
    HashCalculate:   _bucket,
    BucketLookup:    _bucket,
    ChainTraverse:   _chain_traverse,
    HashInsert:      _hash_entry,
    HashUpdate:      _hash_entry,
    HashDelete:      _hash_entry,
    HashFound:       _hash_entry,
    HighlightNode:   _highlight_node,
    HighlightEdge:   _highlight_edge,
    UpdateDistances: _update_distances,
    NegativeCycle:   _negative_cycle,
    AddToMst:        _add_to_mst,
    FormCycle:       _form_cycle,
    RecursiveCall:   _recursive_call,
    RecursiveReturn: _recursive_return,
    MemoHit:         _memo_hit,
    CellEnqueue:     _cell_in,
    CellDequeue:     _cell_dequeue,
    CellPush:        _cell_in,
    CellPop:         _cell_pop,
    MarkPath:        _mark_path,
}

_missing = set(STEP_TYPES) - set(HANDLERS)
_stray   = set(HANDLERS) - set(STEP_TYPES)
if _missing or _stray:
    raise ImportError(
        f"replay handlers out of sync: missing {sorted(c.__name__ for c in _missing)}, "
        f"stray {sorted(c.__name__ for c in _stray)}"
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def reconstruct(steps: Sequence[Step], index: int) -> Overlay:
    """Overlay for `steps[index]`, folding over steps[0..index]."""
    if index == -1:
        return EMPTY_OVERLAY
    if not 0 <= index < len(steps):
        raise IndexError(f"step index {index} out of range for a trace of {len(steps)} steps")

    acc = _Fold()
    for i in range(index + 1):
        step = steps[i]
        HANDLERS[type(step)](step, acc, i == index)

    current = steps[index]
    acc.values.update(index=index, kind=current.kind, message=current.message, code_line=current.code_line)
    return acc.freeze()
