"""
steps/
------
Step-trace protocol: the record vocabulary and the recorder.

    from steps import Trace, record, Message, Compare, INFINITY
"""

from steps.records import (
    INFINITY, INFINITY_LABEL, SORTED_PREFIX, SORTED_SUFFIX, SORTED_SINGLE, STEP_TYPES,
    Cell, EdgeRef, NodeId, Step, frozen_distances, kinds, to_plain,
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
from steps.trace import StepGenerator, Trace, TraceProtocolError, record

__all__ = [
    "INFINITY", "INFINITY_LABEL", "SORTED_PREFIX", "SORTED_SUFFIX", "SORTED_SINGLE", "STEP_TYPES",
    "Cell", "EdgeRef", "NodeId", "Step", "frozen_distances", "kinds", "to_plain",
    "Message",
    "Compare", "Traverse", "Found", "Visit", "SetRoot", "Insert", "Delete", "Replace",
    "RotateLeft", "RotateRight", "BalanceCheck", "UpdateHeight",
    "PointerMove", "ListInsert", "ListDelete", "SetHead",
    "Enqueue", "Dequeue", "Push", "Pop", "Peek",
    "CompareIndices", "Swap", "SortedBoundary", "SetPivot", "MarkIndex",
    "HashCalculate", "BucketLookup", "ChainTraverse", "HashInsert", "HashUpdate", "HashDelete", "HashFound",
    "HighlightNode", "HighlightEdge", "UpdateDistances", "NegativeCycle", "AddToMst", "FormCycle",
    "RecursiveCall", "RecursiveReturn", "MemoHit",
    "CellEnqueue", "CellDequeue", "CellPush", "CellPop", "MarkPath",
    "StepGenerator", "Trace", "TraceProtocolError", "record",
]
