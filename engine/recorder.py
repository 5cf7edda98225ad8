"""
recorder.py — Run Recorder & Analytics
========================================
Times one operation, keeps its trace, and computes the analytics the
Analytics panel renders and the export route serialises.

Usage:
    rec = Recorder()
    trace = rec.run("avl.insert", "AVL insert", "avl", lambda: tree.insert(7), {"value": 7})
    rec.metrics                      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay
"""

import logging
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from steps import Step, Trace, to_plain


LOGGER = logging.getLogger(__name__)

# step kinds that count as one "comparison" / one "write" for analytics
COMPARISON_KINDS = frozenset({"compare", "chain-traverse", "highlight-edge"})
WRITE_KINDS      = frozenset({
    "swap", "insert", "delete", "replace", "set-root", "rotate-left", "rotate-right",
    "ll-insert", "ll-delete", "ll-set-head", "enqueue", "dequeue", "push", "pop",
    "ht-insert", "ht-update", "ht-delete", "update-distances", "add-to-mst",
})


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    op_key:         str            = ""
    op_label:       str            = ""
    concept:        str            = ""
    total_steps:    int            = 0          # number of Steps yielded
    comparisons:    int            = 0
    writes:         int            = 0
    rotations:      int            = 0
    wall_time_ms:   float          = 0.0        # wall-clock time to record the trace
    has_result:     bool           = False      # operation returned something other than None / False
    negative_cycle: bool           = False
    kinds:          Dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        result  : Whatever the operation returned.
        metrics : Computed RunMetrics (available after run()).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.result:  Any                  = None
        self.metrics: Optional[RunMetrics] = None

        self._op_key:  str            = ""
        self._label:   str            = ""
        self._concept: str            = ""
        self._inputs:  Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(
        self,
        op_key: str,
        label: str,
        concept: str,
        operation: Callable[[], Trace],
        inputs: Optional[Dict[str, Any]] = None,
    ) -> Trace:
        """Call `operation`, keep its trace, compute metrics."""
        self._op_key  = op_key
        self._label   = label
        self._concept = concept
        self._inputs  = dict(inputs or {})

        start = time.monotonic()
        trace = operation()
        wall_ms = (time.monotonic() - start) * 1000

        self.steps   = list(trace.steps)
        self.result  = trace.result
        self.metrics = self._compute_metrics(wall_ms)
        LOGGER.debug("%s: %d steps in %.2f ms", op_key, self.metrics.total_steps, self.metrics.wall_time_ms)
        return trace

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "op_key":  self._op_key,
            "label":   self._label,
            "concept": self._concept,
            "inputs":  to_plain(self._inputs),
            "metrics": asdict(self.metrics) if self.metrics else {},
            "steps":   [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        counts = Counter(s.kind for s in self.steps)
        return RunMetrics(
            op_key=self._op_key,
            op_label=self._label,
            concept=self._concept,
            total_steps=len(self.steps),
            comparisons=sum(n for k, n in counts.items() if k in COMPARISON_KINDS),
            writes=sum(n for k, n in counts.items() if k in WRITE_KINDS),
            rotations=counts["rotate-left"] + counts["rotate-right"],
            wall_time_ms=round(wall_ms, 2),
            has_result=self.result is not None and self.result is not False,
            negative_cycle=counts["negative-cycle"] > 0,
            kinds=dict(counts),
        )
