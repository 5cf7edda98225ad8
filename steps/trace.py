"""
trace.py — Trace Recording
===========================
Structures and algorithms are written as generators: they ``yield`` a Step
at every decision and ``return`` their result.  Recursive helpers compose
with ``yield from`` so a sub-call's return value (a new subtree root, a
partition index, …) flows straight back to the caller.

``record()`` drives such a generator to completion and freezes what it saw
into a Trace.  Nothing is streamed: the caller always gets the whole trace
in one piece, after the operation has finished.

    def insert(self, value) -> Trace:
        return record(self._insert(value))

Contract enforced here:
  - steps come out in exactly the order they were yielded
  - the trace is a tuple, so it cannot be appended to or edited later
  - at least one step; an operation that yields nothing is a bug
"""

from typing import Any, Generator, NamedTuple, Tuple

from steps.records import Step


StepGenerator = Generator[Step, None, Any]


class TraceProtocolError(RuntimeError):
    """An operation broke the step-trace contract."""


class Trace(NamedTuple):
    steps:  Tuple[Step, ...]
    result: Any = None

    def last(self) -> Step:
        return self.steps[-1]

    def of_kind(self, kind: str) -> Tuple[Step, ...]:
        return tuple(s for s in self.steps if s.kind == kind)

    def of_type(self, cls: type) -> Tuple[Step, ...]:
        return tuple(s for s in self.steps if isinstance(s, cls))


def record(generator: StepGenerator) -> Trace:
    """Exhaust `generator`, collecting every Step it yields and its return value."""
    collected = []
    while True:
        try:
            step = next(generator)
        except StopIteration as stop:
            result = stop.value
            break
        if not isinstance(step, Step):
            raise TraceProtocolError(f"Expected a Step, got {type(step).__name__}")
        collected.append(step)

    if not collected:
        raise TraceProtocolError("Operation finished without emitting a single step")
    return Trace(steps=tuple(collected), result=result)
