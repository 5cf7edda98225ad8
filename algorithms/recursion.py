"""
recursion.py — Fibonacci Recursion Tree
========================================
Builds the explicit call tree of naive or memoised fib(n) while emitting a
step per call and per return.

  recursive-call     on entry to every call
  memo-hit           (memoised only) argument already solved, return at once
  recursive-return   base case, or after both children returned

Naive call ids are "fib-{n}-{k}" where k counts calls within one build.  The
counter belongs to the builder, so two builds never share it.  Memoised
call ids are the label itself, matching the merged graph's node ids.

The naive tree keeps one node per call.  The memoised graph merges nodes by
label ("fib(3)"), so a repeated sub-problem collapses into one node with
several incoming links; links are de-duplicated.
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

from steps import MemoHit, Message, RecursiveCall, RecursiveReturn, StepGenerator


FIB_LIMIT      = 12
FIB_MEMO_LIMIT = 30

PSEUDOCODE: List[str] = [
    "def fib(n):",                                 # 0
    "    if n <= 1: return n",                     # 1
    "    return fib(n - 1) + fib(n - 2)",          # 2
]

MEMO_PSEUDOCODE: List[str] = [
    "def fib(n, memo):",                           # 0
    "    if n in memo: return memo[n]",            # 1
    "    if n <= 1: memo[n] ← n; return n",        # 2
    "    memo[n] ← fib(n - 1) + fib(n - 2)",       # 3
    "    return memo[n]",                          # 4
]


class RecursionGraph(NamedTuple):
    nodes: List[Dict[str, str]]          # [{"id", "label"}]
    links: List[Dict[str, str]]          # [{"source", "target"}]
    value: int


class _CallNode(NamedTuple):
    id:       str
    label:    str
    children: Tuple["_CallNode", ...]


class FibonacciTreeBuilder:
    """One build per instance: owns the call counter and, when memoised, the memo."""

    def __init__(self, memoized: bool = False):
        self.memoized = memoized
        self._counter = 0
        self._memo: Dict[int, int] = {}

    def _next_id(self, n: int) -> str:
        if self.memoized:
            return f"fib({n})"
        call_id = f"fib-{n}-{self._counter}"
        self._counter += 1
        return call_id

    def call(self, n: int) -> StepGenerator:
        """Returns (call node, value)."""
        node_id = self._next_id(n)
        label = f"fib({n})"
        yield RecursiveCall(node_id=node_id, label=label, message=f"Calling fib({n}).", code_line=0)

        if self.memoized and n in self._memo:
            value = self._memo[n]
            yield MemoHit(node_id=node_id, label=label, return_value=value,
                          message=f"fib({n}) found in memo. Returning {value}.", code_line=1)
            return _CallNode(node_id, label, ()), value

        if n <= 1:
            yield RecursiveReturn(node_id=node_id, label=label, return_value=n,
                                  message=f"Base case: fib({n}) returns {n}.",
                                  code_line=2 if self.memoized else 1)
            if self.memoized:
                self._memo[n] = n
            return _CallNode(node_id, label, ()), n

        yield Message(message=f"Calculating fib({n - 1}) + fib({n - 2}).",
                      code_line=3 if self.memoized else 2)
        left, a = yield from self.call(n - 1)
        right, b = yield from self.call(n - 2)
        value = a + b
        if self.memoized:
            self._memo[n] = value
        yield RecursiveReturn(node_id=node_id, label=label, return_value=value,
                              message=f"fib({n}) returns {a} + {b} = {value}.",
                              code_line=4 if self.memoized else 2)
        return _CallNode(node_id, label, (left, right)), value

    def to_graph(self, root: _CallNode, value: int) -> RecursionGraph:
        nodes: List[Dict[str, str]] = []
        links: List[Dict[str, str]] = []

        if not self.memoized:
            stack = [root]
            while stack:
                node = stack.pop()
                nodes.append({"id": node.id, "label": node.label})
                for child in node.children:
                    links.append({"source": node.id, "target": child.id})
                stack.extend(reversed(node.children))
            return RecursionGraph(nodes=nodes, links=links, value=value)

        seen_nodes = set()
        seen_links = set()
        stack = [root]
        while stack:
            node = stack.pop()
            if node.label not in seen_nodes:
                seen_nodes.add(node.label)
                nodes.append({"id": node.label, "label": node.label})
            for child in node.children:
                key = (node.label, child.label)
                if key not in seen_links:
                    seen_links.add(key)
                    links.append({"source": node.label, "target": child.label})
            stack.extend(reversed(node.children))
        return RecursionGraph(nodes=nodes, links=links, value=value)


def fibonacci(n: int, memoized: bool = False, limit: Optional[int] = None) -> StepGenerator:
    """Returns RecursionGraph, or None when `n` is not an int in 0…limit."""
    if limit is None:
        limit = FIB_MEMO_LIMIT if memoized else FIB_LIMIT
    if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= limit:
        yield Message(message=f"Please enter an integer between 0 and {limit}.", code_line=0)
        return None

    builder = FibonacciTreeBuilder(memoized=memoized)
    root, value = yield from builder.call(n)
    return builder.to_graph(root, value)
