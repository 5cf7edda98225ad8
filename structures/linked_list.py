"""
linked_list.py — Singly Linked List
====================================
Arena of frozen ListNode records keyed by id, plus the head id.  ``next``
holds the following node's id.

  insert_at_head – allocate, point new.next at the old head, move head
  insert_at_tail – allocate, walk to the tail with traverse steps, link
  delete         – head is a special first compare; otherwise compare/traverse
                   per hop, then a pointer-move bypass before ll-delete
  search         – compare per node, traverse between them
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional

from steps import (
    Compare, Found, ListDelete, ListInsert, Message, PointerMove, SetHead,
    StepGenerator, Trace, Traverse, record,
)
from structures.validation import is_number, reject_value


@dataclass(frozen=True)
class ListNode:
    id:    int
    value: float
    next:  Optional[int] = None


INSERT_HEAD_PSEUDOCODE: List[str] = [
    "def insert_at_head(value):",             # 0
    "    node ← Node(value)",                 # 1
    "    node.next ← head",                   # 2
    "    head ← node",                        # 3
]

INSERT_TAIL_PSEUDOCODE: List[str] = [
    "def insert_at_tail(value):",             # 0
    "    node ← Node(value)",                 # 1
    "    if head is None: head ← node; return",   # 2
    "    current ← head",                     # 3
    "    while current.next is not None:",    # 4
    "        current ← current.next",         # 5
    "    current.next ← node",                # 6
]

DELETE_PSEUDOCODE: List[str] = [
    "def delete(value):",                                     # 0
    "    if head is None: return  # empty",                   # 1
    "    if head.value == value: head ← head.next; return",   # 2
    "    current ← head",                                     # 3
    "    while current.next and current.next.value != value:",    # 4
    "        current ← current.next",                         # 5
    "    if current.next is None: return  # not found",       # 6
    "    current.next ← current.next.next",                   # 7
]

SEARCH_PSEUDOCODE: List[str] = [
    "def search(value):",                     # 0
    "    current ← head",                     # 1
    "    while current is not None:",         # 2
    "        if current.value == value: return current",  # 3
    "        current ← current.next",         # 4
    "    return NOT FOUND",                   # 5
]

PSEUDOCODE = {
    "insert_head": INSERT_HEAD_PSEUDOCODE,
    "insert_tail": INSERT_TAIL_PSEUDOCODE,
    "delete":      DELETE_PSEUDOCODE,
    "search":      SEARCH_PSEUDOCODE,
}


class SinglyLinkedList:

    def __init__(self):
        self.head:     Optional[int]       = None
        self._nodes:   Dict[int, ListNode] = {}
        self._next_id: int                 = 1

    def clone(self) -> "SinglyLinkedList":
        twin = SinglyLinkedList()
        twin.head     = self.head
        twin._nodes   = dict(self._nodes)
        twin._next_id = self._next_id
        return twin

    def _allocate(self, value: float) -> ListNode:
        node = ListNode(id=self._next_id, value=value)
        self._next_id += 1
        self._nodes[node.id] = node
        return node

    def _link(self, node_id: int, next_id: Optional[int]) -> None:
        self._nodes[node_id] = replace(self._nodes[node_id], next=next_id)

    def __iter__(self) -> Iterator[ListNode]:
        current = self.head
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.next

    def __len__(self) -> int:
        return len(self._nodes)

    def values(self) -> List[float]:
        return [n.value for n in self]

    def snapshot(self) -> List[Dict[str, Any]]:
        """The id-chain from head to tail."""
        return [{"id": n.id, "value": n.value, "next": n.next} for n in self]

    def __eq__(self, other) -> bool:
        return isinstance(other, SinglyLinkedList) and self.snapshot() == other.snapshot()

    __hash__ = None  # mutable; compared by value

    def __repr__(self) -> str:
        return f"SinglyLinkedList({self.values()})"

    # ------------------------------------------------------------------
    # insert
    # ------------------------------------------------------------------
    def insert_at_head(self, value: float) -> Trace:
        """Result: id of the new node."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._insert_at_head(value))

    def _insert_at_head(self, value: float) -> StepGenerator:
        yield Message(message=f"Creating new node with value {value}.", code_line=1)
        node = self._allocate(value)
        yield ListInsert(node_id=node.id, value=value, message=f"New node {value} is created.", code_line=1)

        yield PointerMove(from_id=node.id, to_id=self.head,
                          message="Set new node's next to point to the current head.", code_line=2)
        self._link(node.id, self.head)

        yield SetHead(node_id=node.id, message="Set head to be the new node.", code_line=3)
        self.head = node.id
        return node.id

    def insert_at_tail(self, value: float) -> Trace:
        """Result: id of the new node."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._insert_at_tail(value))

    def _insert_at_tail(self, value: float) -> StepGenerator:
        yield Message(message=f"Creating new node with value {value}.", code_line=1)
        node = self._allocate(value)
        yield ListInsert(node_id=node.id, value=value, message=f"New node {value} created.", code_line=1)

        if self.head is None:
            yield SetHead(node_id=node.id, message="List is empty. Setting new node as head.", code_line=2)
            self.head = node.id
            return node.id

        current = self._nodes[self.head]
        yield Traverse(from_id=None, to_id=current.id,
                       message="Starting from head to find the tail.", code_line=3)
        while current.next is not None:
            yield Traverse(from_id=current.id, to_id=current.next, message="Moving to next node.", code_line=5)
            current = self._nodes[current.next]

        yield Found(node_id=current.id, message=f"Found the tail node: {current.value}.", code_line=4)
        yield PointerMove(from_id=current.id, to_id=node.id,
                          message="Set tail's next to point to the new node.", code_line=6)
        self._link(current.id, node.id)
        return node.id

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------
    def delete(self, value: float) -> Trace:
        """Result: id of the removed node, or None."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._delete(value))

    def _delete(self, value: float) -> StepGenerator:
        if self.head is None:
            yield Message(message="List is empty. Cannot delete.", code_line=1)
            return None

        head = self._nodes[self.head]
        yield Compare(node_id=head.id,
                      message=f"Checking if head node {head.value} is the one to delete.", code_line=2)
        if head.value == value:
            yield ListDelete(node_id=head.id, message=f"Head is {value}. Deleting head.", code_line=2)
            self.head = head.next
            del self._nodes[head.id]
            return head.id

        current = head
        yield Traverse(from_id=None, to_id=current.id, message="Starting search from head.", code_line=3)
        while current.next is not None:
            following = self._nodes[current.next]
            if following.value == value:
                break
            yield Compare(node_id=following.id, message=f"Checking next node {following.value}.", code_line=4)
            yield Traverse(from_id=current.id, to_id=following.id, message="Moving to next node.", code_line=5)
            current = following

        if current.next is None:
            yield Message(message=f"Value {value} not found in the list.", code_line=6)
            return None

        doomed = self._nodes[current.next]
        yield Compare(node_id=doomed.id, message=f"Found node to delete: {doomed.value}.", code_line=4)
        yield PointerMove(from_id=current.id, to_id=doomed.next,
                          message=f"Bypassing node {doomed.value} to delete it.", code_line=7)
        self._link(current.id, doomed.next)
        yield ListDelete(node_id=doomed.id, message=f"Node {value} deleted.", code_line=7)
        del self._nodes[doomed.id]
        return doomed.id

    # ------------------------------------------------------------------
    # search
    # ------------------------------------------------------------------
    def search(self, value: float) -> Trace:
        """Result: id of the first matching node, or None."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._search(value))

    def _search(self, value: float) -> StepGenerator:
        yield Message(message=f"Starting search for value {value}.", code_line=1)
        current = self.head
        while current is not None:
            node = self._nodes[current]
            yield Compare(node_id=node.id, message=f"Comparing with node {node.value}.", code_line=3)
            if node.value == value:
                yield Found(node_id=node.id, message=f"Found {value}!", code_line=3)
                return node.id
            yield Traverse(from_id=node.id, to_id=node.next, message="Moving to next node.", code_line=4)
            current = node.next

        yield Message(message=f"Value {value} not found. Reached end of list.", code_line=5)
        return None
