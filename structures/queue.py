"""
queue.py — FIFO Queue
======================
Front of the queue is index 0.  dequeue and peek emit ``peek`` on the front
element first so it can be highlighted before it disappears.
"""

from typing import List

from steps import Dequeue, Enqueue, Message, Peek, StepGenerator, Trace, record
from structures.sequence import ElementSequence
from structures.validation import is_number, reject_value


PSEUDOCODE: List[str] = [
    "def enqueue(value):",                        # 0
    "    element ← Element(value)",               # 1
    "    rear.append(element)",                   # 2
    "def dequeue():",                             # 3
    "    if queue is empty: return",              # 4
    "    element ← front",                        # 5
    "    remove front; return element",           # 6
    "def peek(): return front",                   # 7
]


class Queue(ElementSequence):

    def enqueue(self, value: float) -> Trace:
        """Result: id of the new element."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._enqueue(value))

    def _enqueue(self, value: float) -> StepGenerator:
        yield Message(message=f"Creating new element with value {value}.", code_line=1)
        element = self._allocate(value)
        self._items = self._items + (element,)
        yield Enqueue(element_id=element.id, value=value,
                      message=f"Adding {value} to the rear of the queue.", code_line=2)
        return element.id

    def dequeue(self) -> Trace:
        """Result: the removed value, or None when empty."""
        return record(self._dequeue())

    def _dequeue(self) -> StepGenerator:
        if not self._items:
            yield Message(message="Queue is empty. Cannot dequeue.", code_line=4)
            return None
        front = self._items[0]
        yield Peek(element_id=front.id, message=f"About to remove {front.value} from the front.", code_line=5)
        self._items = self._items[1:]
        yield Dequeue(element_id=front.id, message=f"Element {front.value} has been removed.", code_line=6)
        return front.value

    def peek(self) -> Trace:
        """Result: the front value, or None when empty."""
        return record(self._peek())

    def _peek(self) -> StepGenerator:
        if not self._items:
            yield Message(message="Queue is empty. Cannot peek.", code_line=4)
            return None
        front = self._items[0]
        yield Peek(element_id=front.id, message=f"Peeking at the front element: {front.value}.", code_line=7)
        return front.value
