"""
stack.py — LIFO Stack
======================
Top of the stack is the last element.  pop and peek emit ``peek`` on the top
element first.
"""

from typing import List

from steps import Message, Peek, Pop, Push, StepGenerator, Trace, record
from structures.sequence import ElementSequence
from structures.validation import is_number, reject_value


PSEUDOCODE: List[str] = [
    "def push(value):",                           # 0
    "    element ← Element(value)",               # 1
    "    top.append(element)",                    # 2
    "def pop():",                                 # 3
    "    if stack is empty: return",              # 4
    "    element ← top",                          # 5
    "    remove top; return element",             # 6
    "def peek(): return top",                     # 7
]


class Stack(ElementSequence):

    def push(self, value: float) -> Trace:
        """Result: id of the new element."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._push(value))

    def _push(self, value: float) -> StepGenerator:
        yield Message(message=f"Creating new element with value {value}.", code_line=1)
        element = self._allocate(value)
        self._items = self._items + (element,)
        yield Push(element_id=element.id, value=value,
                   message=f"Pushing {value} onto the top of the stack.", code_line=2)
        return element.id

    def pop(self) -> Trace:
        """Result: the removed value, or None when empty."""
        return record(self._pop())

    def _pop(self) -> StepGenerator:
        if not self._items:
            yield Message(message="Stack is empty. Cannot pop.", code_line=4)
            return None
        top = self._items[-1]
        yield Peek(element_id=top.id, message=f"About to pop {top.value} from the top.", code_line=5)
        self._items = self._items[:-1]
        yield Pop(element_id=top.id, message=f"Element {top.value} has been popped.", code_line=6)
        return top.value

    def peek(self) -> Trace:
        """Result: the top value, or None when empty."""
        return record(self._peek())

    def _peek(self) -> StepGenerator:
        if not self._items:
            yield Message(message="Stack is empty. Cannot peek.", code_line=4)
            return None
        top = self._items[-1]
        yield Peek(element_id=top.id, message=f"Peeking at the top element: {top.value}.", code_line=7)
        return top.value
