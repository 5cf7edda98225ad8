"""Shared storage for Queue and Stack: a tuple of frozen elements."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Element:
    id:    int
    value: float


class ElementSequence:
    """
    Elements are kept in a tuple, so a clone is just a reference copy and an
    operation replaces the tuple instead of editing it.
    """

    def __init__(self):
        self._items:   Tuple[Element, ...] = ()
        self._next_id: int                 = 1

    def clone(self):
        twin = self.__class__()
        twin._items   = self._items
        twin._next_id = self._next_id
        return twin

    def _allocate(self, value: float) -> Element:
        element = Element(id=self._next_id, value=value)
        self._next_id += 1
        return element

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def values(self) -> List[float]:
        return [e.value for e in self._items]

    def snapshot(self) -> List[Dict[str, Any]]:
        return [{"id": e.id, "value": e.value} for e in self._items]

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.snapshot() == other.snapshot()

    __hash__ = None  # mutable; compared by value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.values()})"
