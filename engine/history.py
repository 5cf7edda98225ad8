"""
history.py — Linear Undo / Redo
================================
A cursor over an ordered list of immutable snapshots.

    h = History(initial)
    h.set(next_state)      # truncates anything past the cursor, then appends
    h.undo(); h.redo()     # move the cursor; no-op at either end
    h.reset(fresh)         # forget everything, cursor back to 0

Snapshots are never copied or mutated here: a state handed to set() is the
state handed back by undo()/redo().  Equality decides whether set() records
anything at all, so callers must give their state types a structural __eq__.
"""

from typing import Generic, List, TypeVar


T = TypeVar("T")


class History(Generic[T]):

    def __init__(self, initial: T):
        self._snapshots: List[T] = [initial]
        self._cursor:    int     = 0

    @property
    def state(self) -> T:
        return self._snapshots[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)

    def set(self, new_state: T) -> bool:
        """Record `new_state`.  Returns False (and records nothing) if it equals the current state."""
        if new_state == self.state:
            return False
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(new_state)
        self._cursor += 1
        return True

    def undo(self) -> T:
        if self.can_undo:
            self._cursor -= 1
        return self.state

    def redo(self) -> T:
        if self.can_redo:
            self._cursor += 1
        return self.state

    def reset(self, new_state: T) -> None:
        self._snapshots = [new_state]
        self._cursor    = 0
