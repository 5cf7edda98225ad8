"""
avl.py — AVL Tree
==================
Self-balancing BST.  Each node stores its height; the balance factor
(height(left) − height(right)) is derived when needed.

Insert
  Descend with compare/traverse, insert at the null child.  On the way back
  up every ancestor emits update-height then balance-check.  When
  |balance| > 1 the case is picked by comparing the inserted value with the
  child's value:

      LL  balance >  1, value < left.value    → rotate_right(node)
      RR  balance < −1, value > right.value   → rotate_left(node)
      LR  balance >  1, value > left.value    → rotate_left(left), rotate_right(node)
      RL  balance < −1, value < right.value   → rotate_right(right), rotate_left(node)

Delete
  Plain BST delete, then the same climb.  There is no new key to compare
  against, so the case comes from the child's own balance factor:
  LL if bf(left) ≥ 0, LR if bf(left) < 0, RR if bf(right) ≤ 0, RL if bf(right) > 0.

Rotations
  rotate-* is emitted first, the links are swapped (the pivot's inner child
  moves across to the old root), then update-height for the node that became
  the child followed by the new subtree root.  No node is allocated and no
  subtree is walked.

Duplicate inserts and missing deletes end with a message and leave the tree
exactly as it was (no climb is emitted for them).
"""

from typing import Any, Callable, Dict, List, NamedTuple, Optional

from steps import (
    BalanceCheck, Compare, Delete, Found, Insert, Message, Replace, RotateLeft, RotateRight,
    StepGenerator, Trace, Traverse, UpdateHeight, record,
)
from structures.tree import INORDER_PSEUDOCODE, SEARCH_PSEUDOCODE, ArenaTree, TreeNode
from structures.validation import is_number, reject_value


INSERT_PSEUDOCODE: List[str] = [
    "def insert(node, value):",                                                 # 0
    "    if node is None: return Node(value)",                                  # 1
    "    if value < node.value: node.left ← insert(node.left, value)",          # 2
    "    elif value > node.value: node.right ← insert(node.right, value)",      # 3
    "    else: return node  # duplicate",                                       # 4
    "    node.height ← 1 + max(h(node.left), h(node.right))",                   # 5
    "    balance ← h(node.left) − h(node.right)",                               # 6
    "    if balance > 1 and value < node.left.value: return rotate_right(node)",    # 7
    "    if balance < −1 and value > node.right.value: return rotate_left(node)",   # 8
    "    if balance > 1 and value > node.left.value:",                          # 9
    "        node.left ← rotate_left(node.left); return rotate_right(node)",    # 10
    "    if balance < −1 and value < node.right.value:",                        # 11
    "        node.right ← rotate_right(node.right); return rotate_left(node)",  # 12
    "    return node",                                                          # 13
    "def rotate_right(y): x ← y.left; y.left ← x.right; x.right ← y",           # 14
    "def rotate_left(x): y ← x.right; x.right ← y.left; y.left ← x",            # 15
    "    update height(old root), then height(new root)",                       # 16
]

DELETE_PSEUDOCODE: List[str] = [
    "def delete(node, value):",                                                 # 0
    "    if node is None: return None  # not found",                            # 1
    "    if value < node.value: node.left ← delete(node.left, value)",          # 2
    "    elif value > node.value: node.right ← delete(node.right, value)",      # 3
    "    else:",                                                                # 4
    "        if node.left is None or node.right is None: node ← other child",   # 5
    "        else: succ ← min(node.right); node.value ← succ.value",            # 6
    "              node.right ← delete(node.right, succ.value)",                # 7
    "    if node is None: return None",                                         # 8
    "    node.height ← 1 + max(h(node.left), h(node.right))",                   # 9
    "    balance ← h(node.left) − h(node.right)",                               # 10
    "    if balance > 1 and bf(node.left) >= 0: return rotate_right(node)",     # 11
    "    if balance > 1 and bf(node.left) < 0: rotate_left(node.left); return rotate_right(node)",   # 12
    "    if balance < −1 and bf(node.right) <= 0: return rotate_left(node)",    # 13
    "    if balance < −1 and bf(node.right) > 0: rotate_right(node.right); return rotate_left(node)",  # 14
    "    return node",                                                          # 15
    "def rotate_right(y): x ← y.left; y.left ← x.right; x.right ← y",           # 16
    "def rotate_left(x): y ← x.right; x.right ← y.left; y.left ← x",            # 17
    "    update height(old root), then height(new root)",                       # 18
]

PSEUDOCODE = {
    "insert":  INSERT_PSEUDOCODE,
    "delete":  DELETE_PSEUDOCODE,
    "search":  SEARCH_PSEUDOCODE,
    "inorder": INORDER_PSEUDOCODE,
}

CASE_NAMES = {"LL": "Left-Left", "RR": "Right-Right", "LR": "Left-Right", "RL": "Right-Left"}


class _ClimbLines(NamedTuple):
    """code_line positions of the rebalancing climb within one listing."""
    height:       int
    balance:      int
    cases:        Dict[str, int]
    rotate_right: int
    rotate_left:  int
    heights:      int


_INSERT_LINES = _ClimbLines(height=5, balance=6, cases={"LL": 7, "RR": 8, "LR": 10, "RL": 12},
                            rotate_right=14, rotate_left=15, heights=16)
_DELETE_LINES = _ClimbLines(height=9, balance=10, cases={"LL": 11, "LR": 12, "RR": 13, "RL": 14},
                            rotate_right=16, rotate_left=17, heights=18)

CaseChooser = Callable[[TreeNode, int], Optional[str]]


class AVLTree(ArenaTree):

    # ------------------------------------------------------------------
    # Height bookkeeping
    # ------------------------------------------------------------------
    def _h(self, node_id: Optional[int]) -> int:
        return 0 if node_id is None else self._nodes[node_id].height

    def balance_factor(self, node_id: Optional[int]) -> int:
        if node_id is None:
            return 0
        node = self._nodes[node_id]
        return self._h(node.left) - self._h(node.right)

    def _refresh_height(self, node_id: int) -> TreeNode:
        node = self._nodes[node_id]
        return self._update(node_id, height=1 + max(self._h(node.left), self._h(node.right)))

    def is_balanced(self) -> bool:
        """Every balance factor in {−1, 0, 1} and every stored height consistent."""
        for node in self:
            if abs(self.balance_factor(node.id)) > 1:
                return False
            if node.height != self.height_of(node.id):
                return False
        return True

    def _describe(self, node: TreeNode) -> Dict[str, Any]:
        return {
            "id":             node.id,
            "value":          node.value,
            "height":         node.height,
            "balance_factor": self.balance_factor(node.id),
        }

    # ------------------------------------------------------------------
    # Rotations
    # ------------------------------------------------------------------
    def _rotate_right(self, y_id: int, lines: _ClimbLines) -> StepGenerator:
        y = self._nodes[y_id]
        yield RotateRight(node_id=y.id, message=f"Performing right rotation on node {y.value}.",
                          code_line=lines.rotate_right)
        x = self._nodes[y.left]
        self._update(y.id, left=x.right)
        self._update(x.id, right=y.id)

        y = self._refresh_height(y.id)
        x = self._refresh_height(x.id)
        yield UpdateHeight(node_id=y.id, height=y.height,
                           message=f"Updated height of {y.value} to {y.height} after rotation.",
                           code_line=lines.heights)
        yield UpdateHeight(node_id=x.id, height=x.height,
                           message=f"{x.value} is the new subtree root with height {x.height}.",
                           code_line=lines.heights)
        return x.id

    def _rotate_left(self, x_id: int, lines: _ClimbLines) -> StepGenerator:
        x = self._nodes[x_id]
        yield RotateLeft(node_id=x.id, message=f"Performing left rotation on node {x.value}.",
                         code_line=lines.rotate_left)
        y = self._nodes[x.right]
        self._update(x.id, right=y.left)
        self._update(y.id, left=x.id)

        x = self._refresh_height(x.id)
        y = self._refresh_height(y.id)
        yield UpdateHeight(node_id=x.id, height=x.height,
                           message=f"Updated height of {x.value} to {x.height} after rotation.",
                           code_line=lines.heights)
        yield UpdateHeight(node_id=y.id, height=y.height,
                           message=f"{y.value} is the new subtree root with height {y.height}.",
                           code_line=lines.heights)
        return y.id

    # ------------------------------------------------------------------
    # Rebalancing climb (shared by insert and delete)
    # ------------------------------------------------------------------
    def _climb(self, node_id: int, lines: _ClimbLines, choose: CaseChooser) -> StepGenerator:
        """Fix height and balance at one ancestor.  Returns the subtree's new root id."""
        node = self._refresh_height(node_id)
        yield UpdateHeight(node_id=node.id, height=node.height,
                           message=f"Updating height of {node.value} to {node.height} as we backtrack.",
                           code_line=lines.height)

        balance = self.balance_factor(node.id)
        yield BalanceCheck(node_id=node.id, balance=balance,
                           message=f"Balance factor of {node.value} is {balance}.",
                           code_line=lines.balance)

        case = choose(node, balance)
        if case is None:
            return node.id

        yield Message(message=f"Tree unbalanced at {node.value} ({CASE_NAMES[case]} case).",
                      code_line=lines.cases[case])
        if case == "LL":
            return (yield from self._rotate_right(node.id, lines))
        if case == "RR":
            return (yield from self._rotate_left(node.id, lines))
        if case == "LR":
            new_left = yield from self._rotate_left(node.left, lines)
            self._update(node.id, left=new_left)
            return (yield from self._rotate_right(node.id, lines))
        new_right = yield from self._rotate_right(node.right, lines)
        self._update(node.id, right=new_right)
        return (yield from self._rotate_left(node.id, lines))

    def _insert_case(self, value: float) -> CaseChooser:
        def choose(node: TreeNode, balance: int) -> Optional[str]:
            if balance > 1:
                return "LL" if value < self._nodes[node.left].value else "LR"
            if balance < -1:
                return "RR" if value > self._nodes[node.right].value else "RL"
            return None
        return choose

    def _delete_case(self, node: TreeNode, balance: int) -> Optional[str]:
        if balance > 1:
            return "LL" if self.balance_factor(node.left) >= 0 else "LR"
        if balance < -1:
            return "RR" if self.balance_factor(node.right) <= 0 else "RL"
        return None

    # ==================================================================
    # insert
    # ==================================================================
    def insert(self, value: float) -> Trace:
        """Result: id of the new node, or None for a duplicate."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._insert_run(value))

    def _insert_run(self, value: float) -> StepGenerator:
        self.root, new_id = yield from self._insert(self.root, None, value, self._insert_case(value))
        return new_id

    def _insert(self, node_id: Optional[int], parent_id: Optional[int], value: float,
                choose: CaseChooser) -> StepGenerator:
        """Returns (subtree root id, inserted node id or None)."""
        node = self._child(node_id)
        if node is None:
            leaf = self._allocate(value)
            yield Insert(node_id=leaf.id, parent_id=parent_id, value=value,
                         message=f"Node {value} inserted.", code_line=1)
            return leaf.id, leaf.id

        yield Compare(node_id=node.id, message=f"Comparing {value} with {node.value}.", code_line=0)
        if value < node.value:
            yield Traverse(from_id=node.id, to_id=node.left, message="Going left.", code_line=2)
            sub_root, new_id = yield from self._insert(node.left, node.id, value, choose)
            self._update(node.id, left=sub_root)
        elif value > node.value:
            yield Traverse(from_id=node.id, to_id=node.right, message="Going right.", code_line=3)
            sub_root, new_id = yield from self._insert(node.right, node.id, value, choose)
            self._update(node.id, right=sub_root)
        else:
            yield Message(message=f"{value} already exists. No changes made.", code_line=4)
            return node.id, None

        if new_id is None:
            return node.id, None
        return (yield from self._climb(node.id, _INSERT_LINES, choose)), new_id

    # ==================================================================
    # delete
    # ==================================================================
    def delete(self, value: float) -> Trace:
        """Result: True when a node was removed."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._delete_run(value))

    def _delete_run(self, value: float) -> StepGenerator:
        self.root, removed = yield from self._delete(self.root, value)
        return removed

    def _delete(self, node_id: Optional[int], value: float) -> StepGenerator:
        """Returns (subtree root id, removed?)."""
        node = self._child(node_id)
        if node is None:
            yield Message(message=f"Value {value} not found.", code_line=1)
            return None, False

        yield Compare(node_id=node.id, message=f"Searching for {value}, current: {node.value}.", code_line=0)

        if value < node.value:
            yield Traverse(from_id=node.id, to_id=node.left, message="Going left.", code_line=2)
            sub_root, removed = yield from self._delete(node.left, value)
            self._update(node.id, left=sub_root)
            current: Optional[int] = node.id
        elif value > node.value:
            yield Traverse(from_id=node.id, to_id=node.right, message="Going right.", code_line=3)
            sub_root, removed = yield from self._delete(node.right, value)
            self._update(node.id, right=sub_root)
            current = node.id
        else:
            yield Found(node_id=node.id, message=f"Found {value}.", code_line=4)
            removed = True
            if node.left is None or node.right is None:
                current = node.left if node.left is not None else node.right
                outcome = "a leaf" if current is None else "replaced by its only child"
                yield Delete(node_id=node.id, message=f"Removing {value}; it is {outcome}.", code_line=5)
                self._release(node.id)
            else:
                successor = yield from self._descend_to_min(node.right, code_line=6)
                yield Replace(node_id=node.id, replacement_value=successor.value,
                              message=f"Replacing with in-order successor {successor.value}.", code_line=6)
                self._update(node.id, value=successor.value)
                yield Message(message=f"Deleting the original successor {successor.value} "
                                      f"from the right subtree.", code_line=7)
                sub_root, _ = yield from self._delete(node.right, successor.value)
                self._update(node.id, right=sub_root)
                current = node.id

        if current is None or not removed:
            return current, removed
        return (yield from self._climb(current, _DELETE_LINES, self._delete_case)), True

