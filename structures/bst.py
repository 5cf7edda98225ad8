"""
bst.py — Plain Binary Search Tree
==================================
Unbalanced BST over the shared arena.  Every operation returns a Trace.

  insert            – empty tree sets the root; otherwise compare/traverse down
                      to the null child
  search            – found on hit, terminal message on miss (inherited)
  delete            – 0/1/2 children; two children take the in-order successor's
                      value, then the successor is removed from the right subtree
  inorder_traversal – visit per node (inherited)
"""

from typing import List, Optional

from steps import (
    Compare, Delete, Found, Insert, Message, Replace, SetRoot, StepGenerator, Trace, Traverse, record,
)
from structures.tree import INORDER_PSEUDOCODE, SEARCH_PSEUDOCODE, ArenaTree
from structures.validation import is_number, reject_value


INSERT_PSEUDOCODE: List[str] = [
    "def insert(node, value):",                                   # 0
    "    if root is None: root ← Node(value); return",            # 1
    "    compare value with node.value",                          # 2
    "    if value < node.value:",                                 # 3
    "        if node.left is None: node.left ← Node(value)",      # 4
    "        else: insert(node.left, value)",                     # 5
    "    elif value > node.value:",                               # 6
    "        if node.right is None: node.right ← Node(value)",    # 7
    "        else: insert(node.right, value)",                    # 8
    "    else: duplicate, nothing to do",                         # 9
]

DELETE_PSEUDOCODE: List[str] = [
    "def delete(node, value):",                                   # 0
    "    if node is None: return None  # not found",              # 1
    "    if value < node.value: node.left ← delete(node.left, value)",     # 2
    "    elif value > node.value: node.right ← delete(node.right, value)", # 3
    "    else:",                                                  # 4
    "        if node.left is None: return node.right",            # 5
    "        if node.right is None: return node.left",            # 6
    "        succ ← min(node.right)",                             # 7
    "        node.value ← succ.value",                            # 8
    "        node.right ← delete(node.right, succ.value)",        # 9
    "    return node",                                            # 10
]

PSEUDOCODE = {
    "insert":  INSERT_PSEUDOCODE,
    "search":  SEARCH_PSEUDOCODE,
    "delete":  DELETE_PSEUDOCODE,
    "inorder": INORDER_PSEUDOCODE,
}


class BinarySearchTree(ArenaTree):

    # ------------------------------------------------------------------
    # insert
    # ------------------------------------------------------------------
    def insert(self, value: float) -> Trace:
        """Result: id of the new node, or None for a duplicate."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._insert_run(value))

    def _insert_run(self, value: float) -> StepGenerator:
        if self.root is None:
            node = self._allocate(value)
            self.root = node.id
            yield SetRoot(node_id=node.id, value=value,
                          message=f"Tree is empty. Setting {value} as the root.", code_line=1)
            return node.id

        current = self._nodes[self.root]
        while True:
            yield Compare(node_id=current.id,
                          message=f"Comparing new value {value} with node {current.value}.", code_line=2)
            if value == current.value:
                yield Message(message=f"Value {value} already exists in the tree. No changes made.",
                              code_line=9)
                return None

            side = "left" if value < current.value else "right"
            child_id = getattr(current, side)
            relation = "<" if side == "left" else ">"
            yield Traverse(from_id=current.id, to_id=child_id,
                           message=f"{value} {relation} {current.value}, so we go {side}.",
                           code_line=3 if side == "left" else 6)

            if child_id is None:
                node = self._allocate(value)
                self._update(current.id, **{side: node.id})
                yield Insert(node_id=node.id, parent_id=current.id, value=value,
                             message=f"{side.capitalize()} child is null. Inserting {value} here.",
                             code_line=4 if side == "left" else 7)
                return node.id
            current = self._nodes[child_id]

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------
    def delete(self, value: float) -> Trace:
        """Result: True when a node was removed."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._delete_run(value))

    def _delete_run(self, value: float) -> StepGenerator:
        found = [False]
        self.root = yield from self._delete(self.root, value, found)
        if found[0]:
            yield Message(message=f"Deletion of {value} complete.", code_line=10)
        return found[0]

    def _delete(self, node_id: Optional[int], value: float, found: List[bool]) -> StepGenerator:
        node = self._child(node_id)
        if node is None:
            yield Message(message=f"Value {value} not found for deletion.", code_line=1)
            return None

        yield Compare(node_id=node.id,
                      message=f"Searching for {value} to delete. Current node: {node.value}.", code_line=0)

        if value < node.value:
            yield Traverse(from_id=node.id, to_id=node.left,
                           message=f"{value} < {node.value}, going left.", code_line=2)
            new_left = yield from self._delete(node.left, value, found)
            self._update(node.id, left=new_left)
            return node.id

        if value > node.value:
            yield Traverse(from_id=node.id, to_id=node.right,
                           message=f"{value} > {node.value}, going right.", code_line=3)
            new_right = yield from self._delete(node.right, value, found)
            self._update(node.id, right=new_right)
            return node.id

        yield Found(node_id=node.id, message=f"Found node {value} to delete.", code_line=4)
        found[0] = True

        if node.left is None or node.right is None:
            survivor = node.right if node.left is None else node.left
            missing = "left" if node.left is None else "right"
            replacement = "right" if missing == "left" else "left"
            yield Delete(node_id=node.id,
                         message=f"Node has no {missing} child. Replaced with {replacement} child.",
                         code_line=5 if missing == "left" else 6)
            self._release(node.id)
            return survivor

        successor = yield from self._descend_to_min(node.right, code_line=7)
        yield Compare(node_id=successor.id, target_id=node.id,
                      message=f"Found in-order successor: {successor.value}.", code_line=7)
        yield Replace(node_id=node.id, replacement_value=successor.value,
                      message=f"Replacing {node.value} with {successor.value}.", code_line=8)
        self._update(node.id, value=successor.value)

        yield Message(message=f"Now deleting the original successor node {successor.value} "
                              f"from the right subtree.", code_line=9)
        new_right = yield from self._delete(node.right, successor.value, [False])
        self._update(node.id, right=new_right)
        return node.id
