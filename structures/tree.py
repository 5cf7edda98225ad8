"""
tree.py — Arena-backed Binary Tree
===================================
Common storage for the plain BST and the AVL tree.

Nodes live in an arena: ``{node_id: TreeNode}``.  Links are node ids, not
object references, so there are no ownership cycles and a whole tree can be
cloned by copying the arena dict.  TreeNode is frozen; every "mutation"
swaps in a new record under the same id.  A clone therefore shares every
untouched node with the tree it came from, and writing to the clone never
disturbs the original.

Node ids are handed out by a per-tree counter (cloned along with the arena),
so they stay stable for the whole life of a node, including across the
value swap done by two-child deletion.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional

from steps import Compare, Found, Message, StepGenerator, Trace, Traverse, Visit, record
from structures.validation import is_number, reject_value


@dataclass(frozen=True)
class TreeNode:
    id:     int
    value:  float
    left:   Optional[int] = None
    right:  Optional[int] = None
    height: int           = 1


# ---------------------------------------------------------------------------
# Pseudocode shared by both trees
# ---------------------------------------------------------------------------
SEARCH_PSEUDOCODE: List[str] = [
    "def search(node, value):",                    # 0
    "    if node is None: return NOT FOUND",       # 1
    "    if node.value == value: return node",     # 2
    "    if value < node.value:",                  # 3
    "        return search(node.left, value)",     # 4
    "    return search(node.right, value)",        # 5
]

INORDER_PSEUDOCODE: List[str] = [
    "def inorder(node):",                          # 0
    "    if node is None: return",                 # 1
    "    inorder(node.left)",                      # 2
    "    visit(node)",                             # 3
    "    inorder(node.right)",                     # 4
]


class ArenaTree:
    """
    Attributes:
        root      : id of the root node, or None when empty.
        _nodes    : arena {node_id: TreeNode}.
        _next_id  : next id to hand out.
    """

    def __init__(self):
        self.root:     Optional[int]       = None
        self._nodes:   Dict[int, TreeNode] = {}
        self._next_id: int                 = 1

    # ------------------------------------------------------------------
    # Arena plumbing
    # ------------------------------------------------------------------
    def clone(self) -> "ArenaTree":
        twin = self.__class__()
        twin.root     = self.root
        twin._nodes   = dict(self._nodes)
        twin._next_id = self._next_id
        return twin

    def node(self, node_id: int) -> TreeNode:
        return self._nodes[node_id]

    def _child(self, node_id: Optional[int]) -> Optional[TreeNode]:
        return None if node_id is None else self._nodes[node_id]

    def _allocate(self, value: float) -> TreeNode:
        node = TreeNode(id=self._next_id, value=value)
        self._next_id += 1
        self._nodes[node.id] = node
        return node

    def _update(self, node_id: int, **changes: Any) -> TreeNode:
        node = replace(self._nodes[node_id], **changes)
        self._nodes[node_id] = node
        return node

    def _release(self, node_id: int) -> None:
        del self._nodes[node_id]

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        """In-order walk without recursion."""
        stack: List[TreeNode] = []
        cur = self._child(self.root)
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = self._child(cur.left)
            cur = stack.pop()
            yield cur
            cur = self._child(cur.right)

    def values(self) -> List[float]:
        return [n.value for n in self]

    def find_id(self, value: float) -> Optional[int]:
        cur = self._child(self.root)
        while cur is not None:
            if value == cur.value:
                return cur.id
            cur = self._child(cur.left if value < cur.value else cur.right)
        return None

    def height_of(self, node_id: Optional[int]) -> int:
        """Subtree height computed from the structure (1 for a leaf, 0 for None)."""
        node = self._child(node_id)
        if node is None:
            return 0
        return 1 + max(self.height_of(node.left), self.height_of(node.right))

    # ------------------------------------------------------------------
    # Snapshot (render-ready, plain data)
    # ------------------------------------------------------------------
    def snapshot(self) -> Optional[Dict[str, Any]]:
        return self._plain(self.root)

    def _plain(self, node_id: Optional[int]) -> Optional[Dict[str, Any]]:
        node = self._child(node_id)
        if node is None:
            return None
        data = self._describe(node)
        data["children"] = [c for c in (self._plain(node.left), self._plain(node.right)) if c]
        data["left"]  = node.left
        data["right"] = node.right
        return data

    def _describe(self, node: TreeNode) -> Dict[str, Any]:
        return {"id": node.id, "value": node.value}

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.snapshot() == other.snapshot()

    __hash__ = None  # mutable; compared by value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.values()})"

    # ==================================================================
    # OPERATIONS common to both trees
    # ==================================================================
    def search(self, value: float) -> Trace:
        """Result: id of the matching node, or None."""
        if not is_number(value):
            return record(reject_value(value))
        return record(self._search(self.root, value))

    def _search(self, node_id: Optional[int], value: float) -> StepGenerator:
        node = self._child(node_id)
        if node is None:
            yield Message(message=f"Reached a null node. Value {value} not found.", code_line=1)
            return None

        yield Compare(node_id=node.id, message=f"Comparing target {value} with node {node.value}.", code_line=2)
        if node.value == value:
            yield Found(node_id=node.id, message=f"Found {value}!", code_line=2)
            return node.id

        if value < node.value:
            yield Traverse(from_id=node.id, to_id=node.left,
                           message=f"{value} < {node.value}, searching left.", code_line=4)
            return (yield from self._search(node.left, value))

        yield Traverse(from_id=node.id, to_id=node.right,
                       message=f"{value} > {node.value}, searching right.", code_line=5)
        return (yield from self._search(node.right, value))

    def inorder_traversal(self) -> Trace:
        """Result: the values in visiting order."""
        return record(self._inorder_run())

    def _inorder_run(self) -> StepGenerator:
        visited: List[float] = []
        yield Message(message="Starting in-order traversal.", code_line=0)
        yield from self._inorder(self.root, visited)
        yield Message(message=f"In-order traversal complete: {visited}.", code_line=0)
        return visited

    def _inorder(self, node_id: Optional[int], visited: List[float]) -> StepGenerator:
        node = self._child(node_id)
        if node is None:
            return
        yield Message(message=f"Recursively calling on left child of {node.value}.", code_line=2)
        yield from self._inorder(node.left, visited)

        visited.append(node.value)
        yield Visit(node_id=node.id, message=f"Visiting node {node.value}.", code_line=3)

        yield Message(message=f"Recursively calling on right child of {node.value}.", code_line=4)
        yield from self._inorder(node.right, visited)

    def _descend_to_min(self, node_id: int, code_line: int) -> StepGenerator:
        """Walk left-only pointers from `node_id`; returns the minimum node."""
        current = self._nodes[node_id]
        yield Compare(node_id=current.id,
                      message=f"Finding minimum value in subtree. Start at {current.value}.",
                      code_line=code_line)
        while current.left is not None:
            yield Traverse(from_id=current.id, to_id=current.left,
                           message="Going left to find the minimum.", code_line=code_line)
            current = self._nodes[current.left]
            yield Compare(node_id=current.id, message=f"Now at {current.value}.", code_line=code_line)
        return current
