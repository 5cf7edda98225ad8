"""
workspace.py — Application State & Operations
===============================================
Everything one visualizer session holds:

  • AppState   – frozen aggregate of every structure, graph, grid and array
  • History    – linear undo/redo over AppState snapshots
  • Stepper    – playback over the trace of the last operation
  • Recorder   – metrics for the last operation

    ws = Workspace()
    ws.run("avl.insert", value=30)
    ws.stepper.next_step()
    ws.snapshot()

Every operation works on a clone of the structure it touches, so the
AppState it started from is still intact in History afterwards.  States are
compared structurally: an operation that changes nothing (duplicate insert,
search, delete miss) does not add a history entry.
"""

import logging
import random
from dataclasses import asdict, dataclass, replace
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from algorithms import DAG, GRID, MST, RECURSION, SORTING, SSSP, AlgoInfo, list_algorithms
from algorithms.recursion import RecursionGraph
from algorithms.sorting import random_array
from engine.history import History
from engine.recorder import Recorder
from engine.stepper import Stepper
from graph import Graph, Grid
from settings import VisualizerSettings
from steps import Cell, StepGenerator, Trace, record, to_plain
from structures import AVLTree, BinarySearchTree, HashTable, Queue, SinglyLinkedList, Stack, is_number
from structures import avl, bst, hash_table, linked_list, queue, stack


LOGGER = logging.getLogger(__name__)


# structure concepts (algorithm concepts live in the algorithms registry)
BST         = "bst"
AVL         = "avl"
LINKED_LIST = "linked_list"
QUEUE       = "queue"
STACK       = "stack"
HASH_TABLE  = "hash_table"

STRUCTURE_CONCEPTS = (BST, AVL, LINKED_LIST, QUEUE, STACK, HASH_TABLE)
CONCEPTS = STRUCTURE_CONCEPTS + (SSSP, DAG, MST, RECURSION, SORTING, GRID)

STRUCTURE_FACTORIES: Dict[str, Callable[[], Any]] = {
    BST:         BinarySearchTree,
    AVL:         AVLTree,
    LINKED_LIST: SinglyLinkedList,
    QUEUE:       Queue,
    STACK:       Stack,
}

SAMPLE_KEYS = ("apple", "banana", "cherry", "grape", "lemon", "mango", "peach", "plum")
SAMPLE_SIZE = 7


class UnknownOperationError(ValueError):
    """No operation is registered under the requested key."""


class UnknownConceptError(ValueError):
    """No piece of application state is registered under the requested concept."""


# ---------------------------------------------------------------------------
# AppState: one immutable snapshot of the whole session
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AppState:
    bst:         BinarySearchTree
    avl:         AVLTree
    linked_list: SinglyLinkedList
    queue:       Queue
    stack:       Stack
    hash_table:  HashTable
    sssp:        Graph
    dag:         Graph
    mst:         Graph
    grid:        Grid
    sorting:     Tuple[float, ...]       = ()
    recursion:   Optional[RecursionGraph] = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            BST:         self.bst.snapshot(),
            AVL:         self.avl.snapshot(),
            LINKED_LIST: self.linked_list.snapshot(),
            QUEUE:       self.queue.snapshot(),
            STACK:       self.stack.snapshot(),
            HASH_TABLE:  self.hash_table.snapshot(),
            SSSP:        self.sssp.to_dict(),
            DAG:         self.dag.to_dict(),
            MST:         self.mst.to_dict(),
            GRID:        self.grid.snapshot(),
            SORTING:     list(self.sorting),
            RECURSION:   self.recursion._asdict() if self.recursion else None,
        }


# ---------------------------------------------------------------------------
# Operation: one entry of the operation table
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Operation:
    key:         str
    label:       str
    concept:     str
    pseudocode:  List[str]
    method:      Optional[str] = None    # structure method; None for registry algorithms
    takes_value: bool          = False
    takes_key:   bool          = False
    algorithm:   Optional[AlgoInfo] = None   # registry card for algorithm operations

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "key":         self.key,
            "label":       self.label,
            "concept":     self.concept,
            "pseudocode":  list(self.pseudocode),
            "takes_value": self.takes_value,
            "takes_key":   self.takes_key,
        }
        if self.algorithm is not None:
            card = self.algorithm.to_dict()
            data.update({k: v for k, v in card.items() if k not in data})
        return data


def _structure_operations() -> List[Operation]:
    ops = []
    for concept, module, name in ((BST, bst, "BST"), (AVL, avl, "AVL")):
        ops += [
            Operation(f"{concept}.insert", f"{name} insert", concept, module.PSEUDOCODE["insert"],
                      "insert", takes_value=True),
            Operation(f"{concept}.delete", f"{name} delete", concept, module.PSEUDOCODE["delete"],
                      "delete", takes_value=True),
            Operation(f"{concept}.search", f"{name} search", concept, module.PSEUDOCODE["search"],
                      "search", takes_value=True),
            Operation(f"{concept}.inorder", f"{name} in-order traversal", concept, module.PSEUDOCODE["inorder"],
                      "inorder_traversal"),
        ]
    ll = linked_list.PSEUDOCODE
    ops += [
        Operation("linked_list.insert_head", "Linked list insert at head", LINKED_LIST, ll["insert_head"],
                  "insert_at_head", takes_value=True),
        Operation("linked_list.insert_tail", "Linked list insert at tail", LINKED_LIST, ll["insert_tail"],
                  "insert_at_tail", takes_value=True),
        Operation("linked_list.delete", "Linked list delete", LINKED_LIST, ll["delete"],
                  "delete", takes_value=True),
        Operation("linked_list.search", "Linked list search", LINKED_LIST, ll["search"],
                  "search", takes_value=True),
        Operation("queue.enqueue", "Enqueue", QUEUE, queue.PSEUDOCODE, "enqueue", takes_value=True),
        Operation("queue.dequeue", "Dequeue", QUEUE, queue.PSEUDOCODE, "dequeue"),
        Operation("queue.peek", "Queue peek", QUEUE, queue.PSEUDOCODE, "peek"),
        Operation("stack.push", "Push", STACK, stack.PSEUDOCODE, "push", takes_value=True),
        Operation("stack.pop", "Pop", STACK, stack.PSEUDOCODE, "pop"),
        Operation("stack.peek", "Stack peek", STACK, stack.PSEUDOCODE, "peek"),
    ]
    ht = hash_table.PSEUDOCODE
    ops += [
        Operation("hash_table.insert", "Hash table insert", HASH_TABLE, ht["insert"],
                  "insert", takes_value=True, takes_key=True),
        Operation("hash_table.search", "Hash table search", HASH_TABLE, ht["search"],
                  "search", takes_key=True),
        Operation("hash_table.delete", "Hash table delete", HASH_TABLE, ht["delete"],
                  "delete", takes_key=True),
    ]
    return ops


def _algorithm_operations() -> List[Operation]:
    return [
        Operation(info.key, info.label, info.concept, info.pseudocode,
                  takes_value=info.needs_start or info.concept == RECURSION, algorithm=info)
        for info in list_algorithms()
    ]


OPERATIONS: Dict[str, Operation] = {op.key: op for op in _structure_operations() + _algorithm_operations()}


def get_operation(op_key: str) -> Operation:
    try:
        return OPERATIONS[op_key]
    except KeyError:
        raise UnknownOperationError(f"Unknown operation: {op_key}") from None


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------
def coerce_value(value: Any) -> Any:
    """Numeric strings become int / float; anything else is passed through for the operation to judge."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    for parse in (int, float):
        try:
            return parse(text)
        except ValueError:
            continue
    return value


def parse_numbers(raw: str) -> List[float]:
    """'5, 3 8' → [5, 3, 8].  Raises ValueError on the first token that is not a number."""
    values = []
    for token in raw.replace(",", " ").split():
        value = coerce_value(token)
        if not is_number(value):
            raise ValueError(f"Invalid value {token!r}: a number is required.")
        values.append(value)
    return values


def parse_entries(raw: str) -> List[Tuple[str, float]]:
    """'apple:3, pear=5' → [("apple", 3), ("pear", 5)]."""
    entries = []
    for token in raw.replace(",", " ").split():
        sep = ":" if ":" in token else "="
        key, _, value_raw = token.partition(sep)
        value = coerce_value(value_raw)
        if not key or not is_number(value):
            raise ValueError(f"Invalid entry {token!r}: expected key:number.")
        entries.append((key, value))
    return entries


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    """
    Attributes:
        settings : VisualizerSettings the session was built from.
        history  : History[AppState].
        stepper  : Stepper over the last operation's trace.
        recorder : Recorder of the last operation (None before the first run).
    """

    def __init__(self, settings: Optional[VisualizerSettings] = None,
                 on_step: Optional[Callable] = None):
        self.settings = settings or VisualizerSettings()
        self.history:  History[AppState]  = History(self.initial_state())
        self.stepper:  Stepper            = Stepper(on_step=on_step, speed=self.settings.playback_speed)
        self.recorder: Optional[Recorder] = None
        self.last_op:  Optional[str]      = None

    @property
    def state(self) -> AppState:
        return self.history.state

    # ------------------------------------------------------------------
    # Construction of concept data
    # ------------------------------------------------------------------
    def initial_state(self) -> AppState:
        return AppState(
            bst=BinarySearchTree(),
            avl=AVLTree(),
            linked_list=SinglyLinkedList(),
            queue=Queue(),
            stack=Stack(),
            hash_table=HashTable(self.settings.hash_table_buckets),
            sssp=Graph.sssp_sample(),
            dag=Graph.dag_sample(),
            mst=Graph.mst_sample(),
            grid=Grid.empty(self.settings.grid_rows, self.settings.grid_cols),
        )

    def _empty(self, concept: str) -> Any:
        if concept in (SSSP, DAG):
            return Graph(directed=True)
        if concept == MST:
            return Graph(directed=False)
        if concept == GRID:
            return Grid.empty(self.settings.grid_rows, self.settings.grid_cols)
        if concept == SORTING:
            return ()
        if concept == RECURSION:
            return None
        if concept == HASH_TABLE:
            return HashTable(self.settings.hash_table_buckets)
        if concept in STRUCTURE_FACTORIES:
            return STRUCTURE_FACTORIES[concept]()
        return self._unknown(concept)

    def _unknown(self, concept: str):
        raise UnknownConceptError(f"Unknown concept: {concept}")

    def _sample(self, concept: str, seed: Optional[int]) -> Any:
        rng = random.Random(seed)
        if concept in (BST, AVL, LINKED_LIST, QUEUE, STACK):
            values = rng.sample(range(1, 100), SAMPLE_SIZE)
            return self._filled(concept, values)
        if concept == HASH_TABLE:
            keys = rng.sample(SAMPLE_KEYS, 5)
            return self._filled(concept, [(k, rng.randint(1, 99)) for k in keys])
        if concept == SSSP:
            return Graph.sssp_sample() if seed is None else Graph.generate_random(seed=seed)
        if concept == DAG:
            return Graph.dag_sample()
        if concept == MST:
            if seed is None:
                return Graph.mst_sample()
            return Graph.generate_random(directed=False, edge_probability=0.4, seed=seed)
        if concept == SORTING:
            return tuple(random_array(self.settings.sorting_sample_size, seed=seed))
        if concept == GRID:
            return Grid.randomized(self.settings.grid_rows, self.settings.grid_cols, seed=seed)
        if concept == RECURSION:
            raise ValueError("Recursion has no sample data; run a Fibonacci operation instead.")
        return self._unknown(concept)

    def _filled(self, concept: str, items: List[Any]) -> Any:
        """A fresh structure with `items` inserted; the insertion traces are discarded."""
        structure = self._empty(concept)
        for item in items:
            if concept == HASH_TABLE:
                structure.insert(*item)
            elif concept == LINKED_LIST:
                structure.insert_at_tail(item)
            elif concept == QUEUE:
                structure.enqueue(item)
            elif concept == STACK:
                structure.push(item)
            else:
                structure.insert(item)
        return structure

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def run(self, op_key: str, value: Any = None, key: Optional[str] = None) -> Trace:
        """Execute one operation, push the resulting state, load its trace into the stepper."""
        op = get_operation(op_key)
        state = self.state
        inputs = {"value": value, "key": key}

        if op.method is not None:
            structure = getattr(state, op.concept).clone()
            args = self._structure_args(op, value, key)
            call = partial(getattr(structure, op.method), *args)
            new_state = replace(state, **{op.concept: structure})
        else:
            call = partial(record, self._algorithm_generator(op, state, value))
            new_state = state

        recorder = Recorder()
        trace = recorder.run(op.key, op.label, op.concept, call, inputs)
        if op.concept == RECURSION and trace.result is not None:
            new_state = replace(state, recursion=trace.result)

        self.history.set(new_state)
        self.recorder = recorder
        self.last_op  = op.key
        self.stepper.load(trace.steps)
        return trace

    @staticmethod
    def _structure_args(op: Operation, value: Any, key: Optional[str]) -> Tuple:
        args: Tuple = ()
        if op.takes_key:
            args += ("" if key is None else str(key),)
        if op.takes_value:
            args += (coerce_value(value),)
        return args

    def _algorithm_generator(self, op: Operation, state: AppState, value: Any) -> StepGenerator:
        info = op.algorithm
        if op.concept in (SSSP, DAG, MST):
            graph = getattr(state, op.concept)
            if not info.needs_start:
                return info.fn(graph)
            start = coerce_value(value) if value is not None else (graph.nodes[0] if graph.nodes else None)
            return info.fn(graph, start)
        if op.concept == RECURSION:
            limit = (self.settings.fibonacci_memo_limit if op.key == "fibonacci_memo"
                     else self.settings.fibonacci_limit)
            n = coerce_value(value)
            return info.fn(n, limit=limit)
        if op.concept == SORTING:
            return info.fn(list(state.sorting))
        if op.concept == GRID:
            return info.fn(state.grid)
        return self._unknown(op.concept)

    # ------------------------------------------------------------------
    # Data management
    # ------------------------------------------------------------------
    def load_sample(self, concept: str, seed: Optional[int] = None) -> AppState:
        self._commit(concept, self._sample(concept, seed))
        LOGGER.info("Loaded sample data for %s (seed=%s)", concept, seed)
        return self.state

    def load_values(self, concept: str, raw: str, layout: str = "list") -> AppState:
        """
        Replace a concept's data with user-supplied text.  Graph concepts read
        `layout` "list" (adjacency list) or "matrix" (adjacency matrix).
        Raises ValueError on malformed input.
        """
        if layout not in ("list", "matrix"):
            raise ValueError(f"Unknown graph layout: {layout}")
        if concept not in CONCEPTS:
            return self._unknown(concept)
        if concept in (SSSP, DAG, MST):
            parse = Graph.from_adjacency_matrix if layout == "matrix" else Graph.from_adjacency_list
            data = parse(raw, directed=concept != MST)
        elif layout == "matrix":
            raise ValueError(f"{concept} data cannot be loaded from a matrix.")
        elif concept in (BST, AVL, LINKED_LIST, QUEUE, STACK):
            data = self._filled(concept, parse_numbers(raw))
        elif concept == HASH_TABLE:
            data = self._filled(concept, parse_entries(raw))
        elif concept == SORTING:
            data = tuple(parse_numbers(raw))
        else:
            raise ValueError(f"{concept} data cannot be loaded from text.")
        self._commit(concept, data)
        LOGGER.info("Loaded user data for %s", concept)
        return self.state

    def reset_concept(self, concept: str) -> AppState:
        """Empty one concept and discard the undo/redo history; other concepts keep their data."""
        self.history.reset(replace(self.state, **{concept: self._empty(concept)}))
        self._clear_playback()
        LOGGER.info("Reset %s; history reset", concept)
        return self.state

    def toggle_wall(self, cell: Cell) -> AppState:
        self._commit(GRID, self.state.grid.toggle_wall(tuple(cell)))
        return self.state

    def _commit(self, concept: str, data: Any) -> None:
        self.history.set(replace(self.state, **{concept: data}))
        self._clear_playback()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def undo(self) -> bool:
        if not self.history.can_undo:
            return False
        self.history.undo()
        self._clear_playback()
        return True

    def redo(self) -> bool:
        if not self.history.can_redo:
            return False
        self.history.redo()
        self._clear_playback()
        return True

    def _clear_playback(self) -> None:
        self.stepper.reset()
        self.recorder = None
        self.last_op  = None

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Render-ready view of the whole session."""
        last_run = None
        if self.recorder is not None:
            last_run = {
                "op_key":  self.last_op,
                "result":  plain_result(self.recorder.result),
                "metrics": asdict(self.recorder.metrics),
            }
        return {
            "state":    self.state.snapshot(),
            "history":  {
                "can_undo": self.history.can_undo,
                "can_redo": self.history.can_redo,
                "size":     len(self.history),
            },
            "playback": self.stepper.to_dict(),
            "last_run": last_run,
        }


def plain_result(result: Any) -> Any:
    """JSON-friendly rendering of an operation result (named tuples keep their field names)."""
    if hasattr(result, "_asdict"):
        return to_plain(result._asdict())
    return to_plain(result)
