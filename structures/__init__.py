"""
structures/
-----------
Data-structure engines.  Every mutating or querying operation returns a
``steps.Trace``; ``clone()`` gives an independent copy that shares unchanged
records with the original.

    from structures import AVLTree
    tree = AVLTree()
    trace = tree.insert(30)
"""

from structures.avl import AVLTree
from structures.bst import BinarySearchTree
from structures.hash_table import DEFAULT_BUCKETS, HashTable, bucket_index
from structures.linked_list import SinglyLinkedList
from structures.queue import Queue
from structures.stack import Stack
from structures.validation import is_number

__all__ = [
    "AVLTree", "BinarySearchTree", "HashTable", "SinglyLinkedList", "Queue", "Stack",
    "DEFAULT_BUCKETS", "bucket_index", "is_number",
]
