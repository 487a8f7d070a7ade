"""
treetrace - step-traced BST, AVL, B-tree and B+ tree engines.

Every ``insert``/``delete`` returns the ordered list of atomic steps it
took, each carrying an immutable snapshot of the tree at that instant.
"""

from .core import (
    TreeTraceException,
    InvalidOrderError,
    UnknownTreeTypeError,
    CommandParseError,
    TreeInvariantError,
    TreeType,
    StepKind,
)
from .primitives import (
    BinarySnapshot,
    MultiwaySnapshot,
    OperationStep,
    Command,
    CommandKind,
)
from .validation import TreeValidator
from .engines import (
    TreeEngine,
    BinarySearchTree,
    AVLTree,
    BTree,
    BPlusTree,
    create_tree,
)

__version__ = "0.1.0"

__all__ = [
    "TreeTraceException",
    "InvalidOrderError",
    "UnknownTreeTypeError",
    "CommandParseError",
    "TreeInvariantError",
    "TreeType",
    "StepKind",
    "BinarySnapshot",
    "MultiwaySnapshot",
    "OperationStep",
    "Command",
    "CommandKind",
    "TreeEngine",
    "BinarySearchTree",
    "AVLTree",
    "BTree",
    "BPlusTree",
    "create_tree",
    "TreeValidator",
]
