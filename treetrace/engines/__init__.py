from .base import TreeEngine
from .binary_tree import BinaryTreeEngine
from .bst import BinarySearchTree
from .avl import AVLTree
from .multiway_tree import MultiwayTreeEngine
from .btree import BTree
from .bplus_tree import BPlusTree
from .factory import create_tree, validate_order

__all__ = [
    "TreeEngine",
    "BinaryTreeEngine",
    "BinarySearchTree",
    "AVLTree",
    "MultiwayTreeEngine",
    "BTree",
    "BPlusTree",
    "create_tree",
    "validate_order",
]
