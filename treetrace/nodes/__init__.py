from .binary_node import BinaryNode, AVLNode
from .multiway_node import BTreeNode, BPlusTreeNode

__all__ = ["BinaryNode", "AVLNode", "BTreeNode", "BPlusTreeNode"]
