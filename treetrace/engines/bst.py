from treetrace.nodes import BinaryNode

from .binary_tree import BinaryTreeEngine


class BinarySearchTree(BinaryTreeEngine):
    """Unbalanced binary search tree with step tracing."""

    node_class = BinaryNode

    def height(self) -> int:
        return self._height(self.root)
