import logging
from typing import List, Optional

from treetrace.core.types import StepKind
from treetrace.nodes import BinaryNode
from treetrace.primitives import BinarySnapshot
from treetrace.trace import clone_binary

from .base import TreeEngine

logger = logging.getLogger(__name__)


class BinaryTreeEngine(TreeEngine):
    """
    Shared insert/delete walk for binary search trees.

    Subclasses hook into the way back up through ``_after_insert`` and
    ``_after_delete``. Children are re-attached in their parent as soon as
    they change, so every recorded snapshot shows the tree as it really is.

    Two-child deletion takes its replacement from the deeper subtree; on
    equal heights from the subtree with more nodes; on a full tie from the
    left (the in-order predecessor).
    """

    node_class = BinaryNode

    def snapshot(self) -> Optional[BinarySnapshot]:
        return clone_binary(self.root)

    def to_array(self) -> List[int]:
        result: List[int] = []
        self._inorder(self.root, result)
        return result

    def _inorder(self, node: Optional[BinaryNode], result: List[int]) -> None:
        if node is not None:
            self._inorder(node.left, result)
            result.append(node.value)
            self._inorder(node.right, result)

    def _create_node(self, value: int) -> BinaryNode:
        return self.node_class(value)

    # ------------------------------
    # INSERT
    # ------------------------------
    def _insert(self, value: int) -> None:
        if self.root is None:
            self._record(StepKind.CREATE, "The tree is empty, creating a root node",
                         creating_value=value)
            self.root = self._create_node(value)
            self._record(StepKind.INSERT, f"Placed {value} at the root",
                         highlighted=[value])
            return

        self._insert_node(self.root, None, value)

    def _insert_node(self, node: BinaryNode, parent: Optional[BinaryNode],
                     value: int) -> bool:
        """Returns False when nothing was inserted (duplicate value)."""
        if value < node.value:
            self._record(StepKind.HIGHLIGHT, f"{value} < {node.value}, go left",
                         highlighted=[node.value])
            if node.left is None:
                self._attach_child(node, "left", value)
            elif not self._insert_node(node.left, node, value):
                return False
        elif value > node.value:
            self._record(StepKind.HIGHLIGHT, f"{value} > {node.value}, go right",
                         highlighted=[node.value])
            if node.right is None:
                self._attach_child(node, "right", value)
            elif not self._insert_node(node.right, node, value):
                return False
        else:
            self._record(StepKind.HIGHLIGHT, f"{value} already exists",
                         highlighted=[value])
            return False

        self._after_insert(node, parent, value)
        return True

    def _attach_child(self, parent: BinaryNode, side: str, value: int) -> None:
        self._record(StepKind.CREATE,
                     f"Creating an empty node as the {side} child of {parent.value}",
                     highlighted=[parent.value], creating_value=value)
        setattr(parent, side, self._create_node(value))
        self._record(StepKind.INSERT, f"Placed {value} in the new node",
                     highlighted=[value])

    # ------------------------------
    # DELETE
    # ------------------------------
    def _delete(self, value: int) -> None:
        self._delete_node(self.root, None, value)

    def _delete_node(self, node: Optional[BinaryNode], parent: Optional[BinaryNode],
                     value: int) -> bool:
        """Returns False when ``value`` was not found below ``node``."""
        if node is None:
            self._record(StepKind.HIGHLIGHT, f"{value} not found")
            return False

        if value < node.value:
            self._record(StepKind.HIGHLIGHT, f"{value} < {node.value}, go left",
                         highlighted=[node.value])
            if not self._delete_node(node.left, node, value):
                return False
        elif value > node.value:
            self._record(StepKind.HIGHLIGHT, f"{value} > {node.value}, go right",
                         highlighted=[node.value])
            if not self._delete_node(node.right, node, value):
                return False
        else:
            self._record(StepKind.HIGHLIGHT, f"Found {value}", highlighted=[value])
            if node.left is None or node.right is None:
                self._splice_out(node, parent)
                return True
            self._replace_from_subtree(node, value)

        self._after_delete(node, parent)
        return True

    def _splice_out(self, node: BinaryNode, parent: Optional[BinaryNode]) -> None:
        """Remove a node with at most one child, lifting the child into its place."""
        child = node.left if node.left is not None else node.right
        self._replace_child(parent, node, child)

        if child is None:
            if parent is None:
                description = f"Removed {node.value}, the tree is now empty"
            else:
                description = f"Removed leaf node {node.value}"
            self._record(StepKind.DELETE, description)
            return

        side = "left" if node.left is not None else "right"
        self._record(StepKind.DELETE,
                     f"Replaced {node.value} with its {side} child {child.value}",
                     highlighted=[child.value])

    def _replace_from_subtree(self, node: BinaryNode, value: int) -> None:
        """Two-child case: copy the neighbouring value up, then delete it below."""
        if self._choose_replacement_side(node):
            neighbour = self._max_node(node.left)
            self._record(StepKind.HIGHLIGHT, f"Predecessor {neighbour.value} found",
                         highlighted=[neighbour.value])
        else:
            neighbour = self._min_node(node.right)
            self._record(StepKind.HIGHLIGHT, f"Successor {neighbour.value} found",
                         highlighted=[neighbour.value])

        use_left = neighbour.value < value
        logger.debug(f"Two-child delete of {value}: replacing with {neighbour.value}")
        node.value = neighbour.value
        self._record(StepKind.HIGHLIGHT, f"Replaced {value} with {neighbour.value}",
                     highlighted=[neighbour.value])

        if use_left:
            self._delete_node(node.left, node, neighbour.value)
        else:
            self._delete_node(node.right, node, neighbour.value)

    def _choose_replacement_side(self, node: BinaryNode) -> bool:
        """True to take the predecessor from the left subtree."""
        left_height = self._height(node.left)
        right_height = self._height(node.right)

        if left_height != right_height:
            use_left = left_height > right_height
            side = "left" if use_left else "right"
            self._record(StepKind.HIGHLIGHT,
                         f"Left height ({left_height}) vs right height ({right_height}), "
                         f"taking the replacement from the {side}",
                         highlighted=[node.value])
            return use_left

        left_count = self._count(node.left)
        right_count = self._count(node.right)
        if left_count != right_count:
            use_left = left_count > right_count
            side = "left" if use_left else "right"
            self._record(StepKind.HIGHLIGHT,
                         f"Equal heights, left nodes ({left_count}) vs right nodes "
                         f"({right_count}), taking the replacement from the {side}",
                         highlighted=[node.value])
            return use_left

        self._record(StepKind.HIGHLIGHT,
                     "Equal heights and node counts, taking the replacement from the left",
                     highlighted=[node.value])
        return True

    # ------------------------------
    # HOOKS
    # ------------------------------
    def _after_insert(self, node: BinaryNode, parent: Optional[BinaryNode],
                      value: int) -> None:
        pass

    def _after_delete(self, node: BinaryNode, parent: Optional[BinaryNode]) -> None:
        pass

    # ------------------------------
    # HELPERS
    # ------------------------------
    def _replace_child(self, parent: Optional[BinaryNode], old: BinaryNode,
                       new: Optional[BinaryNode]) -> None:
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _height(self, node: Optional[BinaryNode]) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))

    def _count(self, node: Optional[BinaryNode]) -> int:
        if node is None:
            return 0
        return 1 + self._count(node.left) + self._count(node.right)

    @staticmethod
    def _min_node(node: BinaryNode) -> BinaryNode:
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _max_node(node: BinaryNode) -> BinaryNode:
        while node.right is not None:
            node = node.right
        return node
