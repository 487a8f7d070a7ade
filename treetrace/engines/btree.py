from bisect import bisect_left
from typing import List, Optional, Tuple

from treetrace.core.types import StepKind
from treetrace.nodes import BTreeNode

from .multiway_tree import MultiwayTreeEngine


class BTree(MultiwayTreeEngine):
    """
    B-tree of order ``m`` with step tracing.

    Every node holds at most ``m - 1`` keys and, apart from the root, at
    least ``ceil(m / 2) - 1``. Internal nodes and leaves both carry keys.
    Deleting a key held by an internal node replaces it with its successor
    and deletes the successor from the leaf it lives in.
    """

    node_class = BTreeNode

    def to_array(self) -> List[int]:
        result: List[int] = []
        self._inorder(self.root, result)
        return result

    def _inorder(self, node: Optional[BTreeNode], result: List[int]) -> None:
        if node is None:
            return
        for i, key in enumerate(node.keys):
            if not node.is_leaf:
                self._inorder(node.children[i], result)
            result.append(key)
        if not node.is_leaf:
            self._inorder(node.children[-1], result)

    # ------------------------------
    # INSERT
    # ------------------------------
    def _insert_into(self, node: BTreeNode, value: int) -> bool:
        index = bisect_left(node.keys, value)
        if index < len(node.keys) and node.keys[index] == value:
            self._record(StepKind.HIGHLIGHT, f"{value} already exists",
                         highlighted=[value])
            return False

        if node.is_leaf:
            self._insert_into_leaf(node, index, value)
            return True

        self._record(StepKind.HIGHLIGHT, f"Descending from {node.keys} into child {index}",
                     highlighted=node.keys)
        if not self._insert_into(node.children[index], value):
            return False
        if self._is_overflowing(node.children[index]):
            self._split_child(node, index)
        return True

    def _divide(self, parent: BTreeNode, index: int) -> Tuple[int, BTreeNode, BTreeNode]:
        return self._divide_internal(parent, index)

    # ------------------------------
    # DELETE
    # ------------------------------
    def _delete_from(self, node: BTreeNode, value: int) -> bool:
        index = bisect_left(node.keys, value)
        found = index < len(node.keys) and node.keys[index] == value

        if found and node.is_leaf:
            self._remove_from_leaf(node, index)
            return True

        if found:
            successor = self._leftmost_key(node.children[index + 1])
            self._record(StepKind.HIGHLIGHT,
                         f"{value} is in an internal node, its successor is {successor}",
                         highlighted=[value, successor])
            node.keys[index] = successor
            self._record(StepKind.HIGHLIGHT, f"Replaced {value} with {successor}",
                         highlighted=[successor])
            self._delete_from(node.children[index + 1], successor)
            self._fix_underflow(node, index + 1)
            return True

        if node.is_leaf:
            self._record(StepKind.HIGHLIGHT, f"{value} not found")
            return False

        self._record(StepKind.HIGHLIGHT, f"Descending from {node.keys} into child {index}",
                     highlighted=node.keys)
        if not self._delete_from(node.children[index], value):
            return False
        self._fix_underflow(node, index)
        return True

    def _borrow_from_left(self, parent: BTreeNode, index: int) -> None:
        down, up = self._borrow_internal_from_left(parent, index)
        self._record_borrow("left", down, up)

    def _borrow_from_right(self, parent: BTreeNode, index: int) -> None:
        down, up = self._borrow_internal_from_right(parent, index)
        self._record_borrow("right", down, up)

    def _merge(self, parent: BTreeNode, index: int) -> None:
        separator = self._merge_internal(parent, index)
        merged = parent.children[index]
        self._record_or_defer(StepKind.MERGE,
                              f"Merged with the sibling and separator {separator} "
                              f"into {merged.keys}",
                              highlighted=merged.keys)
