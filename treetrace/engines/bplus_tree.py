import math
from bisect import bisect_left
from typing import List, Optional, Tuple

from treetrace.core.types import StepKind
from treetrace.nodes import BPlusTreeNode

from .multiway_tree import MultiwayTreeEngine


class BPlusTree(MultiwayTreeEngine):
    """
    B+ tree of order ``m`` with step tracing.

    Every value lives in exactly one leaf. Internal nodes hold routing keys
    only: a routing key is the largest value of the subtree on its left, so
    a value descends into child ``i`` while it is ``<= keys[i]`` and into the
    last child once it exceeds every key.

    Leaves hold ``ceil(m / 2)`` to ``m`` keys and are chained left to right
    through ``next``. Internal nodes hold ``ceil(m / 2) - 1`` to ``m - 1``
    keys. A leaf split copies the left half's largest key up; an internal
    split moves its middle key up.
    """

    node_class = BPlusTreeNode

    @property
    def max_leaf_keys(self) -> int:
        return self.order

    @property
    def min_leaf_keys(self) -> int:
        return math.ceil(self.order / 2)

    def max_keys_for(self, node: BPlusTreeNode) -> int:
        return self.max_leaf_keys if node.is_leaf else self.max_keys

    def min_keys_for(self, node: BPlusTreeNode) -> int:
        return self.min_leaf_keys if node.is_leaf else self.min_keys

    def first_leaf(self) -> Optional[BPlusTreeNode]:
        node = self.root
        if node is None:
            return None
        while not node.is_leaf:
            node = node.children[0]
        return node

    def to_array(self) -> List[int]:
        """Walk the leaf chain from the leftmost leaf."""
        result: List[int] = []
        leaf = self.first_leaf()
        while leaf is not None:
            result.extend(leaf.keys)
            leaf = leaf.next
        return result

    # ------------------------------
    # INSERT
    # ------------------------------
    def _insert_into(self, node: BPlusTreeNode, value: int) -> bool:
        index = bisect_left(node.keys, value)

        if node.is_leaf:
            if index < len(node.keys) and node.keys[index] == value:
                self._record(StepKind.HIGHLIGHT, f"{value} already exists",
                             highlighted=[value])
                return False
            self._insert_into_leaf(node, index, value)
            return True

        self._record(StepKind.HIGHLIGHT, f"Routing from {node.keys} into child {index}",
                     highlighted=node.keys)
        if not self._insert_into(node.children[index], value):
            return False
        if self._is_overflowing(node.children[index]):
            self._split_child(node, index)
        return True

    def _divide(self, parent: BPlusTreeNode, index: int) -> Tuple[int, BPlusTreeNode, BPlusTreeNode]:
        node = parent.children[index]
        if not node.is_leaf:
            return self._divide_internal(parent, index)

        sibling = self.node_class(is_leaf=True)
        split = (len(node.keys) + 1) // 2
        sibling.keys = node.keys[split:]
        node.keys = node.keys[:split]

        sibling.next = node.next
        node.next = sibling

        # The boundary key stays in the left leaf; the parent gets a copy
        promoted = node.keys[-1]
        parent.keys.insert(index, promoted)
        parent.children.insert(index + 1, sibling)
        return promoted, node, sibling

    def _promotion_verb(self, left: BPlusTreeNode) -> str:
        return "copied up" if left.is_leaf else "moved up"

    # ------------------------------
    # DELETE
    # ------------------------------
    def _delete_from(self, node: BPlusTreeNode, value: int) -> bool:
        index = bisect_left(node.keys, value)

        if node.is_leaf:
            if index < len(node.keys) and node.keys[index] == value:
                self._remove_from_leaf(node, index)
                return True
            self._record(StepKind.HIGHLIGHT, f"{value} not found")
            return False

        self._record(StepKind.HIGHLIGHT, f"Routing from {node.keys} into child {index}",
                     highlighted=node.keys)
        if not self._delete_from(node.children[index], value):
            return False

        if index < len(node.keys) and node.keys[index] == value:
            replacement = self._rightmost_key(node.children[index])
            node.keys[index] = replacement
            self._record_or_defer(StepKind.HIGHLIGHT,
                                  f"Routing key {value} refreshed to {replacement}",
                                  highlighted=[replacement])

        self._fix_underflow(node, index)
        return True

    def _borrow_from_left(self, parent: BPlusTreeNode, index: int) -> None:
        child = parent.children[index]
        if not child.is_leaf:
            down, up = self._borrow_internal_from_left(parent, index)
            self._record_borrow("left", down, up)
            return

        left = parent.children[index - 1]
        moved = left.keys.pop()
        child.keys.insert(0, moved)
        parent.keys[index - 1] = left.keys[-1]
        self._record_or_defer(StepKind.ROTATE,
                              f"Borrowed {moved} from the left leaf, routing key is now "
                              f"{parent.keys[index - 1]}",
                              highlighted=[moved, parent.keys[index - 1]])

    def _borrow_from_right(self, parent: BPlusTreeNode, index: int) -> None:
        child = parent.children[index]
        if not child.is_leaf:
            down, up = self._borrow_internal_from_right(parent, index)
            self._record_borrow("right", down, up)
            return

        right = parent.children[index + 1]
        moved = right.keys.pop(0)
        child.keys.append(moved)
        parent.keys[index] = child.keys[-1]
        self._record_or_defer(StepKind.ROTATE,
                              f"Borrowed {moved} from the right leaf, routing key is now "
                              f"{parent.keys[index]}",
                              highlighted=[moved])

    def _merge(self, parent: BPlusTreeNode, index: int) -> None:
        left = parent.children[index]
        if not left.is_leaf:
            separator = self._merge_internal(parent, index)
            self._record_or_defer(StepKind.MERGE,
                                  f"Merged with the sibling and separator {separator} "
                                  f"into {left.keys}",
                                  highlighted=left.keys)
            return

        right = parent.children[index + 1]
        left.keys.extend(right.keys)
        left.next = right.next
        separator = parent.keys.pop(index)
        parent.children.pop(index + 1)
        self._record_or_defer(StepKind.MERGE,
                              f"Merged leaves into {left.keys}, routing key {separator} removed",
                              highlighted=left.keys)
