import logging
import math
from abc import abstractmethod
from typing import Iterable, List, Optional, Tuple

from treetrace.config import DEFAULT_ORDER
from treetrace.core.types import StepKind
from treetrace.nodes import BTreeNode
from treetrace.primitives import MultiwaySnapshot
from treetrace.trace import clone_multiway

from .base import TreeEngine

logger = logging.getLogger(__name__)


class MultiwayTreeEngine(TreeEngine):
    """
    Shared machinery for B-trees and B+ trees of order ``m``.

    Overflow is resolved bottom-up by splitting the overflowing node and
    pushing one key into its parent, re-checked at every ancestor on the way
    back up. Underflow is resolved bottom-up by borrowing through the parent
    from the best sibling (more keys, ties to the left) when it can spare a
    key, and by merging with it otherwise.

    While a delete is being repaired, a non-root node may briefly sit below
    its minimum. Descriptions of such transient states are deferred and
    folded into the step that repairs them, so no recorded snapshot shows an
    underfull non-root node.

    The order is a precondition checked by ``create_tree``; engines assume
    ``order >= 3``.
    """

    node_class = BTreeNode

    def __init__(self, order: int = DEFAULT_ORDER):
        super().__init__()
        self.order = order

    @property
    def max_keys(self) -> int:
        """Maximum keys of an internal node."""
        return self.order - 1

    @property
    def min_keys(self) -> int:
        """Minimum keys of a non-root internal node."""
        return math.ceil(self.order / 2) - 1

    def max_keys_for(self, node: BTreeNode) -> int:
        return self.max_keys

    def min_keys_for(self, node: BTreeNode) -> int:
        return self.min_keys

    def snapshot(self) -> Optional[MultiwaySnapshot]:
        return clone_multiway(self.root)

    def height(self) -> int:
        height = 0
        node = self.root
        while node is not None:
            height += 1
            node = None if node.is_leaf else node.children[0]
        return height

    def leaf_keys(self) -> List[List[int]]:
        """Keys of every leaf, left to right."""
        groups: List[List[int]] = []
        self._collect_leaves(self.root, groups)
        return groups

    def _collect_leaves(self, node: Optional[BTreeNode], groups: List[List[int]]) -> None:
        if node is None:
            return
        if node.is_leaf:
            groups.append(list(node.keys))
            return
        for child in node.children:
            self._collect_leaves(child, groups)

    # ------------------------------
    # INSERT
    # ------------------------------
    def _insert(self, value: int) -> None:
        if self.root is None:
            self._record(StepKind.CREATE, "The tree is empty, creating a root leaf",
                         creating_value=value)
            self.root = self.node_class(is_leaf=True)
            self.root.keys.append(value)
            self._record(StepKind.INSERT, f"Placed {value} in the root leaf",
                         highlighted=[value])
            return

        if self._insert_into(self.root, value) and self._is_overflowing(self.root):
            self._split_root()

    @abstractmethod
    def _insert_into(self, node: BTreeNode, value: int) -> bool:
        """Insert below ``node``; False when the value already exists."""
        pass

    def _insert_into_leaf(self, leaf: BTreeNode, index: int, value: int) -> None:
        leaf.keys.insert(index, value)
        self._record(StepKind.INSERT, f"Placed {value} in leaf {leaf.keys}",
                     highlighted=[value])

    def _is_overflowing(self, node: BTreeNode) -> bool:
        return len(node.keys) > self.max_keys_for(node)

    def _announce_overflow(self, node: BTreeNode) -> None:
        self._record(StepKind.HIGHLIGHT,
                     f"Node {node.keys} has {len(node.keys)} keys, "
                     f"more than the maximum of {self.max_keys_for(node)}",
                     overflow=node.keys)

    def _split_child(self, parent: BTreeNode, index: int) -> None:
        self._announce_overflow(parent.children[index])
        promoted, left, right = self._divide(parent, index)
        self._record(StepKind.SPLIT,
                     f"Split into {left.keys} and {right.keys}, "
                     f"{promoted} {self._promotion_verb(left)} to the parent",
                     highlighted=[promoted])

    def _split_root(self) -> None:
        old_root = self.root
        self._announce_overflow(old_root)

        self.root = self.node_class(is_leaf=False)
        self.root.children.append(old_root)
        promoted, left, right = self._divide(self.root, 0)
        logger.debug(f"Root split around {promoted}, height is now {self.height()}")
        self._record(StepKind.SPLIT,
                     f"Split the root into {left.keys} and {right.keys}, "
                     f"{promoted} {self._promotion_verb(left)} to a new root",
                     highlighted=[promoted])

    @abstractmethod
    def _divide(self, parent: BTreeNode, index: int) -> Tuple[int, BTreeNode, BTreeNode]:
        """
        Split ``parent.children[index]`` in place.

        Returns:
            The key placed in the parent, and the left and right halves
        """
        pass

    def _promotion_verb(self, left: BTreeNode) -> str:
        return "moved up"

    def _divide_internal(self, parent: BTreeNode, index: int) -> Tuple[int, BTreeNode, BTreeNode]:
        """Classic split: the middle key leaves the node and moves up."""
        node = parent.children[index]
        sibling = self.node_class(is_leaf=node.is_leaf)
        mid = len(node.keys) // 2
        promoted = node.keys[mid]

        sibling.keys = node.keys[mid + 1:]
        node.keys = node.keys[:mid]
        if not node.is_leaf:
            sibling.children = node.children[mid + 1:]
            node.children = node.children[:mid + 1]

        parent.keys.insert(index, promoted)
        parent.children.insert(index + 1, sibling)
        return promoted, node, sibling

    # ------------------------------
    # DELETE
    # ------------------------------
    def _delete(self, value: int) -> None:
        if self._delete_from(self.root, value):
            self._collapse_root()

    @abstractmethod
    def _delete_from(self, node: BTreeNode, value: int) -> bool:
        """Delete below ``node``; False when the value is absent."""
        pass

    def _remove_from_leaf(self, leaf: BTreeNode, index: int) -> None:
        value = leaf.keys.pop(index)
        self._record_or_defer(StepKind.DELETE, f"Removed {value} from the leaf",
                              highlighted=leaf.keys)

    def _is_underflowing(self, node: BTreeNode) -> bool:
        return len(node.keys) < self.min_keys_for(node)

    def _has_underflow(self) -> bool:
        """True while any non-root node is below its minimum."""
        if self.root is None or self.root.is_leaf:
            return False
        pending = list(self.root.children)
        while pending:
            node = pending.pop()
            if self._is_underflowing(node):
                return True
            pending.extend(node.children)
        return False

    def _record_or_defer(self, kind: StepKind, description: str,
                         highlighted: Iterable[int] = ()) -> None:
        if self._has_underflow():
            self._recorder.defer(description, highlighted)
        else:
            self._record(kind, description, highlighted=highlighted)

    def _best_sibling(self, parent: BTreeNode, index: int) -> int:
        """Index of the sibling with more keys; ties go to the left."""
        has_left = index > 0
        has_right = index + 1 < len(parent.children)
        if not has_left:
            return index + 1
        if not has_right:
            return index - 1
        left = parent.children[index - 1]
        right = parent.children[index + 1]
        return index - 1 if len(left.keys) >= len(right.keys) else index + 1

    def _fix_underflow(self, parent: BTreeNode, index: int) -> None:
        child = parent.children[index]
        if not self._is_underflowing(child):
            return

        sibling_index = self._best_sibling(parent, index)
        sibling = parent.children[sibling_index]
        side = "left" if sibling_index < index else "right"
        self._recorder.defer(
            f"Node {child.keys} is below the minimum of {self.min_keys_for(child)} keys, "
            f"best sibling is the {side} {sibling.keys}",
            highlighted=sibling.keys)

        if len(sibling.keys) > self.min_keys_for(sibling):
            logger.debug(f"Borrowing from {side} sibling {sibling.keys}")
            if sibling_index < index:
                self._borrow_from_left(parent, index)
            else:
                self._borrow_from_right(parent, index)
        else:
            logger.debug(f"Merging {child.keys} with {side} sibling {sibling.keys}")
            self._merge(parent, min(index, sibling_index))

    @abstractmethod
    def _borrow_from_left(self, parent: BTreeNode, index: int) -> None:
        pass

    @abstractmethod
    def _borrow_from_right(self, parent: BTreeNode, index: int) -> None:
        pass

    @abstractmethod
    def _merge(self, parent: BTreeNode, index: int) -> None:
        """Merge ``parent.children[index + 1]`` into ``parent.children[index]``."""
        pass

    def _borrow_internal_from_left(self, parent: BTreeNode, index: int) -> Tuple[int, int]:
        """Rotate a key down from the parent and one up from the left sibling."""
        child = parent.children[index]
        left = parent.children[index - 1]
        separator = parent.keys[index - 1]

        child.keys.insert(0, separator)
        parent.keys[index - 1] = left.keys.pop()
        if not child.is_leaf:
            child.children.insert(0, left.children.pop())
        return separator, parent.keys[index - 1]

    def _borrow_internal_from_right(self, parent: BTreeNode, index: int) -> Tuple[int, int]:
        """Rotate a key down from the parent and one up from the right sibling."""
        child = parent.children[index]
        right = parent.children[index + 1]
        separator = parent.keys[index]

        child.keys.append(separator)
        parent.keys[index] = right.keys.pop(0)
        if not child.is_leaf:
            child.children.append(right.children.pop(0))
        return separator, parent.keys[index]

    def _merge_internal(self, parent: BTreeNode, index: int) -> int:
        """Pull the separator down and absorb the right sibling."""
        left = parent.children[index]
        right = parent.children[index + 1]
        separator = parent.keys.pop(index)

        left.keys.append(separator)
        left.keys.extend(right.keys)
        left.children.extend(right.children)
        parent.children.pop(index + 1)
        return separator

    def _record_borrow(self, side: str, down: int, up: int) -> None:
        self._record_or_defer(StepKind.ROTATE,
                              f"Borrowed through the parent from the {side} sibling, "
                              f"{down} moved down and {up} moved up",
                              highlighted=[down, up])

    def _collapse_root(self) -> None:
        if self.root.keys:
            return

        if self.root.is_leaf:
            self.root = None
            self._record(StepKind.DELETE, "The tree is now empty")
        else:
            self.root = self.root.children[0]
            logger.debug(f"Root collapsed onto {self.root.keys}")
            self._record(StepKind.DELETE,
                         f"The root is empty, {self.root.keys} becomes the new root",
                         highlighted=self.root.keys)

    # ------------------------------
    # HELPERS
    # ------------------------------
    @staticmethod
    def _leftmost_key(node: BTreeNode) -> int:
        while not node.is_leaf:
            node = node.children[0]
        return node.keys[0]

    @staticmethod
    def _rightmost_key(node: BTreeNode) -> int:
        while not node.is_leaf:
            node = node.children[-1]
        return node.keys[-1]
