import logging
from typing import Optional

from treetrace.core.types import StepKind
from treetrace.nodes import AVLNode

from .binary_tree import BinaryTreeEngine

logger = logging.getLogger(__name__)


class AVLTree(BinaryTreeEngine):
    """
    Height-balanced binary search tree with step tracing.

    Every node on the way back up from an insert or delete gets its height
    and balance factor recomputed, then one of the four rotation cases is
    applied when the balance factor leaves {-1, 0, 1}:

    - LL: single right rotation
    - RR: single left rotation
    - LR: left rotation on the left child, then right rotation
    - RL: right rotation on the right child, then left rotation

    After an insert the case is chosen by comparing the inserted value with
    the heavy child. After a delete it is chosen by the heavy child's own
    balance factor, since no single value identifies the case.
    """

    node_class = AVLNode

    def height(self) -> int:
        return self._height(self.root)

    def _height(self, node: Optional[AVLNode]) -> int:
        return 0 if node is None else node.height

    def _update_height(self, node: AVLNode) -> None:
        left_height = self._height(node.left)
        right_height = self._height(node.right)
        node.height = 1 + max(left_height, right_height)
        node.balance_factor = left_height - right_height

    def _after_insert(self, node: AVLNode, parent: Optional[AVLNode],
                      value: int) -> None:
        balance = self._check_balance(node)
        if balance > 1:
            case = "LL" if value < node.left.value else "LR"
            self._rebalance(node, parent, case, balance)
        elif balance < -1:
            case = "RR" if value > node.right.value else "RL"
            self._rebalance(node, parent, case, balance)

    def _after_delete(self, node: AVLNode, parent: Optional[AVLNode]) -> None:
        balance = self._check_balance(node)
        if balance > 1:
            case = "LL" if node.left.balance_factor >= 0 else "LR"
            self._rebalance(node, parent, case, balance)
        elif balance < -1:
            case = "RR" if node.right.balance_factor <= 0 else "RL"
            self._rebalance(node, parent, case, balance)

    def _check_balance(self, node: AVLNode) -> int:
        self._update_height(node)
        self._record(StepKind.HIGHLIGHT,
                     f"Balance factor of {node.value} is {node.balance_factor}",
                     highlighted=[node.value])
        return node.balance_factor

    def _rebalance(self, node: AVLNode, parent: Optional[AVLNode], case: str,
                   balance: int) -> None:
        self._record(StepKind.ROTATE,
                     f"{case} imbalance at {node.value} (balance factor {balance})",
                     highlighted=[node.value])
        logger.debug(f"{case} rotation case at {node.value}")

        if case == "LL":
            self._rotate_right(node, parent)
        elif case == "RR":
            self._rotate_left(node, parent)
        elif case == "LR":
            self._rotate_left(node.left, node)
            self._rotate_right(node, parent)
        else:
            self._rotate_right(node.right, node)
            self._rotate_left(node, parent)

    # ------------------------------
    # ROTATIONS
    # ------------------------------
    def _rotate_right(self, pivot: AVLNode, parent: Optional[AVLNode]) -> AVLNode:
        new_root = pivot.left
        self._record(StepKind.ROTATE,
                     f"Rotating right at {pivot.value}, {new_root.value} becomes the subtree root",
                     highlighted=[pivot.value, new_root.value])

        pivot.left = new_root.right
        new_root.right = pivot
        self._update_height(pivot)
        self._update_height(new_root)
        self._replace_child(parent, pivot, new_root)

        self._record(StepKind.ROTATE, f"Right rotation at {pivot.value} complete",
                     highlighted=[pivot.value, new_root.value])
        return new_root

    def _rotate_left(self, pivot: AVLNode, parent: Optional[AVLNode]) -> AVLNode:
        new_root = pivot.right
        self._record(StepKind.ROTATE,
                     f"Rotating left at {pivot.value}, {new_root.value} becomes the subtree root",
                     highlighted=[pivot.value, new_root.value])

        pivot.right = new_root.left
        new_root.left = pivot
        self._update_height(pivot)
        self._update_height(new_root)
        self._replace_child(parent, pivot, new_root)

        self._record(StepKind.ROTATE, f"Left rotation at {pivot.value} complete",
                     highlighted=[pivot.value, new_root.value])
        return new_root
