import math
from typing import List, Optional, Set

from .core.exceptions import TreeInvariantError
from .core.types import TreeType
from .primitives import BinarySnapshot, MultiwaySnapshot, TreeSnapshot


class TreeValidator:
    """
    Checks the structural invariants of a snapshot.

    - BST: strict ordering, no duplicates
    - AVL: BST ordering plus stored heights and balance factors in {-1, 0, 1}
    - B-tree: ordering, key counts within bounds, uniform leaf depth
    - B+ tree: routing bounds, leaf/internal key counts, routing keys copied
      from leaves, leaf chain flags

    Works on snapshots rather than live nodes so it can be pointed at any
    recorded step as well as at the final tree.
    """

    def __init__(self):
        self.validation_errors: List[str] = []

    def validate(self, snapshot: TreeSnapshot, tree_type: TreeType,
                 order: Optional[int] = None, check_fill: bool = True) -> bool:
        """
        Validate a snapshot of ``tree_type``.

        Args:
            snapshot: The tree to check; None is a valid empty tree
            tree_type: Family whose invariants apply
            order: Order of a B-tree / B+ tree
            check_fill: Enforce key-count bounds (insert frames may show a
                node overflowing right before it is split)

        Returns:
            True if valid, False otherwise
        """
        self.validation_errors.clear()
        if snapshot is None:
            return True

        if tree_type in (TreeType.BST, TreeType.AVL):
            self._check_binary(snapshot, None, None, tree_type == TreeType.AVL)
        elif tree_type == TreeType.BTREE:
            self._check_btree(snapshot, order, check_fill)
        else:
            self._check_bplus(snapshot, order, check_fill)
        return len(self.validation_errors) == 0

    # ------------------------------
    # BINARY TREES
    # ------------------------------
    def _check_binary(self, node: Optional[BinarySnapshot], low: Optional[int],
                      high: Optional[int], balanced: bool) -> int:
        """Returns the subtree height."""
        if node is None:
            return 0

        if (low is not None and node.value <= low) or (high is not None and node.value >= high):
            self.validation_errors.append(
                f"Node {node.value} is outside its bounds ({low}, {high})")

        left_height = self._check_binary(node.left, low, node.value, balanced)
        right_height = self._check_binary(node.right, node.value, high, balanced)
        height = 1 + max(left_height, right_height)

        if balanced:
            if node.height != height:
                self.validation_errors.append(
                    f"Node {node.value} stores height {node.height}, actual {height}")
            if node.balance_factor != left_height - right_height:
                self.validation_errors.append(
                    f"Node {node.value} stores balance factor {node.balance_factor}, "
                    f"actual {left_height - right_height}")
            if abs(left_height - right_height) > 1:
                self.validation_errors.append(
                    f"Node {node.value} is unbalanced ({left_height - right_height})")
        return height

    # ------------------------------
    # MULTIWAY TREES
    # ------------------------------
    def _check_shape(self, node: MultiwaySnapshot, depth: int, leaf_depths: Set[int]) -> None:
        if list(node.keys) != sorted(set(node.keys)):
            self.validation_errors.append(f"Keys of {list(node.keys)} are not strictly ascending")

        if node.is_leaf:
            if node.children:
                self.validation_errors.append(f"Leaf {list(node.keys)} has children")
            leaf_depths.add(depth)
            return

        if len(node.children) != len(node.keys) + 1:
            self.validation_errors.append(
                f"Internal node {list(node.keys)} has {len(node.children)} children")
        for child in node.children:
            self._check_shape(child, depth + 1, leaf_depths)

    def _check_btree(self, root: MultiwaySnapshot, order: int, check_fill: bool) -> None:
        leaf_depths: Set[int] = set()
        self._check_shape(root, 0, leaf_depths)
        if len(leaf_depths) > 1:
            self.validation_errors.append(f"Leaves sit at different depths {sorted(leaf_depths)}")

        values = root.values()
        if values != sorted(set(values)):
            self.validation_errors.append(f"Inorder readout {values} is not strictly ascending")

        if check_fill:
            max_keys = order - 1
            min_keys = math.ceil(order / 2) - 1
            self._check_counts(root, True, lambda node: (min_keys, max_keys))

    def _check_bplus(self, root: MultiwaySnapshot, order: int, check_fill: bool) -> None:
        leaf_depths: Set[int] = set()
        self._check_shape(root, 0, leaf_depths)
        if len(leaf_depths) > 1:
            self.validation_errors.append(f"Leaves sit at different depths {sorted(leaf_depths)}")

        values = root.values(leaves_only=True)
        if values != sorted(set(values)):
            self.validation_errors.append(f"Leaf readout {values} is not strictly ascending")

        self._check_routing(root, None, None)

        live = set(values)
        for node in root.nodes():
            if not node.is_leaf:
                for key in node.keys:
                    if key not in live:
                        self.validation_errors.append(
                            f"Routing key {key} is not stored in any leaf")

        leaves = [node for node in root.nodes() if node.is_leaf]
        for i, leaf in enumerate(leaves):
            expected = i < len(leaves) - 1
            if leaf.linked != expected:
                self.validation_errors.append(
                    f"Leaf {list(leaf.keys)} has a broken next link")

        if check_fill:
            internal = (math.ceil(order / 2) - 1, order - 1)
            leaf = (math.ceil(order / 2), order)
            self._check_counts(root, True, lambda node: leaf if node.is_leaf else internal)

    def _check_routing(self, node: MultiwaySnapshot, low: Optional[int],
                       high: Optional[int]) -> None:
        """Values under a subtree lie in (low, high]."""
        for key in node.keys:
            if (low is not None and key <= low) or (high is not None and key > high):
                self.validation_errors.append(
                    f"Key {key} of {list(node.keys)} is outside its range ({low}, {high}]")
        if node.is_leaf:
            return
        bounds = [low] + list(node.keys) + [high]
        for i, child in enumerate(node.children):
            self._check_routing(child, bounds[i], bounds[i + 1])

    def _check_counts(self, node: MultiwaySnapshot, is_root: bool, bounds_for) -> None:
        min_keys, max_keys = bounds_for(node)
        count = len(node.keys)
        if count > max_keys:
            self.validation_errors.append(
                f"Node {list(node.keys)} holds {count} keys, maximum is {max_keys}")
        if not is_root and count < min_keys:
            self.validation_errors.append(
                f"Node {list(node.keys)} holds {count} keys, minimum is {min_keys}")
        for child in node.children:
            self._check_counts(child, False, bounds_for)

    def ensure_valid(self, snapshot: TreeSnapshot, tree_type: TreeType,
                     order: Optional[int] = None, check_fill: bool = True) -> None:
        """
        Like ``validate`` but raises.

        Raises:
            TreeInvariantError: Listing every broken invariant
        """
        if not self.validate(snapshot, tree_type, order, check_fill):
            raise TreeInvariantError(self.validation_errors)
