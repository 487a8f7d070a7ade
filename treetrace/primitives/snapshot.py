"""
Immutable tree snapshots embedded in every recorded step.

Snapshots are plain value objects: they share nothing with the live tree,
compare by value, and can be kept around after the engine keeps mutating.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, List, Union


@dataclass(frozen=True)
class BinarySnapshot:
    """Frozen copy of a BST/AVL node and its subtrees."""
    value: int
    left: Optional['BinarySnapshot'] = None
    right: Optional['BinarySnapshot'] = None
    # Only populated for AVL trees
    height: Optional[int] = None
    balance_factor: Optional[int] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def values(self) -> List[int]:
        """Inorder readout of this subtree."""
        result = []
        if self.left is not None:
            result.extend(self.left.values())
        result.append(self.value)
        if self.right is not None:
            result.extend(self.right.values())
        return result

    def height_of(self) -> int:
        """Height counted in nodes (a single node has height 1)."""
        left = self.left.height_of() if self.left is not None else 0
        right = self.right.height_of() if self.right is not None else 0
        return 1 + max(left, right)

    def count(self) -> int:
        left = self.left.count() if self.left is not None else 0
        right = self.right.count() if self.right is not None else 0
        return 1 + left + right

    def leaf_values(self) -> List[int]:
        """Values of all leaf nodes, left to right."""
        if self.is_leaf():
            return [self.value]
        result = []
        if self.left is not None:
            result.extend(self.left.leaf_values())
        if self.right is not None:
            result.extend(self.right.leaf_values())
        return result


@dataclass(frozen=True)
class MultiwaySnapshot:
    """Frozen copy of a B-tree / B+ tree node and its subtrees."""
    keys: Tuple[int, ...]
    children: Tuple['MultiwaySnapshot', ...] = ()
    is_leaf: bool = True
    # True for a B+ tree leaf that has a right neighbour on the leaf chain
    linked: bool = False

    def values(self, leaves_only: bool = False) -> List[int]:
        """
        Ascending readout of the subtree.

        Args:
            leaves_only: Read only leaf keys (B+ trees keep routing copies
                in internal nodes, which must not be counted twice)
        """
        if self.is_leaf:
            return list(self.keys)
        if leaves_only:
            result = []
            for child in self.children:
                result.extend(child.values(leaves_only=True))
            return result

        result = []
        for i, key in enumerate(self.keys):
            result.extend(self.children[i].values())
            result.append(key)
        result.extend(self.children[-1].values())
        return result

    def leaf_keys(self) -> List[Tuple[int, ...]]:
        """Key groups of every leaf, left to right."""
        if self.is_leaf:
            return [self.keys]
        groups = []
        for child in self.children:
            groups.extend(child.leaf_keys())
        return groups

    def height_of(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(child.height_of() for child in self.children)

    def nodes(self) -> List['MultiwaySnapshot']:
        """Pre-order list of every node in the subtree."""
        result = [self]
        for child in self.children:
            result.extend(child.nodes())
        return result


TreeSnapshot = Union[BinarySnapshot, MultiwaySnapshot, None]
