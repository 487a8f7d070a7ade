"""Deep-copy helpers turning live nodes into immutable snapshots."""

from typing import Optional

from treetrace.nodes import BinaryNode, AVLNode, BTreeNode, BPlusTreeNode
from treetrace.primitives import BinarySnapshot, MultiwaySnapshot


def clone_binary(node: Optional[BinaryNode]) -> Optional[BinarySnapshot]:
    """Copy a BST/AVL subtree; AVL nodes keep their height and balance."""
    if node is None:
        return None

    if isinstance(node, AVLNode):
        return BinarySnapshot(
            value=node.value,
            left=clone_binary(node.left),
            right=clone_binary(node.right),
            height=node.height,
            balance_factor=node.balance_factor,
        )
    return BinarySnapshot(
        value=node.value,
        left=clone_binary(node.left),
        right=clone_binary(node.right),
    )


def clone_multiway(node: Optional[BTreeNode]) -> Optional[MultiwaySnapshot]:
    """Copy a B-tree / B+ tree subtree."""
    if node is None:
        return None

    linked = isinstance(node, BPlusTreeNode) and node.is_leaf and node.next is not None
    return MultiwaySnapshot(
        keys=tuple(node.keys),
        children=tuple(clone_multiway(child) for child in node.children),
        is_leaf=node.is_leaf,
        linked=linked,
    )
