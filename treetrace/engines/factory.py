import logging
from typing import Union

from treetrace.config import DEFAULT_ORDER, MIN_ORDER
from treetrace.core.exceptions import InvalidOrderError
from treetrace.core.types import TreeType

from .avl import AVLTree
from .base import TreeEngine
from .bplus_tree import BPlusTree
from .bst import BinarySearchTree
from .btree import BTree

logger = logging.getLogger(__name__)


def validate_order(order) -> int:
    """
    Check a multiway tree order at the construction boundary.

    Raises:
        InvalidOrderError: If the order is not an integer >= MIN_ORDER
    """
    if isinstance(order, bool) or not isinstance(order, int) or order < MIN_ORDER:
        raise InvalidOrderError(order, MIN_ORDER)
    return order


def create_tree(tree_type: Union[TreeType, str], order: int = DEFAULT_ORDER) -> TreeEngine:
    """
    Build an empty engine for ``tree_type``.

    Args:
        tree_type: A TreeType member or one of its names ("bst", "avl",
            "btree", "bplus")
        order: Order of a B-tree / B+ tree; ignored for binary trees

    Raises:
        UnknownTreeTypeError: If the tree type cannot be resolved
        InvalidOrderError: If a multiway tree is requested with a bad order
    """
    tree_type = TreeType.parse(tree_type)

    if tree_type == TreeType.BST:
        return BinarySearchTree()
    if tree_type == TreeType.AVL:
        return AVLTree()

    order = validate_order(order)
    logger.info(f"Created {tree_type.display_name()} with order {order}")
    if tree_type == TreeType.BTREE:
        return BTree(order)
    return BPlusTree(order)
