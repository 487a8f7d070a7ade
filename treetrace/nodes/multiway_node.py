import weakref
from typing import List, Optional


class BTreeNode:
    """Node of a B-tree: ascending keys, and one more child than keys unless a leaf."""

    def __init__(self, is_leaf: bool = True, keys: Optional[List[int]] = None):
        self.is_leaf = is_leaf
        self.keys: List[int] = list(keys) if keys else []
        self.children: List['BTreeNode'] = []

    def key_count(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        return f"{type(self).__name__}({self.keys}, {kind})"


class BPlusTreeNode(BTreeNode):
    """
    Node of a B+ tree.

    Leaves are chained left to right through ``next``. The chain does not
    own its target: the tree owns nodes top-down, so the link is held as a
    weak reference and reads back as ``None`` once the neighbour is gone.
    """

    def __init__(self, is_leaf: bool = True, keys: Optional[List[int]] = None):
        super().__init__(is_leaf, keys)
        self._next: Optional[weakref.ref] = None

    @property
    def next(self) -> Optional['BPlusTreeNode']:
        if self._next is None:
            return None
        return self._next()

    @next.setter
    def next(self, node: Optional['BPlusTreeNode']) -> None:
        self._next = weakref.ref(node) if node is not None else None
