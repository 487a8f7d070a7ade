from typing import Optional


class BinaryNode:
    """Node of an unbalanced binary search tree."""

    def __init__(self, value: int):
        self.value = value
        self.left: Optional['BinaryNode'] = None
        self.right: Optional['BinaryNode'] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"


class AVLNode(BinaryNode):
    """Binary node carrying height and balance factor bookkeeping."""

    def __init__(self, value: int):
        super().__init__(value)
        self.height = 1
        self.balance_factor = 0
