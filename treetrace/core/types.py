from enum import Enum

from .exceptions import UnknownTreeTypeError


class TreeType(Enum):
    """
    Enum for the supported tree families.
    """
    BST = "bst"
    AVL = "avl"
    BTREE = "btree"
    BPLUS_TREE = "bplus"

    def is_multiway(self) -> bool:
        """Multiway trees are built with an order."""
        return self in (TreeType.BTREE, TreeType.BPLUS_TREE)

    def display_name(self) -> str:
        names = {
            TreeType.BST: "Binary Search Tree",
            TreeType.AVL: "AVL Tree",
            TreeType.BTREE: "B-Tree",
            TreeType.BPLUS_TREE: "B+ Tree",
        }
        return names[self]

    @classmethod
    def parse(cls, name) -> 'TreeType':
        """Resolve a member, its value, or a common alias."""
        if isinstance(name, TreeType):
            return name

        aliases = {
            "bst": cls.BST,
            "avl": cls.AVL,
            "btree": cls.BTREE,
            "b-tree": cls.BTREE,
            "bplus": cls.BPLUS_TREE,
            "bplustree": cls.BPLUS_TREE,
            "b+tree": cls.BPLUS_TREE,
            "b+": cls.BPLUS_TREE,
        }
        key = str(name).strip().lower().replace("_", "")
        if key not in aliases:
            raise UnknownTreeTypeError(f"Unknown tree type: {name!r}")
        return aliases[key]


class StepKind(Enum):
    """Kinds of atomic transitions recorded in a step log."""
    HIGHLIGHT = "highlight"
    CREATE = "create"
    INSERT = "insert"
    DELETE = "delete"
    ROTATE = "rotate"
    SPLIT = "split"
    MERGE = "merge"
    COMPLETE = "complete"
