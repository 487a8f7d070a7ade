import pytest

from treetrace.core.exceptions import InvalidOrderError, UnknownTreeTypeError
from treetrace.core.types import TreeType
from treetrace.engines import (
    AVLTree,
    BinarySearchTree,
    BPlusTree,
    BTree,
    create_tree,
    validate_order,
)


class TestCreateTree:
    """Tests for the engine factory."""

    @pytest.mark.parametrize("name, engine_class", [
        ("bst", BinarySearchTree),
        ("avl", AVLTree),
        ("btree", BTree),
        ("b-tree", BTree),
        ("bplus", BPlusTree),
        ("b+tree", BPlusTree),
        ("BPLUS_TREE", BPlusTree),
        (TreeType.AVL, AVLTree),
    ])
    def test_resolves_names(self, name, engine_class):
        """Test names, aliases and members."""
        assert isinstance(create_tree(name), engine_class)

    def test_order_is_passed_to_multiway_trees(self):
        """Test that the order reaches the engine."""
        assert create_tree("btree", 5).order == 5
        assert create_tree(TreeType.BPLUS_TREE, 4).order == 4

    def test_order_ignored_for_binary_trees(self):
        """Test that binary trees accept any order argument."""
        assert isinstance(create_tree("bst", 1), BinarySearchTree)

    @pytest.mark.parametrize("order", [2, 1, 0, -3, 3.5, "4", True, None])
    def test_invalid_order_rejected(self, order):
        """Test that unusable orders fail at construction."""
        with pytest.raises(InvalidOrderError, match="Tree order must be an integer >= 3"):
            create_tree("btree", order)

    def test_invalid_order_carries_details(self):
        """Test the attributes of the raised error."""
        with pytest.raises(InvalidOrderError) as info:
            validate_order(2)

        assert info.value.order == 2
        assert info.value.minimum == 3

    def test_unknown_tree_type(self):
        """Test that an unknown name is rejected."""
        with pytest.raises(UnknownTreeTypeError, match="Unknown tree type: 'redblack'"):
            create_tree("redblack")

    def test_engines_start_empty(self):
        """Test fresh engines."""
        for tree_type in TreeType:
            engine = create_tree(tree_type)
            assert engine.is_empty()
            assert engine.to_array() == []
            assert engine.snapshot() is None
            assert engine.steps == []
