import pytest

from treetrace.core.exceptions import TreeInvariantError
from treetrace.core.types import TreeType
from treetrace.primitives import BinarySnapshot, MultiwaySnapshot
from treetrace.validation import TreeValidator


def leaf(*keys, linked=False):
    return MultiwaySnapshot(keys=tuple(keys), linked=linked)


def internal(keys, *children):
    return MultiwaySnapshot(keys=tuple(keys), children=tuple(children), is_leaf=False)


class TestBinaryValidation:
    """Ordering and balance checks for binary snapshots."""

    def setup_method(self):
        self.validator = TreeValidator()

    def test_empty_tree_is_valid(self):
        """Test that None passes for every family."""
        for tree_type in TreeType:
            assert self.validator.validate(None, tree_type, 3)

    def test_valid_bst(self):
        """Test a correctly ordered tree."""
        snapshot = BinarySnapshot(5, BinarySnapshot(3), BinarySnapshot(8, BinarySnapshot(7)))
        assert self.validator.validate(snapshot, TreeType.BST)
        assert self.validator.validation_errors == []

    def test_out_of_order_grandchild(self):
        """Test that ordering is checked against every ancestor."""
        snapshot = BinarySnapshot(5, BinarySnapshot(3, right=BinarySnapshot(6)))

        assert not self.validator.validate(snapshot, TreeType.BST)
        assert "Node 6 is outside its bounds (3, 5)" in self.validator.validation_errors

    def test_avl_stale_height(self):
        """Test that stored heights must match the structure."""
        snapshot = BinarySnapshot(5, BinarySnapshot(3, height=1, balance_factor=0),
                                  height=1, balance_factor=1)

        assert not self.validator.validate(snapshot, TreeType.AVL)
        assert "Node 5 stores height 1, actual 2" in self.validator.validation_errors

    def test_avl_unbalanced(self):
        """Test that a balance factor of 2 is rejected."""
        snapshot = BinarySnapshot(
            5,
            BinarySnapshot(3, BinarySnapshot(1, height=1, balance_factor=0),
                           height=2, balance_factor=1),
            height=3, balance_factor=2)

        assert not self.validator.validate(snapshot, TreeType.AVL)
        assert "Node 5 is unbalanced (2)" in self.validator.validation_errors


class TestMultiwayValidation:
    """Structure checks for B-tree and B+ tree snapshots."""

    def setup_method(self):
        self.validator = TreeValidator()

    def test_valid_btree(self):
        """Test a well formed order-3 B-tree."""
        snapshot = internal([20], leaf(10), leaf(30, 40))
        assert self.validator.validate(snapshot, TreeType.BTREE, 3)

    def test_btree_overfull_node(self):
        """Test the maximum key count."""
        snapshot = internal([20], leaf(10), leaf(30, 40, 50))

        assert not self.validator.validate(snapshot, TreeType.BTREE, 3)
        assert "Node [30, 40, 50] holds 3 keys, maximum is 2" in self.validator.validation_errors

    def test_overflow_allowed_without_fill_check(self):
        """Test that insert frames can be checked without bounds."""
        snapshot = leaf(10, 20, 30)
        assert self.validator.validate(snapshot, TreeType.BTREE, 3, check_fill=False)

    def test_btree_uneven_leaves(self):
        """Test that all leaves must sit at the same depth."""
        snapshot = internal([20], leaf(10), internal([40], leaf(30), leaf(50)))

        assert not self.validator.validate(snapshot, TreeType.BTREE, 3)
        assert "Leaves sit at different depths [1, 2]" in self.validator.validation_errors

    def test_btree_wrong_child_count(self):
        """Test that internal nodes need one more child than keys."""
        snapshot = internal([20, 30], leaf(10), leaf(25))

        assert not self.validator.validate(snapshot, TreeType.BTREE, 3)
        assert "Internal node [20, 30] has 2 children" in self.validator.validation_errors

    def test_valid_bplus_tree(self):
        """Test a routing copy with chained leaves."""
        snapshot = internal([20], leaf(10, 20, linked=True), leaf(30, 40))
        assert self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3)

    def test_bplus_stale_routing_key(self):
        """Test that routing keys must still be stored in a leaf."""
        snapshot = internal([20], leaf(10, 15, linked=True), leaf(30, 40))

        assert not self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3)
        assert "Routing key 20 is not stored in any leaf" in self.validator.validation_errors

    def test_bplus_broken_chain(self):
        """Test the linked flags of the leaves."""
        snapshot = internal([20], leaf(10, 20), leaf(30, 40))

        assert not self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3)
        assert "Leaf [10, 20] has a broken next link" in self.validator.validation_errors

    def test_bplus_underfull_leaf(self):
        """Test the leaf minimum."""
        snapshot = internal([10], leaf(10, linked=True), leaf(30, 40))

        assert not self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3)
        assert "Node [10] holds 1 keys, minimum is 2" in self.validator.validation_errors

    def test_errors_reset_between_runs(self):
        """Test that each validation starts from a clean slate."""
        self.validator.validate(internal([20], leaf(10), leaf(30, 40, 50)), TreeType.BTREE, 3)
        assert self.validator.validation_errors

        self.validator.validate(leaf(1), TreeType.BTREE, 3)
        assert self.validator.validation_errors == []

    def test_ensure_valid_raises(self):
        """Test the raising variant."""
        with pytest.raises(TreeInvariantError, match="maximum is 2") as info:
            self.validator.ensure_valid(leaf(1, 2, 3), TreeType.BTREE, 3)

        assert info.value.errors == ["Node [1, 2, 3] holds 3 keys, maximum is 2"]
