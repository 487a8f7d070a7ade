import pytest

from treetrace.core.types import StepKind, TreeType
from treetrace.engines import BPlusTree
from treetrace.validation import TreeValidator


def build(order, *values):
    tree = BPlusTree(order)
    for value in values:
        tree.insert(value)
    return tree


def shape(snapshot):
    if snapshot.is_leaf:
        return list(snapshot.keys)
    return (list(snapshot.keys), [shape(child) for child in snapshot.children])


def chain(tree):
    """Leaf key groups read through the next links."""
    groups = []
    leaf = tree.first_leaf()
    while leaf is not None:
        groups.append(list(leaf.keys))
        leaf = leaf.next
    return groups


class TestBPlusTreeInsert:
    """Leaf splits, copy-up and the leaf chain."""

    def setup_method(self):
        self.tree = build(3, 10, 20, 30, 40)
        self.validator = TreeValidator()

    def test_order_bounds(self):
        """Test leaf and internal bounds derived from the order."""
        assert (self.tree.max_leaf_keys, self.tree.min_leaf_keys) == (3, 2)
        assert (self.tree.max_keys, self.tree.min_keys) == (2, 1)
        assert (BPlusTree(5).max_leaf_keys, BPlusTree(5).min_leaf_keys) == (5, 3)

    def test_insert_scenario(self):
        """Test that the root key is a routing copy of 20."""
        snapshot = self.tree.snapshot()

        assert shape(snapshot) == ([20], [[10, 20], [30, 40]])
        assert self.tree.to_array() == [10, 20, 30, 40]
        assert 20 in snapshot.children[0].keys
        assert self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3)

    def test_leaves_are_chained(self):
        """Test the next links between leaves."""
        assert chain(self.tree) == [[10, 20], [30, 40]]
        assert self.tree.first_leaf().next.next is None

        leaves = self.tree.snapshot().children
        assert leaves[0].linked
        assert not leaves[1].linked

    def test_leaf_split_copies_key_up(self):
        """Test the split message of a leaf."""
        tree = build(3, 10, 20, 30)
        steps = tree.insert(40)

        split = [step for step in steps if step.kind == StepKind.SPLIT]
        assert [step.description for step in split] == [
            "Split the root into [10, 20] and [30, 40], 20 copied up to a new root"]

    def test_internal_split_moves_key_up(self):
        """Test that an internal split does not keep its middle key."""
        tree = BPlusTree(3)
        descriptions = []
        for value in range(10, 100, 10):
            descriptions.extend(step.description for step in tree.insert(value))
        snapshot = tree.snapshot()

        assert any("moved up" in description for description in descriptions)
        assert self.validator.validate(snapshot, TreeType.BPLUS_TREE, 3), \
            self.validator.validation_errors
        assert tree.to_array() == list(range(10, 100, 10))
        assert chain(tree) == [list(keys) for keys in snapshot.leaf_keys()]

    def test_duplicate_detected_at_leaf(self):
        """Test that a value equal to a routing key is still found in its leaf."""
        before = self.tree.snapshot()
        steps = self.tree.insert(20)

        assert any(step.description == "20 already exists" for step in steps)
        assert self.tree.snapshot() == before

    def test_routing_is_recorded(self):
        """Test that each routing decision is a step."""
        steps = self.tree.insert(15)

        assert "Routing from [20] into child 0" in [step.description for step in steps]
        assert shape(self.tree.snapshot()) == ([20], [[10, 15, 20], [30, 40]])


class TestBPlusTreeDelete:
    """Routing refresh, borrow and merge of leaves."""

    def setup_method(self):
        self.tree = build(3, 10, 20, 30, 40)
        self.validator = TreeValidator()

    def test_routing_key_refreshed(self):
        """Test that a routing copy of a deleted value is replaced."""
        self.tree.insert(15)
        steps = self.tree.delete(20)

        assert "Routing key 20 refreshed to 15" in [step.description for step in steps]
        assert shape(self.tree.snapshot()) == ([15], [[10, 15], [30, 40]])

    def test_merge_collapses_root(self):
        """Test that merging the only two leaves leaves a single leaf."""
        steps = self.tree.delete(20)

        merge = [step for step in steps if step.kind == StepKind.MERGE]
        assert len(merge) == 1
        assert "Routing key 20 refreshed to 10" in merge[0].description
        assert shape(self.tree.snapshot()) == [10, 30, 40]
        assert chain(self.tree) == [[10, 30, 40]]
        assert not self.tree.snapshot().linked

    def test_borrow_from_right_leaf(self):
        """Test borrowing the smallest key of the right leaf."""
        self.tree.insert(50)
        steps = self.tree.delete(10)

        assert any("Borrowed 30 from the right leaf, routing key is now 30" in step.description
                   for step in steps)
        assert shape(self.tree.snapshot()) == ([30], [[20, 30], [40, 50]])

    def test_borrow_from_left_leaf(self):
        """Test borrowing the largest key of the left leaf."""
        self.tree.insert(5)
        steps = self.tree.delete(40)

        assert any("Borrowed 20 from the left leaf, routing key is now 10" in step.description
                   for step in steps)
        assert shape(self.tree.snapshot()) == ([10], [[5, 10], [20, 30]])

    def test_no_underfull_node_in_any_step(self):
        """Test the recorded snapshots of a long teardown."""
        tree = build(3, *range(1, 30))
        for value in range(1, 30):
            for step in tree.delete(value):
                snapshot = step.tree_snapshot
                if snapshot is None:
                    continue
                for node in snapshot.nodes()[1:]:
                    minimum = tree.min_leaf_keys if node.is_leaf else tree.min_keys
                    assert len(node.keys) >= minimum
        assert tree.is_empty()
        assert tree.first_leaf() is None

    @pytest.mark.parametrize("order", [3, 4, 5])
    def test_chain_matches_structure_after_deletes(self, order):
        """Test the leaf chain against the tree after every delete."""
        values = [(i * 29) % 83 for i in range(1, 50)]
        tree = build(order, *values)

        for value in values[1::3]:
            tree.delete(value)
            snapshot = tree.snapshot()
            assert chain(tree) == [list(keys) for keys in snapshot.leaf_keys()]
            assert self.validator.validate(snapshot, TreeType.BPLUS_TREE, order), \
                self.validator.validation_errors

    def test_delete_missing_key(self):
        """Test that an absent key leaves the tree untouched."""
        before = self.tree.snapshot()
        steps = self.tree.delete(25)

        assert steps[-2].description == "25 not found"
        assert self.tree.snapshot() == before
