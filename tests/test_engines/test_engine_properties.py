import random

import pytest

from treetrace.core.types import StepKind, TreeType
from treetrace.engines import create_tree
from treetrace.validation import TreeValidator


def random_commands(seed, count=150, high=60):
    rng = random.Random(seed)
    return [(rng.random() < 0.6, rng.randint(1, high)) for _ in range(count)]


CASES = [
    (TreeType.BST, 3),
    (TreeType.AVL, 3),
    (TreeType.BTREE, 3),
    (TreeType.BTREE, 4),
    (TreeType.BTREE, 5),
    (TreeType.BPLUS_TREE, 3),
    (TreeType.BPLUS_TREE, 4),
    (TreeType.BPLUS_TREE, 5),
]


class TestEngineProperties:
    """Randomized command streams checked against a set model."""

    def setup_method(self):
        self.validator = TreeValidator()

    @pytest.mark.parametrize("tree_type, order", CASES)
    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_matches_set_model(self, tree_type, order, seed):
        """Test readout, invariants and bookends after every command."""
        engine = create_tree(tree_type, order)
        model = set()

        for is_insert, value in random_commands(seed):
            if is_insert:
                steps = engine.insert(value)
                model.add(value)
            else:
                steps = engine.delete(value)
                model.discard(value)

            assert engine.to_array() == sorted(model)
            assert steps[0].kind == StepKind.HIGHLIGHT
            assert steps[-1].kind == StepKind.COMPLETE
            assert steps[-1].tree_snapshot == engine.snapshot()
            assert self.validator.validate(engine.snapshot(), tree_type, order), \
                self.validator.validation_errors

    @pytest.mark.parametrize("tree_type, order", CASES)
    def test_repeated_insert_is_idempotent(self, tree_type, order):
        """Test that inserting a present value leaves the tree unchanged."""
        engine = create_tree(tree_type, order)
        for value in range(1, 20):
            engine.insert(value)

        before = engine.snapshot()
        engine.insert(11)
        assert engine.snapshot() == before

    @pytest.mark.parametrize("tree_type, order", CASES)
    def test_earlier_logs_are_never_mutated(self, tree_type, order):
        """Test that step logs and snapshots are independent of later calls."""
        engine = create_tree(tree_type, order)
        first = engine.insert(5)
        kept = list(first)
        snapshots = [step.tree_snapshot for step in first]

        for value in range(6, 30):
            engine.insert(value)
        engine.delete(5)

        assert first == kept
        assert [step.tree_snapshot for step in first] == snapshots
        assert first[-1].tree_snapshot.values() == [5]
