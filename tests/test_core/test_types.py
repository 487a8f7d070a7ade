import pytest

from treetrace.core.exceptions import (
    CommandParseError,
    InvalidOrderError,
    TreeTraceException,
    UnknownTreeTypeError,
)
from treetrace.core.types import StepKind, TreeType


class TestTreeType:
    """Tests for the tree family enum."""

    @pytest.mark.parametrize("name, expected", [
        ("bst", TreeType.BST),
        (" AVL ", TreeType.AVL),
        ("B-Tree", TreeType.BTREE),
        ("b+", TreeType.BPLUS_TREE),
        ("bplus_tree", TreeType.BPLUS_TREE),
        (TreeType.BTREE, TreeType.BTREE),
    ])
    def test_parse(self, name, expected):
        """Test members, values and aliases."""
        assert TreeType.parse(name) == expected

    def test_parse_unknown(self):
        """Test that unknown names raise."""
        with pytest.raises(UnknownTreeTypeError):
            TreeType.parse("trie")

    def test_is_multiway(self):
        """Test which families take an order."""
        assert [t for t in TreeType if t.is_multiway()] == [TreeType.BTREE, TreeType.BPLUS_TREE]

    def test_display_names(self):
        """Test human readable names."""
        assert [t.display_name() for t in TreeType] == [
            "Binary Search Tree", "AVL Tree", "B-Tree", "B+ Tree"]

    def test_step_kinds(self):
        """Test the full set of step kinds."""
        assert [kind.value for kind in StepKind] == [
            "highlight", "create", "insert", "delete", "rotate", "split", "merge", "complete"]


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_all_errors_share_a_base(self):
        """Test that callers can catch one base class."""
        for error in (InvalidOrderError(2, 3), UnknownTreeTypeError("x"),
                      CommandParseError("x", 0)):
            assert isinstance(error, TreeTraceException)

    def test_messages(self):
        """Test the formatted messages."""
        assert str(InvalidOrderError(2, 3)) == "Tree order must be an integer >= 3, got 2"
        assert str(CommandParseError("x 1", 4)) == "Cannot parse command 'x 1' at position 4"
