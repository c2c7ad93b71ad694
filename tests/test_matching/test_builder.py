"""Tests for decision tree construction."""

import pytest

from lookupgen.matching import (
    ComparisonMode,
    DuplicateKeyError,
    EmptyKeySetError,
    Matcher,
    build_matcher,
    build_tree,
    normalize_keys,
)
from lookupgen.matching.keys import Key, KeySet
from lookupgen.matching.nodes import CharTest, Leaf, LengthTest, MISS, iter_leaves


def _leaf(text, index, value=None):
    return Leaf(Key(text, index, value))


class TestBuildTreeShape:
    """Tests for the structure build_tree produces."""

    def test_single_key(self):
        """Test one key gives one LengthTest over a Leaf."""
        root = build_tree(normalize_keys(["only"], [1]))
        assert root == LengthTest(4, _leaf("only", 0, 1), MISS)

    def test_distinct_lengths_need_no_char_tests(self):
        """Test keys of different lengths resolve by length alone."""
        root = build_tree(normalize_keys(["a", "bb", "ccc"], ["A", "BB", "CCC"]))

        assert root == LengthTest(
            1, _leaf("a", 0, "A"),
            LengthTest(
                2, _leaf("bb", 1, "BB"),
                LengthTest(3, _leaf("ccc", 2, "CCC"), MISS),
            ),
        )

    def test_same_length_split(self):
        """Test same-length keys split on the lowest differing position."""
        root = build_tree(normalize_keys(["one", "two", "three"], [1, 2, 3]))

        expected_bucket = CharTest(0, (
            ("o", _leaf("one", 0, 1)),
            ("t", _leaf("two", 1, 2)),
        ))
        assert root == LengthTest(
            3, expected_bucket, LengthTest(5, _leaf("three", 2, 3), MISS)
        )

    def test_nested_splits(self):
        """Test recursion picks a new position for each class."""
        keys = ["cab", "cat", "dog", "cot"]
        root = build_tree(normalize_keys(keys, keys))

        bucket = root.if_equal
        assert isinstance(bucket, CharTest) and bucket.position == 0
        assert bucket.characters == ("c", "d")

        c_class = bucket.branch_for("c")
        assert isinstance(c_class, CharTest) and c_class.position == 1
        assert c_class.characters == ("a", "o")

        ca_class = c_class.branch_for("a")
        assert isinstance(ca_class, CharTest) and ca_class.position == 2
        assert ca_class.characters == ("b", "t")

        assert bucket.branch_for("d") == _leaf("dog", 2, "dog")

    def test_shared_prefix_skipped(self):
        """Test positions where all keys agree are never tested."""
        root = build_tree(normalize_keys(["prefix_a", "prefix_b"], [1, 2]))
        assert root.if_equal.position == 7

    def test_every_key_has_one_leaf(self):
        """Test each key appears in exactly one leaf."""
        keys = ["if", "in", "is", "int", "for", "from", "def", "del"]
        root = build_tree(normalize_keys(keys, list(range(len(keys)))))

        texts = sorted(leaf.key.text for leaf in iter_leaves(root))
        assert texts == sorted(keys)

    def test_char_tests_within_key_length(self):
        """Test every CharTest position lies inside its bucket's length."""
        keys = ["alpha", "alpine", "alps", "also", "alto"]
        root = build_tree(normalize_keys(keys, keys))

        node = root
        while isinstance(node, LengthTest):
            stack = [node.if_equal]
            while stack:
                current = stack.pop()
                if isinstance(current, CharTest):
                    assert 0 <= current.position < node.length
                    stack.extend(child for _, child in current.branches)
            node = node.if_not

    def test_duplicate_in_unvalidated_key_set(self):
        """Test identical same-length keys cannot be split."""
        key_set = KeySet(keys=(Key("aa", 0), Key("aa", 1)))
        with pytest.raises(DuplicateKeyError):
            build_tree(key_set)


class TestDeterminism:
    """Tests for reproducible construction."""

    def test_rebuild_is_identical(self):
        """Test building twice yields equal trees."""
        keys = ["number", "string", "object", "nil", "bool", "array"]
        values = list(range(len(keys)))

        first = build_tree(normalize_keys(keys, values))
        second = build_tree(normalize_keys(keys, values))

        assert first == second
        assert repr(first) == repr(second)

    def test_matchers_compare_equal(self):
        """Test two matchers from the same declaration are equal."""
        first = build_matcher(["x", "yy"], [1, 2], int, name="f")
        second = build_matcher(["x", "yy"], [1, 2], int, name="f")
        assert first == second


class TestBuildMatcher:
    """Tests for build_matcher."""

    def test_metadata(self):
        """Test matcher metadata is filled in."""
        matcher = build_matcher(["one", "two", "three"], [1, 2, 3], int, name="lookup_int")

        assert isinstance(matcher, Matcher)
        assert matcher.key_count == 3
        assert matcher.mode is ComparisonMode.ORDINAL
        assert matcher.value_type is int
        assert matcher.default == 0
        assert matcher.name == "lookup_int"

    def test_defaults_follow_value_type(self):
        """Test the miss value depends on the declared type."""
        assert build_matcher(["a"], ["A"], str).default == ""
        assert build_matcher(["a"], [1.5], float).default == 0.0
        assert build_matcher(["a"], [True], bool).default is False
        assert build_matcher(["a"], [int], type).default is None
        assert build_matcher(["a"], [object()]).default is None

    def test_errors_propagate(self):
        """Test no matcher is produced from an invalid key set."""
        with pytest.raises(DuplicateKeyError):
            build_matcher(["a", "a"], [1, 2])
        with pytest.raises(EmptyKeySetError):
            build_matcher([], [])

    def test_matcher_is_frozen(self):
        """Test matchers cannot be modified."""
        matcher = build_matcher(["a"], [1])
        with pytest.raises(AttributeError):
            matcher.root = MISS
