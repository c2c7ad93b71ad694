"""Tests for YAML to Matcher conversion."""

import decimal

import pytest

pytest.importorskip("yaml")

from lookupgen.matching import ArityMismatchError, DuplicateKeyError, EmptyKeySetError, Matcher
from lookupgen.yaml.converter import yaml_to_matcher, yaml_to_matchers
from lookupgen.yaml.parser import parse_yaml_string, YAMLParseError


class TestYAMLToMatcher:
    """Tests for yaml_to_matcher function."""

    def test_int_lookup(self):
        """Test converting an int lookup."""
        matcher = yaml_to_matcher({
            'name': 'lookup_int',
            'value_type': 'int',
            'keys': ['index', 'offset', 'radix'],
            'values': [42, -42, 8],
        })

        assert isinstance(matcher, Matcher)
        assert matcher.name == 'lookup_int'
        assert matcher.value_type is int
        assert matcher.lookup('radix') == (True, 8)
        assert matcher.lookup('length') == (False, 0)

    def test_string_lookup(self):
        """Test converting a string lookup."""
        matcher = yaml_to_matcher({
            'name': 'lookup_string',
            'value_type': 'str',
            'keys': ['fruit', 'flavor', 'color'],
            'values': ['apple', 'peachy', 'red'],
        })
        assert matcher.lookup('fruit') == (True, 'apple')
        assert matcher.lookup('shape') == (False, '')

    def test_type_lookup_resolves_names(self):
        """Test type names are resolved to classes."""
        matcher = yaml_to_matcher({
            'name': 'lookup_type',
            'value_type': 'type',
            'keys': ['number', 'string', 'object', 'decimal'],
            'values': ['int', 'str', 'object', 'decimal.Decimal'],
        })
        assert matcher.lookup('number') == (True, int)
        assert matcher.lookup('decimal') == (True, decimal.Decimal)
        assert matcher.lookup('float') == (False, None)

    def test_unknown_type_name(self):
        """Test unresolvable type names are reported with the lookup name."""
        with pytest.raises(YAMLParseError, match="lookup_type"):
            yaml_to_matcher({
                'name': 'lookup_type',
                'value_type': 'type',
                'keys': ['x'],
                'values': ['NoSuchType'],
            })

    def test_float_values_widened(self):
        """Test ints in a float lookup become floats."""
        matcher = yaml_to_matcher({
            'name': 'ratios',
            'value_type': 'float',
            'keys': ['one'],
            'values': [1],
        })
        found, value = matcher.lookup('one')
        assert found is True
        assert isinstance(value, float)

    def test_any_is_default(self):
        """Test omitted value_type accepts any values and misses with None."""
        matcher = yaml_to_matcher({
            'name': 'mixed',
            'keys': ['a', 'b'],
            'values': [1, 'two'],
        })
        assert matcher.value_type is object
        assert matcher.lookup('b') == (True, 'two')
        assert matcher.lookup('c') == (False, None)


class TestYAMLToMatcherErrors:
    """Engine errors surface unchanged."""

    def test_duplicate_key(self):
        """Test duplicate keys fail the build."""
        with pytest.raises(DuplicateKeyError):
            yaml_to_matcher({'name': 'f', 'keys': ['a', 'a'], 'values': [1, 2]})

    def test_arity_mismatch(self):
        """Test key/value count mismatch fails the build."""
        with pytest.raises(ArityMismatchError):
            yaml_to_matcher({'name': 'f', 'keys': ['a', 'b'], 'values': [1]})

    def test_empty_key_set(self):
        """Test an empty lookup fails the build."""
        with pytest.raises(EmptyKeySetError):
            yaml_to_matcher({'name': 'f', 'keys': [], 'values': []})


class TestYAMLToMatchers:
    """Tests for yaml_to_matchers function."""

    def test_all_lookups_in_order(self):
        """Test every lookup is converted, in declaration order."""
        config = parse_yaml_string("""
lookups:
  - name: second
    keys: [b]
    values: [2]
  - name: first
    keys: [a]
    values: [1]
""")
        matchers = yaml_to_matchers(config)
        assert [m.name for m in matchers] == ['second', 'first']

    def test_empty_config(self):
        """Test no lookups gives no matchers."""
        assert yaml_to_matchers(parse_yaml_string("")) == []
