"""Matcher construction engine for fixed key sets.

This module turns a build-time-known list of (key, value) pairs into an
immutable decision tree that recognizes exactly those keys:

- LengthSplit, LengthTest: rejection of inputs whose length no key has,
  in about log2(#lengths) comparisons
- CharTest: one character read per level, lowest discriminating position
- Leaf: full equality check against the single surviving key

Example:
    from lookupgen.matching import build_matcher

    matcher = build_matcher(["a", "bb", "ccc"], ["A", "BB", "CCC"], str)

    matcher.lookup("bb")    # LookupResult(found=True, value='BB')
    matcher.lookup("zzz")   # LookupResult(found=False, value='')
"""

from .protocols import ComparisonMode, Renderer
from .errors import (
    MatcherBuildError,
    DuplicateKeyError,
    ArityMismatchError,
    EmptyKeySetError,
    UnrenderableValueError,
)
from .keys import Key, KeySet, normalize_keys
from .nodes import LengthSplit, LengthTest, CharTest, Leaf, Miss, MISS, Node
from .partition import partition_by_length, build_length_dispatch
from .discriminate import select_position, split_on_position
from .engine import Matcher, LookupResult, LookupTrace
from .builder import build_tree, build_matcher

__all__ = [
    # Protocols and enums
    'ComparisonMode',
    'Renderer',
    # Errors
    'MatcherBuildError',
    'DuplicateKeyError',
    'ArityMismatchError',
    'EmptyKeySetError',
    'UnrenderableValueError',
    # Keys
    'Key',
    'KeySet',
    'normalize_keys',
    # Decision tree
    'LengthSplit',
    'LengthTest',
    'CharTest',
    'Leaf',
    'Miss',
    'MISS',
    'Node',
    # Construction steps
    'partition_by_length',
    'build_length_dispatch',
    'select_position',
    'split_on_position',
    'build_tree',
    # Main engine
    'Matcher',
    'LookupResult',
    'LookupTrace',
    'build_matcher',
]
