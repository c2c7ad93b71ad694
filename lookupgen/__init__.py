"""lookupgen - exact-match lookups for fixed key sets.

Builds length-then-character decision trees for a build-time-known set
of keys, evaluates them at runtime and renders them as Python functions.
"""

from lookupgen.matching import (
    build_matcher,
    Matcher,
    LookupResult,
    ComparisonMode,
    MatcherBuildError,
    DuplicateKeyError,
    ArityMismatchError,
    EmptyKeySetError,
)

__version__ = '0.1.0'

__all__ = [
    'build_matcher',
    'Matcher',
    'LookupResult',
    'ComparisonMode',
    'MatcherBuildError',
    'DuplicateKeyError',
    'ArityMismatchError',
    'EmptyKeySetError',
]
