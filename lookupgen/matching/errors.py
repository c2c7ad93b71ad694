"""Build-time errors raised while constructing a matcher.

Every error here is terminal for the declaration being built: no partial
matcher is ever produced. Lookups themselves never raise.
"""

from typing import Any


class MatcherBuildError(ValueError):
    """Base class for errors raised while building a matcher."""
    pass


class DuplicateKeyError(MatcherBuildError):
    """Two keys in one key set are equal under the comparison mode."""

    def __init__(self, key: str, first_index: int, second_index: int):
        self.key = key
        self.first_index = first_index
        self.second_index = second_index
        super().__init__(
            f"Duplicate key {key!r} at indices {first_index} and {second_index}"
        )


class ArityMismatchError(MatcherBuildError):
    """Key and value sequences have different lengths."""

    def __init__(self, key_count: int, value_count: int):
        self.key_count = key_count
        self.value_count = value_count
        super().__init__(
            f"Got {key_count} key(s) but {value_count} value(s)"
        )


class EmptyKeySetError(MatcherBuildError):
    """No keys were supplied.

    Callers that want an always-miss lookup should special-case it instead
    of building a degenerate matcher.
    """

    def __init__(self):
        super().__init__("Cannot build a matcher from an empty key set")


class UnrenderableValueError(MatcherBuildError):
    """A value cannot be expressed as a source literal by an emitter."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Cannot render value {value!r} of type {type(value).__name__} "
            f"as a source literal"
        )
