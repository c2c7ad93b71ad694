"""Key normalization for matcher construction.

Validates a raw key list and its parallel value list and turns them into
an immutable KeySet. This is the only place input is checked; the rest of
the builder assumes a well-formed, duplicate-free key set.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from .errors import ArityMismatchError, DuplicateKeyError, EmptyKeySetError
from .protocols import ComparisonMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Key:
    """A declared key with its position and associated value.

    Attributes:
        text: The key string, compared exactly.
        index: Zero-based declaration index.
        value: Opaque value returned when this key matches.
    """
    text: str
    index: int
    value: Any = None


@dataclass(frozen=True)
class KeySet:
    """Ordered, validated collection of keys for one lookup declaration.

    Attributes:
        keys: Keys in declaration order.
        value_type: Type descriptor declared for the values. The matcher
            never inspects it; it is carried along for emitters.
        mode: Comparison mode used for every test.
    """
    keys: Tuple[Key, ...]
    value_type: Any = None
    mode: ComparisonMode = ComparisonMode.ORDINAL

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self):
        return iter(self.keys)

    @property
    def lengths(self) -> Tuple[int, ...]:
        """Distinct key lengths, ascending."""
        return tuple(sorted({len(key.text) for key in self.keys}))


def normalize_keys(
    keys: Sequence[str],
    values: Sequence[Any],
    value_type: Any = None,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> KeySet:
    """Validate keys and values and build a KeySet.

    Args:
        keys: Ordered key strings.
        values: Values parallel to keys.
        value_type: Declared value type, stored opaquely.
        mode: Comparison mode for the matcher.

    Returns:
        KeySet with one Key per input pair, in declaration order.

    Raises:
        TypeError: If keys or values is None, or a key is not a string.
        ArityMismatchError: If keys and values differ in length.
        EmptyKeySetError: If no keys are given.
        DuplicateKeyError: If the same key appears twice.
    """
    if keys is None or values is None:
        raise TypeError("keys and values must not be None")

    keys = list(keys)
    values = list(values)

    if len(keys) != len(values):
        raise ArityMismatchError(len(keys), len(values))
    if not keys:
        raise EmptyKeySetError()

    seen: Dict[str, int] = {}
    normalized = []
    for index, (text, value) in enumerate(zip(keys, values)):
        if not isinstance(text, str):
            raise TypeError(
                f"Key at index {index} must be a string, "
                f"got {type(text).__name__}"
            )
        # ORDINAL compares raw codepoints, so the text is its own identity
        identity = _identity(text, mode)
        first: Optional[int] = seen.get(identity)
        if first is not None:
            raise DuplicateKeyError(text, first, index)
        seen[identity] = index
        normalized.append(Key(text=text, index=index, value=value))

    logger.debug("Normalized %d key(s) in %s mode", len(normalized), mode.value)
    return KeySet(keys=tuple(normalized), value_type=value_type, mode=mode)


def _identity(text: str, mode: ComparisonMode) -> str:
    """Return the string two keys must share to be considered equal."""
    if mode is ComparisonMode.ORDINAL:
        return text
    raise ValueError(f"Unsupported comparison mode: {mode}")
