"""Selection of discriminating character positions.

Within a group of same-length keys, a discriminating position is an index
where at least two keys disagree. Splitting the group on that character
yields smaller groups, and repeating the process on each one eventually
leaves a single key per group.
"""

from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

from .keys import Key


def select_position(
    keys: Sequence[Key],
    tested: AbstractSet[int] = frozenset(),
) -> Optional[int]:
    """Pick the lowest position where the keys do not all agree.

    Args:
        keys: Two or more keys of the same length.
        tested: Positions already tested on the current path. Every key in
            the group agrees on them, so they are skipped.

    Returns:
        The selected position, or None if the keys agree everywhere
        (which only happens for duplicate keys).
    """
    if not keys:
        return None
    length = len(keys[0].text)
    for position in range(length):
        if position in tested:
            continue
        first = keys[0].text[position]
        for key in keys[1:]:
            if key.text[position] != first:
                return position
    return None


def split_on_position(
    keys: Sequence[Key],
    position: int,
) -> List[Tuple[str, List[Key]]]:
    """Partition keys by their character at position.

    Args:
        keys: Keys long enough to have a character at position.
        position: Character index to split on.

    Returns:
        (character, keys) classes in ascending character order. Each class
        keeps declaration order.
    """
    classes: Dict[str, List[Key]] = {}
    for key in keys:
        classes.setdefault(key.text[position], []).append(key)
    return [(char, classes[char]) for char in sorted(classes)]
