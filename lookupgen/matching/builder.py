"""Decision tree construction.

Builds the tree in one greedy, deterministic pass:

1. Partition keys by length and build a balanced length dispatch.
2. Within each length, split on the lowest discriminating position.
3. Repeat for every class with more than one key.
4. Terminate each class of one key in a Leaf, which verifies the whole
   input at lookup time.

No attempt is made to find the tree with the fewest expected comparisons.
The same keys in the same order always produce an equal tree.
"""

import logging
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple, Union

from .discriminate import select_position, split_on_position
from .engine import Matcher
from .errors import DuplicateKeyError
from .keys import Key, KeySet, normalize_keys
from .nodes import CharTest, Leaf, MISS, Node
from .partition import build_length_dispatch, partition_by_length
from .protocols import ComparisonMode

logger = logging.getLogger(__name__)


def build_tree(key_set: KeySet) -> Node:
    """Build the decision tree for a validated key set.

    Args:
        key_set: Output of normalize_keys.

    Returns:
        Root node of the tree.

    Raises:
        DuplicateKeyError: If two keys of the same length cannot be told
            apart. normalize_keys already rejects this.
    """
    buckets = partition_by_length(key_set)
    return build_length_dispatch(buckets, _build_bucket)


def build_matcher(
    keys: Sequence[str],
    values: Sequence[Any],
    value_type: Any = None,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
    name: Optional[str] = None,
) -> Matcher:
    """Validate keys and values and build a Matcher.

    Args:
        keys: Ordered, distinct key strings.
        values: Values parallel to keys.
        value_type: Declared value type. Determines the value reported on
            a miss (see lookupgen.values.default_for).
        mode: Comparison mode.
        name: Optional name, used by emitters as the procedure name.

    Returns:
        Immutable Matcher.

    Raises:
        ArityMismatchError, EmptyKeySetError, DuplicateKeyError: On an
            invalid key set. No matcher is produced.
    """
    # Import here to avoid circular imports
    from lookupgen.values import default_for

    key_set = normalize_keys(keys, values, value_type, mode)
    root = build_tree(key_set)
    matcher = Matcher(
        root=root,
        key_count=len(key_set),
        mode=mode,
        value_type=value_type,
        default=default_for(value_type),
        name=name,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built matcher %s: %d key(s), %d length(s), depth %d, %d node(s)",
            name or "<anonymous>",
            matcher.key_count,
            len(key_set.lengths),
            matcher.depth,
            matcher.node_count,
        )
    return matcher


def _build_bucket(keys: List[Key]) -> Node:
    """Build the subtree for keys that all share one length."""
    return _build_group(keys, frozenset())


def _build_group(keys: List[Key], tested: FrozenSet[int]) -> Node:
    """Split keys until each group holds a single key.

    Groups are expanded breadth-first and assembled back to front, so a
    key set that nests one CharTest per character position needs no
    recursion.

    Args:
        keys: Same-length keys that agree on every position in tested.
        tested: Positions already tested on the path to this group.
    """
    groups: List[Optional[Tuple[List[Key], FrozenSet[int]]]] = [(keys, tested)]
    # Per group: its only Key, or (position, [(char, child group index)])
    plans: List[Union[Key, Tuple[int, List[Tuple[str, int]]]]] = []

    index = 0
    while index < len(groups):
        group, seen = groups[index]
        groups[index] = None
        if len(group) == 1:
            plans.append(group[0])
        else:
            position = select_position(group, seen)
            if position is None:
                raise DuplicateKeyError(group[0].text, group[0].index, group[1].index)
            now_tested = seen | {position}
            branches = []
            for char, subgroup in split_on_position(group, position):
                branches.append((char, len(groups)))
                groups.append((subgroup, now_tested))
            plans.append((position, branches))
        index += 1

    # A group's children always come after it
    nodes: List[Node] = [MISS] * len(plans)
    for index in reversed(range(len(plans))):
        plan = plans[index]
        if isinstance(plan, Key):
            nodes[index] = Leaf(plan)
        else:
            position, branches = plan
            nodes[index] = CharTest(
                position=position,
                branches=tuple((char, nodes[child]) for char, child in branches),
            )
    return nodes[0]
