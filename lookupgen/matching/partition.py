"""Length partitioning and the top-level length dispatch.

Two strings of different length are never equal, so length is the first
thing a matcher tests. Inputs whose length matches no declared key reach
MISS without a single character being read.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from .keys import Key, KeySet
from .nodes import LengthSplit, LengthTest, MISS, Node

# Largest run of lengths tested one after another instead of split in half
LINEAR_LENGTH_LIMIT = 3


def partition_by_length(key_set: KeySet) -> List[Tuple[int, List[Key]]]:
    """Group keys by length.

    Args:
        key_set: Validated key set.

    Returns:
        (length, keys) pairs in ascending length order. Keys within a
        bucket keep declaration order. No bucket is ever empty.
    """
    buckets: Dict[int, List[Key]] = {}
    for key in key_set.keys:
        buckets.setdefault(len(key.text), []).append(key)
    return [(length, buckets[length]) for length in sorted(buckets)]


def build_length_dispatch(
    buckets: Sequence[Tuple[int, List[Key]]],
    build_bucket: Callable[[List[Key]], Node],
) -> Node:
    """Build a balanced length dispatch over the buckets.

    Runs of up to LINEAR_LENGTH_LIMIT lengths become a chain of LengthTests
    ending in MISS. Longer runs are halved at the median length with a
    LengthSplit, so any input, present length or not, is settled after
    about log2(#lengths) + LINEAR_LENGTH_LIMIT length comparisons.

    Args:
        buckets: Output of partition_by_length.
        build_bucket: Builds the subtree for one bucket's keys.

    Returns:
        Root of the dispatch, or MISS if there are no buckets.

    Example:
        Buckets for lengths 1, 2 and 3 produce

            LengthTest(1, <bucket 1>,
                LengthTest(2, <bucket 2>,
                    LengthTest(3, <bucket 3>, MISS)))

        and lengths 1 to 4 produce

            LengthSplit(3,
                LengthTest(1, <bucket 1>, LengthTest(2, <bucket 2>, MISS)),
                LengthTest(3, <bucket 3>, LengthTest(4, <bucket 4>, MISS)))
    """
    subtrees = [(length, build_bucket(keys)) for length, keys in buckets]
    return _balanced(subtrees)


def _balanced(subtrees: Sequence[Tuple[int, Node]]) -> Node:
    if len(subtrees) <= LINEAR_LENGTH_LIMIT:
        return _length_chain(subtrees)
    middle = len(subtrees) // 2
    return LengthSplit(
        pivot=subtrees[middle][0],
        below=_balanced(subtrees[:middle]),
        at_least=_balanced(subtrees[middle:]),
    )


def _length_chain(subtrees: Sequence[Tuple[int, Node]]) -> Node:
    node: Node = MISS
    for length, subtree in reversed(subtrees):
        node = LengthTest(length=length, if_equal=subtree, if_not=node)
    return node
