"""Decision tree nodes for compiled key matchers.

A matcher is a tree of five node kinds:

- LengthSplit: sends shorter inputs one way and the rest the other
- LengthTest: compares the input length against one declared length
- CharTest: reads one character and follows the branch for it
- Leaf: a single surviving candidate, confirmed by full equality
- Miss: no key can match

All nodes are frozen so a built tree can be shared freely between threads.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .keys import Key


@dataclass(frozen=True)
class Miss:
    """Terminal node: the input matches no declared key."""

    def __repr__(self) -> str:
        return "MISS"


MISS = Miss()


@dataclass(frozen=True)
class Leaf:
    """Exactly one candidate key remains.

    Reaching a leaf does not mean success: the input must still compare
    equal to ``key.text`` before the key's value is reported.
    """
    key: Key

    def verify(self, text: str) -> bool:
        """Return True if text is exactly this leaf's key."""
        return text == self.key.text


@dataclass(frozen=True)
class CharTest:
    """Branch on the character at ``position``.

    Attributes:
        position: Zero-based index of the character to read.
        branches: (character, child) pairs in ascending character order.
            A character with no branch leads to MISS.
    """
    position: int
    branches: Tuple[Tuple[str, 'Node'], ...]

    @property
    def default(self) -> Miss:
        """Node reached when the character has no branch."""
        return MISS

    def branch_for(self, char: str) -> 'Node':
        """Return the child for char, or MISS."""
        for candidate, child in self.branches:
            if candidate == char:
                return child
        return MISS

    @property
    def characters(self) -> Tuple[str, ...]:
        """Characters with an explicit branch."""
        return tuple(char for char, _ in self.branches)


@dataclass(frozen=True)
class LengthTest:
    """Compare the input length against ``length``.

    Attributes:
        length: Declared key length tested here.
        if_equal: Subtree for inputs of exactly this length.
        if_not: Next length test, or MISS when no length is left.
    """
    length: int
    if_equal: 'Node'
    if_not: Union['LengthTest', Miss] = MISS


@dataclass(frozen=True)
class LengthSplit:
    """Route on whether the input is shorter than ``pivot``.

    Attributes:
        pivot: Smallest declared length handled by ``at_least``.
        below: Length dispatch for inputs shorter than pivot.
        at_least: Length dispatch for every other input.
    """
    pivot: int
    below: 'Node'
    at_least: 'Node'


Node = Union[LengthSplit, LengthTest, CharTest, Leaf, Miss]


def children(node: Node) -> Tuple[Node, ...]:
    """Return the direct children of node, left to right."""
    if isinstance(node, LengthSplit):
        return (node.below, node.at_least)
    if isinstance(node, LengthTest):
        return (node.if_equal, node.if_not)
    if isinstance(node, CharTest):
        return tuple(child for _, child in node.branches)
    return ()


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield every node in the tree, depth-first, parents before children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def iter_leaves(node: Node) -> Iterator[Leaf]:
    """Yield every leaf in the tree, left to right."""
    for current in iter_nodes(node):
        if isinstance(current, Leaf):
            yield current


def tree_depth(node: Node) -> int:
    """Return the number of tests on the longest root-to-terminal path.

    Leaf verification counts as a test; MISS does not.
    """
    deepest = 0
    stack = [(node, 0)]
    while stack:
        current, above = stack.pop()
        if isinstance(current, Miss):
            deepest = max(deepest, above)
            continue
        stack.extend((child, above + 1) for child in children(current))
        if isinstance(current, Leaf):
            deepest = max(deepest, above + 1)
    return deepest
