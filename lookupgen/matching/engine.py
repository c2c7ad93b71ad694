"""Runtime evaluation of a built decision tree.

The Matcher walks its tree for each input: length dispatch first, then
character tests, then a full equality check at the leaf. The tree is never
modified, so one Matcher can serve any number of concurrent lookups.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, NamedTuple, Optional

from .nodes import (
    CharTest,
    Leaf,
    LengthSplit,
    LengthTest,
    Node,
    iter_leaves,
    iter_nodes,
    tree_depth,
)
from .protocols import ComparisonMode


class LookupResult(NamedTuple):
    """Outcome of a lookup. Unpacks as ``found, value``."""
    found: bool
    value: Any


@dataclass
class LookupTrace:
    """Record of the comparisons made by one lookup.

    Used to observe how much work a lookup did, e.g. that an input of an
    undeclared length is rejected without reading any character.
    """

    length_tests: int = 0
    """Number of length comparisons performed."""

    positions: List[int] = field(default_factory=list)
    """Character positions read, in order."""

    verified: bool = False
    """Whether a leaf's full equality check ran."""

    result: Optional[LookupResult] = None
    """The lookup outcome."""

    @property
    def char_reads(self) -> int:
        """Number of single-character reads."""
        return len(self.positions)


@dataclass(frozen=True)
class Matcher:
    """Immutable exact-match lookup over a fixed key set.

    Example:
        matcher = build_matcher(["one", "two", "three"], [1, 2, 3], int)

        matcher.lookup("two")     # LookupResult(found=True, value=2)
        matcher.lookup("ten")     # LookupResult(found=False, value=0)
        "three" in matcher        # True
    """

    root: Node
    key_count: int
    mode: ComparisonMode = ComparisonMode.ORDINAL
    value_type: Any = None
    default: Any = None
    """Value reported alongside a miss."""
    name: Optional[str] = None

    def lookup(self, text: Any) -> LookupResult:
        """Find the value for text.

        Args:
            text: Input to match. Anything that is not a str is a miss.

        Returns:
            LookupResult(True, value) on a match, otherwise
            LookupResult(False, default).
        """
        return self._walk(text, None)

    def trace(self, text: Any) -> LookupTrace:
        """Perform a lookup while recording every comparison made."""
        trace = LookupTrace()
        trace.result = self._walk(text, trace)
        return trace

    def get(self, text: Any, default: Any = None) -> Any:
        """Return the value for text, or default if it is not a key."""
        found, value = self.lookup(text)
        return value if found else default

    def keys(self) -> List[str]:
        """Return declared keys in declaration order."""
        leaves = sorted(iter_leaves(self.root), key=lambda leaf: leaf.key.index)
        return [leaf.key.text for leaf in leaves]

    def __contains__(self, text: Any) -> bool:
        return self.lookup(text).found

    def __len__(self) -> int:
        return self.key_count

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    @property
    def depth(self) -> int:
        """Most tests any single lookup can perform."""
        return tree_depth(self.root)

    @property
    def node_count(self) -> int:
        """Total number of nodes in the tree."""
        return sum(1 for _ in iter_nodes(self.root))

    def _walk(self, text: Any, trace: Optional[LookupTrace]) -> LookupResult:
        miss = LookupResult(False, self.default)
        if not isinstance(text, str):
            return miss

        length = len(text)
        node = self.root
        while True:
            if isinstance(node, LengthSplit):
                if trace is not None:
                    trace.length_tests += 1
                node = node.below if length < node.pivot else node.at_least
            elif isinstance(node, LengthTest):
                if trace is not None:
                    trace.length_tests += 1
                node = node.if_equal if length == node.length else node.if_not
            elif isinstance(node, CharTest):
                # Reached only below a matching LengthTest, so in range
                if trace is not None:
                    trace.positions.append(node.position)
                node = node.branch_for(text[node.position])
            elif isinstance(node, Leaf):
                if trace is not None:
                    trace.verified = True
                if node.verify(text):
                    return LookupResult(True, node.key.value)
                return miss
            else:
                return miss
