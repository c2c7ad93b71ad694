"""Protocols and enums for the matching system.

This module defines the comparison modes a matcher can be built with and
the interface that procedure emitters implement to turn a built matcher
into executable source.
"""

from enum import Enum
from typing import Optional, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .engine import Matcher


class ComparisonMode(Enum):
    """How a runtime input is compared against the declared keys.

    The builder and every emitter use this to decide what "equal" means
    for a character test and for the final leaf verification.
    """
    ORDINAL = "ordinal"     # Exact, case-sensitive codepoint comparison


@runtime_checkable
class Renderer(Protocol):
    """Protocol for objects that render a built matcher into source code.

    A renderer walks the decision tree of a Matcher and produces a
    callable procedure with the signature ``lookup(key) -> (found, value)``
    in its target language.
    """

    def render(self, matcher: 'Matcher', name: Optional[str] = None) -> str:
        """Return source text for a lookup procedure.

        Args:
            matcher: The built matcher to render.
            name: Name of the generated procedure. Falls back to the
                matcher's own name when omitted.

        Returns:
            Source code as a string.
        """
        ...
