"""Render matchers as plain Python functions.

Each matcher becomes a function ``name(key)`` returning ``(found, value)``.
The decision tree maps onto nested if/elif chains:

    def lookup_int(key):
        if not isinstance(key, str):
            return False, 0
        n = len(key)
        if n == 3:
            ch = key[0]
            if ch == 'o':
                if key == 'one':
                    return True, 1
            elif ch == 't':
                if key == 'two':
                    return True, 2
        elif n == 5:
            if key == 'three':
                return True, 3
        return False, 0

Every branch either returns a hit or falls through to the final miss. Long
runs of lengths and wide character tests are halved with ``n < pivot`` and
``ch < pivot`` tests, and subtrees nested too deep move into helper
functions, so the source stays within the interpreter's nesting limits.
No dict or hash table is built.
"""

import keyword
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from lookupgen.matching import CharTest, Leaf, LengthSplit, LengthTest, Matcher, Miss, Node
from lookupgen.values import format_literal

from .writer import SourceWriter

logger = logging.getLogger(__name__)

MODULE_HEADER = '"""Generated by lookupgen. Do not edit."""'

# Deepest indentation written inline before a subtree moves to a helper
MAX_NESTING = 32

# Most character branches compared in one if/elif chain before halving
LINEAR_BRANCH_LIMIT = 8


class PythonRenderer:
    """Renderer producing Python source for one or more matchers.

    Example:
        matcher = build_matcher(["a", "bb"], ["A", "BB"], str, name="find")
        source = PythonRenderer().render(matcher)
    """

    def __init__(self, indent: str = "    "):
        self._indent = indent

    def render(self, matcher: Matcher, name: Optional[str] = None) -> str:
        """Return a self-contained snippet defining one lookup function.

        Args:
            matcher: The built matcher.
            name: Function name; defaults to matcher.name.

        Raises:
            ValueError: If no valid function name is available.
            UnrenderableValueError: If a value has no source literal.
        """
        return self.render_module([(name or matcher.name, matcher)])

    def render_module(
        self,
        lookups: Sequence[Tuple[Optional[str], Matcher]],
        docs: Optional[Dict[str, str]] = None,
    ) -> str:
        """Return a module defining one function per (name, matcher) pair.

        Functions appear in the given order after a header and any imports
        the values need. Subtrees nested deeper than MAX_NESTING move into
        helper functions named ``_<name>_<n>``, written right after the
        function that calls them.

        Args:
            lookups: (function name, matcher) pairs.
            docs: Optional docstrings keyed by function name.

        Raises:
            ValueError: If a name is missing, not an identifier, or repeated.
            UnrenderableValueError: If a value has no source literal.
        """
        docs = docs or {}
        seen: Set[str] = set()
        for name, _ in lookups:
            _check_function_name(name)
            if name in seen:
                raise ValueError(f"Duplicate lookup name: {name}")
            seen.add(name)

        imports: Set[str] = set()
        body = SourceWriter(self._indent)
        for name, matcher in lookups:
            function = _Function(name, matcher.default, imports)
            self._write_function(body, function, matcher.root, docs.get(name))
            for helper in function.helper_names:
                if helper in seen:
                    raise ValueError(f"Duplicate lookup name: {helper}")
                seen.add(helper)

        # Imports are only known once every value has been rendered
        header = [MODULE_HEADER, ""]
        if imports:
            header.extend(f"import {module}" for module in sorted(imports))
            header.append("")
        header.append("")

        logger.debug("Rendered %d lookup function(s)", len(lookups))
        return "\n".join(header) + "\n" + body.render()

    def _write_function(
        self,
        writer: SourceWriter,
        function: '_Function',
        root: Node,
        doc: Optional[str],
    ) -> None:
        writer.blank_lines(2)
        writer.write_line(f"def {function.name}(key):")
        with writer.indented():
            if doc:
                writer.write_line(repr(doc))
            writer.write_line("if not isinstance(key, str):")
            with writer.indented():
                writer.write_line(function.miss)
            if not isinstance(root, Miss):
                writer.write_line("n = len(key)")
                self._write_node(writer, root, function)
            writer.write_line(function.miss)

        # Helpers may queue further helpers while being written
        index = 0
        while index < len(function.helpers):
            helper, subtree = function.helpers[index]
            writer.blank_lines(2)
            writer.write_line(f"def {helper}(key):")
            with writer.indented():
                self._write_node(writer, subtree, function)
                writer.write_line(function.miss)
            index += 1

    def _write_node(self, writer: SourceWriter, node: Node, function: '_Function') -> None:
        if isinstance(node, LengthSplit):
            writer.write_line(f"if n < {node.pivot}:")
            with writer.indented():
                self._write_node(writer, node.below, function)
            writer.write_line("else:")
            with writer.indented():
                self._write_node(writer, node.at_least, function)
        elif isinstance(node, LengthTest):
            self._write_length_chain(writer, node, function)
        elif isinstance(node, CharTest):
            if writer.level > MAX_NESTING:
                writer.write_line(f"return {function.defer(node)}(key)")
                return
            writer.write_line(f"ch = key[{node.position}]")
            self._write_branches(writer, node.branches, function)
        elif isinstance(node, Leaf):
            value = format_literal(node.key.value, function.imports)
            writer.write_line(f"if key == {node.key.text!r}:")
            with writer.indented():
                writer.write_line(f"return True, {value}")
        # Miss writes nothing: control falls through to the final miss

    def _write_branches(
        self,
        writer: SourceWriter,
        branches: Sequence[Tuple[str, Node]],
        function: '_Function',
    ) -> None:
        if len(branches) > LINEAR_BRANCH_LIMIT:
            # Branches are sorted, so halving on the middle character works
            middle = len(branches) // 2
            writer.write_line(f"if ch < {branches[middle][0]!r}:")
            with writer.indented():
                self._write_branches(writer, branches[:middle], function)
            writer.write_line("else:")
            with writer.indented():
                self._write_branches(writer, branches[middle:], function)
            return

        for i, (char, child) in enumerate(branches):
            opener = "if" if i == 0 else "elif"
            writer.write_line(f"{opener} ch == {char!r}:")
            with writer.indented():
                self._write_node(writer, child, function)

    def _write_length_chain(
        self, writer: SourceWriter, node: LengthTest, function: '_Function'
    ) -> None:
        first = True
        current: Node = node
        while isinstance(current, LengthTest):
            opener = "if" if first else "elif"
            writer.write_line(f"{opener} n == {current.length}:")
            with writer.indented():
                self._write_node(writer, current.if_equal, function)
            first = False
            current = current.if_not


class _Function:
    """Bookkeeping for one generated lookup function and its helpers."""

    def __init__(self, name: str, default: Any, imports: Set[str]):
        self.name = name
        self.imports = imports
        self.miss = f"return False, {format_literal(default, imports)}"
        self.helpers: List[Tuple[str, Node]] = []

    @property
    def helper_names(self) -> List[str]:
        return [helper for helper, _ in self.helpers]

    def defer(self, subtree: Node) -> str:
        """Queue subtree for its own helper function and return its name."""
        helper = f"_{self.name}_{len(self.helpers) + 1}"
        self.helpers.append((helper, subtree))
        return helper


def render_module(
    matchers: Sequence[Matcher],
    docs: Optional[Dict[str, str]] = None,
) -> str:
    """Render matchers into one module, each under its own name."""
    return PythonRenderer().render_module(
        [(matcher.name, matcher) for matcher in matchers], docs
    )


def compile_lookup(matcher: Matcher, name: Optional[str] = None) -> Callable:
    """Render a matcher and compile it into a callable.

    Args:
        matcher: The built matcher.
        name: Function name; defaults to matcher.name, then "lookup".

    Returns:
        The generated function, ``fn(key) -> (found, value)``.
    """
    name = name or matcher.name or "lookup"
    source = PythonRenderer().render(matcher, name)
    namespace: Dict[str, object] = {}
    exec(compile(source, f"<lookupgen:{name}>", "exec"), namespace)
    return namespace[name]


def _check_function_name(name: Optional[str]) -> None:
    if not name:
        raise ValueError("Lookup function needs a name")
    if not name.isidentifier() or keyword.iskeyword(name):
        raise ValueError(f"Invalid lookup function name: {name!r}")

