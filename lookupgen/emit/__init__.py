"""Procedure emission for built matchers.

Turns a Matcher's decision tree into ordinary Python source, one function
per lookup, each returning ``(found, value)``. The generated code is
deterministic, so regenerating from the same declarations yields
byte-identical output.

Example:
    from lookupgen.matching import build_matcher
    from lookupgen.emit import compile_lookup

    matcher = build_matcher(["index", "offset", "radix"], [42, -42, 8], int)
    lookup_int = compile_lookup(matcher, "lookup_int")
    lookup_int("radix")   # (True, 8)
"""

from .writer import SourceWriter
from .python import PythonRenderer, render_module, compile_lookup

__all__ = [
    'SourceWriter',
    'PythonRenderer',
    'render_module',
    'compile_lookup',
]
