"""Value types, miss defaults and source literals.

The matcher treats values as opaque. Everything that depends on what a
value actually is lives here: the value reported on a miss, turning
declared type names into Python types, and rendering values as source
for the emitter.
"""

import builtins
import importlib
import math
from enum import Enum
from typing import Any, Dict, Optional, Set

from lookupgen.matching.errors import UnrenderableValueError


VALUE_TYPES: Dict[str, type] = {
    'str': str,
    'int': int,
    'float': float,
    'bool': bool,
    'type': type,
    'any': object,
}

_DEFAULTS: Dict[Any, Any] = {
    str: "",
    int: 0,
    float: 0.0,
    bool: False,
}


def resolve_value_type(name: str) -> type:
    """Map a declared value type name to a Python type.

    Raises:
        ValueError: If name is not one of VALUE_TYPES.
    """
    try:
        return VALUE_TYPES[name]
    except KeyError:
        valid = ', '.join(sorted(VALUE_TYPES))
        raise ValueError(
            f"Unknown value type '{name}'. Valid types: {valid}"
        ) from None


def default_for(value_type: Any) -> Any:
    """Return the "no value" sentinel reported on a miss.

    Scalars get their zero value; every other type, including None for an
    undeclared type, gets None.
    """
    return _DEFAULTS.get(value_type)


def resolve_type_name(name: str) -> type:
    """Resolve a type name written in a declaration.

    Accepts builtin names ("int", "object") and dotted paths
    ("decimal.Decimal", "collections.OrderedDict").

    Raises:
        ValueError: If the name does not resolve to a class.
    """
    if not isinstance(name, str) or not name:
        raise ValueError(f"Type name must be a non-empty string, got {name!r}")

    resolved: Any = None
    if '.' not in name:
        resolved = getattr(builtins, name, None)
    else:
        parts = name.split('.')
        # Longest importable module prefix wins; the rest are attributes
        for split in range(len(parts) - 1, 0, -1):
            try:
                resolved = importlib.import_module('.'.join(parts[:split]))
            except ImportError:
                continue
            for attr in parts[split:]:
                resolved = getattr(resolved, attr, None)
            break

    if not isinstance(resolved, type):
        raise ValueError(f"'{name}' does not name a class")
    return resolved


def format_literal(value: Any, imports: Optional[Set[str]] = None) -> str:
    """Render value as a Python source expression.

    Args:
        value: None, bool, int, float, str, an Enum member or a class.
        imports: If given, modules the expression needs are added to it.

    Returns:
        Source text that evaluates to an equal value.

    Raises:
        UnrenderableValueError: For any other value.
    """
    kind = type(value)
    if value is None or kind in (bool, int, str):
        return repr(value)
    if kind is float:
        if not math.isfinite(value):
            raise UnrenderableValueError(value)
        return repr(value)
    if isinstance(value, Enum):
        return f"{_format_class(type(value), imports)}.{value.name}"
    if isinstance(value, type):
        return _format_class(value, imports)
    raise UnrenderableValueError(value)


def _format_class(cls: type, imports: Optional[Set[str]]) -> str:
    """Render a class reference, recording its module if needed."""
    module = cls.__module__
    qualname = cls.__qualname__
    if '<locals>' in qualname:
        raise UnrenderableValueError(cls)
    if module == 'builtins':
        return qualname
    if imports is not None:
        imports.add(module)
    return f"{module}.{qualname}"
