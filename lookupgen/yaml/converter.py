"""Convert YAML declarations to Matcher objects.

This module handles converting parsed YAML structures into built
matchers ready for lookups or code emission.
"""

from typing import Any, Dict, List

from lookupgen.matching import Matcher, build_matcher
from lookupgen.values import resolve_type_name, resolve_value_type

from .parser import YAMLConfig, YAMLParseError


def yaml_to_matchers(config: YAMLConfig) -> List[Matcher]:
    """Build a matcher for every lookup in a YAMLConfig.

    Args:
        config: Parsed YAML configuration

    Returns:
        List of Matcher objects, in declaration order
    """
    return [yaml_to_matcher(decl) for decl in config.lookups]


def yaml_to_matcher(decl: Dict[str, Any]) -> Matcher:
    """Convert a YAML lookup declaration to a Matcher.

    Args:
        decl: Validated lookup declaration dictionary

    Returns:
        Matcher named after the declaration

    Raises:
        YAMLParseError: If a type name value cannot be resolved
        MatcherBuildError: If the keys and values do not form a valid key set
    """
    type_name = decl.get('value_type', 'any')
    value_type = resolve_value_type(type_name)
    values = [_parse_value(value, type_name, decl['name']) for value in decl['values']]

    return build_matcher(
        decl['keys'],
        values,
        value_type=value_type,
        name=decl['name'],
    )


def _parse_value(value: Any, type_name: str, lookup_name: str) -> Any:
    """Turn a YAML value into the value stored in the matcher.

    Args:
        value: Value as loaded from YAML
        type_name: Declared value type name
        lookup_name: Lookup name (for error messages)

    Returns:
        The value, with type names resolved to classes and ints widened
        to floats for float lookups

    Raises:
        YAMLParseError: If a type name value cannot be resolved
    """
    if type_name == 'type':
        try:
            return resolve_type_name(value)
        except ValueError as e:
            raise YAMLParseError(f"Lookup '{lookup_name}': {e}")

    if type_name == 'float':
        return float(value)

    return value
