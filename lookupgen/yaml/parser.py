"""YAML parsing and validation for lookup declarations.

This module handles parsing lookups.yaml files and validating their
structure. It checks shape only: duplicate keys and arity mismatches are
reported by the matcher builder.
"""

import keyword
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Union

import yaml

from lookupgen.values import VALUE_TYPES


@dataclass
class YAMLConfig:
    """Parsed YAML configuration."""
    config: Dict[str, Any] = field(default_factory=dict)
    lookups: List[Dict[str, Any]] = field(default_factory=list)


class YAMLParseError(Exception):
    """Error parsing or validating YAML file."""
    pass


def parse_yaml_file(path: Union[str, Path]) -> YAMLConfig:
    """Parse and validate a lookups.yaml file.

    Args:
        path: Path to the YAML file

    Returns:
        YAMLConfig with parsed configuration and lookups

    Raises:
        YAMLParseError: If the file is invalid or missing required fields
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, encoding='utf-8') as f:
        return parse_yaml_string(f.read())


def parse_yaml_string(content: str) -> YAMLConfig:
    """Parse YAML content from a string.

    Args:
        content: YAML content as string

    Returns:
        YAMLConfig with parsed configuration and lookups
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise YAMLParseError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise YAMLParseError("YAML root must be a mapping")

    return _validate_yaml_data(data)


def _validate_yaml_data(data: Dict[str, Any]) -> YAMLConfig:
    """Validate parsed YAML data structure.

    Args:
        data: Parsed YAML dictionary

    Returns:
        Validated YAMLConfig

    Raises:
        YAMLParseError: If validation fails
    """
    config = data.get('config', {})
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise YAMLParseError("'config' must be a mapping")
    if 'output' in config and not isinstance(config['output'], str):
        raise YAMLParseError("'config.output' must be a string")

    lookups = data.get('lookups', [])
    if lookups is None:
        lookups = []
    if not isinstance(lookups, list):
        raise YAMLParseError("'lookups' must be a list")

    validated_lookups = []
    names = set()
    for i, decl in enumerate(lookups):
        validated = _validate_lookup(decl, i)
        if validated['name'] in names:
            raise YAMLParseError(f"Duplicate lookup name '{validated['name']}'")
        names.add(validated['name'])
        validated_lookups.append(validated)

    return YAMLConfig(config=config, lookups=validated_lookups)


def _validate_lookup(decl: Dict[str, Any], index: int) -> Dict[str, Any]:
    """Validate a single lookup declaration.

    Args:
        decl: Lookup dictionary
        index: Index in lookups list (for error messages)

    Returns:
        Validated lookup dictionary

    Raises:
        YAMLParseError: If validation fails
    """
    if not isinstance(decl, dict):
        raise YAMLParseError(f"Lookup {index} must be a mapping")

    # Required fields
    if 'name' not in decl:
        raise YAMLParseError(f"Lookup {index} missing required field 'name'")
    name = decl['name']
    if not isinstance(name, str):
        raise YAMLParseError(f"Lookup {index}: 'name' must be a string")
    if not name.isidentifier() or keyword.iskeyword(name):
        raise YAMLParseError(f"Lookup {index}: '{name}' is not a valid identifier")

    if 'keys' not in decl:
        raise YAMLParseError(f"Lookup '{name}' missing required field 'keys'")
    if not isinstance(decl['keys'], list):
        raise YAMLParseError(f"Lookup '{name}': 'keys' must be a list")

    if 'values' not in decl:
        raise YAMLParseError(f"Lookup '{name}' missing required field 'values'")
    if not isinstance(decl['values'], list):
        raise YAMLParseError(f"Lookup '{name}': 'values' must be a list")

    # Keys must be strings; unquoted yes/no/numbers load as other types
    for i, key in enumerate(decl['keys']):
        if not isinstance(key, str):
            raise YAMLParseError(
                f"Lookup '{name}': key {i} ({key!r}) must be a string. "
                f"Quote it in the YAML file."
            )

    # Optional fields
    value_type = decl.get('value_type', 'any')
    if not isinstance(value_type, str) or value_type not in VALUE_TYPES:
        raise YAMLParseError(
            f"Lookup '{name}' has invalid value_type '{value_type}'. "
            f"Valid types: {sorted(VALUE_TYPES)}"
        )
    for i, value in enumerate(decl['values']):
        _validate_value(value, value_type, name, i)

    if 'doc' in decl and not isinstance(decl.get('doc'), str):
        raise YAMLParseError(f"Lookup '{name}': 'doc' must be a string")

    return decl


def _validate_value(value: Any, value_type: str, name: str, index: int) -> None:
    """Validate one value against the declared value type.

    Args:
        value: Value as loaded from YAML
        value_type: Declared value type name
        name: Lookup name (for error messages)
        index: Value index (for error messages)

    Raises:
        YAMLParseError: If validation fails
    """
    if value_type == 'any':
        return

    if value_type == 'type':
        # Type values are written as names and resolved by the converter
        ok = isinstance(value, str)
    elif value_type == 'float':
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif value_type == 'int':
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, VALUE_TYPES[value_type])

    if not ok:
        message = f"Lookup '{name}': value {index} ({value!r}) is not of type '{value_type}'"
        if value_type == 'float' and isinstance(value, str):
            # YAML 1.1 floats need a dot and a signed exponent; 1e10 loads as a string
            message += ". Write floats with a decimal point and signed exponent, e.g. 1.0e+10."
        raise YAMLParseError(message)
