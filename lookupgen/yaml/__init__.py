"""YAML-based lookup declarations for lookupgen.

This module provides a declarative YAML format for declaring fixed
key/value lookups and generating Python functions for them.

Example lookups.yaml:
    config:
      output: lookups_generated.py

    lookups:
      - name: lookup_int
        value_type: int
        keys: [index, offset, radix]
        values: [42, -42, 8]
      - name: lookup_type
        value_type: type
        keys: [number, string, object]
        values: [int, str, object]

Usage:
    from lookupgen.yaml import generate
    source = generate('lookups.yaml')

CLI:
    python -m lookupgen.yaml lookups.yaml
"""

from .parser import parse_yaml_file, parse_yaml_string, YAMLConfig, YAMLParseError
from .converter import yaml_to_matcher, yaml_to_matchers
from .runner import generate, describe, main

__all__ = [
    'parse_yaml_file',
    'parse_yaml_string',
    'YAMLConfig',
    'YAMLParseError',
    'yaml_to_matcher',
    'yaml_to_matchers',
    'generate',
    'describe',
    'main',
]
