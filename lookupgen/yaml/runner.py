"""Lookup generation from YAML declarations.

This module provides the main entry point for turning a lookups.yaml file
into a generated Python module.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from lookupgen.emit import render_module

from .parser import parse_yaml_file, YAMLConfig
from .converter import yaml_to_matchers

logger = logging.getLogger(__name__)


def generate(
    yaml_path: Union[str, Path],
    output: Optional[Union[str, Path]] = None,
) -> str:
    """Build every lookup in a YAML file and render them as one module.

    Args:
        yaml_path: Path to the YAML file
        output: Where to write the module. Nothing is written if None.

    Returns:
        The generated Python source

    Example:
        source = generate('lookups.yaml', 'lookups_generated.py')
    """
    yaml_path = Path(yaml_path)
    config = parse_yaml_file(yaml_path)
    matchers = yaml_to_matchers(config)

    logger.info("Loaded %d lookup(s) from %s", len(matchers), yaml_path)

    source = render_module(matchers, docs=_collect_docs(config))

    if output is not None:
        output = Path(output)
        output.write_text(source, encoding='utf-8')
        logger.info("Wrote %s", output)

    return source


def describe(yaml_path: Union[str, Path]) -> List[str]:
    """Return a human-readable summary line for each lookup's tree."""
    config = parse_yaml_file(yaml_path)
    lines = []
    for matcher in yaml_to_matchers(config):
        lengths = sorted({len(key) for key in matcher.keys()})
        lines.append(
            f"{matcher.name}: {matcher.key_count} key(s), "
            f"lengths {lengths}, depth {matcher.depth}, "
            f"{matcher.node_count} node(s)"
        )
    return lines


def _collect_docs(config: YAMLConfig) -> dict:
    return {
        decl['name']: decl['doc']
        for decl in config.lookups
        if decl.get('doc')
    }


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point for generating lookups.

    Usage:
        python -m lookupgen.yaml [options] [yaml_file]

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    import argparse

    parser = argparse.ArgumentParser(
        description='Generate exact-match lookup functions from a YAML file',
        prog='python -m lookupgen.yaml',
    )
    parser.add_argument(
        'yaml_file',
        nargs='?',
        default='lookups.yaml',
        help='Path to the YAML file (default: lookups.yaml)',
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Write the generated module here (default: config.output, else stdout)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print progress information',
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Build the lookups and summarise them without generating code',
    )

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.INFO if parsed.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        yaml_path = Path(parsed.yaml_file)

        if parsed.dry_run:
            print(f"Parsed {yaml_path}:")
            for line in describe(yaml_path):
                print(f"  - {line}")
            return 0

        output = parsed.output
        if output is None:
            # config.output is relative to the YAML file
            configured = parse_yaml_file(yaml_path).config.get('output')
            if configured is not None:
                output = yaml_path.parent / configured

        source = generate(yaml_path, output)
        if output is None:
            sys.stdout.write(source)
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
