"""CLI entry point for lookupgen.yaml module.

Usage:
    python -m lookupgen.yaml [options] [yaml_file]

Example:
    python -m lookupgen.yaml lookups.yaml
    python -m lookupgen.yaml -o generated.py lookups.yaml
    python -m lookupgen.yaml --dry-run lookups.yaml
"""

from .runner import main
import sys

if __name__ == '__main__':
    sys.exit(main())
