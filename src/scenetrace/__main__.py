"""Entry point for running scenetrace directly.

Usage:
    python -m scenetrace
"""

import sys

from scenetrace.cli import main

if __name__ == "__main__":
    sys.exit(main())
