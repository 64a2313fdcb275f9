"""Entry point for running bicameral directly.

Usage:
    python -m bicameral
"""

import sys

from bicameral.cli import main

if __name__ == "__main__":
    sys.exit(main())
