"""
Package entry point.

Allows running: python -m osm_finder "Jakarta" --radius 5000
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
