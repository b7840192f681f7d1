"""
Module execution entry point.

Allows running with: python -m commitree_cli
"""

import sys
from commitree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
