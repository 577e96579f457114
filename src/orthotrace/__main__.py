"""Allow running the renderer with ``python -m orthotrace``."""

import sys

from orthotrace.cli import main

if __name__ == "__main__":
    sys.exit(main())
