"""Allow running the command-line tool with ``python -m rquery``."""

import sys

from rquery.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
