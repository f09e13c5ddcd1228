"""Allow ``python -m potsync``."""

import sys

from potsync.cli import main

if __name__ == "__main__":
    sys.exit(main())
