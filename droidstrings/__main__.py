"""Allow ``python -m droidstrings``."""

import sys

from droidstrings.cli import main

if __name__ == "__main__":
    sys.exit(main())
