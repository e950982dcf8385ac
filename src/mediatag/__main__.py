"""Allow ``python -m mediatag``."""

import sys

from mediatag.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
