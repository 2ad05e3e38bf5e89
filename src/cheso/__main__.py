"""Allow ``python -m cheso``."""

from __future__ import annotations

import sys

from cheso.app import main

if __name__ == "__main__":
    sys.exit(main())
