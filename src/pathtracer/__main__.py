"""Allow ``python -m pathtracer``."""

import sys

from pathtracer.cli import main

if __name__ == "__main__":
    sys.exit(main())
