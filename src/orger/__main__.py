"""Allow ``python -m orger``."""

import sys

from orger.cli import main

sys.exit(main())
