"""Allow ``python -m doclocalize``."""

import sys

from doclocalize.cli import main

sys.exit(main())
