"""Allow ``python -m recipe_export``."""

import sys

from recipe_export.cli import main

sys.exit(main())
