# Area: Shared
"""Allow ``python -m ttt_client``."""

import sys

from .cli import main

sys.exit(main())
