"""Allow ``python -m quiz_judge``."""

import sys

from .cli import main

sys.exit(main())
