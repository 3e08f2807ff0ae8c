"""Allow `python -m ltrkit`."""

import sys

from .cli import main

sys.exit(main())
