"""Run the command line with `python -m enumvariants`."""

import sys

from enumvariants.cli import main


sys.exit(main())
