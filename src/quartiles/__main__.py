"""Run the Quartiles solver with `python -m quartiles`."""

import sys

from quartiles import main

sys.exit(main())
