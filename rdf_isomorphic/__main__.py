"""Default entrypoint for the rdf-isomorphic module."""

import sys

from . import main

sys.exit(main.main())
