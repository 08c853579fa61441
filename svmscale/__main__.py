"""Allows running the toolkit with `python -m svmscale`."""

import sys

from svmscale.cli import main

sys.exit(main())
