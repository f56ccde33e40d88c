"""Allows running the interpreter with ``python -m egg``."""
import sys

from egg.main import main

sys.exit(main())
