import os
import sys

import matplotlib

# Headless backend so analysis plots never open a window
matplotlib.use("Agg")

# Ensure the repository root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import board_from_rows, expected_adjacency

__all__ = [
    "board_from_rows",
    "expected_adjacency",
]
