"""
Pytest configuration for ensuring the project root is on sys.path.

This allows test modules to import the in-repo package layout like:
    from lens_inventory.grid_store import paint_cell

Without relying on external environment variables.
"""

import os
import sys

import pytest

# Insert the repository root (one directory up from tests/) at the
# beginning of sys.path to prioritize local modules over site-packages.
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


DEFAULT_KEY = "Monofocal|Mineral|Sin color|Sin Fotocromático|Antirreflejos|65|0|1.523"


@pytest.fixture
def default_key() -> str:
    return DEFAULT_KEY


@pytest.fixture
def colors():
    from lens_inventory.catalog import default_colors

    return default_colors()
