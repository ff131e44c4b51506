"""Optical lens inventory grid engine.

Sparse per-combination stock, paint/edit grid mutations, CSV exchange and
dashboard analytics. Front ends live in `ui/` (Streamlit) and
`manage_inventory.py` (CLI).
"""

from .axes import SPHERE_VALUES, CYLINDER_VALUES
from .filter_key import LensFilters, encode_filter_key, decode_filter_key
from .grid_store import Cell, get_cell, paint_cell, set_cell_stock
from .grid_view import SortConfig, compute_grid_view, toggle_sort
from .csv_codec import CsvValidationError, export_csv, import_csv
from .analytics import InventoryStats, compute_inventory_stats

__version__ = "1.0.0"

__all__ = [
    "SPHERE_VALUES",
    "CYLINDER_VALUES",
    "LensFilters",
    "encode_filter_key",
    "decode_filter_key",
    "Cell",
    "get_cell",
    "paint_cell",
    "set_cell_stock",
    "SortConfig",
    "compute_grid_view",
    "toggle_sort",
    "CsvValidationError",
    "export_csv",
    "import_csv",
    "InventoryStats",
    "compute_inventory_stats",
]
