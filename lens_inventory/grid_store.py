from __future__ import annotations

"""
Sparse inventory store.

Layout (an ownership tree, no back references):

    store[filter_key][sphere][cylinder] -> Cell(stock, color)

Absent entries mean "not offered" and are equivalent to the erase cell
`Cell(0, "")`. The store never holds erase cells: writing one removes the
entry and any sphere row or sub-grid left empty.

Every write is copy-on-write. Only the touched sub-grid and sphere row are
copied, untouched branches are shared, and a write that changes nothing
returns the very same store object so callers can detect changes with `is`.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple
import logging

from .catalog import ERASE_TAG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    stock: int = 0
    color: str = ERASE_TAG

    @property
    def available(self) -> bool:
        return self.color != ERASE_TAG

    def to_dict(self) -> Dict[str, Any]:
        return {"stock": int(self.stock), "color": self.color}


EMPTY_CELL = Cell()

SubGrid = Dict[str, Dict[str, Cell]]
InventoryStore = Dict[str, SubGrid]


def empty_store() -> InventoryStore:
    return {}


def normalize_cell(stock: int, color: str) -> Cell:
    """Build a cell honoring the invariants: stock >= 0, erase implies stock 0."""
    color = color or ERASE_TAG
    if color == ERASE_TAG:
        return EMPTY_CELL
    return Cell(stock=max(0, int(stock)), color=color)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_grid(store: Mapping[str, SubGrid], filter_key: str) -> SubGrid:
    """Sub-grid for a filter key; an empty mapping if the key is unknown."""
    return store.get(filter_key) or {}


def get_cell(store: Mapping[str, SubGrid], filter_key: str, sph: str, cyl: str) -> Cell:
    row = get_grid(store, filter_key).get(sph) or {}
    return row.get(cyl, EMPTY_CELL)


def iter_cells(store: Mapping[str, SubGrid]) -> Iterator[Tuple[str, str, str, Cell]]:
    """Yield (filter_key, sphere, cylinder, cell) in insertion order."""
    for filter_key, grid in store.items():
        for sph, row in grid.items():
            for cyl, cell in row.items():
                yield filter_key, sph, cyl, cell


def count_cells(store: Mapping[str, SubGrid]) -> int:
    return sum(1 for _ in iter_cells(store))


# ---------------------------------------------------------------------------
# Writes (pure)
# ---------------------------------------------------------------------------

def write_cell(
    store: InventoryStore, filter_key: str, sph: str, cyl: str, cell: Cell
) -> InventoryStore:
    """Return a store where (filter_key, sph, cyl) holds `cell`.

    This is the only write path, so the cell invariants are applied here.
    """
    cell = normalize_cell(cell.stock, cell.color)
    if get_cell(store, filter_key, sph, cyl) == cell:
        return store

    grid = dict(get_grid(store, filter_key))
    row = dict(grid.get(sph) or {})
    if cell.available:
        row[cyl] = cell
    else:
        row.pop(cyl, None)

    if row:
        grid[sph] = row
    else:
        grid.pop(sph, None)

    new_store = dict(store)
    if grid:
        new_store[filter_key] = grid
    else:
        new_store.pop(filter_key, None)
    return new_store


def paint_cell(
    store: InventoryStore, filter_key: str, sph: str, cyl: str, color: str
) -> InventoryStore:
    """Apply a paint stroke to one cell.

    Painting the color a cell already has is a no-op. Painting the erase tag
    zeroes the stock; any other color keeps the existing stock.
    """
    current = get_cell(store, filter_key, sph, cyl)
    if current.color == color:
        return store
    stock = 0 if color == ERASE_TAG else current.stock
    logger.debug("paint %s @ %s/%s -> %r", filter_key, sph, cyl, color)
    return write_cell(store, filter_key, sph, cyl, Cell(stock=stock, color=color))


def set_cell_stock(
    store: InventoryStore, filter_key: str, sph: str, cyl: str, stock: int
) -> InventoryStore:
    """Overwrite the stock of a cell, leaving its color untouched.

    Cells without a color cannot hold stock, so setting stock on them leaves
    the store unchanged.
    """
    if stock < 0:
        raise ValueError(f"Stock cannot be negative: {stock}")
    current = get_cell(store, filter_key, sph, cyl)
    logger.debug("stock %s @ %s/%s -> %d", filter_key, sph, cyl, stock)
    return write_cell(store, filter_key, sph, cyl, Cell(stock=stock, color=current.color))


def deep_copy_store(store: Mapping[str, SubGrid]) -> InventoryStore:
    """Independent copy of the whole tree (cells are immutable and shared)."""
    return {key: {sph: dict(row) for sph, row in grid.items()} for key, grid in store.items()}


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def store_to_dict(store: Mapping[str, SubGrid]) -> Dict[str, Any]:
    return {
        key: {sph: {cyl: cell.to_dict() for cyl, cell in row.items()} for sph, row in grid.items()}
        for key, grid in store.items()
    }


def _coerce_stock(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return 0
    return value if value >= 0 else 0


def store_from_dict(data: Any) -> InventoryStore:
    """Rebuild a store from persisted data with best-effort default-fill.

    Malformed branches are skipped, missing or invalid stock becomes 0 and
    erase cells are dropped. Raises ValueError if `data` is not a mapping.
    """
    if not isinstance(data, dict):
        raise ValueError("Inventory blob must be a mapping")
    store: InventoryStore = {}
    skipped = 0
    for key, grid in data.items():
        if not isinstance(grid, dict):
            skipped += 1
            continue
        for sph, row in grid.items():
            if not isinstance(row, dict):
                skipped += 1
                continue
            for cyl, raw_cell in row.items():
                if not isinstance(raw_cell, dict):
                    skipped += 1
                    continue
                cell = normalize_cell(_coerce_stock(raw_cell.get("stock", 0)), str(raw_cell.get("color") or ""))
                if cell.available:
                    store.setdefault(str(key), {}).setdefault(str(sph), {})[str(cyl)] = cell
    if skipped:
        logger.warning("Skipped %d malformed entries while loading inventory", skipped)
    return store


__all__ = [
    "Cell",
    "EMPTY_CELL",
    "SubGrid",
    "InventoryStore",
    "empty_store",
    "normalize_cell",
    "get_grid",
    "get_cell",
    "iter_cells",
    "count_cells",
    "write_cell",
    "paint_cell",
    "set_cell_stock",
    "deep_copy_store",
    "store_to_dict",
    "store_from_dict",
]
