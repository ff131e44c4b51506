from __future__ import annotations

"""
CSV bulk import/export for the inventory store.

Export writes one row per available cell across every filter key:

    ID,SKU,Foco,Material,Color,Fotocromatico,Tratamiento,Diametro,Adicion,
    Indice Refraccion,Esfera,Cilindro,Stock,Precio

Fields containing a comma, a double quote or a newline are quoted (RFC 4180
style). Import is deliberately simpler: each line is split on bare commas, so
a quoted field that contains a comma does not survive the round trip. Only
the eleven attribute/grading/stock columns are required on import, matched by
name in any order.

Import never fails on a single bad row. Rows that cannot be used are skipped
and only the processed count is reported.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import re

import pandas as pd

from .catalog import DEFAULT_IMPORT_COLOR_NAME, ERASE_TAG, ColorInfo, find_by_name, price_lookup
from .filter_key import ATTRIBUTE_COLUMNS, decode_filter_key, encode_filter_key
from .grid_store import Cell, InventoryStore, deep_copy_store, iter_cells, normalize_cell

logger = logging.getLogger(__name__)


EXPORT_FILENAME = "inventario_lentes.csv"

SPHERE_COLUMN = "Esfera"
CYLINDER_COLUMN = "Cilindro"
STOCK_COLUMN = "Stock"
PRICE_COLUMN = "Precio"

EXPORT_HEADERS: List[str] = [
    "ID",
    "SKU",
    *ATTRIBUTE_COLUMNS,
    SPHERE_COLUMN,
    CYLINDER_COLUMN,
    STOCK_COLUMN,
    PRICE_COLUMN,
]

REQUIRED_IMPORT_COLUMNS: List[str] = [*ATTRIBUTE_COLUMNS, SPHERE_COLUMN, CYLINDER_COLUMN, STOCK_COLUMN]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class CsvValidationError(ValueError):
    """The file or the store cannot be imported/exported at all."""


@dataclass
class ImportResult:
    store: InventoryStore
    processed: int
    skipped: int


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def build_export_rows(store: InventoryStore, colors: Sequence[ColorInfo]) -> List[list]:
    """One row per available cell, in store iteration order, IDs from 1."""
    by_tag = price_lookup(colors)
    rows: List[list] = []
    for filter_key, sph, cyl, cell in iter_cells(store):
        if not cell.color:
            continue
        entry = by_tag.get(cell.color)
        price = entry.price if entry is not None else 0.0
        rows.append(
            [
                len(rows) + 1,
                f"{filter_key}-{sph}-{cyl}",
                *decode_filter_key(filter_key),
                sph,
                cyl,
                cell.stock,
                f"{price:.2f}",
            ]
        )
    return rows


def export_frame(store: InventoryStore, colors: Sequence[ColorInfo]) -> pd.DataFrame:
    """Export rows as a DataFrame of strings with the fixed header.

    Raises CsvValidationError when there is nothing to export.
    """
    rows = build_export_rows(store, colors)
    if not rows:
        raise CsvValidationError("There is no inventory data to export")
    width = len(EXPORT_HEADERS)
    # keys with an unexpected segment count are padded/truncated to the header
    normalized = [[str(v) for v in (row + [""] * width)[:width]] for row in rows]
    return pd.DataFrame(normalized, columns=EXPORT_HEADERS, dtype=object)


def export_csv(store: InventoryStore, colors: Sequence[ColorInfo]) -> str:
    """Render the export as CSV text ("\\n" line endings, no trailing newline)."""
    frame = export_frame(store, colors)
    text = frame.to_csv(index=False, lineterminator="\n")
    if text.endswith("\n"):
        text = text[:-1]
    logger.info("Exported %d inventory rows", len(frame))
    return text


def write_export(path: Path, store: InventoryStore, colors: Sequence[ColorInfo]) -> Path:
    """Write the export to `path` (UTF-8) and return the path."""
    text = export_csv(store, colors)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _parse_stock(raw: str) -> Optional[int]:
    """Leading-integer parse: "20" -> 20, " 7" -> 7, "5.9" -> 5, "x" -> None."""
    match = _LEADING_INT.match(raw or "")
    if not match:
        return None
    return int(match.group(1))


def _header_indices(header_line: str) -> Tuple[Dict[str, int], int]:
    """Map each required column to its position; also return the header width."""
    headers = [h.replace('"', "") for h in header_line.strip().split(",")]
    indices: Dict[str, int] = {}
    for column in REQUIRED_IMPORT_COLUMNS:
        position = next((i for i, h in enumerate(headers) if h.strip() == column), -1)
        if position == -1:
            raise CsvValidationError(f"Missing required CSV column: {column}")
        indices[column] = position
    return indices, len(headers)


def import_csv(text: str, store: InventoryStore, colors: Sequence[ColorInfo]) -> ImportResult:
    """Merge CSV rows into a copy of `store` and return the new store.

    Existing cell colors are kept. A cell without a color gets the
    "Stock Bajo" color when the imported stock is positive; if the catalog
    has no such entry, or the stock is 0, the cell stays unavailable.

    Raises CsvValidationError for an empty file or a missing required column;
    the input store is never modified.
    """
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if len(lines) < 2:
        raise CsvValidationError("The CSV file is empty or has no data rows")

    indices, width = _header_indices(lines[0])
    default_entry = find_by_name(colors, DEFAULT_IMPORT_COLOR_NAME)
    default_color = default_entry.value if default_entry is not None else ERASE_TAG

    new_store = deep_copy_store(store)
    processed = 0
    skipped = 0
    for line_no, line in enumerate(lines[1:], start=2):
        values = line.strip().split(",")
        if len(values) < width:
            skipped += 1
            logger.debug("Line %d skipped: %d fields, header has %d", line_no, len(values), width)
            continue

        key = encode_filter_key([values[indices[column]] for column in ATTRIBUTE_COLUMNS])
        sph = values[indices[SPHERE_COLUMN]]
        cyl = values[indices[CYLINDER_COLUMN]]
        stock = _parse_stock(values[indices[STOCK_COLUMN]])
        if not key or not sph or not cyl or stock is None or stock < 0:
            skipped += 1
            logger.debug("Line %d skipped: unusable key, grading or stock", line_no)
            continue

        row = new_store.setdefault(key, {}).setdefault(sph, {})
        existing = row.get(cyl)
        current_color = existing.color if existing is not None else ERASE_TAG
        color = current_color or (default_color if stock > 0 else ERASE_TAG)

        cell: Cell = normalize_cell(stock, color)
        if cell.available:
            row[cyl] = cell
        else:
            row.pop(cyl, None)
        processed += 1

    _prune_empty(new_store)
    logger.info("CSV import finished: %d rows processed, %d skipped", processed, skipped)
    return ImportResult(store=new_store, processed=processed, skipped=skipped)


def _prune_empty(store: InventoryStore) -> None:
    for key in list(store):
        grid = store[key]
        for sph in [s for s, row in grid.items() if not row]:
            del grid[sph]
        if not grid:
            del store[key]


def read_import_file(path: Path) -> str:
    """Read a CSV file as UTF-8 text, tolerating a byte-order mark."""
    return Path(path).read_text(encoding="utf-8-sig")


__all__ = [
    "EXPORT_FILENAME",
    "EXPORT_HEADERS",
    "REQUIRED_IMPORT_COLUMNS",
    "CsvValidationError",
    "ImportResult",
    "build_export_rows",
    "export_frame",
    "export_csv",
    "write_export",
    "import_csv",
    "read_import_file",
]
