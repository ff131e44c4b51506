from __future__ import annotations

"""
Grid view engine: which sphere rows and cylinder columns are visible, and in
what order.

Searching narrows both axes by prefix; sorting only reorders sphere rows.
Cylinder columns always keep generation order so the column layout stays put.
Nothing here touches the inventory store.
"""

from dataclasses import dataclass
from typing import List, Literal, Mapping, Optional, Sequence, Tuple
import math

import pandas as pd

from .axes import CYLINDER_VALUES, SPHERE_VALUES, parse_grading
from .grid_store import SubGrid

SortKey = Literal["sphere", "stock"]
SortDirection = Literal["asc", "desc"]

DEFAULT_DIRECTION = {"sphere": "asc", "stock": "desc"}


@dataclass(frozen=True)
class SortConfig:
    key: SortKey = "sphere"
    column: Optional[str] = None
    direction: SortDirection = "desc"

    def __post_init__(self) -> None:
        if self.key not in DEFAULT_DIRECTION:
            raise ValueError(f"Unknown sort key '{self.key}'")
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Unknown sort direction '{self.direction}'")


INITIAL_SORT = SortConfig()


def toggle_sort(current: SortConfig, key: SortKey, column: Optional[str] = None) -> SortConfig:
    """Clicking the same header flips direction; a new header starts at its default."""
    if current.key == key and current.column == column:
        return SortConfig(key, column, "desc" if current.direction == "asc" else "asc")
    return SortConfig(key, column, DEFAULT_DIRECTION[key])


@dataclass(frozen=True)
class GridView:
    spheres: Tuple[str, ...]
    cylinders: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.spheres or not self.cylinders


def parse_search_query(query: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split a search into (sphere token, cylinder token).

    Returns (None, None) for a blank query. Tokens beyond the second are ignored.
    """
    text = (query or "").strip().lower()
    if not text:
        return None, None
    parts = text.split()
    return parts[0], (parts[1] if len(parts) > 1 else None)


def filter_axes(
    query: Optional[str],
    spheres: Sequence[str] = SPHERE_VALUES,
    cylinders: Sequence[str] = CYLINDER_VALUES,
) -> Tuple[List[str], List[str]]:
    """Prefix-filter both axes; the cylinder axis is only narrowed by a second token."""
    sphere_token, cylinder_token = parse_search_query(query)
    if sphere_token is None:
        return list(spheres), list(cylinders)
    visible_spheres = [s for s in spheres if s.lower().startswith(sphere_token)]
    if cylinder_token is None:
        visible_cylinders = list(cylinders)
    else:
        visible_cylinders = [c for c in cylinders if c.lower().startswith(cylinder_token)]
    return visible_spheres, visible_cylinders


def _stock_at(grid: Mapping[str, Mapping], sph: str, cyl: str) -> float:
    """Stock of an available cell, or -inf for a missing/erased one."""
    cell = (grid.get(sph) or {}).get(cyl)
    if cell is None or not cell.available:
        return -math.inf
    return float(cell.stock)


def sort_spheres(spheres: Sequence[str], grid: SubGrid, sort: SortConfig) -> List[str]:
    """Order sphere rows according to `sort`.

    A stock sort without a column leaves the order unchanged. Under a stock
    sort, rows without a cell in the column rank as -infinity and ties are
    broken by descending sphere value regardless of direction.
    """
    rows = list(spheres)
    reverse = sort.direction == "desc"

    if sort.key == "sphere":
        rows.sort(key=parse_grading, reverse=reverse)
        return rows

    if sort.key == "stock" and sort.column:
        cyl = sort.column
        # tie-break first (stable sort), then the primary key
        rows.sort(key=parse_grading, reverse=True)
        rows.sort(key=lambda sph: _stock_at(grid, sph, cyl), reverse=reverse)
    return rows


def compute_grid_view(
    grid: SubGrid,
    query: Optional[str] = None,
    sort: SortConfig = INITIAL_SORT,
    spheres: Sequence[str] = SPHERE_VALUES,
    cylinders: Sequence[str] = CYLINDER_VALUES,
) -> GridView:
    visible_spheres, visible_cylinders = filter_axes(query, spheres, cylinders)
    return GridView(
        spheres=tuple(sort_spheres(visible_spheres, grid, sort)),
        cylinders=tuple(visible_cylinders),
    )


def grid_frame(view: GridView, grid: SubGrid) -> pd.DataFrame:
    """Stock table for display: rows are spheres, columns cylinders.

    Available cells show their stock; unavailable cells are None.
    """
    data = []
    for sph in view.spheres:
        row = grid.get(sph) or {}
        data.append([row[cyl].stock if cyl in row and row[cyl].available else None for cyl in view.cylinders])
    frame = pd.DataFrame(data, index=list(view.spheres), columns=list(view.cylinders), dtype=object)
    frame.index.name = "ESF / CIL"
    return frame


__all__ = [
    "SortConfig",
    "INITIAL_SORT",
    "toggle_sort",
    "GridView",
    "parse_search_query",
    "filter_axes",
    "sort_spheres",
    "compute_grid_view",
    "grid_frame",
]
