from __future__ import annotations

"""
Inventory analytics for the summary dashboard.

A single pass over the whole store (independent of the current filter
selection) produces:

- total valuation (stock x unit price of the cell's color)
- total units in stock and count of distinct in-stock lenses
- low-stock alerts for colors that define a threshold
- stock per material, sorted by stock descending

Cells whose color is missing from the catalog still count towards units and
distinct lenses but add nothing to valuation, material totals or alerts.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from .catalog import ColorInfo, price_lookup
from .filter_key import humanize_filter_key, material_of
from .grid_store import InventoryStore


@dataclass(frozen=True)
class LowStockItem:
    filters: str
    sph: str
    cyl: str
    stock: int
    threshold: int


@dataclass
class InventoryStats:
    total_value: float = 0.0
    total_stock: int = 0
    unique_lenses: int = 0
    low_stock_items: List[LowStockItem] = field(default_factory=list)
    material_distribution: List[Tuple[str, int]] = field(default_factory=list)


def compute_inventory_stats(store: InventoryStore, colors: Sequence[ColorInfo]) -> InventoryStats:
    by_tag = price_lookup(colors)
    stats = InventoryStats()
    materials: Dict[str, int] = {}

    for filter_key, grid in store.items():
        material = material_of(filter_key)
        materials.setdefault(material, 0)

        for sph, row in grid.items():
            for cyl, cell in row.items():
                if cell.stock <= 0 or not cell.color:
                    continue
                stats.unique_lenses += 1
                stats.total_stock += cell.stock

                entry = by_tag.get(cell.color)
                if entry is None:
                    continue
                stats.total_value += cell.stock * entry.price
                materials[material] += cell.stock

                threshold = entry.low_stock_threshold
                if threshold and cell.stock < threshold:
                    stats.low_stock_items.append(
                        LowStockItem(
                            filters=humanize_filter_key(filter_key),
                            sph=sph,
                            cyl=cyl,
                            stock=cell.stock,
                            threshold=threshold,
                        )
                    )

    # sorted() is stable, so equal totals keep first-seen order
    stats.material_distribution = sorted(materials.items(), key=lambda item: item[1], reverse=True)
    return stats


def material_frame(stats: InventoryStats) -> pd.DataFrame:
    return pd.DataFrame(stats.material_distribution, columns=["Material", "Stock"])


def low_stock_frame(stats: InventoryStats) -> pd.DataFrame:
    """Alert table with the columns the dashboard shows."""
    rows = [
        {
            "Lente": item.filters,
            "Graduación (ESF/CIL)": f"{item.sph} / {item.cyl}",
            "Stock": item.stock,
            "Límite": item.threshold,
        }
        for item in stats.low_stock_items
    ]
    return pd.DataFrame(rows, columns=["Lente", "Graduación (ESF/CIL)", "Stock", "Límite"])


def summary_dict(stats: InventoryStats) -> Dict[str, object]:
    """Plain-dict form of the headline numbers (used by the CLI and logs)."""
    return {
        "total_value": round(stats.total_value, 2),
        "total_stock": stats.total_stock,
        "unique_lenses": stats.unique_lenses,
        "low_stock_alerts": len(stats.low_stock_items),
        "materials": dict(stats.material_distribution),
    }


__all__ = [
    "LowStockItem",
    "InventoryStats",
    "compute_inventory_stats",
    "material_frame",
    "low_stock_frame",
    "summary_dict",
]
