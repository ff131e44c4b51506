from __future__ import annotations

"""Inventory service: CSV transfer and dashboard data for the UI.

All engine calls that touch files or produce derived tables are localized
here. Methods return `(ok, message)` pairs or plain values so components
only decide how to display them.
"""

from pathlib import Path
from typing import Optional, Tuple
import logging

from lens_inventory.analytics import InventoryStats, compute_inventory_stats
from lens_inventory.csv_codec import CsvValidationError, export_csv, import_csv
from lens_inventory.ui_logic import StateManager

log = logging.getLogger(__name__)


class InventoryService:
    """High-level operations over the session's StateManager."""

    def __init__(self, state_manager: StateManager, output_dir: Path) -> None:
        self.state_manager = state_manager
        self.output_dir = Path(output_dir)

    def export_text(self) -> Tuple[Optional[str], str]:
        """Return `(csv_text, "")`, or `(None, reason)` when nothing can be exported."""
        sm = self.state_manager
        try:
            return export_csv(sm.inventory, sm.colors), ""
        except CsvValidationError as exc:
            return None, str(exc)

    def import_bytes(self, data: bytes) -> Tuple[bool, str]:
        """Decode an uploaded file and merge it into the store."""
        sm = self.state_manager
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            return False, f"The file is not valid UTF-8 text: {exc}"
        try:
            result = import_csv(text, sm.inventory, sm.colors)
        except CsvValidationError as exc:
            return False, str(exc)
        sm.set_inventory(result.store)
        return True, f"Imported {result.processed} rows successfully"

    def stats(self) -> InventoryStats:
        return compute_inventory_stats(self.state_manager.inventory, self.state_manager.colors)

    def material_chart(self, stats: InventoryStats) -> Optional[Path]:
        """Render the material chart PNG; None if matplotlib is unavailable."""
        try:
            from viz.plots import plot_material_distribution
        except Exception as exc:
            log.error("Visualization dependencies missing or import failed: %s", exc)
            return None
        return plot_material_distribution(stats, self.output_dir)
