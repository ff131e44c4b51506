"""Service layer for the inventory UI.

Services encapsulate file I/O and chart rendering so UI components can
remain thin and focused on presentation.
"""

from .inventory_service import InventoryService

__all__ = [
    "InventoryService",
]
