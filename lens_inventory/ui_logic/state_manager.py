"""
Framework-agnostic state management for the lens inventory.

This module owns every piece of mutable engine state: the inventory store,
the color catalog, the attribute option sets, the current filter selection,
the search query and the sort directive. Writes go through this class so that
registered listeners (for example the autosave observer) run after each
successful change.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional
import logging

from ..catalog import (
    ColorInfo,
    add_attribute_option,
    add_color,
    default_colors,
    default_filter_options,
    set_price,
)
from ..filter_key import LensFilters
from ..grid_store import InventoryStore, SubGrid, get_grid
from ..grid_view import INITIAL_SORT, GridView, SortConfig, SortKey, compute_grid_view, toggle_sort

logger = logging.getLogger(__name__)


INVENTORY_CHANGED = "inventory_changed"
COLORS_CHANGED = "colors_changed"
OPTIONS_CHANGED = "options_changed"
VIEW_CHANGED = "view_changed"


@dataclass
class ViewState:
    """Selection and presentation state; never persisted."""
    filters: LensFilters = field(default_factory=LensFilters)
    search_query: str = ""
    sort: SortConfig = INITIAL_SORT


@dataclass
class InventoryState:
    """Aggregate engine state."""
    inventory: InventoryStore = field(default_factory=dict)
    colors: List[ColorInfo] = field(default_factory=default_colors)
    filter_options: Dict[str, List[str]] = field(default_factory=default_filter_options)
    view: ViewState = field(default_factory=ViewState)


class StateManager:
    """
    Framework-agnostic state manager with reactive patterns.

    Listeners are plain callables registered per event name and invoked with
    `(old_value, new_value)`. A failing listener is logged and does not undo
    or block the change that triggered it.
    """

    def __init__(self, state: Optional[InventoryState] = None):
        self._state = state or InventoryState()
        self._listeners: Dict[str, List[Callable]] = {}

    def get_state(self) -> InventoryState:
        return self._state

    # --- Derived reads ---
    @property
    def inventory(self) -> InventoryStore:
        return self._state.inventory

    @property
    def colors(self) -> List[ColorInfo]:
        return self._state.colors

    @property
    def filter_options(self) -> Dict[str, List[str]]:
        return self._state.filter_options

    @property
    def filters(self) -> LensFilters:
        return self._state.view.filters

    @property
    def current_key(self) -> str:
        return self._state.view.filters.key

    def current_grid(self) -> SubGrid:
        return get_grid(self._state.inventory, self.current_key)

    def visible_view(self) -> GridView:
        """Visible sphere/cylinder order for the current selection."""
        view = self._state.view
        return compute_grid_view(self.current_grid(), view.search_query, view.sort)

    # --- Inventory ---
    def set_inventory(self, new_inventory: InventoryStore) -> bool:
        """Replace the store. Returns False (and notifies nobody) if nothing changed."""
        old = self._state.inventory
        if new_inventory is old or new_inventory == old:
            return False
        self._state.inventory = new_inventory
        self._notify_listeners(INVENTORY_CHANGED, old, new_inventory)
        return True

    # --- Catalog ---
    def set_colors(self, colors: List[ColorInfo]) -> bool:
        old = self._state.colors
        if colors == old:
            return False
        self._state.colors = list(colors)
        self._notify_listeners(COLORS_CHANGED, old, self._state.colors)
        return True

    def add_color(self, name: str, value: str, price: Any = 0, low_stock_threshold: Any = None) -> ColorInfo:
        """Append a catalog entry; raises CatalogError on invalid input."""
        colors = add_color(self._state.colors, name, value, price, low_stock_threshold)
        self.set_colors(colors)
        return colors[-1]

    def set_price(self, tag: str, price: Any) -> bool:
        return self.set_colors(set_price(self._state.colors, tag, price))

    # --- Attribute options ---
    def set_filter_options(self, options: Dict[str, List[str]]) -> bool:
        old = self._state.filter_options
        if options == old:
            return False
        self._state.filter_options = options
        self._notify_listeners(OPTIONS_CHANGED, old, options)
        return True

    def add_attribute_option(self, attribute: str, value: str) -> None:
        """Add an option and select it, as the selector does after adding."""
        options = add_attribute_option(self._state.filter_options, attribute, value)
        self.set_filter_options(options)
        clean = str(value or "").strip()
        if clean:
            self.set_filter(attribute, clean)

    # --- View ---
    def _update_view(self, **kwargs) -> None:
        old = self._state.view
        new = replace(old, **kwargs)
        if new == old:
            return
        self._state.view = new
        self._notify_listeners(VIEW_CHANGED, old, new)

    def set_filters(self, filters: LensFilters) -> None:
        self._update_view(filters=filters)

    def set_filter(self, attribute: str, value: str) -> None:
        self._update_view(filters=self._state.view.filters.with_value(attribute, value))

    def set_search_query(self, query: str) -> None:
        self._update_view(search_query=query or "")

    def set_sort(self, sort: SortConfig) -> None:
        self._update_view(sort=sort)

    def toggle_sort(self, key: SortKey, column: Optional[str] = None) -> SortConfig:
        sort = toggle_sort(self._state.view.sort, key, column)
        self._update_view(sort=sort)
        return sort

    # --- Listeners ---
    def add_listener(self, event: str, callback: Callable) -> None:
        """Add a listener for state change events."""
        if event not in self._listeners:
            self._listeners[event] = []
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        """Remove a listener for state change events."""
        if event in self._listeners:
            try:
                self._listeners[event].remove(callback)
            except ValueError:
                pass

    def _notify_listeners(self, event: str, *args, **kwargs) -> None:
        """Notify all listeners for a specific event."""
        if event in self._listeners:
            for callback in self._listeners[event]:
                try:
                    callback(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Error in state listener callback for '{event}': {e}")
