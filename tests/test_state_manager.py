"""
Tests for the engine StateManager and its listener contract.
"""

import pytest

from lens_inventory.catalog import CatalogError, find_by_tag
from lens_inventory.filter_key import LensFilters
from lens_inventory.grid_store import paint_cell
from lens_inventory.grid_view import SortConfig
from lens_inventory.ui_logic import StateManager
from lens_inventory.ui_logic.state_manager import (
    COLORS_CHANGED,
    INVENTORY_CHANGED,
    OPTIONS_CHANGED,
    VIEW_CHANGED,
    InventoryState,
)


class TestStateManager:
    def test_initialization(self, default_key):
        manager = StateManager()
        state = manager.get_state()
        assert isinstance(state, InventoryState)
        assert state.inventory == {}
        assert len(state.colors) == 4
        assert manager.current_key == default_key
        assert state.view.sort == SortConfig("sphere", None, "desc")

    def test_set_inventory_notifies_once(self, default_key):
        manager = StateManager()
        calls = []
        manager.add_listener(INVENTORY_CHANGED, lambda old, new: calls.append((old, new)))
        store = paint_cell({}, default_key, "1.00", "0.50", "#fde047")
        assert manager.set_inventory(store) is True
        assert manager.set_inventory(store) is False
        assert manager.set_inventory(dict(store)) is False
        assert calls == [({}, store)]

    def test_failing_listener_does_not_block(self, default_key):
        manager = StateManager()

        def boom(old, new):
            raise RuntimeError("listener failure")

        seen = []
        manager.add_listener(INVENTORY_CHANGED, boom)
        manager.add_listener(INVENTORY_CHANGED, lambda old, new: seen.append(new))
        store = paint_cell({}, default_key, "1.00", "0.50", "#fde047")
        assert manager.set_inventory(store) is True
        assert manager.inventory is store
        assert seen == [store]

    def test_remove_listener(self):
        manager = StateManager()
        calls = []
        callback = lambda old, new: calls.append(new)  # noqa: E731
        manager.add_listener(VIEW_CHANGED, callback)
        manager.remove_listener(VIEW_CHANGED, callback)
        manager.remove_listener(VIEW_CHANGED, callback)
        manager.set_search_query("1.00")
        assert calls == []

    def test_add_color_and_price(self):
        manager = StateManager()
        events = []
        manager.add_listener(COLORS_CHANGED, lambda old, new: events.append(len(new)))
        entry = manager.add_color("Azul", "#93c5fd", 20, 5)
        assert entry.name == "Azul"
        assert manager.set_price("#93c5fd", 25) is True
        assert manager.set_price("#93c5fd", 25) is False
        assert find_by_tag(manager.colors, "#93c5fd").price == 25.0
        assert events == [5, 5]
        with pytest.raises(CatalogError):
            manager.add_color("Azul", "#000001")

    def test_add_attribute_option_selects_it(self):
        manager = StateManager()
        events = []
        manager.add_listener(OPTIONS_CHANGED, lambda old, new: events.append(new))
        manager.add_attribute_option("diametro", "80")
        assert manager.filter_options["diametro"][-1] == "80"
        assert manager.filters.diametro == "80"
        assert len(events) == 1

    def test_view_changes(self):
        manager = StateManager()
        views = []
        manager.add_listener(VIEW_CHANGED, lambda old, new: views.append(new))
        manager.set_filters(LensFilters(material="Orgánico"))
        manager.set_filters(LensFilters(material="Orgánico"))
        manager.set_search_query("5.00 0.75")
        assert manager.toggle_sort("sphere").direction == "asc"
        assert len(views) == 3
        view = manager.visible_view()
        assert view.spheres == ("5.00",)
        assert view.cylinders == ("0.75",)
