"""
Tests for blob persistence and the autosave observer.
"""

import json
from pathlib import Path

from lens_inventory.catalog import default_colors, default_filter_options
from lens_inventory.grid_store import Cell, paint_cell
from lens_inventory.settings import StorageSettings
from lens_inventory.ui_logic import BlobStore, DataManager, MutationManager, StateManager


def make_manager(tmp_path: Path) -> DataManager:
    return DataManager.from_settings(StorageSettings(data_dir=tmp_path))


class TestBlobStore:
    def test_missing_key_loads_none(self, tmp_path: Path):
        assert BlobStore(tmp_path).load("nothing") is None

    def test_save_and_load(self, tmp_path: Path):
        store = BlobStore(tmp_path / "nested")
        path = store.save("k", "hola ñ")
        assert path == tmp_path / "nested" / "k.json"
        assert store.load("k") == "hola ñ"
        # no temp files left behind
        assert [p.name for p in (tmp_path / "nested").iterdir()] == ["k.json"]


class TestDataManager:
    def test_defaults_when_nothing_saved(self, tmp_path: Path):
        dm = make_manager(tmp_path)
        state = dm.load_state()
        assert state.inventory == {}
        assert state.colors == default_colors()
        assert state.filter_options == default_filter_options()

    def test_corrupt_blobs_fall_back_to_defaults(self, tmp_path: Path, caplog):
        (tmp_path / "opticalLensInventory.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "opticalLensColors.json").write_text('{"a": 1}', encoding="utf-8")
        (tmp_path / "opticalLensFilterOptions.json").write_text("[]", encoding="utf-8")
        dm = make_manager(tmp_path)
        with caplog.at_level("WARNING"):
            state = dm.load_state()
        assert state.inventory == {}
        assert state.colors == default_colors()
        assert state.filter_options == default_filter_options()
        assert len([r for r in caplog.records if r.levelname == "WARNING"]) == 3

    def test_legacy_colors_blob(self, tmp_path: Path):
        legacy = [{"name": "Stock Bajo", "value": "#fde047", "lowStockThreshold": 15}]
        (tmp_path / "opticalLensColors.json").write_text(json.dumps(legacy), encoding="utf-8")
        colors = make_manager(tmp_path).load_colors()
        assert colors[0].is_erase
        assert colors[1].price == 0.0
        assert colors[1].low_stock_threshold == 15

    def test_round_trip(self, tmp_path: Path, default_key):
        dm = make_manager(tmp_path)
        store = paint_cell({}, default_key, "1.00", "0.50", "#fde047")
        assert dm.save_inventory(store) is True
        assert dm.load_inventory() == {default_key: {"1.00": {"0.50": Cell(0, "#fde047")}}}

    def test_save_failure_is_logged_not_raised(self, tmp_path: Path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        dm = DataManager(BlobStore(blocker / "sub"))
        with caplog.at_level("ERROR"):
            assert dm.save_colors(default_colors()) is False
        assert any("Error saving blob" in r.getMessage() for r in caplog.records)

    def test_autosave_persists_every_change(self, tmp_path: Path):
        dm = make_manager(tmp_path)
        sm = StateManager(dm.load_state())
        dm.attach_autosave(sm)
        mutations = MutationManager(sm)

        mutations.select_color("#fde047")
        mutations.paint_stroke([("1.00", "0.50")])
        sm.add_color("Azul", "#93c5fd", 10)
        sm.add_attribute_option("diametro", "80")

        reloaded = make_manager(tmp_path).load_state()
        assert reloaded.inventory == sm.inventory
        assert reloaded.colors == sm.colors
        assert reloaded.filter_options["diametro"][-1] == "80"
