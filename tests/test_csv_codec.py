"""
Tests for CSV export/import of the inventory store.
"""

from pathlib import Path

import pytest

from lens_inventory.catalog import ColorInfo, find_by_name
from lens_inventory.csv_codec import (
    EXPORT_HEADERS,
    CsvValidationError,
    build_export_rows,
    export_csv,
    import_csv,
    read_import_file,
    write_export,
)
from lens_inventory.grid_store import Cell, get_cell, iter_cells, paint_cell, set_cell_stock

IMPORT_HEADER = (
    "Foco,Material,Color,Fotocromatico,Tratamiento,Diametro,Adicion,Indice Refraccion,Esfera,Cilindro,Stock"
)
ROW_PREFIX = "Monofocal,Mineral,Sin color,Sin Fotocromático,Antirreflejos,65,0,1.523"


def _store(default_key):
    store = paint_cell({}, default_key, "1.00", "0.50", "#fde047")
    store = set_cell_stock(store, default_key, "1.00", "0.50", 12)
    store = paint_cell(store, default_key, "-2.25", "1.00", "#86efac")
    return store


class TestExport:
    def test_header_and_rows(self, default_key, colors):
        text = export_csv(_store(default_key), colors)
        lines = text.split("\n")
        assert lines[0] == (
            "ID,SKU,Foco,Material,Color,Fotocromatico,Tratamiento,Diametro,Adicion,"
            "Indice Refraccion,Esfera,Cilindro,Stock,Precio"
        )
        assert lines[1] == (
            f"1,{default_key}-1.00-0.50,{ROW_PREFIX},1.00,0.50,12,50.00"
        )
        assert lines[2].startswith(f"2,{default_key}--2.25-1.00,")
        assert lines[2].endswith(",-2.25,1.00,0,100.00")
        assert not text.endswith("\n")

    def test_unknown_color_exports_zero_price(self, default_key, colors):
        store = paint_cell({}, default_key, "1.00", "0.50", "#123456")
        rows = build_export_rows(store, colors)
        assert rows[0][-1] == "0.00"

    def test_fields_with_commas_and_quotes_are_quoted(self, colors):
        key = 'Monofocal|Mineral|Gris, oscuro|Sin Fotocromático|Marca "X"|65|0|1.523'
        store = paint_cell({}, key, "1.00", "0.50", "#fde047")
        line = export_csv(store, colors).split("\n")[1]
        assert '"Gris, oscuro"' in line
        assert '"Marca ""X"""' in line

    def test_empty_store_cannot_be_exported(self, colors):
        with pytest.raises(CsvValidationError):
            export_csv({}, colors)

    def test_write_export(self, tmp_path: Path, default_key, colors):
        path = write_export(tmp_path / "out" / "inv.csv", _store(default_key), colors)
        assert path.exists()
        assert path.read_text(encoding="utf-8").splitlines()[0].split(",") == EXPORT_HEADERS


class TestImport:
    def test_import_into_empty_store_uses_stock_bajo(self, default_key, colors):
        text = f"{IMPORT_HEADER}\n{ROW_PREFIX},+2.00,0.50,20"
        result = import_csv(text, {}, colors)
        assert result.processed == 1
        cell = get_cell(result.store, default_key, "+2.00", "0.50")
        assert cell == Cell(20, find_by_name(colors, "Stock Bajo").value)

    def test_existing_color_is_preserved(self, default_key, colors):
        store = paint_cell({}, default_key, "1.00", "0.50", "#86efac")
        text = f"{IMPORT_HEADER}\n{ROW_PREFIX},1.00,0.50,8"
        result = import_csv(text, store, colors)
        assert get_cell(result.store, default_key, "1.00", "0.50") == Cell(8, "#86efac")
        # the input store is never modified
        assert get_cell(store, default_key, "1.00", "0.50") == Cell(0, "#86efac")

    def test_zero_stock_without_color_stays_unavailable(self, default_key, colors):
        text = f"{IMPORT_HEADER}\n{ROW_PREFIX},1.00,0.50,0"
        result = import_csv(text, {}, colors)
        assert result.processed == 1
        assert result.store == {}

    def test_missing_stock_bajo_leaves_cell_unavailable(self, default_key):
        colors = [ColorInfo("Eliminar", ""), ColorInfo("Otro", "#000000")]
        text = f"{IMPORT_HEADER}\n{ROW_PREFIX},1.00,0.50,9"
        result = import_csv(text, {}, colors)
        assert not get_cell(result.store, default_key, "1.00", "0.50").available

    def test_columns_matched_by_name_in_any_order(self, colors):
        text = (
            "Stock,Cilindro,Esfera,Indice Refraccion,Adicion,Diametro,Tratamiento,Fotocromatico,Color,Material,Foco\n"
            "3,0.25,-1.00,1.60,0,70,Antirrayas,Transitions,Gris,Orgánico,Bifocal"
        )
        result = import_csv(text, {}, colors)
        key = "Bifocal|Orgánico|Gris|Transitions|Antirrayas|70|0|1.60"
        assert get_cell(result.store, key, "-1.00", "0.25").stock == 3

    def test_bad_rows_are_skipped(self, colors):
        text = "\n".join(
            [
                IMPORT_HEADER,
                f"{ROW_PREFIX},1.00,0.50,abc",
                f"{ROW_PREFIX},1.00,0.50",
                f"{ROW_PREFIX},,0.50,4",
                f"{ROW_PREFIX},1.00,0.50,-2",
                "",
                f"{ROW_PREFIX},1.00,0.75,5.9",
            ]
        )
        result = import_csv(text, {}, colors)
        assert result.processed == 1
        assert result.skipped == 4
        assert [cell.stock for *_, cell in iter_cells(result.store)] == [5]

    def test_windows_line_endings_and_quoted_header(self, default_key, colors):
        header = ",".join(f'"{h}"' for h in IMPORT_HEADER.split(","))
        text = f"{header}\r\n{ROW_PREFIX},1.00,0.50,4\r\n"
        result = import_csv(text, {}, colors)
        assert get_cell(result.store, default_key, "1.00", "0.50").stock == 4

    def test_missing_column_raises(self, colors):
        header = IMPORT_HEADER.replace(",Stock", "")
        with pytest.raises(CsvValidationError, match="Stock"):
            import_csv(f"{header}\n{ROW_PREFIX},1.00,0.50", {}, colors)

    def test_header_only_raises(self, colors):
        with pytest.raises(CsvValidationError):
            import_csv(IMPORT_HEADER + "\n\n", {}, colors)

    def test_read_import_file_strips_bom(self, tmp_path: Path):
        path = tmp_path / "in.csv"
        path.write_bytes(("\ufeff" + IMPORT_HEADER).encode("utf-8"))
        assert read_import_file(path).startswith("Foco,")


def test_export_import_round_trip(default_key, colors):
    store = _store(default_key)
    store = set_cell_stock(store, default_key, "-2.25", "1.00", 3)
    result = import_csv(export_csv(store, colors), {}, colors)
    assert result.processed == 2
    for key, sph, cyl, cell in iter_cells(store):
        imported = get_cell(result.store, key, sph, cyl)
        assert imported.stock == cell.stock
        assert imported.available


def test_zero_stock_cells_do_not_survive_import_into_empty_store(default_key, colors):
    # no existing color and nothing to infer one from
    result = import_csv(export_csv(_store(default_key), colors), {}, colors)
    assert not get_cell(result.store, default_key, "-2.25", "1.00").available
    assert get_cell(result.store, default_key, "1.00", "0.50") == Cell(12, "#fde047")
