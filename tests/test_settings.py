from pathlib import Path

from lens_inventory.settings import DATA_DIR, PROJECT_ROOT
from lens_inventory.settings import AppSettings, load_settings, settings_from_dict


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "nope.yaml")
    assert settings == AppSettings()
    assert settings.storage.data_dir == DATA_DIR
    assert settings.storage.inventory_key == "opticalLensInventory"


def test_invalid_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("storage: [unclosed", encoding="utf-8")
    assert load_settings(path) == AppSettings()


def test_non_mapping_gives_defaults(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    assert load_settings(path) == AppSettings()


def test_values_and_relative_paths(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "\n".join(
            [
                "storage:",
                f"  data_dir: {tmp_path / 'blobs'}",
                "  colors_key: misColores",
                "logging:",
                "  log_dir: var/logs",
                "  debug: true",
                "export:",
                "  filename: stock.csv",
                "defaults:",
                "  filters:",
                "    material: Policarbonato",
                "    diametro: 70",
            ]
        ),
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.storage.data_dir == tmp_path / "blobs"
    assert settings.storage.colors_key == "misColores"
    assert settings.storage.inventory_key == "opticalLensInventory"
    assert settings.logs_dir == PROJECT_ROOT / "var" / "logs"
    assert settings.debug is True
    assert settings.export_filename == "stock.csv"
    assert settings.default_filters.material == "Policarbonato"
    assert settings.default_filters.diametro == "70"
    assert settings.default_filters.foco == "Monofocal"


def test_repository_settings_file_loads():
    settings = load_settings()
    assert settings.default_filters.key.startswith("Monofocal|Mineral|")


def test_settings_from_empty_dict():
    assert settings_from_dict({}) == AppSettings()
