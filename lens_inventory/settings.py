from __future__ import annotations

"""Application settings loaded from `config/settings.yaml`.

Every key is optional: missing keys (or a missing file) fall back to the
defaults below. Relative directories resolve against the project root.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from .filter_key import LensFilters

log = logging.getLogger(__name__)

# Runtime directories default to siblings of the package
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"
LOGS_DIR = PROJECT_ROOT / "logs"
SETTINGS_FILE = PROJECT_ROOT / "config" / "settings.yaml"


@dataclass
class StorageSettings:
    """Where blobs live and the key each one is saved under."""

    data_dir: Path = DATA_DIR
    inventory_key: str = "opticalLensInventory"
    colors_key: str = "opticalLensColors"
    filter_options_key: str = "opticalLensFilterOptions"


@dataclass
class AppSettings:
    storage: StorageSettings = field(default_factory=StorageSettings)
    logs_dir: Path = LOGS_DIR
    output_dir: Path = OUTPUT_DIR
    debug: bool = False
    export_filename: str = "inventario_lentes.csv"
    default_filters: LensFilters = field(default_factory=LensFilters)


def _resolve_dir(raw: Any, default: Path) -> Path:
    if raw is None or str(raw).strip() == "":
        return default
    path = Path(str(raw)).expanduser()
    return path if path.is_absolute() else PROJECT_ROOT / path


def settings_from_dict(data: Dict[str, Any]) -> AppSettings:
    """Build settings from a parsed YAML mapping, filling gaps with defaults."""
    data = data or {}
    storage_raw = data.get("storage") or {}
    logging_raw = data.get("logging") or {}
    export_raw = data.get("export") or {}
    defaults_raw = data.get("defaults") or {}

    base = StorageSettings()
    storage = StorageSettings(
        data_dir=_resolve_dir(storage_raw.get("data_dir"), base.data_dir),
        inventory_key=str(storage_raw.get("inventory_key") or base.inventory_key),
        colors_key=str(storage_raw.get("colors_key") or base.colors_key),
        filter_options_key=str(storage_raw.get("filter_options_key") or base.filter_options_key),
    )
    return AppSettings(
        storage=storage,
        logs_dir=_resolve_dir(logging_raw.get("log_dir"), LOGS_DIR),
        output_dir=_resolve_dir(export_raw.get("output_dir"), OUTPUT_DIR),
        debug=bool(logging_raw.get("debug", False)),
        export_filename=str(export_raw.get("filename") or "inventario_lentes.csv"),
        default_filters=LensFilters.from_mapping(defaults_raw.get("filters") or {}),
    )


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load settings from YAML; a missing or unreadable file yields defaults."""
    path = Path(path) if path is not None else SETTINGS_FILE
    if not path.exists():
        log.debug("No settings file at %s; using defaults", path)
        return AppSettings()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        log.warning("Could not parse %s (%s); using defaults", path, exc)
        return AppSettings()
    if not isinstance(data, dict):
        log.warning("Settings file %s is not a mapping; using defaults", path)
        return AppSettings()
    return settings_from_dict(data)
