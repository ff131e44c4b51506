"""
Framework-agnostic persistence for the lens inventory.

Three blobs are stored independently, one JSON file each:

- the inventory store
- the color catalog
- the attribute option sets

Loading never fails: an absent blob yields the built-in default and an
unparsable one is logged and replaced by the default. Saving happens through
an observer attached to the StateManager, after every successful change.
"""

from pathlib import Path
from typing import Dict, List, Optional
import json
import logging
import os
import tempfile

from ..catalog import (
    ColorInfo,
    colors_from_list,
    colors_to_list,
    default_colors,
    default_filter_options,
    filter_options_from_dict,
)
from ..grid_store import InventoryStore, store_from_dict, store_to_dict
from ..settings import StorageSettings
from .state_manager import (
    COLORS_CHANGED,
    INVENTORY_CHANGED,
    OPTIONS_CHANGED,
    InventoryState,
    StateManager,
    ViewState,
)

logger = logging.getLogger(__name__)


class BlobStore:
    """Opaque key -> text store backed by `<directory>/<key>.json` files."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, text: str) -> Path:
        """Write atomically: a temp file in the same directory is renamed over the target."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        return path


class DataManager:
    """
    Loads and saves the three persisted blobs.

    Parsing problems are recovered locally (defaults + WARNING); save errors
    are logged at ERROR and leave the in-memory state untouched.
    """

    def __init__(self, blob_store: BlobStore, storage: Optional[StorageSettings] = None):
        self.blob_store = blob_store
        self.storage = storage or StorageSettings(data_dir=blob_store.directory)

    @classmethod
    def from_settings(cls, storage: StorageSettings) -> "DataManager":
        return cls(BlobStore(storage.data_dir), storage)

    # --- Loading ---
    def _load_json(self, key: str):
        text = self.blob_store.load(key)
        if text is None:
            return None
        return json.loads(text)

    def load_inventory(self) -> InventoryStore:
        key = self.storage.inventory_key
        try:
            data = self._load_json(key)
            if data is None:
                return {}
            store = store_from_dict(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load inventory blob '{key}', starting empty: {e}")
            return {}
        logger.info("Loaded inventory with %d filter combinations", len(store))
        return store

    def load_colors(self) -> List[ColorInfo]:
        key = self.storage.colors_key
        try:
            data = self._load_json(key)
            if data is None:
                return default_colors()
            return colors_from_list(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load color catalog '{key}', using defaults: {e}")
            return default_colors()

    def load_filter_options(self) -> Dict[str, List[str]]:
        key = self.storage.filter_options_key
        try:
            data = self._load_json(key)
            if data is None:
                return default_filter_options()
            return filter_options_from_dict(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load filter options '{key}', using defaults: {e}")
            return default_filter_options()

    def load_state(self, view: Optional[ViewState] = None) -> InventoryState:
        return InventoryState(
            inventory=self.load_inventory(),
            colors=self.load_colors(),
            filter_options=self.load_filter_options(),
            view=view or ViewState(),
        )

    # --- Saving ---
    def _save_json(self, key: str, data) -> bool:
        try:
            self.blob_store.save(key, json.dumps(data, ensure_ascii=False, indent=2))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving blob '{key}': {e}")
            return False

    def save_inventory(self, store: InventoryStore) -> bool:
        return self._save_json(self.storage.inventory_key, store_to_dict(store))

    def save_colors(self, colors: List[ColorInfo]) -> bool:
        return self._save_json(self.storage.colors_key, colors_to_list(colors))

    def save_filter_options(self, options: Dict[str, List[str]]) -> bool:
        return self._save_json(self.storage.filter_options_key, options)

    # --- Autosave observer ---
    def attach_autosave(self, state_manager: StateManager) -> None:
        """Persist each blob whenever the StateManager reports it changed."""
        state_manager.add_listener(INVENTORY_CHANGED, lambda old, new: self.save_inventory(new))
        state_manager.add_listener(COLORS_CHANGED, lambda old, new: self.save_colors(new))
        state_manager.add_listener(OPTIONS_CHANGED, lambda old, new: self.save_filter_options(new))
