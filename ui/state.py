from __future__ import annotations

"""
Session bundle for the Streamlit GUI.

Streamlit reruns the script on every interaction, so the engine objects are
built once and kept in `st.session_state`. This module only wires them
together; it never imports streamlit.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from lens_inventory.settings import AppSettings, load_settings
from lens_inventory.ui_logic import DataManager, MutationManager, StateManager, ValidationManager
from lens_inventory.ui_logic.state_manager import ViewState


@dataclass
class EngineSession:
    """Everything one browser session needs to drive the grid.

    - `state_manager` owns inventory, catalog, options and the view
    - `mutations` is the paint/edit state machine bound to it
    - `notice` is a one-shot (level, message) shown after the next rerun
    """

    settings: AppSettings
    state_manager: StateManager
    data_manager: DataManager
    mutations: MutationManager
    validation: ValidationManager
    notice: Optional[Tuple[str, str]] = None

    def flash(self, level: str, message: str) -> None:
        self.notice = (level, message)

    def pop_notice(self) -> Optional[Tuple[str, str]]:
        notice, self.notice = self.notice, None
        return notice


def build_session(settings: Optional[AppSettings] = None) -> EngineSession:
    """Load persisted blobs and attach autosave, returning a fresh session."""
    settings = settings or load_settings()
    data_manager = DataManager.from_settings(settings.storage)
    state_manager = StateManager(data_manager.load_state(ViewState(filters=settings.default_filters)))
    data_manager.attach_autosave(state_manager)
    return EngineSession(
        settings=settings,
        state_manager=state_manager,
        data_manager=data_manager,
        mutations=MutationManager(state_manager),
        validation=ValidationManager(state_manager),
    )
