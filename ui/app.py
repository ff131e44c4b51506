"""
Optical lens inventory UI.

Four tabs over a single engine session kept in `st.session_state`.
"""

from pathlib import Path
import sys
import streamlit as st

# Ensure project root is on sys.path to enable lens_inventory imports
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from lens_inventory.utils_logging import configure_logging
from ui.state import EngineSession, build_session
from ui.services import InventoryService
from ui.components.inventory_grid import render_grid_tab
from ui.components.dashboard_tab import render_dashboard_tab
from ui.components.import_export_tab import render_import_export_tab
from ui.components.help_tab import render_help_tab


st.set_page_config(page_title="Inventario de Lentes", page_icon="👓", layout="wide", initial_sidebar_state="collapsed")


def main() -> None:
    # Initialize session
    if "engine" not in st.session_state:
        session = build_session()
        configure_logging(session.settings.logs_dir, debug=session.settings.debug)
        st.session_state["engine"] = session
    session: EngineSession = st.session_state["engine"]

    inventory_service = InventoryService(session.state_manager, session.settings.output_dir)

    st.title("👓 Inventario de Lentes")
    st.caption("Stock por graduación, color y combinación de atributos")

    tabs = st.tabs([
        "Grilla",
        "Resumen",
        "Importar / Exportar",
        "Ayuda",
    ])

    with tabs[0]:
        render_grid_tab(session)
    with tabs[1]:
        render_dashboard_tab(session, inventory_service)
    with tabs[2]:
        render_import_export_tab(session, inventory_service)
    with tabs[3]:
        render_help_tab(session)


if __name__ == "__main__":
    main()
