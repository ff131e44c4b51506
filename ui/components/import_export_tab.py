from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from ui.services import InventoryService


class ImportExportTab(BaseComponent):
    """Tab 3: CSV download of every available lens and CSV upload."""

    def __init__(self, session, inventory_service: InventoryService) -> None:
        super().__init__(session)
        self.inventory_service = inventory_service

    def render(self) -> None:
        st.header("Importar / Exportar")
        self.show_notice()

        st.subheader("Exportar")
        text, reason = self.inventory_service.export_text()
        if text is None:
            st.info(reason)
        else:
            st.download_button(
                label="Descargar CSV",
                data=text.encode("utf-8"),
                file_name=self.session.settings.export_filename,
                mime="text/csv",
            )

        st.subheader("Importar")
        st.caption(
            "Columnas requeridas: Foco, Material, Color, Fotocromatico, Tratamiento, Diametro, "
            "Adicion, Indice Refraccion, Esfera, Cilindro, Stock. Los campos no pueden contener comas."
        )
        uploaded = st.file_uploader("Archivo CSV", type=["csv"], key="csv_upload")
        if uploaded is not None and st.button("Importar archivo"):
            ok, message = self.inventory_service.import_bytes(uploaded.getvalue())
            self.session.flash("success" if ok else "error", message)
            st.rerun()


def render_import_export_tab(session, inventory_service: InventoryService) -> None:
    ImportExportTab(session, inventory_service).render()
