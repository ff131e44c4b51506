from __future__ import annotations

import streamlit as st

from lens_inventory.analytics import low_stock_frame, material_frame
from .base_component import BaseComponent
from ui.services import InventoryService


class DashboardTab(BaseComponent):
    """Tab 2: inventory summary across every attribute combination."""

    def __init__(self, session, inventory_service: InventoryService) -> None:
        super().__init__(session)
        self.inventory_service = inventory_service

    def render(self) -> None:
        st.header("Resumen del Inventario")
        stats = self.inventory_service.stats()

        c1, c2, c3 = st.columns(3)
        c1.metric("Valor total", f"${stats.total_value:,.2f}")
        c2.metric("Unidades en stock", f"{stats.total_stock:,}")
        c3.metric("Lentes distintos", f"{stats.unique_lenses:,}")

        st.subheader("Alertas de stock bajo")
        alerts = low_stock_frame(stats)
        if alerts.empty:
            st.success("No hay lentes por debajo de su límite de stock.")
        else:
            st.dataframe(alerts, hide_index=True, use_container_width=True)

        st.subheader("Stock por material")
        materials = material_frame(stats)
        if materials.empty:
            st.info("Todavía no hay inventario.")
            return
        chart = self.inventory_service.material_chart(stats)
        if chart is not None:
            st.image(str(chart))
        else:
            st.dataframe(materials, hide_index=True, use_container_width=True)


def render_dashboard_tab(session, inventory_service: InventoryService) -> None:
    DashboardTab(session, inventory_service).render()
