from __future__ import annotations

import itertools

import pandas as pd
import streamlit as st

from lens_inventory.axes import CYLINDER_VALUES, SPHERE_VALUES
from lens_inventory.catalog import price_lookup
from lens_inventory.grid_view import grid_frame
from lens_inventory.ui_logic import InteractionMode
from .base_component import BaseComponent
from .color_palette import ColorPalette
from .filter_bar import FilterBar


class GridTab(BaseComponent):
    """Tab 1: stock grid for the selected attribute combination.

    Streamlit has no pointer events, so a drag stroke is entered as a set of
    sphere rows and cylinder columns and replayed through `paint_stroke`.
    A click is the "Editar" button of the stock editor.
    """

    def render(self) -> None:
        st.header("Inventario de Lentes")
        self.show_notice()

        FilterBar(self.session).render()
        self._render_search_and_sort()
        st.divider()
        ColorPalette(self.session).render()

        mode = self.session.mutations.mode
        if mode in (InteractionMode.PAINT_ARMED, InteractionMode.PAINTING):
            self._render_paint_form()
        else:
            self._render_edit_form()

        self._render_grid()

    # --- Controls ---
    def _render_search_and_sort(self) -> None:
        sm = self.session.state_manager
        col_search, col_key, col_column, col_button = st.columns([3, 1, 1, 1])
        with col_search:
            query = st.text_input(
                "Buscar graduación (ESF CIL)",
                value=sm.get_state().view.search_query,
                placeholder="Ej: -1.25 0.50",
            )
        if query != sm.get_state().view.search_query:
            sm.set_search_query(query)

        sort = sm.get_state().view.sort
        with col_key:
            key = st.selectbox("Ordenar por", ["sphere", "stock"], format_func={"sphere": "Esfera", "stock": "Stock"}.get)
        with col_column:
            column = st.selectbox("Columna CIL", CYLINDER_VALUES, disabled=(key == "sphere"))
        with col_button:
            st.write("")
            if st.button("Ordenar"):
                sm.toggle_sort(key, column if key == "stock" else None)
                st.rerun()
        arrow = "↑" if sort.direction == "asc" else "↓"
        target = f"stock @ {sort.column}" if sort.key == "stock" else "esfera"
        st.caption(f"Orden actual: {target} {arrow}")

    def _render_paint_form(self) -> None:
        mutations = self.session.mutations
        with st.form("paint_stroke_form"):
            st.caption("Trazo de pintura: se pinta cada combinación de filas y columnas elegidas.")
            spheres = st.multiselect("Esferas", SPHERE_VALUES)
            cylinders = st.multiselect("Cilindros", CYLINDER_VALUES)
            submitted = st.form_submit_button("Pintar")
        if submitted:
            cells = list(itertools.product(spheres, cylinders))
            changed = mutations.paint_stroke(cells)
            self.session.flash("success", f"{changed} celdas actualizadas")
            st.rerun()

    def _render_edit_form(self) -> None:
        mutations = self.session.mutations
        col_sph, col_cyl, col_btn = st.columns([1, 1, 1])
        with col_sph:
            sph = st.selectbox("Esfera", SPHERE_VALUES, index=SPHERE_VALUES.index("0.00"))
        with col_cyl:
            cyl = st.selectbox("Cilindro", CYLINDER_VALUES)
        with col_btn:
            st.write("")
            if st.button("Editar"):
                if mutations.click_cell(sph, cyl) is not InteractionMode.EDIT_ARMED:
                    self.session.flash("warning", "La celda no tiene color: no se puede editar su stock")
                st.rerun()

        active = mutations.active_cell
        if mutations.mode is not InteractionMode.EDIT_ARMED or active is None:
            return
        sm = self.session.state_manager
        current = (sm.current_grid().get(active.sph) or {}).get(active.cyl)
        with st.form("stock_edit_form"):
            text = st.text_input(
                f"Stock para {active.sph} / {active.cyl}",
                value=str(current.stock if current is not None else 0),
            )
            save = st.form_submit_button("Guardar")
            close = st.form_submit_button("Cerrar")
        if save or close:
            mutations.submit_stock(text)
            st.rerun()

    # --- Table ---
    def _render_grid(self) -> None:
        sm = self.session.state_manager
        view = sm.visible_view()
        if view.is_empty:
            st.info("No se encontraron graduaciones para la búsqueda.")
            return

        grid = sm.current_grid()
        frame = grid_frame(view, grid)
        st.dataframe(self._style(frame, grid), use_container_width=True, height=600)

    def _style(self, frame: pd.DataFrame, grid):
        by_tag = price_lookup(self.session.state_manager.colors)

        def cell_css(sph: str, cyl: str) -> str:
            cell = (grid.get(sph) or {}).get(cyl)
            if cell is None or not cell.available:
                return ""
            entry = by_tag.get(cell.color)
            text = entry.text_color if entry is not None else "#111827"
            return f"background-color: {cell.color}; color: {text}"

        def styles(df: pd.DataFrame) -> pd.DataFrame:
            return pd.DataFrame(
                [[cell_css(sph, cyl) for cyl in df.columns] for sph in df.index],
                index=df.index,
                columns=df.columns,
            )

        return frame.style.apply(styles, axis=None).format(lambda v: "" if v is None else str(v))


def render_grid_tab(session) -> None:
    GridTab(session).render()
