from __future__ import annotations

import streamlit as st

from lens_inventory.catalog import CatalogError, paint_colors
from .base_component import BaseComponent

EDIT_LABEL = "Editar stock"


class ColorPalette(BaseComponent):
    """Paint color picker, new-color form and price editor."""

    def render(self) -> None:
        sm = self.session.state_manager
        mutations = self.session.mutations
        colors = sm.colors

        labels = [EDIT_LABEL] + [c.name for c in colors]
        tags = [None] + [c.value for c in colors]
        armed = mutations.armed_color
        index = tags.index(armed) if armed in tags else 0
        picked = st.radio("Pincel", labels, index=index, horizontal=True, key=f"palette_{armed}")
        tag = tags[labels.index(picked)]
        if tag != armed:
            mutations.select_color(tag)
            st.rerun()

        swatches = " ".join(
            f"<span style='background:{c.value or '#ffffff'};color:{c.text_color};"
            f"padding:2px 8px;border:1px solid #d1d5db;border-radius:4px'>{c.name} "
            f"{c.price:.2f}</span>"
            for c in paint_colors(colors)
        )
        st.markdown(swatches, unsafe_allow_html=True)

        col_new, col_price = st.columns(2)
        with col_new, st.expander("Nuevo color"):
            self._render_new_color_form()
        with col_price, st.expander("Precios"):
            self._render_price_form()

    def _render_new_color_form(self) -> None:
        with st.form("new_color_form", clear_on_submit=True):
            name = st.text_input("Nombre")
            value = st.color_picker("Color", value="#93c5fd")
            price = st.number_input("Precio", min_value=0.0, value=0.0, step=1.0)
            threshold = st.number_input("Límite de stock bajo (0 = sin alerta)", min_value=0, value=0, step=1)
            submitted = st.form_submit_button("Añadir color")
        if not submitted:
            return
        result = self.session.validation.validate_new_color(name, value, price, threshold or None)
        if not result.is_valid:
            st.error("; ".join(e.message for e in result.get_errors_by_severity("error")))
            return
        try:
            entry = self.session.state_manager.add_color(name, value, price, threshold or None)
        except CatalogError as exc:
            st.error(str(exc))
            return
        self.session.flash("success", f"Color '{entry.name}' añadido")
        st.rerun()

    def _render_price_form(self) -> None:
        sm = self.session.state_manager
        for entry in sm.colors:
            if entry.is_erase:
                continue
            new_price = st.number_input(
                entry.name,
                min_value=0.0,
                value=float(entry.price),
                step=1.0,
                key=f"price_{entry.value}",
            )
            if new_price != entry.price and self.session.validation.validate_price(new_price).is_valid:
                sm.set_price(entry.value, new_price)
