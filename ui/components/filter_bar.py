from __future__ import annotations

import streamlit as st

from lens_inventory.filter_key import LENS_ATTRIBUTES
from .base_component import BaseComponent


class FilterBar(BaseComponent):
    """Eight attribute selectors plus an "add option" form.

    Changing any selector switches the visible sub-grid; adding an option
    selects it straight away.
    """

    def render(self) -> None:
        sm = self.session.state_manager
        options = sm.filter_options
        current = sm.filters.to_dict()

        cols = st.columns(4)
        for idx, (attribute, label) in enumerate(LENS_ATTRIBUTES):
            choices = list(options.get(attribute, []))
            if current[attribute] not in choices:
                choices.append(current[attribute])
            with cols[idx % 4]:
                picked = st.selectbox(
                    label,
                    choices,
                    index=choices.index(current[attribute]),
                    key=f"filter_{attribute}_{current[attribute]}",
                )
            if picked != current[attribute]:
                sm.set_filter(attribute, picked)
                st.rerun()

        with st.expander("Añadir opción"):
            with st.form("add_option_form", clear_on_submit=True):
                labels = dict(LENS_ATTRIBUTES)
                attribute = st.selectbox("Atributo", list(labels), format_func=labels.get)
                value = st.text_input("Nuevo valor")
                submitted = st.form_submit_button("Añadir")
            if submitted:
                result = self.session.validation.validate_attribute_option(attribute, value)
                if not result.is_valid:
                    st.error("; ".join(e.message for e in result.errors))
                    return
                sm.add_attribute_option(attribute, value)
                if result.errors:
                    self.session.flash("info", result.errors[0].message)
                st.rerun()
