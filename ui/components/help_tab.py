from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent

HELP_TEXT = """
**Filtros.** Cada combinación de los ocho atributos tiene su propia grilla de
esferas (filas) y cilindros (columnas).

**Pintar.** Elija un color del pincel y marque filas y columnas: cada celda
toma ese color. *Eliminar* deja la celda sin color y con stock 0. Vuelva a
*Editar stock* para salir del modo pintura.

**Editar stock.** Sin color elegido, seleccione una celda con color y escriba
la cantidad. Valores negativos o no numéricos se descartan.

**Buscar.** `5.00 0.75` muestra esferas que empiezan por `5.00` y cilindros que
empiezan por `0.75`. Con un solo término sólo se filtran las esferas.

**Importar.** Las filas sin color previo y con stock mayor que 0 reciben el
color *Stock Bajo*.
"""


class HelpTab(BaseComponent):
    """Tab 4: usage notes."""

    def render(self) -> None:
        st.header("Ayuda")
        st.markdown(HELP_TEXT)


def render_help_tab(session) -> None:
    HelpTab(session).render()
