from __future__ import annotations

"""Base component class for the inventory Streamlit UI.

All tabs/components inherit from `BaseComponent` and implement the
`render()` method. Components receive the session bundle (engine state,
mutation state machine, validation) through their constructor.
"""

from dataclasses import dataclass

import streamlit as st


@dataclass
class BaseComponent:
    """Base class for all UI components.

    Attributes:
        session: `ui.state.EngineSession` for the current browser session
    """

    session: object

    def render(self) -> None:
        """Render the component.

        Subclasses must override this method to draw Streamlit widgets
        and route gestures to the engine.
        """
        raise NotImplementedError("Subclasses must implement render()")

    def show_notice(self) -> None:
        """Display (once) the message left by the previous interaction."""
        notice = self.session.pop_notice()
        if notice is None:
            return
        level, message = notice
        getattr(st, level, st.info)(message)
