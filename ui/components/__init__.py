"""UI components package for the inventory Streamlit application.

Each tab defines a class inheriting from `BaseComponent` with a `render()`
method that draws the tab and pushes user gestures into the engine.
"""

from .base_component import BaseComponent  # re-export for convenience

__all__ = [
    "BaseComponent",
]
