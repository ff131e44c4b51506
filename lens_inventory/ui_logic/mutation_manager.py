"""
Paint/edit interaction protocol for the stock grid.

The grid has two mutually exclusive ways of changing the inventory:

- Paint mode: a color (or the erase tool) is armed; pressing on a cell paints
  it and dragging across other cells paints each one entered. Releasing the
  pointer or leaving the grid ends the stroke but keeps the color armed.
- Edit mode: with no color armed, clicking an available cell opens a stock
  editor for it; submitting a valid non-negative integer stores the value.

States:

    IDLE ──select_color──▶ PAINT_ARMED ──pointer_down──▶ PAINTING
      ▲                       │   ▲                          │
      │◀──select same/None────┘   └──pointer_up / leave──────┘
      │
      └──click_cell (available)──▶ EDIT_ARMED ──submit_stock──▶ IDLE

Store updates go through the pure functions in `grid_store` and are handed
to the StateManager, which notifies observers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple
import logging

from ..grid_store import get_cell, paint_cell, set_cell_stock
from .state_manager import VIEW_CHANGED, StateManager

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    IDLE = "idle"
    PAINT_ARMED = "paint_armed"
    PAINTING = "painting"
    EDIT_ARMED = "edit_armed"


@dataclass(frozen=True)
class ActiveCell:
    sph: str
    cyl: str


def parse_stock_input(text: object) -> Optional[int]:
    """Return the stock typed by the user, or None when it must be discarded."""
    if isinstance(text, bool):
        return None
    if isinstance(text, int):
        value = text
    else:
        try:
            value = int(str(text).strip())
        except (TypeError, ValueError):
            return None
    return value if value >= 0 else None


class MutationManager:
    """State machine turning grid gestures into inventory updates."""

    def __init__(self, state_manager: StateManager):
        self.state_manager = state_manager
        self._mode = InteractionMode.IDLE
        self._armed_color: Optional[str] = None
        self._active_cell: Optional[ActiveCell] = None
        state_manager.add_listener(VIEW_CHANGED, self._on_view_changed)

    # --- Introspection ---
    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def armed_color(self) -> Optional[str]:
        return self._armed_color

    @property
    def active_cell(self) -> Optional[ActiveCell]:
        return self._active_cell

    @property
    def is_painting(self) -> bool:
        return self._mode is InteractionMode.PAINTING

    # --- Paint mode ---
    def select_color(self, tag: Optional[str]) -> InteractionMode:
        """Arm a paint color; selecting the armed color again (or None) disarms."""
        self._active_cell = None
        if tag is None or tag == self._armed_color:
            self._armed_color = None
            self._mode = InteractionMode.IDLE
        else:
            self._armed_color = tag
            self._mode = InteractionMode.PAINT_ARMED
        return self._mode

    def pointer_down(self, sph: str, cyl: str) -> bool:
        """Start a stroke on a cell. Returns True if the store changed."""
        if self._mode is not InteractionMode.PAINT_ARMED:
            return False
        self._mode = InteractionMode.PAINTING
        return self._paint(sph, cyl)

    def pointer_enter(self, sph: str, cyl: str) -> bool:
        """Continue a stroke onto another cell."""
        if self._mode is not InteractionMode.PAINTING:
            return False
        return self._paint(sph, cyl)

    def pointer_up(self) -> None:
        self._end_stroke()

    def pointer_leave_grid(self) -> None:
        self._end_stroke()

    def paint_stroke(self, cells: Iterable[Tuple[str, str]]) -> int:
        """Run a whole stroke (down, enters, up) and return how many cells changed."""
        changed = 0
        cells = list(cells)
        if not cells or self._mode is not InteractionMode.PAINT_ARMED:
            return 0
        first, rest = cells[0], cells[1:]
        try:
            changed += int(self.pointer_down(*first))
            for sph, cyl in rest:
                changed += int(self.pointer_enter(sph, cyl))
        finally:
            self.pointer_up()
        return changed

    def _end_stroke(self) -> None:
        if self._mode is InteractionMode.PAINTING:
            self._mode = InteractionMode.PAINT_ARMED

    def _paint(self, sph: str, cyl: str) -> bool:
        sm = self.state_manager
        new_store = paint_cell(sm.inventory, sm.current_key, sph, cyl, self._armed_color)
        return sm.set_inventory(new_store)

    # --- Edit mode ---
    def click_cell(self, sph: str, cyl: str) -> InteractionMode:
        """Open the stock editor on an available cell (no-op while painting)."""
        if self._mode in (InteractionMode.PAINT_ARMED, InteractionMode.PAINTING):
            return self._mode
        sm = self.state_manager
        cell = get_cell(sm.inventory, sm.current_key, sph, cyl)
        if cell.available:
            self._active_cell = ActiveCell(sph, cyl)
            self._mode = InteractionMode.EDIT_ARMED
        else:
            self.clear_edit()
        return self._mode

    def submit_stock(self, text: object) -> bool:
        """Close the editor, storing the value if it is a non-negative integer.

        Confirm, losing focus and cancel all land here. Invalid input is
        dropped silently. Returns True if the store changed.
        """
        if self._mode is not InteractionMode.EDIT_ARMED or self._active_cell is None:
            return False
        cell = self._active_cell
        self.clear_edit()

        stock = parse_stock_input(text)
        if stock is None:
            logger.debug("Discarded stock input %r for %s/%s", text, cell.sph, cell.cyl)
            return False
        sm = self.state_manager
        new_store = set_cell_stock(sm.inventory, sm.current_key, cell.sph, cell.cyl, stock)
        return sm.set_inventory(new_store)

    def clear_edit(self) -> None:
        self._active_cell = None
        if self._mode is InteractionMode.EDIT_ARMED:
            self._mode = InteractionMode.IDLE

    def _on_view_changed(self, old_view, new_view) -> None:
        if old_view.filters != new_view.filters:
            self.clear_edit()
