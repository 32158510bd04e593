"""Transient interaction state for the live preview.

Holds per-item offsets and scales for the custom layout, the selected item
and the zoom factor. None of this is part of the menu document: it lives as
long as the preview that owns it and is never exported.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from menu_render_service.models.menu_models import LayoutMode

logger = logging.getLogger(__name__)

SCALE_STEP = 0.1
MIN_SCALE = 0.5
MAX_SCALE = 2.0

ZOOM_STEP = 0.1
MIN_ZOOM = 0.5
MAX_ZOOM = 1.5


class InteractionState(str, Enum):
    """States of the custom layout interaction."""

    IDLE = "idle"
    SELECTED = "selected"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class ItemTransform:
    """Offset in px and scale factor for one item."""

    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0


DEFAULT_TRANSFORM = ItemTransform()


@dataclass(frozen=True)
class DragOrigin:
    """Pointer and offset captured when a drag starts."""

    item_id: str
    pointer_x: float
    pointer_y: float
    offset_x: float
    offset_y: float


def _clamp(value: float, low: float, high: float) -> float:
    return round(max(low, min(high, value)), 2)


class CustomLayoutInteraction:
    """State machine for selecting, dragging and scaling items.

    Item manipulation only applies while the layout mode is custom; zoom
    applies in every mode. Every method returns True when the event changed
    or consumed state and False when it was ignored.
    """

    def __init__(self) -> None:
        """Start idle, with no transforms and unit zoom."""
        self.transforms: dict[str, ItemTransform] = {}
        self.selected_item_id: str | None = None
        self.zoom: float = 1.0
        self._drag: DragOrigin | None = None

    @property
    def state(self) -> InteractionState:
        if self._drag is not None:
            return InteractionState.DRAGGING
        if self.selected_item_id is not None:
            return InteractionState.SELECTED
        return InteractionState.IDLE

    def transform_for(self, item_id: str) -> ItemTransform:
        """Current transform for an item, defaulting to no offset and unit scale."""
        return self.transforms.get(item_id, DEFAULT_TRANSFORM)

    def click(self, item_id: str, layout: LayoutMode) -> bool:
        """Toggle selection of ``item_id``."""
        if layout != LayoutMode.CUSTOM or self._drag is not None:
            return False
        if self.selected_item_id == item_id:
            self.selected_item_id = None
        else:
            self.selected_item_id = item_id
        return True

    def pointer_down(self, item_id: str, x: float, y: float, layout: LayoutMode) -> bool:
        """Start dragging the selected item from pointer position ``(x, y)``."""
        if layout != LayoutMode.CUSTOM or self._drag is not None:
            return False
        if self.selected_item_id != item_id:
            return False
        current = self.transform_for(item_id)
        self._drag = DragOrigin(
            item_id=item_id,
            pointer_x=x,
            pointer_y=y,
            offset_x=current.x,
            offset_y=current.y,
        )
        return True

    def pointer_move(self, x: float, y: float, layout: LayoutMode) -> bool:
        """Move the dragged item by the pointer delta since the drag started.

        Offsets are not clamped to any canvas boundary. A drag still open when
        the layout has left custom mode is cancelled instead.
        """
        drag = self._drag
        if drag is None:
            return False
        if layout != LayoutMode.CUSTOM:
            self.cancel_drag()
            return False
        current = self.transform_for(drag.item_id)
        self.transforms[drag.item_id] = ItemTransform(
            x=drag.offset_x + (x - drag.pointer_x),
            y=drag.offset_y + (y - drag.pointer_y),
            scale=current.scale,
        )
        return True

    def cancel_drag(self) -> bool:
        """Abandon an open drag, leaving the item where the last move put it."""
        if self._drag is None:
            return False
        logger.info(f"Cancelled drag of item {self._drag.item_id}")
        self._drag = None
        return True

    def pointer_up(self) -> bool:
        """End the drag; the item stays selected and keeps its offset."""
        if self._drag is None:
            return False
        self._drag = None
        return True

    def scale_up(self, layout: LayoutMode) -> bool:
        return self._rescale(SCALE_STEP, layout)

    def scale_down(self, layout: LayoutMode) -> bool:
        return self._rescale(-SCALE_STEP, layout)

    def _rescale(self, step: float, layout: LayoutMode) -> bool:
        item_id = self.selected_item_id
        if layout != LayoutMode.CUSTOM or item_id is None:
            return False
        current = self.transform_for(item_id)
        self.transforms[item_id] = ItemTransform(
            x=current.x,
            y=current.y,
            scale=_clamp(current.scale + step, MIN_SCALE, MAX_SCALE),
        )
        return True

    def reset(self, layout: LayoutMode) -> bool:
        """Drop the selected item's transform so it snaps back to the default."""
        item_id = self.selected_item_id
        if layout != LayoutMode.CUSTOM or item_id is None:
            return False
        self.transforms.pop(item_id, None)
        self._drag = None
        return True

    def zoom_in(self) -> bool:
        self.zoom = _clamp(self.zoom + ZOOM_STEP, MIN_ZOOM, MAX_ZOOM)
        return True

    def zoom_out(self) -> bool:
        self.zoom = _clamp(self.zoom - ZOOM_STEP, MIN_ZOOM, MAX_ZOOM)
        return True
