"""Canvas transform and selection state.

A CanvasState is an immutable snapshot. The CanvasStore replaces it on
every intent; views only ever read it.

Committed values (steady_zoom, steady_pan, selection) survive between
gestures. In-flight values (gesture_*) live only while a gesture runs and
are reset to identity when it ends or is cancelled.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Optional

from constants import MIN_ZOOM_SCALE, MAX_ZOOM_SCALE
from models.transform import Vec2, Size, ZERO


class GestureMode(Enum):
    """What an in-flight pan or zoom gesture acts on"""
    CANVAS = "canvas"
    SELECTION = "selection"


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM_SCALE, min(MAX_ZOOM_SCALE, zoom))


@dataclass(frozen=True)
class CanvasState:
    viewport: Size = Size(0, 0)

    steady_zoom: float = 1.0
    steady_pan: Vec2 = ZERO
    selection: FrozenSet[str] = frozenset()

    # In-flight drag
    drag_mode: Optional[GestureMode] = None
    gesture_pan: Vec2 = ZERO
    gesture_emoji_pan: Vec2 = ZERO

    # In-flight magnification
    magnify_mode: Optional[GestureMode] = None
    gesture_zoom: float = 1.0
    gesture_emoji_zoom: float = 1.0

    # ========================================
    # Effective values (rendering only)
    # ========================================

    @property
    def zoom(self) -> float:
        """Effective zoom: committed zoom times in-flight canvas zoom"""
        return self.steady_zoom * self.gesture_zoom

    @property
    def pan(self) -> Vec2:
        """Effective pan in screen pixels"""
        return (self.steady_pan + self.gesture_pan) * self.zoom

    @property
    def viewport_center(self) -> Vec2:
        return self.viewport.center

    @property
    def has_selection(self) -> bool:
        return bool(self.selection)

    @property
    def is_dragging(self) -> bool:
        return self.drag_mode is not None

    @property
    def is_magnifying(self) -> bool:
        return self.magnify_mode is not None

    def is_selected(self, emoji_id: str) -> bool:
        return emoji_id in self.selection

    # ========================================
    # Derived snapshots
    # ========================================

    def with_selection_toggled(self, emoji_id: str) -> 'CanvasState':
        if emoji_id in self.selection:
            return replace(self, selection=self.selection - {emoji_id})
        return replace(self, selection=self.selection | {emoji_id})

    def without_drag(self) -> 'CanvasState':
        return replace(self, drag_mode=None, gesture_pan=ZERO, gesture_emoji_pan=ZERO)

    def without_magnify(self) -> 'CanvasState':
        return replace(self, magnify_mode=None, gesture_zoom=1.0, gesture_emoji_zoom=1.0)
