"""Canvas layout - where things are drawn for a given CanvasState.

Pure functions used by the canvas widget for painting and hit testing.
"""
from dataclasses import dataclass
from typing import List, Optional

from models.transform import Vec2, ZERO
from utils.coordinate_transforms import to_screen_coordinates


@dataclass(frozen=True)
class EmojiPlacement:
    """Screen placement of one emoji.

    center is the committed screen position; offset is the in-flight drag
    offset (selected emoji only). scale multiplies font_size.
    """
    emoji_id: str
    text: str
    center: Vec2
    font_size: int
    scale: float
    offset: Vec2
    selected: bool

    @property
    def rendered_center(self) -> Vec2:
        return self.center + self.offset

    @property
    def extent(self) -> float:
        """Side length of the square the glyph occupies on screen"""
        return self.font_size * self.scale


@dataclass(frozen=True)
class BackgroundPlacement:
    """Screen point of the document origin and the image scale"""
    anchor: Vec2
    scale: float


def emoji_placements(state, emojis) -> List[EmojiPlacement]:
    """Placements for emojis in z-order.

    Args:
        state: CanvasState
        emojis: Iterable of Emoji

    Returns:
        list of EmojiPlacement
    """
    zoom = state.zoom
    pan = state.pan
    center = state.viewport_center
    placements = []
    for emoji in emojis:
        selected = state.is_selected(emoji.id)
        placements.append(EmojiPlacement(
            emoji_id=emoji.id,
            text=emoji.text,
            center=to_screen_coordinates((emoji.x, emoji.y), center, pan, zoom),
            font_size=emoji.size,
            scale=zoom * state.gesture_emoji_zoom if selected else zoom,
            offset=state.gesture_emoji_pan if selected else ZERO,
            selected=selected,
        ))
    return placements


def background_placement(state) -> BackgroundPlacement:
    """The background image is centered on the document origin"""
    anchor = to_screen_coordinates((0, 0), state.viewport_center, state.pan, state.zoom)
    return BackgroundPlacement(anchor, state.zoom)


def emoji_at(point, placements) -> Optional[str]:
    """Id of the topmost emoji whose box contains point, else None"""
    for placement in reversed(placements):
        half = placement.extent / 2
        center = placement.rendered_center
        if abs(point.x - center.x) <= half and abs(point.y - center.y) <= half:
            return placement.emoji_id
    return None
