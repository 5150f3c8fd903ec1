"""Gesture routing - turns raw pointer events into intents.

Two decisions live here:
- Tap resolution: an ordered table of recognizers, first match wins.
  Emoji taps come first, then the background double tap (zoom to fit),
  which pre-empts the background single tap (deselect all).
- Gesture mode: whether a drag or magnification acts on the whole canvas
  or on the selected emoji. Chosen once when the gesture begins.
"""
from dataclasses import dataclass
from typing import Callable, Optional

from models.canvas_state import GestureMode
from models.intents import ToggleEmojiSelection, DeselectAll, ZoomToFit


@dataclass(frozen=True)
class TapEvent:
    """A completed tap; emoji_id is None when it hit empty canvas"""
    emoji_id: Optional[str] = None
    count: int = 1


@dataclass(frozen=True)
class TapRecognizer:
    name: str
    matches: Callable[[TapEvent], bool]
    build: Callable[[TapEvent], object]


TAP_RECOGNIZERS = (
    TapRecognizer(
        'emoji_tap',
        lambda tap: tap.emoji_id is not None,
        lambda tap: ToggleEmojiSelection(tap.emoji_id),
    ),
    TapRecognizer(
        'background_double_tap',
        lambda tap: tap.emoji_id is None and tap.count >= 2,
        lambda tap: ZoomToFit(),
    ),
    TapRecognizer(
        'background_single_tap',
        lambda tap: tap.emoji_id is None and tap.count == 1,
        lambda tap: DeselectAll(),
    ),
)


def resolve_tap(tap, recognizers=TAP_RECOGNIZERS):
    """Return the intent of the first recognizer matching tap, or None"""
    for recognizer in recognizers:
        if recognizer.matches(tap):
            return recognizer.build(tap)
    return None


def drag_mode(emoji_id, selection):
    """Mode for a drag starting on emoji_id (None = empty canvas).

    Only an emoji that is already selected drags the selection; touching
    an unselected emoji pans the canvas.
    """
    if emoji_id is not None and emoji_id in selection:
        return GestureMode.SELECTION
    return GestureMode.CANVAS


def magnify_mode(selection):
    """Mode for a magnification: selected emoji if any, else the canvas"""
    return GestureMode.SELECTION if selection else GestureMode.CANVAS
