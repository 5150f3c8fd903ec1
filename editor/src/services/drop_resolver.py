"""Drop target resolution.

Resolution order, first success wins:
    1. URL        -> remote background
    2. image data -> embedded background
    3. text       -> new emoji at the drop point, if its first
                     character is an emoji glyph

Anything else is not handled.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from models.emoji_art import Background
from utils.coordinate_transforms import to_document_coordinates
from utils.emoji_text import first_grapheme, is_emoji

_logger = logging.getLogger('DropResolver')


@dataclass(frozen=True)
class SetBackgroundAction:
    background: Background


@dataclass(frozen=True)
class AddEmojiAction:
    text: str
    position: Tuple[int, int]
    size: int


def image_url(url: str) -> str:
    """Unwrap image-search links that carry the real image in ?imgurl=...

    Args:
        url: Dropped URL

    Returns:
        The imgurl query parameter if present, else url unchanged
    """
    for key, value in parse_qsl(urlsplit(url).query):
        if key == "imgurl" and value:
            return value
    return url


def resolve_drop(payload, location, state, default_font_size) -> Optional[object]:
    """Decide what a drop means.

    Args:
        payload: DropPayload
        location: Vec2 drop point in screen pixels
        state: CanvasState at drop time
        default_font_size: Emoji size at zoom 1.0

    Returns:
        SetBackgroundAction, AddEmojiAction, or None if not handled
    """
    for url in payload.urls:
        if url:
            _logger.debug(f"Drop resolved as background URL {url}")
            return SetBackgroundAction(Background.url(image_url(url)))

    if payload.image_data:
        _logger.debug(f"Drop resolved as embedded background ({len(payload.image_data)} bytes)")
        return SetBackgroundAction(Background.image_data(payload.image_data))

    if payload.text:
        glyph = first_grapheme(payload.text)
        if is_emoji(glyph):
            zoom = state.zoom
            position = to_document_coordinates(location, state.viewport_center, state.pan, zoom)
            return AddEmojiAction(glyph, position, int(default_font_size / zoom))

    _logger.debug("Drop not handled")
    return None
