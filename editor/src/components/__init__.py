"""UI components for EmojiArt

- emoji_canvas: document view, gesture and drop handling
- palette_strip: draggable emoji palettes
"""

from .emoji_canvas import EmojiCanvas, payload_from_mime
from .palette_strip import PaletteStrip, EmojiLabel

__all__ = [
    'EmojiCanvas',
    'payload_from_mime',
    'PaletteStrip',
    'EmojiLabel',
]
