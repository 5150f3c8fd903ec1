"""
EmojiArt Editor - Data Models

This module contains the data model classes: the document (emoji and
background), the canvas transform/selection snapshot, the intents that
change it, and emoji palettes.
This is the MODEL in MVC architecture.
"""

from .emoji_art import EmojiArtDocument, Emoji, Background, BackgroundFetchStatus
from .canvas_state import CanvasState, GestureMode
from .palette import Palette, PaletteStore
from .transform import Vec2, Size

__all__ = [
    'EmojiArtDocument', 'Emoji', 'Background', 'BackgroundFetchStatus',
    'CanvasState', 'GestureMode',
    'Palette', 'PaletteStore',
    'Vec2', 'Size',
]
