"""
Shared fixtures for EmojiArt Editor tests.

Provides a document, a canvas store with a known viewport, and image bytes.
"""
import io
import os
import sys

import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

from PIL import Image

from models.emoji_art import EmojiArtDocument
from models.intents import ViewportResized
from services.canvas_store import CanvasStore


VIEWPORT_WIDTH = 400
VIEWPORT_HEIGHT = 300


def png_bytes(width, height, color=(200, 30, 30)):
    """Encode a solid-color PNG of the given size"""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


# ── Fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def document():
    """Empty document with a blank background"""
    return EmojiArtDocument()


@pytest.fixture
def store(document):
    """Canvas store over the document with a 400x300 viewport"""
    store = CanvasStore(document, default_font_size=40)
    store.dispatch(ViewportResized(VIEWPORT_WIDTH, VIEWPORT_HEIGHT))
    return store


@pytest.fixture
def rocket(document):
    """Id of a rocket emoji at the document origin"""
    return document.add_emoji("🚀", (0, 0), 40)


@pytest.fixture
def image_200x100():
    return png_bytes(200, 100)


@pytest.fixture
def make_png():
    """Factory for PNG bytes of a given size"""
    return png_bytes
