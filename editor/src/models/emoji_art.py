"""
EmojiArt Editor - Document Model

THE MODEL in the MVC architecture. Owns the emoji list and the background.

This class handles:
- Emoji collection (uuid-based identification)
- Emoji operations (add, remove, move, scale)
- Background (blank, remote URL, embedded image data)
- Background fetch status bookkeeping
- Change listeners for views

The document is INDEPENDENT of UI:
- No Qt imports
- No selection state (that's the CanvasStore)
- No networking (the window runs the fetch and reports back)

Usage:
    document = EmojiArtDocument()
    emoji_id = document.add_emoji("🚀", (10, -20), 40)
    document.move_emoji(emoji_id, Vec2(5.0, 5.0))
    document.scale_emoji(emoji_id, 1.5)

    document.set_background(Background.url("https://example.com/a.jpg"))
    document.finish_background_fetch("https://example.com/a.jpg", data)
"""

import io
import logging
import uuid as uuid_module
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from models.transform import Size


class BackgroundFetchStatus(Enum):
    """Progress of loading the background image"""
    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Background:
    """Document background: blank, remote URL or embedded image bytes"""
    kind: str = "blank"
    value: object = None

    @classmethod
    def blank(cls) -> 'Background':
        return cls()

    @classmethod
    def url(cls, url: str) -> 'Background':
        return cls("url", url)

    @classmethod
    def image_data(cls, data: bytes) -> 'Background':
        return cls("image_data", bytes(data))

    @property
    def is_blank(self) -> bool:
        return self.kind == "blank"

    @property
    def url_value(self) -> Optional[str]:
        return self.value if self.kind == "url" else None

    @property
    def data_value(self) -> Optional[bytes]:
        return self.value if self.kind == "image_data" else None


@dataclass(eq=False)
class Emoji:
    """Placed emoji. Equality and hashing go by id only."""
    text: str
    x: int
    y: int
    size: int
    id: str = field(default_factory=lambda: str(uuid_module.uuid4()))

    def __eq__(self, other):
        if not isinstance(other, Emoji):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


def _round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero"""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class EmojiArtDocument:
    """EmojiArt document with full operation API

    Properties:
        emojis: Placed emoji in z-order (last is topmost)
        background: Current Background
        background_image_data: Decoded-ready image bytes, or None
        background_image_size: Natural pixel Size of the image, or None
        background_fetch_status: BackgroundFetchStatus
    """

    def __init__(self):
        """Create empty document with blank background"""
        self._logger = logging.getLogger('EmojiArtDocument')

        self._emojis: List[Emoji] = []
        self._background = Background.blank()
        self._background_image_data: Optional[bytes] = None
        self._background_image_size: Optional[Size] = None
        self._fetch_status = BackgroundFetchStatus.IDLE

        self._listeners: List[Callable[[str], None]] = []

        self._logger.debug("Created new EmojiArtDocument")

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback: Callable[[str], None]):
        """Register a change listener

        Args:
            callback: Called with the event name ("emojis", "background",
                "fetch_status" or "fetch_requested")
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, event: str):
        for listener in list(self._listeners):
            listener(event)

    # ========================================
    # Properties
    # ========================================

    @property
    def emojis(self) -> List[Emoji]:
        """Snapshot of placed emoji (copy of the list, shared Emoji objects)"""
        return list(self._emojis)

    @property
    def emoji_ids(self) -> List[str]:
        return [emoji.id for emoji in self._emojis]

    @property
    def background(self) -> Background:
        return self._background

    @property
    def background_image_data(self) -> Optional[bytes]:
        return self._background_image_data

    @property
    def background_image_size(self) -> Optional[Size]:
        return self._background_image_size

    @property
    def background_fetch_status(self) -> BackgroundFetchStatus:
        return self._fetch_status

    # ========================================
    # Emoji Operations
    # ========================================

    def get_emoji(self, emoji_id: str) -> Emoji:
        """Look up an emoji by id

        Raises:
            ValueError: If no emoji has this id
        """
        for emoji in self._emojis:
            if emoji.id == emoji_id:
                return emoji
        raise ValueError(f"Emoji with id '{emoji_id}' not found")

    def has_emoji(self, emoji_id: str) -> bool:
        return any(emoji.id == emoji_id for emoji in self._emojis)

    def add_emoji(self, text: str, position: Tuple[int, int], size) -> str:
        """Add new emoji

        Args:
            text: Single emoji grapheme
            position: (x, y) in document coordinates
            size: Font size, truncated to an integer

        Returns:
            Id of the new emoji
        """
        x, y = position
        emoji = Emoji(text=text, x=int(x), y=int(y), size=int(size))
        self._emojis.append(emoji)
        self._logger.debug(f"Added emoji {text} {emoji.id} at ({emoji.x}, {emoji.y}) size {emoji.size}")
        self._notify("emojis")
        return emoji.id

    def remove_emoji(self, emoji_id: str):
        """Remove emoji

        Raises:
            ValueError: If no emoji has this id
        """
        emoji = self.get_emoji(emoji_id)
        self._emojis.remove(emoji)
        self._logger.debug(f"Removed emoji {emoji_id}")
        self._notify("emojis")

    def move_emoji(self, emoji_id: str, offset):
        """Move emoji by an offset, truncating each axis to an integer

        Args:
            emoji_id: Emoji to move
            offset: Vec2 offset in document coordinates

        Raises:
            ValueError: If no emoji has this id
        """
        emoji = self.get_emoji(emoji_id)
        emoji.x += int(offset.x)
        emoji.y += int(offset.y)
        self._logger.debug(f"Moved emoji {emoji_id} by ({offset.x:.2f}, {offset.y:.2f})")
        self._notify("emojis")

    def scale_emoji(self, emoji_id: str, factor: float):
        """Multiply emoji size by factor, rounding half away from zero

        Raises:
            ValueError: If no emoji has this id
        """
        emoji = self.get_emoji(emoji_id)
        emoji.size = _round_half_away(emoji.size * factor)
        self._logger.debug(f"Scaled emoji {emoji_id} by {factor:.3f} -> size {emoji.size}")
        self._notify("emojis")

    # ========================================
    # Background
    # ========================================

    def set_background(self, background: Background):
        """Replace the background

        A URL background enters FETCHING and emits "fetch_requested"; the
        caller runs the fetch and reports back with finish_background_fetch()
        or fail_background_fetch(). Embedded data is decoded immediately.
        """
        self._background = background
        self._background_image_data = None
        self._background_image_size = None

        if background.kind == "url":
            self._set_fetch_status(BackgroundFetchStatus.FETCHING)
            self._notify("background")
            self._notify("fetch_requested")
        elif background.kind == "image_data":
            self._apply_image_data(background.data_value)
            self._notify("background")
        else:
            self._set_fetch_status(BackgroundFetchStatus.IDLE)
            self._notify("background")

    def finish_background_fetch(self, url: str, data: bytes):
        """Deliver fetched bytes for a URL background

        Ignored when the URL is no longer the current background.
        """
        if self._background.url_value != url:
            self._logger.debug(f"Ignoring stale fetch result for {url}")
            return
        self._apply_image_data(data)
        self._notify("background")

    def fail_background_fetch(self, url: str, reason: str = ""):
        """Report a failed fetch for a URL background"""
        if self._background.url_value != url:
            self._logger.debug(f"Ignoring stale fetch failure for {url}")
            return
        self._logger.warning(f"Background fetch failed for {url}: {reason}")
        self._set_fetch_status(BackgroundFetchStatus.FAILED)

    def _apply_image_data(self, data: bytes):
        """Decode image bytes with Pillow to learn the natural size"""
        try:
            with Image.open(io.BytesIO(data)) as image:
                width, height = image.size
        except (UnidentifiedImageError, OSError) as e:
            self._logger.warning(f"Background image data could not be decoded: {e}")
            self._background_image_data = None
            self._background_image_size = None
            self._set_fetch_status(BackgroundFetchStatus.FAILED)
            return

        self._background_image_data = bytes(data)
        self._background_image_size = Size(width, height)
        self._set_fetch_status(BackgroundFetchStatus.LOADED)

    def _set_fetch_status(self, status: BackgroundFetchStatus):
        if status != self._fetch_status:
            self._fetch_status = status
            self._notify("fetch_status")
