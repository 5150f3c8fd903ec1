"""Intents - discrete user/gesture events fed to the CanvasStore.

Each gesture is a began/changed/ended (or cancelled) sequence. Taps are
already resolved by the gesture router into their meaning.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from models.transform import Vec2, ZERO


@dataclass(frozen=True)
class ViewportResized:
    width: float
    height: float


# ========================================
# Taps
# ========================================

@dataclass(frozen=True)
class ToggleEmojiSelection:
    emoji_id: str


@dataclass(frozen=True)
class DeselectAll:
    pass


@dataclass(frozen=True)
class ZoomToFit:
    pass


# ========================================
# Drag
# ========================================

@dataclass(frozen=True)
class DragBegan:
    """Drag started; emoji_id is the emoji under the pointer, if any"""
    emoji_id: Optional[str] = None


@dataclass(frozen=True)
class DragChanged:
    translation: Vec2 = ZERO


@dataclass(frozen=True)
class DragEnded:
    translation: Vec2 = ZERO


@dataclass(frozen=True)
class DragCancelled:
    pass


# ========================================
# Magnification
# ========================================

@dataclass(frozen=True)
class MagnifyBegan:
    pass


@dataclass(frozen=True)
class MagnifyChanged:
    scale: float = 1.0


@dataclass(frozen=True)
class MagnifyEnded:
    scale: float = 1.0


@dataclass(frozen=True)
class MagnifyCancelled:
    pass


# ========================================
# Commands
# ========================================

@dataclass(frozen=True)
class DeleteSelection:
    pass


@dataclass(frozen=True)
class ZoomStep:
    """Multiply committed zoom by factor (menu zoom in/out)"""
    factor: float


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class DropPayload:
    """What a drag-and-drop carried, in resolution order"""
    urls: Tuple[str, ...] = ()
    image_data: Optional[bytes] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class Drop:
    payload: DropPayload = field(default_factory=DropPayload)
    location: Vec2 = ZERO
