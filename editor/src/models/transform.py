"""Vector data structures for coordinate and size representation."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs and offsets.

    Used for any x/y pair across the editor's spaces:
    - Screen pixels (top-left origin of the canvas widget)
    - Document coordinates (origin at the viewport center at zoom 1)
    - Pan offsets and drag translations
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor):
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    @property
    def is_zero(self):
        return self.x == 0 and self.y == 0


ZERO = Vec2(0.0, 0.0)


@dataclass(frozen=True)
class Size:
    """Width/height pair for viewports and images."""
    width: float
    height: float

    def __iter__(self):
        return iter((self.width, self.height))

    @property
    def center(self) -> Vec2:
        """Center point of a rect of this size anchored at the origin."""
        return Vec2(self.width / 2, self.height / 2)

    @property
    def is_empty(self) -> bool:
        """True if either dimension is zero or negative."""
        return self.width <= 0 or self.height <= 0
