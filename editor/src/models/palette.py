"""Emoji palette model - named strips of emoji the user drags onto the canvas."""

import logging
import uuid as uuid_module
from dataclasses import dataclass, field
from typing import List

from constants import DEFAULT_PALETTES
from utils.emoji_text import graphemes


@dataclass
class Palette:
    name: str
    emojis: str
    id: str = field(default_factory=lambda: str(uuid_module.uuid4()))


class PaletteStore:
    """Ordered collection of palettes.

    Always holds at least one palette; an empty store is reseeded with
    DEFAULT_PALETTES.
    """

    def __init__(self, name: str, palettes: List[Palette] = None):
        self._logger = logging.getLogger('PaletteStore')
        self.name = name
        self.palettes: List[Palette] = list(palettes) if palettes else []
        if not self.palettes:
            self.palettes = [Palette(name, emojis) for name, emojis in DEFAULT_PALETTES]
            self._logger.debug(f"Seeded palette store '{name}' with {len(self.palettes)} default palettes")

    def __len__(self):
        return len(self.palettes)

    def palette(self, index: int) -> Palette:
        """Palette at index; out-of-range indices wrap around"""
        return self.palettes[index % len(self.palettes)]

    def insert_palette(self, name: str, emojis: str = "", at: int = 0) -> Palette:
        """Insert a new palette, clamping the index into range"""
        at = max(0, min(len(self.palettes), at))
        palette = Palette(name, _unique_characters(emojis))
        self.palettes.insert(at, palette)
        return palette

    def remove_palette(self, index: int) -> int:
        """Remove palette at index (wrapped). The last palette is never removed.

        Returns:
            Index of the palette to show afterwards
        """
        if len(self.palettes) > 1:
            index = index % len(self.palettes)
            removed = self.palettes.pop(index)
            self._logger.debug(f"Removed palette '{removed.name}'")
        return index % len(self.palettes)

    def add_emoji(self, index: int, emoji: str):
        """Append emoji to a palette unless already present"""
        palette = self.palette(index)
        if emoji and emoji not in graphemes(palette.emojis):
            palette.emojis += emoji

    # ========================================
    # Config serialization
    # ========================================

    def to_dicts(self) -> List[dict]:
        return [{'name': p.name, 'emojis': p.emojis} for p in self.palettes]

    @classmethod
    def from_dicts(cls, name: str, entries) -> 'PaletteStore':
        """Build a store from config entries, skipping malformed ones"""
        palettes = []
        for entry in entries or []:
            if isinstance(entry, dict) and isinstance(entry.get('emojis'), str):
                palettes.append(Palette(str(entry.get('name', 'Untitled')), entry['emojis']))
        return cls(name, palettes)


def _unique_characters(text: str) -> str:
    seen = []
    for character in graphemes(text):
        if character not in seen:
            seen.append(character)
    return "".join(seen)
