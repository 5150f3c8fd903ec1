"""
EmojiArt Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Emoji sizing defaults
- Zoom limits and step factors
- Default palettes
- Config file locations and defaults
- Canvas rendering constants
"""

import os

APP_NAME = "EmojiArt"
APP_VERSION = "1.0.0"

# ======================================================================
# EMOJI DEFAULTS
# ======================================================================

# Font size of an emoji dropped at zoom 1.0 (scaled by 1/zoom on drop)
DEFAULT_EMOJI_FONT_SIZE = 40

# ======================================================================
# ZOOM CONSTRAINTS
# ======================================================================

MIN_ZOOM_SCALE = 0.05
MAX_ZOOM_SCALE = 20.0

# Menu / Ctrl+wheel zoom step
ZOOM_STEP_FACTOR = 1.25

# Ctrl+wheel: angle delta per 1.0 of log-scale magnification
WHEEL_MAGNIFY_DIVISOR = 1200.0
# Idle time after the last wheel tick before the magnification ends (ms)
WHEEL_MAGNIFY_END_DELAY_MS = 300

# ======================================================================
# DEFAULT PALETTES
# ======================================================================

DEFAULT_PALETTE_STORE_NAME = "Default"

DEFAULT_PALETTES = [
    ("Mixed", "😀😷🦠💉👻👀🐶🌲🌎🌞🔥🍎⚽️🚗🚓🚲🛩🚁🚀🛸🏠⌚️🎁🗝🔐❤️⛔️❌❓✅⚠️🎶➕➖🏳️"),
    ("Vehicles", "🚙🚗🚘🚕🚖🏎🚚🛻🚛🚐🚓🚔🚑🚒🚀✈️🛫🛬🛩🚁🛸🚲🏍🛶⛵️🚤🛥🛳⛴🚢🚂🚝🚅🚆🚊🚉🚇🛺🚜"),
    ("Sports", "🏈⚾️🏀⚽️🎾🏐🥏🏓⛳️🥅🥌🏂⛷🎳"),
    ("Music", "🎼🎤🎹🪘🥁🎺🪗🪕🎻"),
    ("Animals", "🐥🐣🐂🐄🐎🐖🐏🐑🦙🐐🐓🐁🐀🐒🦆🦅🦉🦇🐢🐍🦎🦖🦕🐅🐆🦓🦍🦧🦣🐘🦛🦏🐪🐫🦒🦘🦬🐃🦙🐐🦌🐕🐩🦮🐈🦤🦢🦩🕊🦝🦨🦡🦫🦦🦥🐿🦔"),
    ("Faces", "😀😃😄😁😆😅😂🤣🥲☺️😊😇🙂🙃😉😌😍🥰😘😗😙😚😋😛😝😜🤪🤨🧐🤓😎🥸🤩🥳😏😞😔😟😕🙁☹️😣😖😫😩🥺😢😭😤😠😡🤯😳🥶😥😓🤗🤔🤭🤫🤥😬🙄😯😧🥱😴🤮😷🤧🤒🤕"),
    ("Weather", "☀️🌤⛅️🌥☁️🌦🌧⛈🌩🌨❄️💨☔️💧💦🌊☂️🌫🌪"),
]

# ======================================================================
# CONFIG
# ======================================================================

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".emojiart")
CONFIG_FILE_NAME = "config.json"

DEFAULT_FETCH_TIMEOUT = 10  # seconds
DEFAULT_LOG_LEVEL = "WARNING"
MAX_RECENT_BACKGROUNDS = 10

# ======================================================================
# CANVAS RENDERING
# ======================================================================

SELECTION_BORDER_WIDTH = 4
SELECTION_BORDER_COLOR = "#1E6FD9"
CANVAS_BACKGROUND_COLOR = "#FFFFFF"
