"""
Tests for tap resolution and gesture mode selection.
"""
from models.canvas_state import GestureMode
from models.intents import ToggleEmojiSelection, DeselectAll, ZoomToFit
from services.gesture_router import (
    TapEvent, TapRecognizer, TAP_RECOGNIZERS, resolve_tap, drag_mode, magnify_mode
)


# ══════════════════════════════════════════════════════════════════════════
# Tap priority table
# ══════════════════════════════════════════════════════════════════════════

class TestResolveTap:

    def test_emoji_tap_toggles(self):
        assert resolve_tap(TapEvent("abc", 1)) == ToggleEmojiSelection("abc")

    def test_emoji_double_tap_still_toggles(self):
        assert resolve_tap(TapEvent("abc", 2)) == ToggleEmojiSelection("abc")

    def test_background_double_tap_zooms_to_fit(self):
        assert resolve_tap(TapEvent(None, 2)) == ZoomToFit()

    def test_background_single_tap_deselects(self):
        assert resolve_tap(TapEvent(None, 1)) == DeselectAll()

    def test_order_is_emoji_then_double_then_single(self):
        names = [recognizer.name for recognizer in TAP_RECOGNIZERS]
        assert names == ['emoji_tap', 'background_double_tap', 'background_single_tap']

    def test_first_match_wins(self):
        recognizers = (
            TapRecognizer('first', lambda tap: True, lambda tap: 'first'),
            TapRecognizer('second', lambda tap: True, lambda tap: 'second'),
        )
        assert resolve_tap(TapEvent(None, 1), recognizers) == 'first'

    def test_no_match_returns_none(self):
        assert resolve_tap(TapEvent(None, 0)) is None


# ══════════════════════════════════════════════════════════════════════════
# Gesture modes
# ══════════════════════════════════════════════════════════════════════════

class TestModes:

    def test_drag_on_background_pans_canvas(self):
        assert drag_mode(None, frozenset({"a"})) == GestureMode.CANVAS

    def test_drag_on_selected_emoji_moves_selection(self):
        assert drag_mode("a", frozenset({"a", "b"})) == GestureMode.SELECTION

    def test_drag_on_unselected_emoji_pans_canvas(self):
        assert drag_mode("c", frozenset({"a"})) == GestureMode.CANVAS

    def test_magnify_without_selection(self):
        assert magnify_mode(frozenset()) == GestureMode.CANVAS

    def test_magnify_with_selection(self):
        assert magnify_mode(frozenset({"a"})) == GestureMode.SELECTION
