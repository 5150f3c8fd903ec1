"""Canvas store - reducer and change notification for CanvasState.

The store owns the current CanvasState snapshot and a reference to the
document. Views dispatch intents; the store reduces each intent to a new
snapshot, performs document writes where a gesture commits, and notifies
subscribers when the snapshot changed.

Gesture lifecycle:
    *Began    -> mode chosen from the selection (never changes mid-gesture)
    *Changed  -> in-flight delta updated, nothing committed
    *Ended    -> delta committed (canvas transform or document), reset
    *Cancelled-> delta discarded

Usage:
    store = CanvasStore(document)
    unsubscribe = store.subscribe(lambda state: widget.update())
    store.dispatch(ViewportResized(800, 600))
    store.dispatch(DragBegan(None))
    store.dispatch(DragChanged(Vec2(10, 0)))
    store.dispatch(DragEnded(Vec2(30, 0)))
"""

import logging
from dataclasses import replace
from typing import Callable, List

from constants import DEFAULT_EMOJI_FONT_SIZE
from models.canvas_state import CanvasState, GestureMode, clamp_zoom
from models.intents import (
    ViewportResized, ToggleEmojiSelection, DeselectAll, ZoomToFit,
    DragBegan, DragChanged, DragEnded, DragCancelled,
    MagnifyBegan, MagnifyChanged, MagnifyEnded, MagnifyCancelled,
    DeleteSelection, ZoomStep, ResetView, Drop
)
from models.transform import Size, ZERO
from services import gesture_router
from services.drop_resolver import resolve_drop, SetBackgroundAction, AddEmojiAction


class CanvasStore:
    """Holds CanvasState and applies intents to it.

    Attributes:
        document: EmojiArtDocument receiving committed item changes
        default_font_size: Size of a dropped emoji at zoom 1.0
        last_drop_handled: Result of the most recent Drop intent
    """

    def __init__(self, document, state: CanvasState = None, default_font_size: int = DEFAULT_EMOJI_FONT_SIZE):
        self._logger = logging.getLogger('CanvasStore')
        self.document = document
        self.default_font_size = default_font_size
        self.last_drop_handled = False
        self._state = state if state is not None else CanvasState()
        self._subscribers: List[Callable[[CanvasState], None]] = []

        self._handlers = {
            ViewportResized: self._on_viewport_resized,
            ToggleEmojiSelection: self._on_toggle_selection,
            DeselectAll: self._on_deselect_all,
            ZoomToFit: self._on_zoom_to_fit,
            DragBegan: self._on_drag_began,
            DragChanged: self._on_drag_changed,
            DragEnded: self._on_drag_ended,
            DragCancelled: self._on_drag_cancelled,
            MagnifyBegan: self._on_magnify_began,
            MagnifyChanged: self._on_magnify_changed,
            MagnifyEnded: self._on_magnify_ended,
            MagnifyCancelled: self._on_magnify_cancelled,
            DeleteSelection: self._on_delete_selection,
            ZoomStep: self._on_zoom_step,
            ResetView: self._on_reset_view,
            Drop: self._on_drop,
        }

        document.add_listener(self._on_document_changed)

    # ========================================
    # Public API
    # ========================================

    @property
    def state(self) -> CanvasState:
        return self._state

    def subscribe(self, listener: Callable[[CanvasState], None]) -> Callable[[], None]:
        """Register listener for new snapshots

        Returns:
            Callable that unsubscribes the listener
        """
        self._subscribers.append(listener)

        def unsubscribe():
            if listener in self._subscribers:
                self._subscribers.remove(listener)
        return unsubscribe

    def dispatch(self, intent) -> CanvasState:
        """Reduce intent into a new snapshot and notify subscribers

        Unknown intents are ignored.

        Returns:
            The current snapshot after the intent
        """
        handler = self._handlers.get(type(intent))
        if handler is None:
            self._logger.warning(f"Ignoring unknown intent {intent!r}")
            return self._state
        new_state = handler(self._state, intent)
        self._commit(new_state)
        return self._state

    def _commit(self, new_state: CanvasState):
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._subscribers):
            listener(new_state)

    # ========================================
    # Selection
    # ========================================

    def _on_toggle_selection(self, state, intent):
        return state.with_selection_toggled(intent.emoji_id)

    def _on_deselect_all(self, state, intent):
        return replace(state, selection=frozenset())

    def _on_delete_selection(self, state, intent):
        for emoji_id in self._selected_in_document(state):
            self.document.remove_emoji(emoji_id)
        self._logger.debug(f"Deleted {len(state.selection)} selected emoji")
        # Document listener may already have pruned the selection
        return replace(self._state, selection=frozenset())

    def _selected_in_document(self, state):
        """Selected ids still present, in document z-order"""
        return [emoji_id for emoji_id in self.document.emoji_ids if emoji_id in state.selection]

    def _on_document_changed(self, event):
        if event != "emojis" or not self._state.selection:
            return
        present = set(self.document.emoji_ids)
        pruned = self._state.selection & present
        if pruned != self._state.selection:
            self._commit(replace(self._state, selection=frozenset(pruned)))

    # ========================================
    # Zoom
    # ========================================

    def _on_viewport_resized(self, state, intent):
        return replace(state, viewport=Size(intent.width, intent.height))

    def _on_zoom_to_fit(self, state, intent):
        image_size = self.document.background_image_size
        if image_size is None or image_size.is_empty or state.viewport.is_empty:
            return state
        h_zoom = state.viewport.width / image_size.width
        v_zoom = state.viewport.height / image_size.height
        return replace(state, steady_zoom=min(h_zoom, v_zoom), steady_pan=ZERO)

    def _on_zoom_step(self, state, intent):
        if intent.factor <= 0:
            return state
        return replace(state, steady_zoom=clamp_zoom(state.steady_zoom * intent.factor))

    def _on_reset_view(self, state, intent):
        return replace(state, steady_zoom=1.0, steady_pan=ZERO)

    def _on_magnify_began(self, state, intent):
        return replace(state.without_magnify(), magnify_mode=gesture_router.magnify_mode(state.selection))

    def _on_magnify_changed(self, state, intent):
        if state.magnify_mode is None or intent.scale <= 0:
            return state
        if state.magnify_mode == GestureMode.SELECTION:
            return replace(state, gesture_emoji_zoom=intent.scale, gesture_zoom=1.0)
        return replace(state, gesture_zoom=intent.scale, gesture_emoji_zoom=1.0)

    def _on_magnify_ended(self, state, intent):
        mode = state.magnify_mode
        state = state.without_magnify()
        if mode is None or intent.scale <= 0:
            return state
        if mode == GestureMode.CANVAS:
            return replace(state, steady_zoom=clamp_zoom(state.steady_zoom * intent.scale))
        for emoji_id in self._selected_in_document(state):
            self.document.scale_emoji(emoji_id, intent.scale)
        return state

    def _on_magnify_cancelled(self, state, intent):
        return state.without_magnify()

    # ========================================
    # Pan
    # ========================================

    def _on_drag_began(self, state, intent):
        mode = gesture_router.drag_mode(intent.emoji_id, state.selection)
        return replace(state.without_drag(), drag_mode=mode)

    def _on_drag_changed(self, state, intent):
        if state.drag_mode == GestureMode.SELECTION:
            return replace(state, gesture_emoji_pan=intent.translation)
        if state.drag_mode == GestureMode.CANVAS:
            return replace(state, gesture_pan=intent.translation / state.zoom)
        return state

    def _on_drag_ended(self, state, intent):
        mode = state.drag_mode
        # Effective zoom still includes any simultaneous magnification
        offset = intent.translation / state.zoom
        state = state.without_drag()
        if mode == GestureMode.CANVAS:
            return replace(state, steady_pan=state.steady_pan + offset)
        if mode == GestureMode.SELECTION:
            for emoji_id in self._selected_in_document(state):
                self.document.move_emoji(emoji_id, offset)
        return state

    def _on_drag_cancelled(self, state, intent):
        return state.without_drag()

    # ========================================
    # Drop
    # ========================================

    def _on_drop(self, state, intent):
        action = resolve_drop(intent.payload, intent.location, state, self.default_font_size)
        self.last_drop_handled = action is not None
        if isinstance(action, SetBackgroundAction):
            self.document.set_background(action.background)
        elif isinstance(action, AddEmojiAction):
            self.document.add_emoji(action.text, action.position, action.size)
        return state
