"""
Widget tests for EmojiCanvas and drop payload extraction.

Mouse events are delivered straight to the handlers so the tests do not
depend on platform cursor handling.
"""
import pytest
from PyQt5.QtCore import Qt, QEvent, QPoint, QPointF, QMimeData, QUrl
from PyQt5.QtGui import QMouseEvent, QImage, QColor, QWheelEvent
from PyQt5.QtWidgets import QApplication

from components.emoji_canvas import EmojiCanvas, payload_from_mime
from models.emoji_art import Background
from models.intents import DropPayload, ToggleEmojiSelection
from models.transform import Vec2, Size


def mouse_event(kind, x, y, buttons=Qt.LeftButton):
    button = Qt.LeftButton if kind != QEvent.MouseMove else Qt.NoButton
    return QMouseEvent(kind, QPointF(x, y), button, buttons, Qt.NoModifier)


def press(canvas, x, y):
    canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, x, y))


def move(canvas, x, y):
    canvas.mouseMoveEvent(mouse_event(QEvent.MouseMove, x, y))


def release(canvas, x, y):
    canvas.mouseReleaseEvent(mouse_event(QEvent.MouseButtonRelease, x, y, Qt.NoButton))


@pytest.fixture
def canvas(qtbot, store):
    widget = EmojiCanvas(store)
    qtbot.addWidget(widget)
    widget.resize(400, 300)
    widget.show()
    qtbot.waitUntil(lambda: store.state.viewport == Size(400, 300))
    return widget


# ══════════════════════════════════════════════════════════════════════════
# Taps
# ══════════════════════════════════════════════════════════════════════════

class TestTaps:

    def test_viewport_follows_widget_size(self, qtbot, canvas, store):
        canvas.resize(500, 200)
        qtbot.waitUntil(lambda: store.state.viewport == Size(500, 200))

    def test_click_on_emoji_toggles(self, canvas, store, rocket):
        press(canvas, 205, 155)
        release(canvas, 205, 155)
        assert store.state.is_selected(rocket)
        press(canvas, 205, 155)
        release(canvas, 205, 155)
        assert not store.state.is_selected(rocket)

    def test_click_on_background_deselects_after_delay(self, qtbot, canvas, store, rocket):
        store.dispatch(ToggleEmojiSelection(rocket))
        press(canvas, 20, 20)
        release(canvas, 20, 20)
        assert store.state.has_selection
        qtbot.waitUntil(lambda: not store.state.has_selection, timeout=3000)

    def test_double_click_zooms_to_fit_and_keeps_selection(self, canvas, store, document, rocket, make_png):
        document.set_background(Background.image_data(make_png(800, 600)))
        store.dispatch(ToggleEmojiSelection(rocket))
        press(canvas, 20, 20)
        release(canvas, 20, 20)
        canvas.mouseDoubleClickEvent(mouse_event(QEvent.MouseButtonDblClick, 20, 20))
        release(canvas, 20, 20)
        assert store.state.steady_zoom == 0.5
        assert not canvas._single_tap_timer.isActive()
        assert store.state.is_selected(rocket)

    def test_background_tap_then_emoji_tap_keeps_emoji_selected(self, qtbot, canvas, store, rocket):
        press(canvas, 20, 20)
        release(canvas, 20, 20)
        press(canvas, 205, 155)
        release(canvas, 205, 155)
        assert store.state.is_selected(rocket)
        qtbot.wait(QApplication.doubleClickInterval() + 200)
        assert store.state.is_selected(rocket)

    def test_pending_background_tap_lands_before_next_drag(self, canvas, store, document, rocket):
        store.dispatch(ToggleEmojiSelection(rocket))
        press(canvas, 20, 20)
        release(canvas, 20, 20)
        press(canvas, 200, 150)
        assert not store.state.has_selection
        move(canvas, 240, 150)
        release(canvas, 240, 150)
        assert document.get_emoji(rocket).position == (0, 0)
        assert store.state.steady_pan == Vec2(40, 0)

    def test_emoji_not_hit_while_background_loads(self, canvas, store, document, rocket):
        document.set_background(Background.url("https://example.com/bg.png"))
        assert canvas.emoji_id_at(QPoint(200, 150)) is None
        press(canvas, 205, 155)
        release(canvas, 205, 155)
        assert not store.state.is_selected(rocket)
        assert canvas._single_tap_timer.isActive()


# ══════════════════════════════════════════════════════════════════════════
# Drags
# ══════════════════════════════════════════════════════════════════════════

class TestDrags:

    def test_background_drag_pans(self, canvas, store):
        press(canvas, 100, 100)
        move(canvas, 130, 90)
        assert store.state.pan == Vec2(30, -10)
        release(canvas, 130, 90)
        assert store.state.steady_pan == Vec2(30, -10)
        assert not store.state.is_dragging

    def test_selected_emoji_drag_moves(self, canvas, store, document, rocket):
        store.dispatch(ToggleEmojiSelection(rocket))
        press(canvas, 200, 150)
        move(canvas, 240, 150)
        release(canvas, 240, 150)
        assert document.get_emoji(rocket).position == (40, 0)
        assert store.state.steady_pan == Vec2(0, 0)

    def test_small_movement_is_a_tap(self, canvas, store, rocket):
        press(canvas, 200, 150)
        move(canvas, 201, 150)
        release(canvas, 201, 150)
        assert store.state.is_selected(rocket)
        assert store.state.steady_pan == Vec2(0, 0)

    def test_escape_cancels_drag(self, qtbot, canvas, store):
        press(canvas, 100, 100)
        move(canvas, 160, 100)
        qtbot.keyClick(canvas, Qt.Key_Escape)
        release(canvas, 160, 100)
        assert store.state.steady_pan == Vec2(0, 0)
        assert not store.state.is_dragging


# ══════════════════════════════════════════════════════════════════════════
# Keyboard / wheel / painting
# ══════════════════════════════════════════════════════════════════════════

class TestKeyboardAndWheel:

    def test_delete_key(self, qtbot, canvas, store, document, rocket):
        store.dispatch(ToggleEmojiSelection(rocket))
        qtbot.keyClick(canvas, Qt.Key_Delete)
        assert document.emojis == []

    def test_escape_deselects(self, qtbot, canvas, store, rocket):
        store.dispatch(ToggleEmojiSelection(rocket))
        qtbot.keyClick(canvas, Qt.Key_Escape)
        assert not store.state.has_selection

    def test_ctrl_wheel_magnifies(self, qtbot, canvas, store):
        event = QWheelEvent(QPointF(200, 150), QPointF(200, 150), QPoint(0, 0), QPoint(0, 1200),
                            Qt.NoButton, Qt.ControlModifier, Qt.NoScrollPhase, False)
        canvas.wheelEvent(event)
        assert store.state.zoom == pytest.approx(2.0)
        assert store.state.steady_zoom == 1.0
        qtbot.waitUntil(lambda: store.state.steady_zoom == pytest.approx(2.0), timeout=3000)
        assert not store.state.is_magnifying

    def test_paints_without_errors(self, canvas, store, document, rocket, make_png):
        document.set_background(Background.image_data(make_png(64, 64)))
        store.dispatch(ToggleEmojiSelection(rocket))
        image = canvas.grab().toImage()
        assert not image.isNull()


# ══════════════════════════════════════════════════════════════════════════
# Drop payloads
# ══════════════════════════════════════════════════════════════════════════

class TestPayloadFromMime:

    def test_text(self, qapp):
        mime = QMimeData()
        mime.setText("🚀")
        assert payload_from_mime(mime) == DropPayload(text="🚀")

    def test_remote_url(self, qapp):
        mime = QMimeData()
        mime.setUrls([QUrl("https://example.com/a.png")])
        payload = payload_from_mime(mime)
        assert payload.urls == ("https://example.com/a.png",)

    def test_image(self, qapp):
        image = QImage(4, 4, QImage.Format_ARGB32)
        image.fill(QColor("red"))
        mime = QMimeData()
        mime.setImageData(image)
        payload = payload_from_mime(mime)
        assert payload.image_data.startswith(b"\x89PNG")

    def test_local_file_read_as_image_data(self, qapp, tmp_path, make_png):
        path = tmp_path / "bg.png"
        path.write_bytes(make_png(3, 3))
        mime = QMimeData()
        mime.setUrls([QUrl.fromLocalFile(str(path))])
        payload = payload_from_mime(mime)
        assert payload.urls == ()
        assert payload.image_data == make_png(3, 3)
