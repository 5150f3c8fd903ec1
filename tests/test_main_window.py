"""
Integration tests for the EmojiArtEditor main window.

The config directory is redirected to tmp_path. Fetches are faked, except in
the close tests, which run a real worker thread over a blocked fetch.
"""
import threading

import pytest

import app_window.background_mixin as background_mixin
import services.background_fetcher as background_fetcher
from main import EmojiArtEditor
from models.emoji_art import Background, BackgroundFetchStatus
from models.intents import ToggleEmojiSelection, ZoomStep


class FakeWorker:
    """Stands in for BackgroundFetchWorker; records started URLs"""
    started = []

    def __init__(self, url, timeout, parent=None):
        self.url = url
        self.fetched = _Signal()
        self.failed = _Signal()
        self.finished = _Signal()

    def start(self):
        FakeWorker.started.append(self.url)

    def isRunning(self):
        return False

    def wait(self, timeout_ms=None):
        return True

    def deleteLater(self):
        pass


class _Signal:
    def __init__(self):
        self.slots = []

    def connect(self, slot):
        self.slots.append(slot)

    def emit(self, *args):
        for slot in self.slots:
            slot(*args)


@pytest.fixture
def window(qtbot, tmp_path, monkeypatch):
    FakeWorker.started = []
    monkeypatch.setattr(background_mixin, 'BackgroundFetchWorker', FakeWorker)
    editor = EmojiArtEditor(config_dir=str(tmp_path / "config"))
    qtbot.addWidget(editor)
    return editor


class TestMainWindow:

    def test_delete_button_tracks_selection(self, window):
        emoji_id = window.document.add_emoji("🚀", (0, 0), 40)
        assert window.delete_button.isHidden()
        window.store.dispatch(ToggleEmojiSelection(emoji_id))
        assert not window.delete_button.isHidden()
        window.delete_button.click()
        assert window.document.emojis == []
        assert window.delete_button.isHidden()

    def test_zoom_label(self, window):
        window.store.dispatch(ZoomStep(2.0))
        assert window.zoom_label.text() == "200%"

    def test_url_background_fetch_success(self, window, make_png):
        url = "https://example.com/bg.png"
        window.document.set_background(Background.url(url))
        assert FakeWorker.started == [url]
        window._on_background_fetched(url, make_png(20, 10))
        assert window.document.background_fetch_status == BackgroundFetchStatus.LOADED
        assert window.recent_backgrounds == [url]

    def test_url_background_fetch_failure(self, window):
        url = "https://example.com/missing.png"
        window.document.set_background(Background.url(url))
        window._on_background_failed(url, "404")
        assert window.document.background_fetch_status == BackgroundFetchStatus.FAILED
        assert window.recent_backgrounds == []

    def test_recent_menu_lists_backgrounds(self, window, make_png):
        url = "https://example.com/bg.png"
        window.document.set_background(Background.url(url))
        window._on_background_fetched(url, make_png(4, 4))
        texts = [action.text() for action in window.recent_menu.actions()]
        assert url in texts


# ═══════════════════════════════════════════════════════════════════════
# Closing with a fetch in flight
# ═══════════════════════════════════════════════════════════════════════

@pytest.fixture
def slow_window(qtbot, tmp_path, monkeypatch):
    """Window whose fetch workers block until the test releases them"""
    release = threading.Event()

    def blocked_fetch(url, timeout=None, session=None):
        release.wait(5)
        return b"late"

    monkeypatch.setattr(background_fetcher, 'fetch_image_bytes', blocked_fetch)
    editor = EmojiArtEditor(config_dir=str(tmp_path / "config"))
    qtbot.addWidget(editor)
    editor.fetch_timeout = 0.05
    editor.show()
    yield editor, release
    release.set()
    background_mixin.wait_for_detached_fetches()


class TestCloseDuringFetch:

    def test_running_worker_outlives_window(self, qtbot, slow_window):
        window, release = slow_window
        url = "https://example.com/slow.png"
        window.document.set_background(Background.url(url))
        worker = window._fetch_workers[0]
        assert worker.isRunning()

        window.close()

        assert window._fetch_workers == []
        assert worker.parent() is None
        assert worker in background_mixin.detached_fetch_workers
        assert worker.isRunning()

        release.set()
        qtbot.waitUntil(lambda: worker not in background_mixin.detached_fetch_workers, timeout=3000)
        assert worker.isFinished()
        # Results arriving after close no longer reach the document
        assert window.document.background_fetch_status == BackgroundFetchStatus.FETCHING

    def test_wait_for_detached_fetches_blocks_until_done(self, slow_window):
        window, release = slow_window
        window.document.set_background(Background.url("https://example.com/slow.png"))
        worker = window._fetch_workers[0]
        window.close()
        assert worker.isRunning()

        release.set()
        background_mixin.wait_for_detached_fetches()

        assert worker.isFinished()
        assert background_mixin.detached_fetch_workers == set()
