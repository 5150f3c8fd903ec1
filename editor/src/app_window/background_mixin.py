"""Background image handling for EmojiArtEditor"""

import logging

from PyQt5.QtWidgets import QInputDialog

from models.emoji_art import Background, BackgroundFetchStatus
from services.background_fetcher import BackgroundFetchWorker

_logger = logging.getLogger('BackgroundMixin')


class BackgroundMixin:
    """Runs URL fetches the document requests and feeds results back"""

    def _on_document_event(self, event):
        if event == "fetch_requested":
            url = self.document.background.url_value
            if url:
                self._start_background_fetch(url)
        elif event == "fetch_status":
            self._show_fetch_status(self.document.background_fetch_status)

    def _start_background_fetch(self, url):
        _logger.debug(f"Starting background fetch for {url}")
        worker = BackgroundFetchWorker(url, self.fetch_timeout, self)
        worker.fetched.connect(self._on_background_fetched)
        worker.failed.connect(self._on_background_failed)
        worker.finished.connect(lambda w=worker: self._on_fetch_worker_finished(w))
        self._fetch_workers.append(worker)
        worker.start()

    def _on_fetch_worker_finished(self, worker):
        if worker in self._fetch_workers:
            self._fetch_workers.remove(worker)
        worker.deleteLater()

    def _on_background_fetched(self, url, data):
        self.document.finish_background_fetch(url, data)
        if (self.document.background.url_value == url
                and self.document.background_fetch_status == BackgroundFetchStatus.LOADED):
            self._add_to_recent_backgrounds(url)

    def _on_background_failed(self, url, message):
        self.document.fail_background_fetch(url, message)

    def _show_fetch_status(self, status):
        messages = {
            BackgroundFetchStatus.FETCHING: "Loading background…",
            BackgroundFetchStatus.LOADED: "Background loaded",
            BackgroundFetchStatus.FAILED: "Background could not be loaded",
        }
        message = messages.get(status)
        if message and hasattr(self, 'status_bar'):
            self.status_bar.showMessage(message, 5000)

    # ========================================
    # Menu actions
    # ========================================

    def _set_background_from_url(self):
        url, ok = QInputDialog.getText(self, "Set Background", "Image URL:")
        url = url.strip()
        if ok and url:
            self.document.set_background(Background.url(url))

    def _open_recent_background(self, url):
        self.document.set_background(Background.url(url))

    def _clear_background(self):
        self.document.set_background(Background.blank())

    def _wait_for_fetches(self):
        """Release running fetch workers from the window on close

        Each worker is cut off from the window's slots and unparented so it
        outlives the window, then given the fetch timeout to finish.
        Stragglers are collected by wait_for_detached_fetches() at exit.
        """
        timeout_ms = int(self.fetch_timeout * 1000)
        for worker in list(self._fetch_workers):
            self._fetch_workers.remove(worker)
            if not worker.isRunning():
                continue
            worker.fetched.disconnect()
            worker.failed.disconnect()
            worker.finished.disconnect()
            worker.setParent(None)
            detached_fetch_workers.add(worker)
            worker.finished.connect(lambda w=worker: detached_fetch_workers.discard(w))
            if not worker.wait(timeout_ms):
                _logger.warning(f"Fetch of {worker.url} still running after close")


# Workers detached from a closed window, kept alive until they finish
detached_fetch_workers = set()


def wait_for_detached_fetches():
    """Block until every detached fetch worker has stopped"""
    for worker in list(detached_fetch_workers):
        worker.wait()
    detached_fetch_workers.clear()
