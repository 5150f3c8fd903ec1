"""
Background image fetching.

QThread-based worker that downloads a URL background so the GUI thread
never blocks on the network. The worker only returns bytes; the window
hands them to the document on the GUI thread.
"""

import logging

import requests
from PyQt5.QtCore import QThread, pyqtSignal

from constants import DEFAULT_FETCH_TIMEOUT

_logger = logging.getLogger('BackgroundFetcher')


def fetch_image_bytes(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT, session=None) -> bytes:
    """Download url and return the response body.

    Args:
        url: http(s) URL of the image
        timeout: Seconds before giving up
        session: Optional requests.Session to reuse connections

    Returns:
        Raw response bytes

    Raises:
        requests.RequestException: On network errors or non-2xx status
    """
    getter = session.get if session is not None else requests.get
    response = getter(url, timeout=timeout)
    response.raise_for_status()
    _logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.content


class BackgroundFetchWorker(QThread):
    """Worker thread fetching one background URL."""

    fetched = pyqtSignal(str, bytes)  # url, data
    failed = pyqtSignal(str, str)     # url, message

    def __init__(self, url: str, timeout: float = DEFAULT_FETCH_TIMEOUT, parent=None):
        super().__init__(parent)
        self.url = url
        self.timeout = timeout

    def run(self):
        """Fetch and report through signals."""
        try:
            data = fetch_image_bytes(self.url, self.timeout)
        except requests.RequestException as e:
            _logger.warning(f"Fetching {self.url} failed: {e}")
            self.failed.emit(self.url, str(e))
            return
        self.fetched.emit(self.url, data)
