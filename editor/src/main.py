import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors; config log_level may override
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow

from constants import APP_NAME, CONFIG_DIR, CONFIG_FILE_NAME
from models.emoji_art import EmojiArtDocument
from services.canvas_store import CanvasStore
from utils.logger import set_main_window

# Mixin imports
from app_window.menu_mixin import MenuMixin
from app_window.config_mixin import ConfigMixin
from app_window.background_mixin import BackgroundMixin, wait_for_detached_fetches
from app_window.ui_setup_mixin import UISetupMixin


class EmojiArtEditor(MenuMixin, ConfigMixin, BackgroundMixin, UISetupMixin, QMainWindow):
    def __init__(self, config_dir=CONFIG_DIR):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1024, 768)

        # Config (palettes, font size, fetch timeout, recent backgrounds)
        self.config_dir = config_dir
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self._load_config()

        # Document and canvas state
        self.document = EmojiArtDocument()
        self.store = CanvasStore(self.document, default_font_size=self.default_emoji_font_size)
        self.document.add_listener(self._on_document_event)
        self._fetch_workers = []

        set_main_window(self)

        self.setup_ui()

    def closeEvent(self, event):
        self._wait_for_fetches()
        self._save_config()
        self.canvas.detach()
        super().closeEvent(event)


def main():
    """Main entry point for the EmojiArt application"""
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyle("Fusion")

    window = EmojiArtEditor()
    window.show()
    exit_code = app.exec_()
    wait_for_detached_fetches()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
