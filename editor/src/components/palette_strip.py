"""Palette strip - horizontal row of emoji that can be dragged onto the canvas"""

import logging

from PyQt5.QtWidgets import (QWidget, QHBoxLayout, QLabel, QScrollArea, QComboBox,
                             QApplication, QSizePolicy)
from PyQt5.QtCore import Qt, QMimeData, pyqtSignal
from PyQt5.QtGui import QDrag, QFont

from constants import DEFAULT_EMOJI_FONT_SIZE
from utils.emoji_text import graphemes


class EmojiLabel(QLabel):
    """Single palette entry; dragging it carries the emoji as plain text"""

    def __init__(self, emoji, font_size=DEFAULT_EMOJI_FONT_SIZE, parent=None):
        super().__init__(emoji, parent)
        self.emoji = emoji
        self._press_pos = None
        font = QFont(self.font())
        font.setPixelSize(font_size)
        self.setFont(font)
        self.setAlignment(Qt.AlignCenter)
        self.setCursor(Qt.OpenHandCursor)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._press_pos = event.pos()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._press_pos is None or not (event.buttons() & Qt.LeftButton):
            return
        if (event.pos() - self._press_pos).manhattanLength() < QApplication.startDragDistance():
            return
        self._press_pos = None
        drag = QDrag(self)
        drag.setMimeData(self.mime_data())
        drag.setPixmap(self.grab())
        drag.setHotSpot(drag.pixmap().rect().center())
        drag.exec_(Qt.CopyAction)

    def mouseReleaseEvent(self, event):
        self._press_pos = None
        super().mouseReleaseEvent(event)

    def mime_data(self):
        mime = QMimeData()
        mime.setText(self.emoji)
        return mime


class PaletteStrip(QWidget):
    """Palette chooser plus scrolling row of the chosen palette's emoji

    Signals:
        palette_changed(int): Index of the palette now shown
    """

    palette_changed = pyqtSignal(int)

    def __init__(self, palette_store, font_size=DEFAULT_EMOJI_FONT_SIZE, parent=None):
        super().__init__(parent)
        self._logger = logging.getLogger('PaletteStrip')
        self.palette_store = palette_store
        self.font_size = font_size
        self.current_index = 0
        self.labels = []
        self._setup_ui()
        self.refresh()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        self.palette_combo = QComboBox()
        self.palette_combo.setSizeAdjustPolicy(QComboBox.AdjustToContents)
        self.palette_combo.currentIndexChanged.connect(self._on_combo_changed)
        layout.addWidget(self.palette_combo)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scroll_area.setFrameShape(QScrollArea.NoFrame)
        self.scroll_area.setFixedHeight(self.font_size + 24)
        self.scroll_area.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        layout.addWidget(self.scroll_area, 1)

        self.row = QWidget()
        self.row_layout = QHBoxLayout(self.row)
        self.row_layout.setContentsMargins(0, 0, 0, 0)
        self.row_layout.setSpacing(4)
        self.scroll_area.setWidget(self.row)

    def refresh(self):
        """Rebuild the chooser and the emoji row from the palette store"""
        self.palette_combo.blockSignals(True)
        self.palette_combo.clear()
        for palette in self.palette_store.palettes:
            self.palette_combo.addItem(palette.name)
        self.current_index %= len(self.palette_store)
        self.palette_combo.setCurrentIndex(self.current_index)
        self.palette_combo.blockSignals(False)
        self._rebuild_row()

    def show_palette(self, index):
        """Show the palette at index (wraps around)"""
        self.current_index = index % len(self.palette_store)
        if self.palette_combo.currentIndex() != self.current_index:
            self.palette_combo.blockSignals(True)
            self.palette_combo.setCurrentIndex(self.current_index)
            self.palette_combo.blockSignals(False)
        self._rebuild_row()
        self.palette_changed.emit(self.current_index)

    def show_next_palette(self):
        self.show_palette(self.current_index + 1)

    def show_previous_palette(self):
        self.show_palette(self.current_index - 1)

    def _on_combo_changed(self, index):
        if index >= 0:
            self.show_palette(index)

    def _rebuild_row(self):
        for label in self.labels:
            self.row_layout.removeWidget(label)
            label.deleteLater()
        self.labels = []
        # Remove trailing stretch
        while self.row_layout.count():
            self.row_layout.takeAt(0)

        palette = self.palette_store.palette(self.current_index)
        for emoji in graphemes(palette.emojis):
            label = EmojiLabel(emoji, self.font_size, self.row)
            self.row_layout.addWidget(label)
            self.labels.append(label)
        self.row_layout.addStretch(1)
        self._logger.debug(f"Showing palette '{palette.name}' with {len(self.labels)} emoji")

    def current_emojis(self):
        """Emoji of the palette currently shown"""
        return [label.emoji for label in self.labels]
