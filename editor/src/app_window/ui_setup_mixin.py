"""UI setup for EmojiArtEditor"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QStatusBar, QLabel

from components.emoji_canvas import EmojiCanvas
from components.palette_strip import PaletteStrip
from models.intents import DeleteSelection


class UISetupMixin:
    """UI initialization and component wiring"""

    def setup_ui(self):
        """Initialize and wire up all UI components"""
        self._create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # Top row: palette strip plus delete button
        top_row = QHBoxLayout()
        top_row.setContentsMargins(0, 0, 4, 0)
        self.palette_strip = PaletteStrip(self.palette_store, self.default_emoji_font_size)
        top_row.addWidget(self.palette_strip, 1)

        self.delete_button = QPushButton("Delete")
        self.delete_button.setToolTip("Delete selected emoji (Del)")
        self.delete_button.clicked.connect(self._delete_selection)
        self.delete_button.setVisible(False)
        top_row.addWidget(self.delete_button)
        main_layout.addLayout(top_row)

        # Canvas
        self.canvas = EmojiCanvas(self.store)
        main_layout.addWidget(self.canvas, 1)

        # Status bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.zoom_label = QLabel()
        self.status_bar.addPermanentWidget(self.zoom_label)

        self.store.subscribe(self._on_canvas_state_changed)
        self._on_canvas_state_changed(self.store.state)
        self.canvas.setFocus()

    def _on_canvas_state_changed(self, state):
        """Keep the delete button and zoom readout in step with the canvas"""
        self.delete_button.setVisible(state.has_selection)
        self.zoom_label.setText(f"{state.zoom * 100:.0f}%")

    def _delete_selection(self):
        self.store.dispatch(DeleteSelection())
