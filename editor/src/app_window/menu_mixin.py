"""Menu bar creation and menu action handlers for EmojiArtEditor"""

from PyQt5.QtWidgets import QMessageBox

from constants import APP_NAME, APP_VERSION, ZOOM_STEP_FACTOR
from models.intents import ZoomStep, ZoomToFit, ResetView, DeselectAll


class MenuMixin:
    """Menu bar and menu action handlers"""

    def _create_menu_bar(self):
        """Create the menu bar with File, Edit, View, Help menus"""
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")

        background_action = file_menu.addAction("Set &Background from URL...")
        background_action.setShortcut("Ctrl+B")
        background_action.triggered.connect(self._set_background_from_url)

        self.recent_menu = file_menu.addMenu("Recent Backgrounds")
        self._update_recent_backgrounds_menu()

        clear_background_action = file_menu.addAction("&Clear Background")
        clear_background_action.triggered.connect(self._clear_background)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)

        # Edit Menu
        edit_menu = menubar.addMenu("&Edit")

        delete_action = edit_menu.addAction("&Delete Selection")
        delete_action.setShortcut("Ctrl+Backspace")
        delete_action.triggered.connect(self._delete_selection)

        deselect_action = edit_menu.addAction("Deselect &All")
        deselect_action.setShortcut("Ctrl+Shift+A")
        deselect_action.triggered.connect(lambda: self.store.dispatch(DeselectAll()))

        edit_menu.addSeparator()

        next_palette_action = edit_menu.addAction("&Next Palette")
        next_palette_action.setShortcut("Ctrl+]")
        next_palette_action.triggered.connect(lambda: self.palette_strip.show_next_palette())

        previous_palette_action = edit_menu.addAction("&Previous Palette")
        previous_palette_action.setShortcut("Ctrl+[")
        previous_palette_action.triggered.connect(lambda: self.palette_strip.show_previous_palette())

        # View Menu
        view_menu = menubar.addMenu("&View")

        zoom_in_action = view_menu.addAction("Zoom &In")
        zoom_in_action.setShortcut("Ctrl+=")
        zoom_in_action.triggered.connect(self._zoom_in)

        zoom_out_action = view_menu.addAction("Zoom &Out")
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(self._zoom_out)

        zoom_fit_action = view_menu.addAction("Zoom to &Fit")
        zoom_fit_action.setShortcut("Ctrl+9")
        zoom_fit_action.triggered.connect(lambda: self.store.dispatch(ZoomToFit()))

        reset_view_action = view_menu.addAction("&Actual Size")
        reset_view_action.setShortcut("Ctrl+0")
        reset_view_action.triggered.connect(lambda: self.store.dispatch(ResetView()))

        # Help Menu
        help_menu = menubar.addMenu("&Help")

        about_action = help_menu.addAction("&About")
        about_action.triggered.connect(self._show_about)

    def _zoom_in(self):
        self.store.dispatch(ZoomStep(ZOOM_STEP_FACTOR))

    def _zoom_out(self):
        self.store.dispatch(ZoomStep(1.0 / ZOOM_STEP_FACTOR))

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"{APP_NAME} {APP_VERSION}\n\n"
            "Drag emoji from the palette onto the canvas, drop an image or "
            "image URL to set the background.\n\n"
            "Click an emoji to select it. Drag or Ctrl+scroll with a selection "
            "to move or resize it, otherwise to pan or zoom the canvas. "
            "Double-click the background to zoom to fit."
        )
