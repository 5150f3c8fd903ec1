"""EmojiArt canvas widget.

Paints the document through the CanvasStore's current snapshot and turns
Qt input into intents:
- Left drag        -> DragBegan/Changed/Ended (canvas pan or selection move)
- Click on emoji   -> toggle selection
- Click on canvas  -> deselect all (delayed by the double-click interval)
- Double click     -> zoom to fit (pre-empts the pending single click)
- Ctrl+wheel, trackpad pinch -> MagnifyBegan/Changed/Ended
- Delete/Backspace -> delete selection, Escape -> cancel drag / deselect
- Drops            -> Drop intent (URL, image data, emoji text)
"""

import logging
import math

from PyQt5.QtWidgets import QWidget, QApplication, QSizePolicy
from PyQt5.QtCore import Qt, QTimer, QEvent, QRectF, QBuffer, QByteArray, QIODevice
from PyQt5.QtGui import QPainter, QColor, QFont, QPen, QImage

from constants import (
	CANVAS_BACKGROUND_COLOR, SELECTION_BORDER_COLOR, SELECTION_BORDER_WIDTH,
	WHEEL_MAGNIFY_DIVISOR, WHEEL_MAGNIFY_END_DELAY_MS
)
from models.emoji_art import BackgroundFetchStatus
from models.intents import (
	ViewportResized, DragBegan, DragChanged, DragEnded, DragCancelled,
	MagnifyBegan, MagnifyChanged, MagnifyEnded,
	DeleteSelection, DeselectAll, Drop, DropPayload
)
from models.transform import Vec2
from services.canvas_layout import emoji_placements, background_placement, emoji_at
from services.gesture_router import TapEvent, resolve_tap

_logger = logging.getLogger('EmojiCanvas')


def payload_from_mime(mime):
	"""Build a DropPayload from QMimeData.

	Remote URLs are kept as URLs; local files are read as image data.

	Args:
		mime: QMimeData from the drop event

	Returns:
		DropPayload
	"""
	urls = []
	image_data = None
	if mime.hasUrls():
		for url in mime.urls():
			if url.isLocalFile():
				if image_data is None:
					image_data = _read_local_file(url.toLocalFile())
			elif url.scheme() in ('http', 'https'):
				urls.append(url.toString())
	if image_data is None and mime.hasImage():
		image_data = _image_to_png_bytes(mime.imageData())
	text = mime.text() if mime.hasText() else None
	return DropPayload(urls=tuple(urls), image_data=image_data, text=text or None)


def _read_local_file(path):
	try:
		with open(path, 'rb') as f:
			return f.read()
	except OSError as e:
		_logger.warning(f"Could not read dropped file {path}: {e}")
		return None


def _image_to_png_bytes(image):
	"""Encode a QImage (or QPixmap-convertible variant) as PNG bytes"""
	if image is None:
		return None
	if not isinstance(image, QImage):
		image = QImage(image)
	if image.isNull():
		return None
	array = QByteArray()
	buffer = QBuffer(array)
	buffer.open(QIODevice.WriteOnly)
	image.save(buffer, "PNG")
	buffer.close()
	return bytes(array)


class EmojiCanvas(QWidget):
	"""Canvas view for one document.

	Attributes:
		store: CanvasStore holding the transform/selection snapshot
		document: EmojiArtDocument being displayed
	"""

	def __init__(self, store, parent=None):
		super().__init__(parent)
		self.store = store
		self.document = store.document

		self.setAcceptDrops(True)
		self.setFocusPolicy(Qt.StrongFocus)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		self.setMinimumSize(200, 200)

		# Background image decoded for painting
		self._background_image = None

		# Pointer state
		self._press_pos = None
		self._press_target = None
		self._is_dragging = False
		self._suppress_release_tap = False

		# Background single tap waits for a possible double click
		self._single_tap_timer = QTimer(self)
		self._single_tap_timer.setSingleShot(True)
		self._single_tap_timer.timeout.connect(self._on_single_tap_timeout)

		# Ctrl+wheel magnification ends after the wheel goes idle
		self._wheel_scale = None
		self._wheel_end_timer = QTimer(self)
		self._wheel_end_timer.setSingleShot(True)
		self._wheel_end_timer.timeout.connect(self._end_wheel_magnify)

		# Trackpad pinch
		self._pinch_scale = None

		self._unsubscribe = store.subscribe(self._on_state_changed)
		self.document.add_listener(self._on_document_changed)
		self._reload_background_image()

	# ========================================
	# Model observation
	# ========================================

	def _on_state_changed(self, state):
		self.update()

	def _on_document_changed(self, event):
		if event == "background":
			self._reload_background_image()
		self.update()

	def _reload_background_image(self):
		data = self.document.background_image_data
		if data is None:
			self._background_image = None
			return
		image = QImage()
		if not image.loadFromData(data):
			_logger.warning("Qt could not decode background image data")
			self._background_image = None
			return
		self._background_image = image

	def detach(self):
		"""Stop observing the store and document"""
		self._unsubscribe()
		self.document.remove_listener(self._on_document_changed)

	# ========================================
	# Geometry / painting
	# ========================================

	def resizeEvent(self, event):
		super().resizeEvent(event)
		self.store.dispatch(ViewportResized(self.width(), self.height()))

	def paintEvent(self, event):
		state = self.store.state
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.setRenderHint(QPainter.SmoothPixmapTransform)
		painter.fillRect(self.rect(), QColor(CANVAS_BACKGROUND_COLOR))

		if self._background_image is not None:
			placement = background_placement(state)
			width = self._background_image.width() * placement.scale
			height = self._background_image.height() * placement.scale
			target = QRectF(placement.anchor.x - width / 2, placement.anchor.y - height / 2, width, height)
			painter.drawImage(target, self._background_image)

		if self.document.background_fetch_status == BackgroundFetchStatus.FETCHING:
			self._paint_loading(painter)
		else:
			for placement in emoji_placements(state, self.document.emojis):
				self._paint_emoji(painter, placement)
		painter.end()

	def _paint_loading(self, painter):
		font = QFont(self.font())
		font.setPixelSize(28)
		painter.setFont(font)
		painter.setPen(QColor("#808080"))
		painter.drawText(self.rect(), Qt.AlignCenter, "Loading…")

	def _paint_emoji(self, painter, placement):
		extent = placement.extent
		if extent < 1:
			return
		center = placement.rendered_center
		rect = QRectF(center.x - extent / 2, center.y - extent / 2, extent, extent)

		font = QFont(self.font())
		font.setPixelSize(max(1, int(round(extent))))
		painter.setFont(font)
		painter.setPen(QColor("#000000"))
		painter.drawText(rect, Qt.AlignCenter, placement.text)

		if placement.selected:
			pen = QPen(QColor(SELECTION_BORDER_COLOR))
			pen.setWidth(SELECTION_BORDER_WIDTH)
			painter.setPen(pen)
			painter.setBrush(Qt.NoBrush)
			painter.drawRect(rect)

	def emoji_id_at(self, pos):
		"""Id of the emoji under a widget position, or None

		Emoji are hidden while the background loads, so nothing is hit then.
		"""
		if self.document.background_fetch_status == BackgroundFetchStatus.FETCHING:
			return None
		placements = emoji_placements(self.store.state, self.document.emojis)
		return emoji_at(Vec2(pos.x(), pos.y()), placements)

	# ========================================
	# Mouse: taps and drags
	# ========================================

	def mousePressEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		self.setFocus()
		self._flush_pending_tap()
		self._press_pos = event.pos()
		self._press_target = self.emoji_id_at(event.pos())
		self._is_dragging = False
		event.accept()

	def mouseMoveEvent(self, event):
		if self._press_pos is None:
			super().mouseMoveEvent(event)
			return
		delta = event.pos() - self._press_pos
		if not self._is_dragging:
			if delta.manhattanLength() < QApplication.startDragDistance():
				return
			self._is_dragging = True
			self.store.dispatch(DragBegan(self._press_target))
		self.store.dispatch(DragChanged(Vec2(delta.x(), delta.y())))
		event.accept()

	def mouseReleaseEvent(self, event):
		if event.button() != Qt.LeftButton or self._press_pos is None:
			super().mouseReleaseEvent(event)
			return
		delta = event.pos() - self._press_pos
		target = self._press_target
		was_dragging = self._is_dragging
		self._press_pos = None
		self._press_target = None
		self._is_dragging = False

		if was_dragging:
			self.store.dispatch(DragEnded(Vec2(delta.x(), delta.y())))
		elif self._suppress_release_tap:
			self._suppress_release_tap = False
		elif target is not None:
			self._dispatch_tap(TapEvent(target, 1))
		else:
			self._single_tap_timer.start(QApplication.doubleClickInterval())
		event.accept()

	def mouseDoubleClickEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mouseDoubleClickEvent(event)
			return
		target = self.emoji_id_at(event.pos())
		if target is not None:
			# Second click on an emoji is just another tap
			self.mousePressEvent(event)
			return
		self._single_tap_timer.stop()
		self._suppress_release_tap = True
		self._press_pos = event.pos()
		self._press_target = None
		self._is_dragging = False
		self._dispatch_tap(TapEvent(None, 2))
		event.accept()

	def _flush_pending_tap(self):
		"""Deliver a waiting background single tap before a new press"""
		if self._single_tap_timer.isActive():
			self._single_tap_timer.stop()
			self._dispatch_tap(TapEvent(None, 1))

	def _on_single_tap_timeout(self):
		self._dispatch_tap(TapEvent(None, 1))

	def _dispatch_tap(self, tap):
		intent = resolve_tap(tap)
		if intent is not None:
			self.store.dispatch(intent)

	# ========================================
	# Magnification
	# ========================================

	def wheelEvent(self, event):
		if not event.modifiers() & Qt.ControlModifier:
			super().wheelEvent(event)
			return
		delta = event.angleDelta().y()
		if delta == 0:
			return
		if self._wheel_scale is None:
			self._wheel_scale = 1.0
			self.store.dispatch(MagnifyBegan())
		self._wheel_scale *= math.pow(2.0, delta / WHEEL_MAGNIFY_DIVISOR)
		self.store.dispatch(MagnifyChanged(self._wheel_scale))
		self._wheel_end_timer.start(WHEEL_MAGNIFY_END_DELAY_MS)
		event.accept()

	def _end_wheel_magnify(self):
		if self._wheel_scale is None:
			return
		scale = self._wheel_scale
		self._wheel_scale = None
		self.store.dispatch(MagnifyEnded(scale))

	def event(self, event):
		if event.type() == QEvent.NativeGesture:
			return self._handle_native_gesture(event)
		return super().event(event)

	def _handle_native_gesture(self, event):
		"""macOS trackpad pinch arrives as begin/zoom/end native gestures"""
		gesture = event.gestureType()
		if gesture == Qt.ZoomNativeGesture:
			if self._pinch_scale is None:
				self._pinch_scale = 1.0
				self.store.dispatch(MagnifyBegan())
			self._pinch_scale *= 1.0 + event.value()
			self.store.dispatch(MagnifyChanged(self._pinch_scale))
			return True
		if gesture == Qt.EndNativeGesture and self._pinch_scale is not None:
			scale = self._pinch_scale
			self._pinch_scale = None
			self.store.dispatch(MagnifyEnded(scale))
			return True
		return super().event(event)

	# ========================================
	# Keyboard
	# ========================================

	def keyPressEvent(self, event):
		key = event.key()
		if key in (Qt.Key_Delete, Qt.Key_Backspace):
			self.store.dispatch(DeleteSelection())
			event.accept()
		elif key == Qt.Key_Escape:
			if self._is_dragging:
				self._is_dragging = False
				self._press_pos = None
				self._press_target = None
				self.store.dispatch(DragCancelled())
			else:
				self.store.dispatch(DeselectAll())
			event.accept()
		else:
			super().keyPressEvent(event)

	# ========================================
	# Drag and drop
	# ========================================

	def dragEnterEvent(self, event):
		mime = event.mimeData()
		if mime.hasUrls() or mime.hasImage() or mime.hasText():
			event.acceptProposedAction()
		else:
			event.ignore()

	def dragMoveEvent(self, event):
		event.acceptProposedAction()

	def dropEvent(self, event):
		payload = payload_from_mime(event.mimeData())
		pos = event.pos()
		self.store.dispatch(Drop(payload, Vec2(pos.x(), pos.y())))
		if self.store.last_drop_handled:
			event.acceptProposedAction()
		else:
			event.ignore()
