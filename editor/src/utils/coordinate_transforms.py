"""Coordinate transformation utilities for canvas rendering.

Provides conversion between the two coordinate systems of the canvas:
- Screen space (Qt widget pixels, top-left origin, Y-down)
- Document space (integer emoji positions, origin at the viewport center
  when pan is zero, unaffected by zoom)

Both functions take the *effective* pan, i.e. the pan offset already
multiplied by the current zoom.
"""
import math

from models.transform import Vec2


# Quotients within this distance of an integer snap to it before truncation
_INTEGER_SNAP = 1e-9


def _truncate(value):
	"""Truncate toward zero, tolerating float noise just shy of an integer.

	Args:
		value: Floating document coordinate

	Returns:
		int: Truncated coordinate
	"""
	nearest = round(value)
	if math.isclose(value, nearest, rel_tol=_INTEGER_SNAP, abs_tol=_INTEGER_SNAP):
		return int(nearest)
	return int(value)


def to_document_coordinates(screen_point, viewport_center, pan, zoom):
	"""Convert a screen point to integer document coordinates.

	Removes pan, then the viewport center, then divides out zoom.

	Args:
		screen_point: Vec2 in screen pixels
		viewport_center: Vec2 center of the canvas in screen pixels
		pan: Vec2 effective pan offset in screen pixels
		zoom: Effective zoom scale (must be non-zero)

	Returns:
		(x, y): Document coordinates truncated to integers
	"""
	doc_x = (screen_point.x - pan.x - viewport_center.x) / zoom
	doc_y = (screen_point.y - pan.y - viewport_center.y) / zoom
	return (_truncate(doc_x), _truncate(doc_y))


def to_screen_coordinates(document_point, viewport_center, pan, zoom):
	"""Convert integer document coordinates to a screen point.

	Args:
		document_point: (x, y) document coordinates
		viewport_center: Vec2 center of the canvas in screen pixels
		pan: Vec2 effective pan offset in screen pixels
		zoom: Effective zoom scale

	Returns:
		Vec2 in screen pixels
	"""
	doc_x, doc_y = document_point
	return Vec2(
		viewport_center.x + doc_x * zoom + pan.x,
		viewport_center.y + doc_y * zoom + pan.y
	)
