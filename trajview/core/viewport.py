"""Aspect-ratio fitting of data bounding boxes to a display."""

from __future__ import annotations

import math

from trajview.core.trajectory import Area

Rect = tuple[float, float, float, float]

DEFAULT_VIEWPORT: Rect = (-1.0, 1.0, -1.0, 1.0)
DEFAULT_MIN_EXTENT = 1.0


def fit_aspect_ratio(
    left: float,
    right: float,
    bottom: float,
    top: float,
    display_aspect: float,
) -> Rect:
    """Grow ``(left, right, bottom, top)`` along one axis to match ``display_aspect``.

    The box centre is preserved. When the data is wider than the display the
    vertical extent grows, otherwise the horizontal one does.
    """
    width = right - left
    height = top - bottom
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot fit a degenerate box (width={width}, height={height}).")
    if not (display_aspect > 0 and math.isfinite(display_aspect)):
        raise ValueError(f"display_aspect must be > 0 and finite, got {display_aspect}")

    data_aspect = width / height
    if data_aspect > display_aspect:
        desired_height = width / display_aspect
        delta = (desired_height - height) / 2.0
        return (left, right, bottom - delta, top + delta)

    desired_width = height * display_aspect
    delta = (desired_width - width) / 2.0
    return (left - delta, right + delta, bottom, top)


def fit_area(area: Area, display_aspect: float, min_extent: float = DEFAULT_MIN_EXTENT) -> Rect:
    """Fit a trajectory ``Area`` to the display, guarding empty and flat boxes."""
    if area.is_empty:
        return fit_aspect_ratio(*DEFAULT_VIEWPORT, display_aspect)

    left, right, bottom, top = area.x_min, area.x_max, area.y_min, area.y_max
    if right - left <= 0:
        center = (left + right) / 2.0
        left, right = center - min_extent / 2.0, center + min_extent / 2.0
    if top - bottom <= 0:
        center = (bottom + top) / 2.0
        bottom, top = center - min_extent / 2.0, center + min_extent / 2.0
    return fit_aspect_ratio(left, right, bottom, top, display_aspect)
